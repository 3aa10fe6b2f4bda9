from sqlalchemy.orm import Session
from typing import Optional
import logging
from .exceptions import (
    ServiceError,
    NotFoundError,
    PermissionDeniedError,
    BusinessRuleViolationError,
)
from ..models.profile import Profile
from ..schemas.profile import ProfileDirectory, ProfileResponse
from ..utils.date_helpers import DateHelpers

logger = logging.getLogger(__name__)


class ProfileServiceError(ServiceError):
    """Base exception for profile service errors"""

    pass


class ProfileNotFoundError(NotFoundError, ProfileServiceError):
    """Profile not found"""

    pass


class ProfileService:
    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, profile_id: str) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.id == profile_id).first()

    def get_profile_by_email(self, email: str) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.email == email).first()

    def create_profile(
        self, profile_id: str, email: str, name: str, phone: Optional[str] = None
    ) -> Profile:
        """Signup hook: new profiles start unapproved as normal users"""
        try:
            profile = Profile(id=profile_id, email=email, name=name, phone=phone)
            self.db.add(profile)
            self.db.commit()
            self.db.refresh(profile)

        except Exception as e:
            self.db.rollback()
            raise ProfileServiceError(f"Failed to create profile: {str(e)}")

        logger.info(f"Profile {profile_id} registered, awaiting approval")
        return profile

    def list_profiles(self, acting_user: Profile) -> ProfileDirectory:
        self._require_super_admin(acting_user)

        profiles = self.db.query(Profile).order_by(Profile.created_at.desc()).all()
        return ProfileDirectory(
            pending=[ProfileResponse.model_validate(p) for p in profiles if not p.approved],
            approved=[ProfileResponse.model_validate(p) for p in profiles if p.approved],
        )

    def approve(self, profile_id: str, acting_user: Profile) -> Profile:
        self._require_super_admin(acting_user)
        profile = self._get_profile_or_raise(profile_id)
        return self._set_approved(profile, True, acting_user)

    def revoke(self, profile_id: str, acting_user: Profile) -> Profile:
        self._require_super_admin(acting_user)
        profile = self._get_profile_or_raise(profile_id)

        if profile.id == acting_user.id:
            raise BusinessRuleViolationError("You cannot revoke your own approval")

        return self._set_approved(profile, False, acting_user)

    def _set_approved(
        self, profile: Profile, approved: bool, acting_user: Profile
    ) -> Profile:
        try:
            profile.approved = approved
            profile.updated_at = DateHelpers.utcnow()
            self.db.commit()
            self.db.refresh(profile)

        except Exception as e:
            self.db.rollback()
            raise ProfileServiceError(f"Failed to update approval: {str(e)}")

        logger.info(
            f"Profile {profile.id} {'approved' if approved else 'revoked'} by {acting_user.id}"
        )
        return profile

    def _get_profile_or_raise(self, profile_id: str) -> Profile:
        profile = self.get_profile(profile_id)
        if not profile:
            raise ProfileNotFoundError("User not found")
        return profile

    @staticmethod
    def _require_super_admin(user: Profile) -> None:
        if not user.is_super_admin:
            raise PermissionDeniedError("Admin permissions required")
