from sqlalchemy import Column, String, Boolean, DateTime, UniqueConstraint
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import relationship
from ..database import Base
from .base import utcnow
from .enums import UserRole


class Profile(Base):
    __tablename__ = "profiles"

    # Same value as the Supabase auth user id
    id = Column(String(36), primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, index=True, nullable=False)
    phone = Column(String, nullable=True)

    role = Column(String, nullable=False, default=UserRole.NORMAL_USER.value)
    approved = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (UniqueConstraint("email", name="uq_profile_email"),)

    # Relationships
    created_sessions = relationship(
        "BadmintonSession", back_populates="creator", foreign_keys="BadmintonSession.created_by"
    )
    responses = relationship("SessionResponse", back_populates="user")
    comments = relationship("Comment", back_populates="user")

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN.value

    @classmethod
    def create_from_supabase(cls, supabase_user, db) -> "Profile":
        """Create a profile row for a Supabase auth user on first sight"""
        metadata = getattr(supabase_user, "user_metadata", None) or {}
        email = supabase_user.email or ""
        profile_id = str(supabase_user.id)
        profile = cls(
            id=profile_id,
            email=email,
            name=metadata.get("name") or email.split("@")[0] or "Player",
            phone=metadata.get("phone"),
        )
        try:
            db.add(profile)
            db.commit()
        except IntegrityError:
            # A concurrent request created the row first
            db.rollback()
            existing = db.query(cls).filter(cls.id == profile_id).first()
            if existing is None:
                raise
            return existing
        except Exception:
            db.rollback()
            raise

        db.refresh(profile)
        return profile
