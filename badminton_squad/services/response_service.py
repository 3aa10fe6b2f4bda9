from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Union
from datetime import datetime
import logging
from .exceptions import ServiceError, BusinessRuleViolationError, ValidationFailedError
from .session_service import SessionService
from ..models.response import SessionResponse
from ..models.profile import Profile
from ..models.enums import ResponseStatus
from ..schemas.response import SessionResponseOut
from ..utils.date_helpers import DateHelpers

logger = logging.getLogger(__name__)


class ResponseServiceError(ServiceError):
    """Base exception for response service errors"""

    pass


class ResponseCutoffError(BusinessRuleViolationError, ResponseServiceError):
    """Responses are locked for this session"""

    pass


class ResponseService:
    def __init__(self, db: Session):
        self.db = db
        self.session_service = SessionService(db)

    def upsert_response(
        self,
        session_id: str,
        status: Union[ResponseStatus, str],
        user: Profile,
        now: Optional[datetime] = None,
    ) -> SessionResponse:
        """Insert or overwrite the caller's RSVP for a session until the cutoff"""

        status = self._parse_status(status)
        session = self.session_service.get_session_or_raise(session_id)

        if DateHelpers.is_response_locked(session.start_time, now):
            raise ResponseCutoffError(
                "Response cutoff has passed. Cannot update response."
            )

        existing = self._get_response(session_id, user.id)
        if existing:
            return self._overwrite(existing, status)

        try:
            response = SessionResponse(
                session_id=session_id, user_id=user.id, status=status.value
            )
            self.db.add(response)
            self.db.commit()
            self.db.refresh(response)
            return response

        except IntegrityError:
            # Another request inserted the pair first; fall back to overwrite
            self.db.rollback()
            existing = self._get_response(session_id, user.id)
            if not existing:
                raise ResponseServiceError("Failed to update response")
            return self._overwrite(existing, status)

        except Exception as e:
            self.db.rollback()
            raise ResponseServiceError(f"Failed to update response: {str(e)}")

    def list_session_responses(self, session_id: str) -> List[SessionResponseOut]:
        """All RSVPs for a session with the responder's name"""

        self.session_service.get_session_or_raise(session_id)

        rows = (
            self.db.query(SessionResponse, Profile.name)
            .join(Profile, SessionResponse.user_id == Profile.id)
            .filter(SessionResponse.session_id == session_id)
            .order_by(SessionResponse.created_at)
            .all()
        )

        return [
            SessionResponseOut(
                id=response.id,
                user_id=response.user_id,
                session_id=response.session_id,
                status=response.status,
                user_name=user_name,
                created_at=response.created_at,
                updated_at=response.updated_at,
            )
            for response, user_name in rows
        ]

    def _get_response(self, session_id: str, user_id: str) -> Optional[SessionResponse]:
        return (
            self.db.query(SessionResponse)
            .filter(
                SessionResponse.session_id == session_id,
                SessionResponse.user_id == user_id,
            )
            .first()
        )

    def _overwrite(
        self, response: SessionResponse, status: ResponseStatus
    ) -> SessionResponse:
        try:
            response.status = status.value
            response.updated_at = DateHelpers.utcnow()
            self.db.commit()
            self.db.refresh(response)
            return response

        except Exception as e:
            self.db.rollback()
            raise ResponseServiceError(f"Failed to update response: {str(e)}")

    @staticmethod
    def _parse_status(status: Union[ResponseStatus, str]) -> ResponseStatus:
        try:
            return ResponseStatus(status)
        except ValueError:
            raise ValidationFailedError(
                "Invalid status. Must be COMING, NOT_COMING, or TENTATIVE",
                details={"status": ["Invalid status"]},
            )
