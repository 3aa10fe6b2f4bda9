from sqlalchemy.orm import Session
from typing import Any, Dict, Optional
from datetime import datetime
import logging
from .exceptions import ServiceError, PermissionDeniedError, BusinessRuleViolationError
from .session_service import SessionService
from ..models.response import SessionResponse
from ..models.user_analytics import UserAnalytics
from ..models.profile import Profile
from ..schemas.analytics import SessionAnalytics, UserAccuracy
from ..utils.analytics import (
    response_status_to_attendance,
    calculate_user_accuracy,
    calculate_session_analytics,
    calculate_reliability_score,
)
from ..utils.date_helpers import DateHelpers

logger = logging.getLogger(__name__)


class AnalyticsServiceError(ServiceError):
    """Base exception for analytics service errors"""

    pass


class AnalyticsService:
    def __init__(self, db: Session):
        self.db = db
        self.session_service = SessionService(db)

    def complete_session(
        self,
        session_id: str,
        actual_attendees: int,
        completed_by: Profile,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Mark a session complete and log one analytics row per RSVP.

        Attendance is inferred from the RSVP itself (COMING attended,
        NOT_COMING did not, TENTATIVE unknown); ``actual_attendees`` is the
        head count the organiser reports and feeds the session accuracy.
        """
        if actual_attendees < 0:
            raise BusinessRuleViolationError("Invalid actual attendees count")

        session = self.session_service.get_session_or_raise(session_id)

        if session.created_by != completed_by.id:
            raise PermissionDeniedError(
                "Only session creator can mark session as complete"
            )

        if session.completed_at is not None:
            raise BusinessRuleViolationError("Session has already been completed")

        responses = (
            self.db.query(SessionResponse)
            .filter(SessionResponse.session_id == session_id)
            .all()
        )

        recorded_at = DateHelpers.to_utc(now or DateHelpers.utcnow())
        try:
            for response in responses:
                self.db.add(
                    UserAnalytics(
                        user_id=response.user_id,
                        session_id=session_id,
                        predicted_status=response.status,
                        actual_attendance=response_status_to_attendance(
                            response.status
                        ),
                        recorded_at=recorded_at,
                    )
                )

            session.completed_at = recorded_at
            self.db.commit()

        except Exception as e:
            self.db.rollback()
            raise AnalyticsServiceError(f"Failed to record analytics data: {str(e)}")

        logger.info(
            f"Session {session_id} completed with {len(responses)} analytics records"
        )

        summary = calculate_session_analytics(
            [response.status for response in responses], actual_attendees
        )
        return {
            "records_created": len(responses),
            "session_analytics": SessionAnalytics(**summary),
        }

    def get_user_accuracy(self, user_id: str) -> UserAccuracy:
        rows = (
            self.db.query(UserAnalytics.predicted_status, UserAnalytics.actual_attendance)
            .filter(UserAnalytics.user_id == user_id)
            .all()
        )

        accuracy = calculate_user_accuracy(
            [
                {"predicted_status": predicted, "actual_attendance": actual}
                for predicted, actual in rows
            ]
        )
        return UserAccuracy(
            user_id=user_id,
            reliability_score=calculate_reliability_score(accuracy),
            **accuracy,
        )
