from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import Dict, List, Optional
from datetime import datetime
import logging
from .exceptions import (
    ServiceError,
    NotFoundError,
    PermissionDeniedError,
    BusinessRuleViolationError,
    ValidationFailedError,
)
from ..models.session import BadmintonSession
from ..models.response import SessionResponse
from ..models.profile import Profile
from ..models.enums import SessionFilter
from ..schemas.common import CreatorSummary, ResponseCounts, Playability
from ..schemas.session import SessionCreate, SessionUpdate, SessionDetail
from ..utils.constants import SquadConstants
from ..utils.courts import calculate_courts, get_playability_status
from ..utils.date_helpers import DateHelpers
from ..utils.validation import ValidationHelpers

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {"start_time", "created_at"}


class SessionServiceError(ServiceError):
    """Base exception for session service errors"""

    pass


class SessionNotFoundError(NotFoundError, SessionServiceError):
    """Session not found"""

    pass


class SessionService:
    def __init__(self, db: Session):
        self.db = db

    def create_session(
        self,
        session_data: SessionCreate,
        created_by: Profile,
        now: Optional[datetime] = None,
    ) -> BadmintonSession:
        """Create a new session after checking the calendar rules"""

        start_time, end_time = self._validated_times(session_data, now)

        try:
            session = BadmintonSession(
                title=session_data.title,
                description=session_data.description,
                location=session_data.location,
                start_time=start_time,
                end_time=end_time,
                created_by=created_by.id,
            )

            self.db.add(session)
            self.db.commit()
            self.db.refresh(session)

        except Exception as e:
            self.db.rollback()
            raise SessionServiceError(f"Failed to create session: {str(e)}")

        logger.info(f"Session {session.id} created by {created_by.id}")
        return session

    def update_session(
        self,
        session_id: str,
        session_updates: SessionUpdate,
        updated_by: Profile,
        now: Optional[datetime] = None,
    ) -> BadmintonSession:
        """Replace a session's details; creator only, never on the session day"""

        session = self._get_session_or_raise(session_id)
        self._ensure_mutable(session, updated_by, "edit", now)

        start_time, end_time = self._validated_times(session_updates, now)

        try:
            session.title = session_updates.title
            session.description = session_updates.description
            session.location = session_updates.location
            session.start_time = start_time
            session.end_time = end_time
            session.updated_at = DateHelpers.utcnow()

            self.db.commit()
            self.db.refresh(session)
            return session

        except Exception as e:
            self.db.rollback()
            raise SessionServiceError(f"Failed to update session: {str(e)}")

    def delete_session(
        self, session_id: str, deleted_by: Profile, now: Optional[datetime] = None
    ) -> bool:
        """Delete a session; responses, comments and analytics go with it"""

        session = self._get_session_or_raise(session_id)
        self._ensure_mutable(session, deleted_by, "delete", now)

        try:
            self.db.delete(session)
            self.db.commit()

        except Exception as e:
            self.db.rollback()
            raise SessionServiceError(f"Failed to delete session: {str(e)}")

        logger.info(f"Session {session_id} deleted by {deleted_by.id}")
        return True

    def list_sessions(
        self,
        user: Profile,
        session_filter: SessionFilter = SessionFilter.ALL,
        limit: int = SquadConstants.DEFAULT_SESSION_LIMIT,
        sort: str = "start_time",
        now: Optional[datetime] = None,
    ) -> List[SessionDetail]:
        """Upcoming sessions with counts, courts and the caller's own RSVP"""

        if sort not in SORTABLE_FIELDS:
            raise ValidationFailedError(
                details={"sort": [f"Sort must be one of: {', '.join(sorted(SORTABLE_FIELDS))}"]}
            )

        now = DateHelpers.ensure_aware(now or DateHelpers.utcnow())
        query = self.db.query(BadmintonSession).filter(
            BadmintonSession.start_time >= DateHelpers.to_utc(now)
        )

        if session_filter == SessionFilter.RESPONDED:
            query = query.join(
                SessionResponse, SessionResponse.session_id == BadmintonSession.id
            ).filter(SessionResponse.user_id == user.id)
        elif session_filter == SessionFilter.CREATED:
            query = query.filter(BadmintonSession.created_by == user.id)

        sort_column = getattr(BadmintonSession, sort)
        order = sort_column.asc() if sort == "start_time" else sort_column.desc()
        sessions = query.order_by(order).limit(limit).all()

        counts = self.get_response_counts([s.id for s in sessions])
        user_responses = self._get_user_responses(user.id, [s.id for s in sessions])

        return [
            self._build_detail(
                session,
                counts.get(session.id, ResponseCounts()),
                user_responses.get(session.id),
            )
            for session in sessions
        ]

    def get_session_details(
        self, session_id: str, user: Profile, now: Optional[datetime] = None
    ) -> SessionDetail:
        session = self._get_session_or_raise(session_id)
        counts = self.get_response_counts([session.id])
        user_response = self._get_user_responses(user.id, [session.id])

        detail = self._build_detail(
            session,
            counts.get(session.id, ResponseCounts()),
            user_response.get(session.id),
        )
        detail.can_edit = self._can_mutate(session, user, now)
        return detail

    def get_session_or_raise(self, session_id: str) -> BadmintonSession:
        return self._get_session_or_raise(session_id)

    def get_response_counts(self, session_ids: List[str]) -> Dict[str, ResponseCounts]:
        """COMING / TENTATIVE / NOT_COMING tallies keyed by session id"""
        if not session_ids:
            return {}

        rows = (
            self.db.query(
                SessionResponse.session_id,
                SessionResponse.status,
                func.count(SessionResponse.id),
            )
            .filter(SessionResponse.session_id.in_(session_ids))
            .group_by(SessionResponse.session_id, SessionResponse.status)
            .all()
        )

        counts: Dict[str, ResponseCounts] = {}
        for session_id, status, count in rows:
            tally = counts.setdefault(session_id, ResponseCounts())
            if status in ResponseCounts.model_fields:
                setattr(tally, status, count)
        return counts

    # Helpers

    def _get_session_or_raise(self, session_id: str) -> BadmintonSession:
        session = (
            self.db.query(BadmintonSession)
            .filter(BadmintonSession.id == session_id)
            .first()
        )
        if not session:
            raise SessionNotFoundError("Session not found")
        return session

    def _get_user_responses(
        self, user_id: str, session_ids: List[str]
    ) -> Dict[str, str]:
        if not session_ids:
            return {}

        rows = (
            self.db.query(SessionResponse.session_id, SessionResponse.status)
            .filter(
                SessionResponse.user_id == user_id,
                SessionResponse.session_id.in_(session_ids),
            )
            .all()
        )
        return {session_id: status for session_id, status in rows}

    def _validated_times(self, session_data: SessionCreate, now: Optional[datetime]):
        errors = ValidationHelpers.validate_session_times(
            session_data.start_time, session_data.end_time, now
        )
        if errors:
            raise ValidationFailedError(details=errors)

        return (
            DateHelpers.to_utc(session_data.start_time),
            DateHelpers.to_utc(session_data.end_time),
        )

    def _can_mutate(
        self, session: BadmintonSession, user: Profile, now: Optional[datetime]
    ) -> bool:
        now = now or DateHelpers.utcnow()
        return session.created_by == user.id and not DateHelpers.is_same_ist_day(
            session.start_time, now
        )

    def _ensure_mutable(
        self,
        session: BadmintonSession,
        user: Profile,
        action: str,
        now: Optional[datetime] = None,
    ) -> None:
        """Creator only (admins may also delete), and never on the session day"""
        is_creator = session.created_by == user.id
        admin_delete = action == "delete" and user.is_super_admin

        if not (is_creator or admin_delete):
            raise PermissionDeniedError(f"You can only {action} your own sessions")

        now = now or DateHelpers.utcnow()
        if DateHelpers.is_same_ist_day(session.start_time, now):
            action_past = "edited" if action == "edit" else "deleted"
            raise BusinessRuleViolationError(
                f"Sessions cannot be {action_past} on the same day"
            )

    def _build_detail(
        self,
        session: BadmintonSession,
        counts: ResponseCounts,
        user_response: Optional[str],
    ) -> SessionDetail:
        creator = session.creator
        return SessionDetail(
            id=session.id,
            title=session.title,
            description=session.description,
            location=session.location,
            start_time=DateHelpers.ensure_aware(session.start_time),
            end_time=DateHelpers.ensure_aware(session.end_time),
            created_by=CreatorSummary(
                id=session.created_by, name=creator.name if creator else None
            ),
            response_counts=counts,
            recommended_courts=calculate_courts(counts.COMING),
            playability=Playability(**get_playability_status(counts.COMING)),
            user_response=user_response,
            response_cutoff=DateHelpers.response_cutoff(session.start_time),
            is_completed=session.completed_at is not None,
            created_at=DateHelpers.ensure_aware(session.created_at),
            updated_at=DateHelpers.ensure_aware(session.updated_at),
        )
