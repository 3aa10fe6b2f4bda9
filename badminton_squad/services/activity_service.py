from sqlalchemy.orm import Session
from typing import Any, Dict, List
import logging
from .session_service import SessionService
from ..models.session import BadmintonSession
from ..models.response import SessionResponse
from ..models.enums import ActivityFilter
from ..schemas.common import ResponseCounts
from ..utils.constants import SquadConstants
from ..utils.date_helpers import DateHelpers

logger = logging.getLogger(__name__)


class ActivityService:
    def __init__(self, db: Session):
        self.db = db
        self.session_service = SessionService(db)

    def get_user_activity(
        self,
        user_id: str,
        activity_filter: ActivityFilter = ActivityFilter.ALL,
        limit: int = SquadConstants.DEFAULT_ACTIVITY_LIMIT,
        offset: int = 0,
    ) -> Dict[str, Any]:
        """
        Sessions the user created and sessions the user answered, newest first.

        A limit of 0 returns everything from ``offset`` on. For the merged
        feed both sources are read from the top and the page is cut after
        sorting.
        """

        if activity_filter == ActivityFilter.ALL:
            window = offset + limit if limit > 0 else 0
            merged = sorted(
                self._created_activity(user_id, window, 0)
                + self._responded_activity(user_id, window, 0),
                key=lambda item: item["activity_date"],
                reverse=True,
            )
            activities = merged[offset : offset + limit] if limit > 0 else merged[offset:]
        elif activity_filter == ActivityFilter.CREATED:
            activities = self._created_activity(user_id, limit, offset)
        else:
            activities = self._responded_activity(user_id, limit, offset)

        created_count = (
            self.db.query(BadmintonSession)
            .filter(BadmintonSession.created_by == user_id)
            .count()
        )
        responded_count = (
            self.db.query(SessionResponse)
            .filter(SessionResponse.user_id == user_id)
            .count()
        )

        if activity_filter == ActivityFilter.ALL:
            available = created_count + responded_count
        elif activity_filter == ActivityFilter.CREATED:
            available = created_count
        else:
            available = responded_count

        return {
            "activities": activities,
            "metadata": {
                "total_activities": len(activities),
                "created_sessions_count": created_count,
                "responded_sessions_count": responded_count,
                "filter": activity_filter.value,
                "limit": limit,
                "offset": offset,
                "has_more": limit > 0 and available > offset + limit,
            },
        }

    def _created_activity(
        self, user_id: str, limit: int, offset: int
    ) -> List[Dict[str, Any]]:
        query = (
            self.db.query(BadmintonSession)
            .filter(BadmintonSession.created_by == user_id)
            .order_by(BadmintonSession.created_at.desc())
            .offset(offset)
        )
        if limit > 0:
            query = query.limit(limit)
        sessions = query.all()

        counts = self.session_service.get_response_counts([s.id for s in sessions])
        return [
            {
                **self._session_fields(session),
                "response_counts": counts.get(session.id, ResponseCounts()),
                "activity_type": "created",
                "activity_date": DateHelpers.ensure_aware(session.created_at),
            }
            for session in sessions
        ]

    def _responded_activity(
        self, user_id: str, limit: int, offset: int
    ) -> List[Dict[str, Any]]:
        query = (
            self.db.query(SessionResponse, BadmintonSession)
            .join(BadmintonSession, SessionResponse.session_id == BadmintonSession.id)
            .filter(SessionResponse.user_id == user_id)
            .order_by(SessionResponse.created_at.desc())
            .offset(offset)
        )
        if limit > 0:
            query = query.limit(limit)

        return [
            {
                **self._session_fields(session),
                "user_response": response.status,
                "activity_type": "responded",
                "activity_date": DateHelpers.ensure_aware(response.created_at),
                "response_id": response.id,
            }
            for response, session in query.all()
        ]

    @staticmethod
    def _session_fields(session: BadmintonSession) -> Dict[str, Any]:
        creator = session.creator
        return {
            "id": session.id,
            "title": session.title,
            "description": session.description,
            "location": session.location,
            "start_time": DateHelpers.ensure_aware(session.start_time),
            "end_time": DateHelpers.ensure_aware(session.end_time),
            "created_at": DateHelpers.ensure_aware(session.created_at),
            "created_by": {
                "id": session.created_by,
                "name": creator.name if creator else None,
            },
        }
