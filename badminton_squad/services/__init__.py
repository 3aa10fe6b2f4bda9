from .activity_service import ActivityService
from .analytics_service import AnalyticsService
from .comment_service import CommentService
from .profile_service import ProfileService
from .response_service import ResponseService
from .session_service import SessionService

__all__ = [
    "ActivityService",
    "AnalyticsService",
    "CommentService",
    "ProfileService",
    "ResponseService",
    "SessionService",
]
