from .profile import Profile
from .session import BadmintonSession
from .response import SessionResponse
from .comment import Comment
from .user_analytics import UserAnalytics


__all__ = [
    "Profile",
    "BadmintonSession",
    "SessionResponse",
    "Comment",
    "UserAnalytics",
]
