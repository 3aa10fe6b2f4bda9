from .common import ErrorResponse, CreatorSummary, ResponseCounts, Playability
from .auth import LoginRequest, SignupRequest, LoginResponse
from .profile import ProfileResponse, ProfileSummary, ProfileDirectory
from .session import SessionCreate, SessionUpdate, SessionDetail
from .response import ResponseUpsert, SessionResponseOut
from .comment import CommentCreate, CommentUpdate, CommentNode
from .analytics import SessionCompletion, SessionAnalytics, UserAccuracy

__all__ = [
    "ErrorResponse",
    "CreatorSummary",
    "ResponseCounts",
    "Playability",
    "LoginRequest",
    "SignupRequest",
    "LoginResponse",
    "ProfileResponse",
    "ProfileSummary",
    "ProfileDirectory",
    "SessionCreate",
    "SessionUpdate",
    "SessionDetail",
    "ResponseUpsert",
    "SessionResponseOut",
    "CommentCreate",
    "CommentUpdate",
    "CommentNode",
    "SessionCompletion",
    "SessionAnalytics",
    "UserAccuracy",
]
