from enum import Enum


class UserRole(str, Enum):
    NORMAL_USER = "normal_user"
    SUPER_ADMIN = "super_admin"
    CRED_MANAGER = "cred_manager"


class ResponseStatus(str, Enum):
    COMING = "COMING"
    NOT_COMING = "NOT_COMING"
    TENTATIVE = "TENTATIVE"


class SessionFilter(str, Enum):
    ALL = "all"
    RESPONDED = "responded"
    CREATED = "created"


class ActivityFilter(str, Enum):
    ALL = "all"
    CREATED = "created"
    RESPONDED = "responded"


class PlayabilityStatus(str, Enum):
    INSUFFICIENT = "insufficient"
    MINIMUM = "minimum"
    GOOD = "good"
    EXCELLENT = "excellent"
