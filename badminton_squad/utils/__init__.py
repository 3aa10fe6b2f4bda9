from .date_helpers import DateHelpers
from .constants import SquadConstants, ResponseMessages
from .validation import ValidationHelpers
from .courts import calculate_courts, get_courts_description, get_playability_status
from .comment_tree import build_comment_tree, validate_comment_depth

__all__ = [
    "DateHelpers",
    "SquadConstants",
    "ResponseMessages",
    "ValidationHelpers",
    "calculate_courts",
    "get_courts_description",
    "get_playability_status",
    "build_comment_tree",
    "validate_comment_depth",
]
