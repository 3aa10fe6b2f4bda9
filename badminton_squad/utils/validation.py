import re
from typing import Dict, List, Optional
from datetime import datetime
from .constants import SquadConstants
from .date_helpers import DateHelpers


class ValidationHelpers:
    @staticmethod
    def validate_phone(phone: Optional[str]) -> bool:
        """Validate phone number format (flexible)"""
        if not phone:
            return True  # Optional field

        # Remove all non-numeric characters
        digits_only = re.sub(r"\D", "", phone)

        # Check if it's a reasonable length (7-15 digits)
        return 7 <= len(digits_only) <= 15

    @staticmethod
    def sanitize_comment(content: str) -> str:
        """Trim, collapse runs of whitespace and cap the length"""
        if not content:
            return ""

        collapsed = re.sub(r"\s+", " ", content.strip())
        return collapsed[: SquadConstants.MAX_COMMENT_LENGTH]

    @staticmethod
    def validate_session_times(
        start_time: datetime, end_time: datetime, now: Optional[datetime] = None
    ) -> Dict[str, List[str]]:
        """
        Check the scheduling rules for a session.

        Every rule is checked independently and the messages are grouped by
        the field they belong to. An empty dict means the times are valid.
        """
        errors: Dict[str, List[str]] = {}

        def add(field: str, message: str) -> None:
            errors.setdefault(field, []).append(message)

        start = DateHelpers.ensure_aware(start_time)
        end = DateHelpers.ensure_aware(end_time)

        if end <= start:
            add("end_time", "End time must be after start time")

        if not DateHelpers.is_same_ist_day(start, end):
            add("end_time", "Session must start and end on the same day (IST)")

        if start < DateHelpers.earliest_session_start(now):
            add(
                "start_time",
                f"Sessions must be created at least {SquadConstants.MIN_DAYS_IN_ADVANCE} days in advance",
            )

        if DateHelpers.duration_hours(start, end) > SquadConstants.MAX_SESSION_HOURS:
            add(
                "end_time",
                f"Session duration cannot exceed {SquadConstants.MAX_SESSION_HOURS} hours",
            )

        return errors
