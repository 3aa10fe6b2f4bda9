from datetime import datetime, timedelta, date, timezone
from typing import Optional
from dateutil import tz
from .constants import SquadConstants

IST = tz.gettz(SquadConstants.TIMEZONE_NAME)


class DateHelpers:
    @staticmethod
    def utcnow() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
        """Treat naive datetimes (e.g. read back from SQLite) as UTC"""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @staticmethod
    def to_ist(value: datetime) -> datetime:
        return DateHelpers.ensure_aware(value).astimezone(IST)

    @staticmethod
    def ist_date(value: datetime) -> date:
        return DateHelpers.to_ist(value).date()

    @staticmethod
    def ist_midnight(day: date) -> datetime:
        """00:00 IST on the given calendar day, as an aware datetime"""
        return datetime(day.year, day.month, day.day, tzinfo=IST)

    @staticmethod
    def is_same_ist_day(first: datetime, second: datetime) -> bool:
        return DateHelpers.ist_date(first) == DateHelpers.ist_date(second)

    @staticmethod
    def earliest_session_start(now: Optional[datetime] = None) -> datetime:
        """Start of the IST day that is MIN_DAYS_IN_ADVANCE days after today"""
        now = now or DateHelpers.utcnow()
        target_day = DateHelpers.ist_date(now) + timedelta(
            days=SquadConstants.MIN_DAYS_IN_ADVANCE
        )
        return DateHelpers.ist_midnight(target_day)

    @staticmethod
    def response_cutoff(session_start: datetime) -> datetime:
        """Midnight IST at the start of the day before the session"""
        cutoff_day = DateHelpers.ist_date(session_start) - timedelta(
            days=SquadConstants.RESPONSE_CUTOFF_DAYS
        )
        return DateHelpers.ist_midnight(cutoff_day)

    @staticmethod
    def is_response_locked(
        session_start: datetime, now: Optional[datetime] = None
    ) -> bool:
        now = DateHelpers.ensure_aware(now or DateHelpers.utcnow())
        return now >= DateHelpers.response_cutoff(session_start)

    @staticmethod
    def is_within_edit_window(
        created_at: Optional[datetime], now: Optional[datetime] = None
    ) -> bool:
        """Comments can be edited for COMMENT_EDIT_WINDOW_HOURS after creation"""
        now = DateHelpers.ensure_aware(now or DateHelpers.utcnow())
        if created_at is None:
            return True

        age = now - DateHelpers.ensure_aware(created_at)
        return age <= timedelta(hours=SquadConstants.COMMENT_EDIT_WINDOW_HOURS)

    @staticmethod
    def duration_hours(start: datetime, end: datetime) -> float:
        delta = DateHelpers.ensure_aware(end) - DateHelpers.ensure_aware(start)
        return delta.total_seconds() / 3600

    @staticmethod
    def to_utc(value: datetime) -> datetime:
        """Normalise to UTC before storing; SQLite drops the offset on write"""
        return DateHelpers.ensure_aware(value).astimezone(timezone.utc)
