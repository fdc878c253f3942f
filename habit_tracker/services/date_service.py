"""
Date helpers for habit bookkeeping.
Handles calendar-day equality, weekday indices and elapsed-day counts.
"""
from datetime import datetime, date, time
from typing import Optional


class DateService:
    """Service for date-related operations"""

    @staticmethod
    def today() -> date:
        """Current local calendar date"""
        return datetime.now().date()

    @staticmethod
    def now() -> datetime:
        """Current local time"""
        return datetime.now()

    @staticmethod
    def to_local_naive(dt: datetime) -> datetime:
        """
        Convert a datetime to naive local time.

        Timezone-aware values (e.g. "...Z" strings written by a browser) are
        shifted into the local zone first, so calendar-day comparisons match
        what the user saw.
        """
        if dt.tzinfo is not None:
            return dt.astimezone().replace(tzinfo=None)
        return dt

    @staticmethod
    def parse_iso(value: str) -> datetime:
        """
        Parse an ISO-8601 string into naive local time.

        Raises:
            ValueError: If the string is not ISO-8601
        """
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return DateService.to_local_naive(datetime.fromisoformat(value))

    @staticmethod
    def start_of_day_iso(day: date) -> str:
        """ISO string of local midnight for the given day"""
        return datetime.combine(day, time.min).isoformat()

    @staticmethod
    def is_same_day(value: str, day: date) -> bool:
        """True if the ISO string falls on the given local calendar day"""
        try:
            return DateService.parse_iso(value).date() == day
        except ValueError:
            return False

    @staticmethod
    def weekday_index(day: date) -> int:
        """Weekday index with Sunday = 0 ... Saturday = 6"""
        return (day.weekday() + 1) % 7

    @staticmethod
    def difference_in_days(later: datetime, earlier: Optional[datetime]) -> Optional[int]:
        """
        Number of whole 24h periods between two datetimes, truncated toward zero.

        Returns:
            None if `earlier` is missing
        """
        if earlier is None:
            return None
        delta = DateService.to_local_naive(later) - DateService.to_local_naive(earlier)
        return int(delta.total_seconds() / 86400)
