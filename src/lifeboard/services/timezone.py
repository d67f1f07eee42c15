"""Clock and time-of-day handling for quick-add.

Date rules such as "tomorrow" are relative to the user's "now", which is read
from here (in the configured timezone) only when the caller does not pass one.
"""

import logging
import re
from datetime import date, datetime, time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from lifeboard.config import settings

logger = logging.getLogger(__name__)

# Matches "2pm", "2 pm", "2:30pm", "14:05"
TIME_FRAGMENT_PATTERN = re.compile(
    r"^\s*(\d{1,2})(?::(\d{2}))?\s*(am|pm)?\s*$",
    re.IGNORECASE,
)


def to_24h(fragment: str | None) -> tuple[int, int] | None:
    """Convert a raw time fragment into (hour, minute).

    Returns None for fragments that are not clock times, such as the
    day-part words "morning" or "evening".
    """
    if not fragment:
        return None

    match = TIME_FRAGMENT_PATTERN.match(fragment)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    ampm = match.group(3).lower() if match.group(3) else None

    if ampm is None and match.group(2) is None:
        # A bare number is not a time
        return None

    if ampm == "pm" and hour < 12:
        hour += 12
    elif ampm == "am" and hour == 12:
        hour = 0

    if hour > 23 or minute > 59:
        return None
    return hour, minute


class TimezoneService:
    """Current time and date construction in the user's timezone."""

    def __init__(self, default_timezone: str | None = None):
        self._default_tz_name = default_timezone or settings.user_timezone
        try:
            self._default_tz = ZoneInfo(self._default_tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r, falling back to UTC", self._default_tz_name)
            self._default_tz_name = "UTC"
            self._default_tz = ZoneInfo("UTC")

    @property
    def default_timezone(self) -> str:
        return self._default_tz_name

    @property
    def tzinfo(self) -> ZoneInfo:
        return self._default_tz

    def now(self) -> datetime:
        """Get current time in user's timezone."""
        return datetime.now(self._default_tz)

    def today(self) -> date:
        return self.now().date()

    def combine(self, day: date, hour: int = 0, minute: int = 0) -> datetime:
        """Build an aware datetime for a calendar date and clock time."""
        return datetime.combine(day, time(hour, minute), tzinfo=self._default_tz)


# Module-level singleton
_timezone_service: TimezoneService | None = None


def get_timezone_service(default_timezone: str | None = None) -> TimezoneService:
    """Get the singleton TimezoneService instance.

    Args:
        default_timezone: Optional timezone to use. Only used on first call.
    """
    global _timezone_service
    if _timezone_service is None:
        _timezone_service = TimezoneService(default_timezone)
    return _timezone_service


def reset_timezone_service() -> None:
    """Reset the singleton (useful for testing)."""
    global _timezone_service
    _timezone_service = None


def now() -> datetime:
    """Get current time in user's timezone."""
    return get_timezone_service().now()


def today() -> date:
    return get_timezone_service().today()
