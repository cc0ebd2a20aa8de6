"""Calendar arithmetic and date formatting.

``calendar_diff`` is for display only ("expires in 2 days, 3 hours").
Expiry checks compare instants directly.
"""

import calendar
from datetime import datetime, timezone
from typing import NamedTuple

from pydantic import TypeAdapter, ValidationError

from jfa.config import EmailSettings

_datetime_adapter = TypeAdapter(datetime)


class CalendarDiff(NamedTuple):
    """Difference between two instants in calendar units."""

    years: int
    months: int
    days: int
    hours: int
    minutes: int
    seconds: int


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime) -> datetime:
    """Attach the local zone to naive datetimes; aware ones pass through."""
    if dt.tzinfo is None:
        return dt.astimezone()
    return dt


def calendar_diff(a: datetime, b: datetime) -> CalendarDiff:
    """Calendar-aware difference between two instants.

    Both operands are compared in UTC and ordered earlier-first, so the
    result does not depend on argument order and every component is
    non-negative. Borrows cascade from seconds up to years; a borrowed
    month is worth the number of days in the earlier operand's month.

    Args:
        a: First instant
        b: Second instant

    Returns:
        CalendarDiff with all components >= 0
    """
    a = ensure_aware(a).astimezone(timezone.utc)
    b = ensure_aware(b).astimezone(timezone.utc)
    if a > b:
        a, b = b, a

    years = b.year - a.year
    months = b.month - a.month
    days = b.day - a.day
    hours = b.hour - a.hour
    minutes = b.minute - a.minute
    seconds = b.second - a.second

    if seconds < 0:
        seconds += 60
        minutes -= 1
    if minutes < 0:
        minutes += 60
        hours -= 1
    if hours < 0:
        hours += 24
        days -= 1
    if days < 0:
        days += calendar.monthrange(a.year, a.month)[1]
        months -= 1
    if months < 0:
        months += 12
        years -= 1

    return CalendarDiff(years, months, days, hours, minutes, seconds)


class DateFormatter:
    """Formats instants with the configured date and time patterns."""

    def __init__(self, date_pattern: str, use_24h: bool = True) -> None:
        """Initialize formatter.

        Args:
            date_pattern: strftime pattern for the date part
            use_24h: 24-hour clock when True, 12-hour with AM/PM otherwise
        """
        self.date_pattern = date_pattern
        self.time_pattern = "%H:%M" if use_24h else "%I:%M %p"

    @classmethod
    def from_settings(cls, settings: EmailSettings) -> "DateFormatter":
        """Build a formatter from the email settings section."""
        return cls(settings.date_format, settings.use_24h)

    def pretty(self, dt: datetime) -> tuple[str, str]:
        """Return the (date, time) strings for an instant in local time."""
        local = ensure_aware(dt).astimezone()
        return local.strftime(self.date_pattern), local.strftime(self.time_pattern)

    def format(self, dt: datetime) -> str:
        """Return "<date> <time>" for an instant."""
        date, time = self.pretty(dt)
        return f"{date} {time}"


def parse_datetime(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp as sent by Jellyfin.

    Jellyfin emits up to seven fractional digits and a trailing ``Z``;
    pydantic accepts both and cuts the fraction to microseconds.

    Returns:
        Aware datetime, or None if the value cannot be parsed
    """
    try:
        parsed = _datetime_adapter.validate_python(value.strip())
    except ValidationError:
        return None
    return ensure_aware(parsed)
