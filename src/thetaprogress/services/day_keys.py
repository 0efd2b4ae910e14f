"""Calendar-day keys in a fixed reference timezone.

A key is the ``YYYY-MM-DD`` date of an instant as seen on a wall clock in the
configured zone, so "today" follows the user's calendar rather than UTC.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

CalendarKey = str


def resolve_zone(zone: tzinfo | str) -> tzinfo:
    return ZoneInfo(zone) if isinstance(zone, str) else zone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today_key(reference_time: datetime, zone: tzinfo | str) -> CalendarKey:
    """Project ``reference_time`` into ``zone`` and return its date part.

    Naive datetimes are taken to be UTC.
    """

    if reference_time.tzinfo is None:
        reference_time = reference_time.replace(tzinfo=timezone.utc)
    return reference_time.astimezone(resolve_zone(zone)).date().isoformat()


def shift(key: CalendarKey, delta_days: int) -> CalendarKey:
    return (date.fromisoformat(key) + timedelta(days=delta_days)).isoformat()


def is_immediately_before(a: CalendarKey, b: CalendarKey) -> bool:
    return shift(a, 1) == b


def last_n_days(today: CalendarKey, n: int) -> list[CalendarKey]:
    """Return ``n`` keys ending at ``today``, oldest first."""

    return [shift(today, -offset) for offset in range(n - 1, -1, -1)]


def month_prefix(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


__all__ = [
    "CalendarKey",
    "is_immediately_before",
    "last_n_days",
    "month_prefix",
    "resolve_zone",
    "shift",
    "today_key",
    "utc_now",
]
