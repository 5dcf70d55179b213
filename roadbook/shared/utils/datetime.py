"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the service are timezone-aware UTC.
"""

from datetime import UTC, date, datetime, timedelta


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def expires_after(start: datetime, seconds: float) -> datetime:
    """Return start shifted by the given number of seconds."""
    return start + timedelta(seconds=seconds)


def compact_date(value: date) -> str:
    """
    Format a date as YYYYMMDD, the format the booking listing expects.

    Args:
        value: Date (or datetime) to format

    Returns:
        Eight-digit date string
    """
    return value.strftime("%Y%m%d")


def listing_window(today: date, years_back: int, years_forward: int) -> tuple[str, str]:
    """
    Return the (from, to) booking listing window around today.

    The window spans whole calendar years: 1 January of today's year minus
    years_back up to 31 December of today's year plus years_forward.
    """
    start = date(today.year - years_back, 1, 1)
    end = date(today.year + years_forward, 12, 31)
    return compact_date(start), compact_date(end)


def elapsed_ms(started: float, now: float) -> int:
    """Whole milliseconds between two perf_counter/monotonic readings."""
    return int(round((now - started) * 1000))
