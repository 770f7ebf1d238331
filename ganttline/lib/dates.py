"""
Date helpers: tolerant parsing, quarter alignment and display formats.
"""

import calendar
import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_date(value: Any, now: Optional[datetime] = None) -> datetime:
    """Parse a date-like value into a naive datetime.

    Never raises. Missing or unparseable input yields `now` (the current
    moment when not given), which keeps every task renderable at the
    cost of misplaced bars for bad data.
    """
    if isinstance(value, datetime):
        return _to_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, str) and value.strip():
        text = value.strip()
        # fromisoformat doesn't take a trailing Z before 3.11
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _to_naive(datetime.fromisoformat(text))
        except ValueError:
            logger.debug(f"Unparseable date {value!r}, substituting current time")
    elif value is not None:
        logger.debug(f"Unsupported date value {value!r}, substituting current time")

    return now if now is not None else datetime.now()


def _to_naive(value: datetime) -> datetime:
    """Convert aware datetimes to naive UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def quarter_of(day: date) -> int:
    """Quarter number (1-4) containing the given day."""
    return (day.month - 1) // 3 + 1


def quarter_start(year: int, quarter: int) -> date:
    """First day of a quarter."""
    return date(year, (quarter - 1) * 3 + 1, 1)


def quarter_end(year: int, quarter: int) -> date:
    """Last day of a quarter."""
    month = quarter * 3
    return date(year, month, calendar.monthrange(year, month)[1])


def first_day_of_quarter(day: date) -> date:
    return quarter_start(day.year, quarter_of(day))


def last_day_of_quarter(day: date) -> date:
    return quarter_end(day.year, quarter_of(day))


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month containing `day`."""
    last = calendar.monthrange(day.year, day.month)[1]
    return date(day.year, day.month, 1), date(day.year, day.month, last)


def format_display_date(value: date) -> str:
    """Locale-fixed display format, e.g. 'Jan 5, 2024'."""
    return f"{MONTH_ABBR[value.month - 1]} {value.day}, {value.year:04d}"


def format_iso_date(value: date) -> str:
    """Comma-free export format, e.g. '2024-01-05'."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
