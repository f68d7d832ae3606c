"""ISO-8601 week helpers (Monday-start weeks, ``YYYY-Www`` identifiers)."""

import re
from datetime import date, datetime, timedelta
from typing import Union

WEEK_PATTERN = re.compile(r"^(\d{4})-W(\d{2})$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _to_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def format_date(value: Union[date, str, None] = None) -> str:
    """Format a date as ``YYYY-MM-DD``; today when omitted.

    Raises:
        ValueError: If ``value`` is not a valid ISO date.
    """
    if value is None:
        return date.today().isoformat()
    return _to_date(value).isoformat()


def is_valid_date(value: str) -> bool:
    if not DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def format_week(value: Union[date, str, None] = None) -> str:
    """Return the ISO week id of a date, e.g. ``2026-W03``."""
    day = date.today() if value is None else _to_date(value)
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"


def current_date() -> str:
    return format_date()


def current_week() -> str:
    return format_week()


def is_valid_week(week: str) -> bool:
    """Check ``YYYY-Www`` format and that the week exists in that ISO year."""
    match = WEEK_PATTERN.match(week)
    if not match:
        return False
    year, number = int(match.group(1)), int(match.group(2))
    if not 1 <= number <= 53:
        return False
    try:
        date.fromisocalendar(year, number, 1)
    except ValueError:
        return False
    return True


def week_date_range(week: str) -> tuple[str, str]:
    """Return the Monday and Sunday of an ISO week as ISO strings.

    Raises:
        ValueError: If ``week`` is not a valid ``YYYY-Www`` identifier.
    """
    match = WEEK_PATTERN.match(week)
    if not match:
        raise ValueError(f"Invalid week format: {week}. Expected YYYY-Www")
    start = date.fromisocalendar(int(match.group(1)), int(match.group(2)), 1)
    end = start + timedelta(days=6)
    return start.isoformat(), end.isoformat()
