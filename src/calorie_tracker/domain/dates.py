"""Calendar date helpers.

Dates are stored as ``D.M.YYYY`` strings and used directly as join keys
between entries, weight logs and "today". They are only parsed back into
dates for chronological ordering.
"""

from datetime import date, datetime

DATE_PARTS = 3


def format_date(value: date) -> str:
    """Return the stored text form of a calendar date."""
    return f"{value.day}.{value.month}.{value.year}"


def format_time(value: datetime) -> str:
    """Return the stored text form of a wall-clock time."""
    return value.strftime("%H.%M")


def parse_date(value: str) -> date:
    """Parse a stored date string, falling back to ``date.min``."""
    parts = value.strip().split(".")
    if len(parts) != DATE_PARTS:
        return date.min
    try:
        day, month, year = (int(part) for part in parts)
        return date(year, month, day)
    except ValueError:
        return date.min


def compare_calendar_dates(a: str, b: str) -> int:
    """Compare two stored date strings chronologically."""
    left, right = parse_date(a), parse_date(b)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0
