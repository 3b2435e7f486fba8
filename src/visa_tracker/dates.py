"""Calendar-day helpers.

Trip dates are calendar days with no time-of-day. Stored values arrive as
"YYYY-MM-DD" strings or as ISO timestamps ("YYYY-MM-DDT00:00:00.000Z");
both are read from their leading date components so that no timezone
conversion can move a trip onto the neighbouring day.
"""

import re
from collections.abc import Iterator
from datetime import date, datetime, timedelta

from visa_tracker.exceptions import InvalidDateError

_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")

DateInput = date | datetime | str


def parse_to_local_day_start(value: DateInput) -> date:
    """Read a date, datetime or date string as a calendar day.

    Args:
        value: A ``date``, a ``datetime`` (its own calendar day is kept,
            whatever its tzinfo) or a string starting with ``YYYY-MM-DD``.

    Returns:
        The calendar day as a ``date``

    Raises:
        InvalidDateError: If the string is not a recognizable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        raise InvalidDateError(value)

    text = value.strip()
    match = _DATE_PREFIX.match(text)
    if match:
        year, month, day = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError as e:
            raise InvalidDateError(value) from e

    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise InvalidDateError(value) from e


def to_date_key(day: date) -> str:
    """Format a day as ``YYYY-MM-DD``."""
    return day.isoformat()


def format_local_date(value: DateInput) -> str:
    """Human-readable form of a stored date (e.g. ``Mar 1, 2024``)."""
    day = parse_to_local_day_start(value)
    return f"{day:%b} {day.day}, {day.year}"


def days_between(start: date, end: date) -> int:
    """Signed number of whole days from ``start`` to ``end``."""
    return (end - start).days


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive.

    Yields nothing when ``end`` is before ``start``.
    """
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
