"""Leave day arithmetic."""

from datetime import date, timedelta

SUNDAY = 6  # date.weekday()


def iter_days(start: date, end: date):  # type: ignore[no-untyped-def]
    """Yield every date of the closed range ``[start, end]``."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def count_leave_days(start: date, end: date) -> int:
    """Number of leave days in ``[start, end]``; Sundays are not counted."""
    return sum(1 for day in iter_days(start, end) if day.weekday() != SUNDAY)
