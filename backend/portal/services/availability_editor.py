"""Editor for blocked periods of the shared vacation calendar.

Administrators block ("disable") date ranges during which employees cannot
book vacations, and re-open ("enable") sub-ranges of them. Blocked periods
are stored as closed date intervals with ``available = False``.

``disable`` appends one interval and never merges it with existing ones, so
overlapping blocked rows can coexist. ``enable`` removes the requested days
from every overlapping blocked interval, keeping the parts before and after
as new, narrower intervals. Each mutation runs in a single transaction;
concurrent edits of the same scope are last-write-wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.models.availability_interval import AvailabilityInterval
from portal.models.shared import ONE_DAY
from portal.repositories.availability_interval_repository import (
    AvailabilityIntervalRepository,
)
from portal.services.leave_days import iter_days

logger = logging.getLogger(__name__)


class InvalidDateRangeError(ValueError):
    """The range ends before it starts."""


class AvailabilityEditError(RuntimeError):
    """A calendar edit failed; callers should re-fetch before editing again."""


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidDateRangeError(
                f"End date {self.end.isoformat()} is before start date {self.start.isoformat()}"
            )

    def overlaps(self, start: date, end: date) -> bool:
        return start <= self.end and end >= self.start


def subtract_range(start: date, end: date, removed: DateRange) -> list[tuple[date, date]]:
    """Parts of ``[start, end]`` left after taking out ``removed``.

    Returns zero, one or two closed ranges, in ascending order.
    """
    if not removed.overlaps(start, end):
        return [(start, end)]
    pieces = []
    if start < removed.start:
        pieces.append((start, removed.start - ONE_DAY))
    if end > removed.end:
        pieces.append((removed.end + ONE_DAY, end))
    return pieces


class AvailabilityEditor:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AvailabilityIntervalRepository(db)

    def list_intervals(self, scope_id: str) -> list[AvailabilityInterval]:
        return self.repo.get_by_scope(scope_id)

    def list_blocked(self, scope_id: str) -> list[AvailabilityInterval]:
        return self.repo.get_by_scope(scope_id, available=False)

    def add_interval(
        self, scope_id: str, start: date, end: date, available: bool
    ) -> AvailabilityInterval:
        """Store a raw interval row as given."""
        DateRange(start, end)
        try:
            return self.repo.create(
                scope_id=scope_id, start_date=start, end_date=end, available=available
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise AvailabilityEditError(str(exc)) from exc

    def disable(self, scope_id: str, start: date, end: date) -> AvailabilityInterval:
        """Block ``[start, end]`` by appending a new blocked interval."""
        DateRange(start, end)
        try:
            interval = self.repo.create(
                scope_id=scope_id, start_date=start, end_date=end, available=False
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to disable %s..%s for scope %s: %s", start, end, scope_id, exc)
            raise AvailabilityEditError(str(exc)) from exc
        logger.info("Disabled %s..%s for scope %s", start, end, scope_id)
        return interval

    def enable(self, scope_id: str, start: date, end: date) -> list[AvailabilityInterval]:
        """Re-open ``[start, end]``, keeping blocked days outside it blocked.

        Returns the narrower blocked intervals created from the remainders.

        Raises:
            InvalidDateRangeError: if ``end`` is before ``start``.
            AvailabilityEditError: if the edit could not be stored.
        """
        opened = DateRange(start, end)
        try:
            overlapping = self.repo.get_blocked_overlapping(scope_id, start, end)
            remainders: list[tuple[date, date]] = []
            for interval in overlapping:
                remainders.extend(
                    subtract_range(interval.start_date, interval.end_date, opened)  # type: ignore[arg-type]
                )
                self.repo.delete(interval, commit=False)

            created = [
                self.repo.create(
                    scope_id=scope_id,
                    start_date=piece_start,
                    end_date=piece_end,
                    available=False,
                    commit=False,
                )
                for piece_start, piece_end in remainders
            ]
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to enable %s..%s for scope %s: %s", start, end, scope_id, exc)
            raise AvailabilityEditError(str(exc)) from exc

        logger.info(
            "Enabled %s..%s for scope %s: replaced %d intervals with %d",
            start,
            end,
            scope_id,
            len(overlapping),
            len(created),
        )
        return created

    def blocked_days(self, scope_id: str, start: date, end: date) -> list[date]:
        """Every blocked day within ``[start, end]``, sorted and unique."""
        window = DateRange(start, end)
        days: set[date] = set()
        for interval in self.repo.get_blocked_overlapping(scope_id, start, end):
            first = max(interval.start_date, window.start)  # type: ignore[type-var]
            last = min(interval.end_date, window.end)  # type: ignore[type-var]
            days.update(iter_days(first, last))
        return sorted(days)

    def is_range_bookable(self, scope_id: str, start: date, end: date) -> bool:
        DateRange(start, end)
        return not self.repo.get_blocked_overlapping(scope_id, start, end)
