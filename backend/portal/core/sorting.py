"""Sorting utilities for repository queries and in-memory list pages."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from portal.core.database import Base

SORT_ASC = "asc"
SORT_DESC = "desc"


def apply_order_by(
    query: Query,  # type: ignore[type-arg]
    model: type[Base],
    order_by: str | None,
    default_field: str = "created_at",
    default_direction: str = SORT_DESC,
) -> Query:  # type: ignore[type-arg]
    """Apply ordering to a SQLAlchemy query.

    Args:
        query: The SQLAlchemy query to sort.
        model: The SQLAlchemy model class.
        order_by: Sort string in "field:direction" format (e.g. "title:asc").
            If None, uses default_field and default_direction.
        default_field: Default column to sort by.
        default_direction: Default sort direction ("asc" or "desc").

    Returns:
        The query with ordering applied.
    """
    field, direction = parse_order_by(order_by, default_field, default_direction)
    if not hasattr(model, field):
        field, direction = default_field, default_direction

    column = getattr(model, field)
    order_func = asc if direction == SORT_ASC else desc
    return query.order_by(order_func(column))


def parse_order_by(
    order_by: str | None,
    default_field: str,
    default_direction: str = SORT_ASC,
) -> tuple[str, str]:
    """Split a "field:direction" string, falling back to the defaults."""
    if not order_by:
        return default_field, default_direction
    parts = order_by.split(":", 1)
    field = parts[0] or default_field
    direction = parts[1] if len(parts) > 1 else SORT_ASC
    if direction not in (SORT_ASC, SORT_DESC):
        direction = default_direction
    return field, direction


def resolve_field(record: Any, path: str) -> Any:
    """Read a possibly dotted field ("usuario.empresa.nombre") from a record.

    Works for mappings and plain objects; any missing link yields None.
    """
    value = record
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def _timestamp(value: Any) -> float:
    if value is None or value == "":
        return float("-inf")
    if isinstance(value, datetime):
        return value.timestamp()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day).timestamp()
    try:
        return datetime.fromisoformat(str(value)).timestamp()
    except ValueError:
        return float("-inf")


def sort_records(
    records: Sequence[Any],
    key: str,
    direction: str = SORT_ASC,
    date_keys: Iterable[str] = (),
) -> list[Any]:
    """Return a stably sorted copy of ``records``.

    Fields listed in ``date_keys`` compare by parsed timestamp; every other
    field compares by its raw value, with missing values treated as "".
    """
    if key in set(date_keys):
        sort_key: Callable[[Any], Any] = lambda r: _timestamp(resolve_field(r, key))  # noqa: E731
    else:

        def sort_key(r: Any) -> Any:
            value = resolve_field(r, key)
            return "" if value is None else value

    return sorted(records, key=sort_key, reverse=direction == SORT_DESC)


@dataclass
class SortState:
    """Column header sort state for a list page.

    Clicking a column sorts ascending; clicking the same column again
    flips to descending, and a third click goes back to ascending.
    Switching columns always starts ascending.
    """

    key: str | None = None
    direction: str = SORT_ASC

    def request_sort(self, key: str) -> SortState:
        if self.key == key and self.direction == SORT_ASC:
            self.direction = SORT_DESC
        else:
            self.direction = SORT_ASC
        self.key = key
        return self

    def apply(self, records: Sequence[Any], date_keys: Iterable[str] = ()) -> list[Any]:
        if self.key is None:
            return list(records)
        return sort_records(records, self.key, self.direction, date_keys)
