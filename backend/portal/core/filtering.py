"""In-memory filtering for list pages.

Filtering is always recomputed from the full source list; nothing here is
incremental. Free-text search is debounced by the caller with ``Debouncer``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from typing import Any

from portal.core.config import settings
from portal.core.sorting import resolve_field

logger = logging.getLogger(__name__)

# Select boxes on list pages use this value for "no filter".
ALL = "all"


def _is_active(value: Any) -> bool:
    return value is not None and value != "" and value != ALL


def matches_search(record: Any, search: str, fields: Iterable[str]) -> bool:
    needle = search.lower()
    for field in fields:
        value = resolve_field(record, field)
        if value is not None and needle in str(value).lower():
            return True
    return False


def filter_records(
    records: Sequence[Any],
    search: str | None = None,
    search_fields: Iterable[str] = (),
    filters: Mapping[str, Any] | None = None,
    contains: Mapping[str, str] | None = None,
) -> list[Any]:
    """Filter records by free-text search and column filters.

    Args:
        records: The full, unfiltered source list.
        search: Case-insensitive substring matched against ``search_fields``.
        search_fields: Field paths searched by ``search``; a record matches
            if any of them contains the term.
        filters: Exact-match column filters. ``None``, "" and "all" disable
            a filter.
        contains: Case-insensitive substring column filters.

    Returns:
        A new list holding the matching records in their original order.
    """
    search_fields = tuple(search_fields)
    active_filters = {k: v for k, v in (filters or {}).items() if _is_active(v)}
    active_contains = {k: v for k, v in (contains or {}).items() if _is_active(v)}

    result = []
    for record in records:
        if search and not matches_search(record, search, search_fields):
            continue
        if any(resolve_field(record, k) != v for k, v in active_filters.items()):
            continue
        if any(
            str(v).lower() not in str(resolve_field(record, k) or "").lower()
            for k, v in active_contains.items()
        ):
            continue
        result.append(record)
    return result


class Debouncer:
    """Run only the last of a burst of calls, ``delay`` seconds after it.

    Each ``call`` cancels the previously scheduled one, so recomputation on
    every keystroke collapses into one run once typing pauses.
    """

    def __init__(self, delay: float | None = None):
        self.delay = settings.SEARCH_DEBOUNCE_SECONDS if delay is None else delay
        self._task: asyncio.Task[Any] | None = None

    def call(self, func: Callable[..., Awaitable[Any] | Any], *args: Any) -> asyncio.Task[Any]:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(func, *args))
        return self._task

    async def _run(self, func: Callable[..., Awaitable[Any] | Any], *args: Any) -> Any:
        await asyncio.sleep(self.delay)
        result = func(*args)
        if asyncio.iscoroutine(result):
            result = await result
        return result

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Superseded pending debounced call")
        self._task = None

    async def flush(self) -> Any:
        """Wait for the pending call, if any, and return its result."""
        if self._task is None:
            return None
        return await self._task
