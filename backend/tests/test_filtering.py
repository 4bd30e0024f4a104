"""Tests for list-page filtering and search debouncing."""

import asyncio
from unittest.mock import patch

import pytest

from portal.core.filtering import ALL, Debouncer, filter_records, matches_search

RECORDS = [
    {"id": 1, "name": "Ana Pérez", "status": "pendiente", "company": {"name": "Acme"}},
    {"id": 2, "name": "Bruno Díaz", "status": "aprobado", "company": {"name": "Globex"}},
    {"id": 3, "name": "Carla Ruiz", "status": "pendiente", "company": None},
    {"id": 4, "name": "Dario Acevedo", "status": "rechazado", "company": {"name": "Acme"}},
]

SEARCH_FIELDS = ("name", "company.name")


def _ids(records):  # type: ignore[no-untyped-def]
    return [r["id"] for r in records]


class TestMatchesSearch:
    def test_case_insensitive(self) -> None:
        assert matches_search(RECORDS[0], "ANA", SEARCH_FIELDS)

    def test_nested_field(self) -> None:
        assert matches_search(RECORDS[1], "glob", SEARCH_FIELDS)

    def test_missing_nested_field_does_not_match(self) -> None:
        assert not matches_search(RECORDS[2], "acme", ("company.name",))


class TestFilterRecords:
    def test_empty_criteria_is_identity(self) -> None:
        assert filter_records(RECORDS) == RECORDS
        assert filter_records(RECORDS, search="", search_fields=SEARCH_FIELDS) == RECORDS

    def test_all_and_none_disable_filters(self) -> None:
        result = filter_records(RECORDS, filters={"status": ALL, "company.name": None})
        assert result == RECORDS

    def test_search_across_fields(self) -> None:
        result = filter_records(RECORDS, search="ac", search_fields=SEARCH_FIELDS)
        assert _ids(result) == [1, 4]

    def test_exact_filter(self) -> None:
        result = filter_records(RECORDS, filters={"status": "pendiente"})
        assert _ids(result) == [1, 3]

    def test_filters_combine(self) -> None:
        result = filter_records(
            RECORDS,
            search="a",
            search_fields=SEARCH_FIELDS,
            filters={"status": "pendiente", "company.name": "Acme"},
        )
        assert _ids(result) == [1]

    def test_contains_filter(self) -> None:
        result = filter_records(RECORDS, contains={"company.name": "GLO"})
        assert _ids(result) == [2]

    def test_recomputed_from_source(self) -> None:
        narrowed = filter_records(RECORDS, filters={"status": "aprobado"})
        widened = filter_records(RECORDS, filters={"status": "pendiente"})
        assert _ids(narrowed) == [2]
        assert _ids(widened) == [1, 3]

    def test_does_not_reorder(self) -> None:
        reversed_records = list(reversed(RECORDS))
        result = filter_records(reversed_records, filters={"company.name": "Acme"})
        assert _ids(result) == [4, 1]


class TestDebouncer:
    @pytest.mark.asyncio
    async def test_only_last_call_runs(self) -> None:
        calls: list[str] = []
        debouncer = Debouncer(delay=0.01)

        debouncer.call(calls.append, "a")
        debouncer.call(calls.append, "ab")
        debouncer.call(calls.append, "abc")
        await debouncer.flush()

        assert calls == ["abc"]

    @pytest.mark.asyncio
    async def test_awaits_coroutines(self) -> None:
        async def compute(term: str) -> str:
            return term.upper()

        debouncer = Debouncer(delay=0.01)
        debouncer.call(compute, "ana")
        assert await debouncer.flush() == "ANA"

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_call(self) -> None:
        calls: list[int] = []
        debouncer = Debouncer(delay=0.01)

        debouncer.call(calls.append, 1)
        debouncer.cancel()
        await asyncio.sleep(0.03)

        assert calls == []
        assert await debouncer.flush() is None

    def test_default_delay(self) -> None:
        assert Debouncer().delay == pytest.approx(0.3)

    def test_default_delay_follows_settings(self) -> None:
        with patch("portal.core.filtering.settings") as mock_settings:
            mock_settings.SEARCH_DEBOUNCE_SECONDS = 0.05
            assert Debouncer().delay == pytest.approx(0.05)
