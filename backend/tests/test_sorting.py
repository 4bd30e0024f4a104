"""Tests for query ordering and in-memory list sorting."""

from datetime import date, datetime

import pytest
from sqlalchemy.orm import Session

from portal.core.sorting import (
    SORT_ASC,
    SORT_DESC,
    SortState,
    apply_order_by,
    parse_order_by,
    resolve_field,
    sort_records,
)
from portal.models.announcement import Announcement
from portal.repositories.announcement_repository import AnnouncementRepository
from portal.schemas.announcement import AnnouncementCreate

# ---------------------------------------------------------------------------
# Unit tests for the apply_order_by utility
# ---------------------------------------------------------------------------


class TestParseOrderBy:
    def test_none_uses_defaults(self) -> None:
        assert parse_order_by(None, "created_at", SORT_DESC) == ("created_at", SORT_DESC)

    def test_field_without_direction_is_ascending(self) -> None:
        assert parse_order_by("title", "created_at", SORT_DESC) == ("title", SORT_ASC)

    def test_invalid_direction_falls_back(self) -> None:
        assert parse_order_by("title:sideways", "created_at", SORT_DESC) == ("title", SORT_DESC)


class TestApplyOrderBy:
    def _seed(self, db_session: Session) -> None:
        repo = AnnouncementRepository(db_session)
        for title in ("Bravo", "Alpha", "Charlie"):
            repo.create(AnnouncementCreate(title=title, body="..."))

    def test_sort_by_valid_field_asc(self, db_session: Session) -> None:
        self._seed(db_session)
        query = apply_order_by(db_session.query(Announcement), Announcement, "title:asc")
        assert [a.title for a in query.all()] == ["Alpha", "Bravo", "Charlie"]

    def test_sort_by_valid_field_desc(self, db_session: Session) -> None:
        self._seed(db_session)
        query = apply_order_by(db_session.query(Announcement), Announcement, "title:desc")
        assert [a.title for a in query.all()] == ["Charlie", "Bravo", "Alpha"]

    def test_invalid_field_falls_back_to_default(self, db_session: Session) -> None:
        self._seed(db_session)
        query = apply_order_by(db_session.query(Announcement), Announcement, "nope:asc")
        assert len(query.all()) == 3


# ---------------------------------------------------------------------------
# In-memory sorting
# ---------------------------------------------------------------------------


RECORDS = [
    {"id": 1, "name": "Carla", "company": {"name": "Zeta"}, "created": "2025-03-01T10:00:00"},
    {"id": 2, "name": "ana", "company": {"name": "Alfa"}, "created": "2025-01-15T08:30:00"},
    {"id": 3, "name": "Bruno", "company": None, "created": "2025-02-20T12:00:00"},
]


class TestResolveField:
    def test_nested_mapping(self) -> None:
        assert resolve_field(RECORDS[0], "company.name") == "Zeta"

    def test_missing_link_is_none(self) -> None:
        assert resolve_field(RECORDS[2], "company.name") is None


class TestSortRecords:
    def test_returns_copy(self) -> None:
        result = sort_records(RECORDS, "id", SORT_DESC)
        assert [r["id"] for r in result] == [3, 2, 1]
        assert [r["id"] for r in RECORDS] == [1, 2, 3]

    def test_missing_values_sort_as_empty_string(self) -> None:
        result = sort_records(RECORDS, "company.name", SORT_ASC)
        assert [r["id"] for r in result] == [3, 2, 1]

    def test_date_keys_compare_by_timestamp(self) -> None:
        result = sort_records(RECORDS, "created", SORT_ASC, date_keys=["created"])
        assert [r["id"] for r in result] == [2, 3, 1]

    def test_date_objects(self) -> None:
        rows = [{"d": date(2025, 5, 2)}, {"d": datetime(2025, 5, 1, 9)}, {"d": None}]
        result = sort_records(rows, "d", SORT_DESC, date_keys=["d"])
        assert result[-1]["d"] is None
        assert result[0]["d"] == date(2025, 5, 2)

    def test_stable_for_equal_keys(self) -> None:
        rows = [{"k": 1, "i": 0}, {"k": 0, "i": 1}, {"k": 1, "i": 2}, {"k": 0, "i": 3}]
        assert [r["i"] for r in sort_records(rows, "k")] == [1, 3, 0, 2]


class TestSortState:
    def test_first_click_sorts_ascending(self) -> None:
        state = SortState().request_sort("name")
        assert (state.key, state.direction) == ("name", SORT_ASC)

    def test_toggle_cycle(self) -> None:
        state = SortState()
        directions = [state.request_sort("name").direction for _ in range(3)]
        assert directions == [SORT_ASC, SORT_DESC, SORT_ASC]

    def test_new_column_starts_ascending(self) -> None:
        state = SortState(key="name", direction=SORT_ASC).request_sort("name")
        assert state.direction == SORT_DESC
        state.request_sort("company")
        assert (state.key, state.direction) == ("company", SORT_ASC)

    def test_apply_without_key_keeps_order(self) -> None:
        assert SortState().apply(RECORDS) == RECORDS

    @pytest.mark.parametrize("direction,expected", [(SORT_ASC, [2, 3, 1]), (SORT_DESC, [1, 3, 2])])
    def test_apply_sorts(self, direction: str, expected: list[int]) -> None:
        state = SortState(key="created", direction=direction)
        assert [r["id"] for r in state.apply(RECORDS, date_keys=["created"])] == expected
