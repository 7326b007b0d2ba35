"""
Unit tests for ``core.domain.filtering``.
"""

from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from core.domain.filtering import (
    apply_filters,
    filter_by_category,
    filter_by_status,
    search,
    sort_by_created,
)

T0 = datetime(2024, 1, 1, tzinfo=dt_timezone.utc)


def _item(pk, status, category="infrastructure", *, title="", description="", minutes=0):
    return {
        "id": pk,
        "status": status,
        "category": category,
        "title": title or f"Laporan {pk}",
        "description": description or "Deskripsi",
        "created_at": T0 + timedelta(minutes=minutes),
    }


@pytest.fixture()
def reports() -> list[dict]:
    return [
        _item(1, "pending", minutes=5, title="Jalan berlubang"),
        _item(2, "resolved", "sanitation", minutes=1, description="Sampah menumpuk"),
        _item(3, "pending", "health", minutes=9),
        _item(4, "in_progress", minutes=3),
        _item(5, "pending", "sanitation", minutes=2, title="Lampu JALAN mati"),
    ]


def _ids(items):
    return [item["id"] for item in items]


class TestFilterByStatus:

    def test_subset_in_original_order(self, reports):
        assert _ids(filter_by_status(reports, "pending")) == [1, 3, 5]

    def test_then_sort_newest(self, reports):
        pending = filter_by_status(reports, "pending")
        assert _ids(sort_by_created(pending, "newest")) == [3, 1, 5]

    @pytest.mark.parametrize("value", ["all", "", None])
    def test_all_returns_everything(self, reports, value):
        result = filter_by_status(reports, value)
        assert result == reports
        assert result is not reports

    def test_no_match_is_empty(self, reports):
        assert filter_by_status(reports, "rejected") == []


class TestFilterByCategory:

    def test_category(self, reports):
        assert _ids(filter_by_category(reports, "sanitation")) == [2, 5]

    def test_all(self, reports):
        assert len(filter_by_category(reports, "all")) == 5


class TestSearch:

    def test_case_insensitive_title(self, reports):
        assert _ids(search(reports, "jalan")) == [1, 5]

    def test_description(self, reports):
        assert _ids(search(reports, "SAMPAH")) == [2]

    def test_category_value(self, reports):
        assert _ids(search(reports, "health")) == [3]

    def test_category_label(self):
        items = [
            {**_item(1, "pending", "sanitation"), "category_display": "Kebersihan"},
            {**_item(2, "pending", "health"), "category_display": "Kesehatan"},
        ]
        assert _ids(search(items, "kebersihan")) == [1]
        assert _ids(search(items, "KESEHATAN")) == [2]

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query_disables_search(self, reports, query):
        assert search(reports, query) == reports


class TestSortByCreated:

    def test_oldest(self, reports):
        assert _ids(sort_by_created(reports, "oldest")) == [2, 5, 4, 1, 3]

    def test_ties_keep_relative_order(self):
        items = [_item(1, "pending"), _item(2, "pending"), _item(3, "pending")]
        assert _ids(sort_by_created(items, "newest")) == [1, 2, 3]
        assert _ids(sort_by_created(items, "oldest")) == [1, 2, 3]

    def test_unknown_order(self, reports):
        with pytest.raises(ValueError):
            sort_by_created(reports, "alphabetical")


class TestApplyFilters:

    def test_pipeline(self, reports):
        result = apply_filters(
            reports, status="pending", category="sanitation", query="lampu", order="oldest",
        )
        assert _ids(result) == [5]

    def test_idempotent(self, reports):
        kwargs = {"status": "pending", "query": "", "order": "newest"}
        once = apply_filters(reports, **kwargs)
        assert apply_filters(once, **kwargs) == once

    def test_input_is_not_mutated(self, reports):
        before = copy.deepcopy(reports)
        apply_filters(reports, status="pending", order="oldest")
        assert reports == before

    def test_defaults_return_everything_newest_first(self, reports):
        assert _ids(apply_filters(reports)) == [3, 1, 4, 5, 2]
