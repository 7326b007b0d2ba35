"""
core.domain.filtering — Pure list filters used by the report and
suggestion list screens.

Every function takes an iterable of items (model instances or plain
mappings) and returns a **new** list; inputs are never mutated.  The
pipeline in ``apply_filters`` is:

    status → category → free-text search → created_at sort

``"all"`` disables the status/category filters and an empty (or
whitespace-only) query disables the search.  Searching matches the
lowercased query as a substring of title, description, category or the
category's display label (``get_category_display()`` on models,
``category_display`` on mappings).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

ALL = "all"

ORDER_NEWEST = "newest"
ORDER_OLDEST = "oldest"
ORDERINGS = (ORDER_NEWEST, ORDER_OLDEST)

SEARCH_FIELDS = ("title", "description", "category")


def _get(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _category_label(item: Any) -> str:
    if isinstance(item, Mapping):
        return str(item.get("category_display") or "")
    display = getattr(item, "get_category_display", None)
    return str(display()) if callable(display) else ""


def filter_by_status(items: Iterable[Any], status: str = ALL) -> list[Any]:
    if not status or status == ALL:
        return list(items)
    return [item for item in items if str(_get(item, "status")) == str(status)]


def filter_by_category(items: Iterable[Any], category: str = ALL) -> list[Any]:
    if not category or category == ALL:
        return list(items)
    return [item for item in items if str(_get(item, "category")) == str(category)]


def search(items: Iterable[Any], query: str = "") -> list[Any]:
    """Case-insensitive substring match over ``SEARCH_FIELDS`` and the category label."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(items)
    return [
        item for item in items
        if any(
            needle in str(_get(item, name) or "").lower()
            for name in SEARCH_FIELDS
        ) or needle in _category_label(item).lower()
    ]


def sort_by_created(items: Iterable[Any], order: str = ORDER_NEWEST) -> list[Any]:
    """
    Sort by ``created_at``.  ``sorted`` is stable in both directions, so
    ties keep their incoming relative order.
    """
    if order not in ORDERINGS:
        raise ValueError(f"Unknown ordering '{order}'; expected one of {ORDERINGS}.")
    return sorted(
        items,
        key=lambda item: _get(item, "created_at"),
        reverse=(order == ORDER_NEWEST),
    )


def apply_filters(
    items: Iterable[Any],
    *,
    status: str = ALL,
    category: str = ALL,
    query: str = "",
    order: str = ORDER_NEWEST,
) -> list[Any]:
    """Run the full list pipeline.  Idempotent for fixed arguments."""
    result = filter_by_status(items, status)
    result = filter_by_category(result, category)
    result = search(result, query)
    return sort_by_created(result, order)
