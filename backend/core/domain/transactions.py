"""
core.domain.transactions — Helpers for safe state transitions.

Wraps ``transaction.atomic`` and ``select_for_update`` into reusable
patterns so that the report and suggestion service layers follow the
same concurrency-safe approach:

1. Lock the row (``lock_for_update``) inside ``transaction.atomic()``.
2. Ask the workflow engine for a ``TransitionResult`` against the
   *locked* snapshot.
3. Persist the returned mutation map (``apply_mutations``).

Usage::

    from core.domain.transactions import apply_mutations, lock_for_update

    with transaction.atomic():
        report = lock_for_update(Report, report_id)
        result = REPORT_ENGINE.request_transition(report, actor, target, text)
        result.raise_for_rejection()
        apply_mutations(report, result.mutations)
"""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from django.db import models

from core.domain.exceptions import NotFound

M = TypeVar("M", bound=models.Model)


def lock_for_update(model_class: type[M], pk: Any) -> M:
    """
    Acquire a row-level lock on the given model instance.

    Convenience wrapper around ``select_for_update().get(pk=pk)``
    that must be called inside an ``atomic()`` block.

    Raises:
        NotFound: If no row with that PK exists.
    """
    try:
        return model_class.objects.select_for_update().get(pk=pk)
    except model_class.DoesNotExist:
        raise NotFound(f"{model_class.__name__} with pk={pk} does not exist.")


def apply_mutations(instance: M, mutations: Mapping[str, Any]) -> M:
    """
    Copy ``mutations`` onto ``instance`` and save only those columns.

    Keys are model attribute names (``assignee_id`` rather than
    ``assignee``), so the FK column is written without a lookup.
    """
    if not mutations:
        return instance
    update_fields = []
    for attname, value in mutations.items():
        setattr(instance, attname, value)
        # ``update_fields`` takes field names, not attnames.
        update_fields.append(instance._meta.get_field(attname).name)
    instance.save(update_fields=update_fields)
    return instance
