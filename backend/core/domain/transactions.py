"""
core.domain.transactions — Helpers for row-locked atomic writes.

Every store procedure that mutates counters follows the same pattern:
open ``transaction.atomic()``, lock the rows it is going to touch with
``select_for_update`` (always in the same order to avoid deadlocks),
re-validate under the lock, then write.

Usage::

    from core.domain.transactions import lock_for_update, lock_many

    with transaction.atomic():
        complaint = lock_for_update(Complaint, complaint_id)
        officers = lock_many(Officer, [old_id, new_id])
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from django.db import models

from core.domain.exceptions import NotFound

M = TypeVar("M", bound=models.Model)


def lock_for_update(model_class: type[M], pk: Any) -> M:
    """
    Acquire a row-level lock on the given model instance.

    Convenience wrapper around ``select_for_update().get(pk=pk)``
    that must be called inside an ``atomic()`` block.

    Args:
        model_class: The Django model class.
        pk:          Primary key value.

    Returns:
        The locked model instance.

    Raises:
        NotFound: If no row with that PK exists.
    """
    try:
        return model_class.objects.select_for_update().get(pk=pk)
    except model_class.DoesNotExist:
        raise NotFound(f"{model_class.__name__} with pk={pk} does not exist.")


def lock_many(model_class: type[M], pks: Iterable[Any]) -> dict[Any, M]:
    """
    Lock several rows of one model in ascending PK order.

    Locking in a fixed order keeps two concurrent procedures that touch
    the same pair of rows from deadlocking each other.

    Returns:
        ``{pk: locked_instance}`` for every requested PK.

    Raises:
        NotFound: If any requested PK is missing.
    """
    wanted = sorted(set(pks))
    rows = {
        obj.pk: obj
        for obj in model_class.objects.select_for_update().filter(pk__in=wanted).order_by("pk")
    }
    missing = [pk for pk in wanted if pk not in rows]
    if missing:
        raise NotFound(
            f"{model_class.__name__} with pk={missing[0]} does not exist."
        )
    return rows
