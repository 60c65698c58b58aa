"""
Generic Repository

Create/read/update/delete access over one Django model, the persistence
gateway every domain repository builds on.

Reads are explicit: callers name the relations they need through
``include`` and get them in the same query (``select_related``) or in one
extra query per relation (``prefetch_related``), never lazily per row.

Writes are staged in a ``ChangeSet`` and flushed by ``commit()`` inside a
single transaction. Repositories created by one unit of work share the
same change set, so a commit on any of them saves everything staged so far
in the order it was staged.
"""

from __future__ import annotations

import logging
from typing import Generic, Iterable, Optional, TypeVar, Union

from django.db import models, transaction  # type: ignore
from django.db.models import Q  # type: ignore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=models.Model)

Where = Optional[Union[Q, dict]]


class ChangeSet:
    """Ordered list of staged writes."""

    SAVE = "save"
    DELETE = "delete"

    def __init__(self) -> None:
        self._operations: list[tuple[str, models.Model]] = []

    def stage(self, operation: str, obj: models.Model) -> None:
        self._operations.append((operation, obj))

    def clear(self) -> None:
        self._operations.clear()

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self):
        return iter(list(self._operations))

    def flush(self) -> None:
        """Apply staged writes atomically; cleared only on success."""
        if not self._operations:
            return
        logger.debug(f"Flushing {len(self._operations)} staged write(s)")
        with transaction.atomic():
            for operation, obj in self._operations:
                if operation == self.DELETE:
                    obj.delete()
                else:
                    obj.save()
        self._operations.clear()


def _lock_queryset_if_possible(queryset):
    """
    Apply select_for_update when inside transaction.atomic().

    Backends without row locks ignore it.
    """

    if not transaction.get_connection().in_atomic_block:
        return queryset

    return queryset.select_for_update(of=("self",))


def _is_forward_path(model: type[models.Model], path: str) -> bool:
    """True when every hop of ``path`` is a forward FK or one-to-one."""

    current = model
    for name in path.split("__"):
        field = current._meta.get_field(name)
        if not (field.concrete and (field.many_to_one or field.one_to_one)):
            return False
        current = field.related_model
    return True


class Repository(Generic[ModelT]):
    """Generic repository over a single model."""

    model: type[ModelT]

    def __init__(self, changes: ChangeSet | None = None, model: type[ModelT] | None = None) -> None:
        if model is not None:
            self.model = model
        self.changes = changes if changes is not None else ChangeSet()

    # --- reads --------------------------------------------------------------

    def queryset(self, where: Where = None, include: Iterable[str] = (), tracked: bool = True):
        qs = self.model._default_manager.all()
        if isinstance(where, Q):
            qs = qs.filter(where)
        elif where:
            qs = qs.filter(**where)

        select, prefetch = [], []
        for path in include:
            (select if _is_forward_path(self.model, path) else prefetch).append(path)
        if select:
            qs = qs.select_related(*select)
        if prefetch:
            qs = qs.prefetch_related(*prefetch)

        if tracked:
            qs = _lock_queryset_if_possible(qs)
        return qs

    def get(self, where: Where = None, include: Iterable[str] = (), tracked: bool = True) -> list[ModelT]:
        """
        Return every row matching ``where``.

        ``tracked`` rows are meant to be modified: inside an atomic block
        they are locked until the transaction ends.
        """
        return list(self.queryset(where, include, tracked))

    def get_one(self, where: Where = None, include: Iterable[str] = (), tracked: bool = True) -> ModelT | None:
        return self.queryset(where, include, tracked).first()

    # --- writes -------------------------------------------------------------

    def create(self, obj: ModelT) -> ModelT:
        self.changes.stage(ChangeSet.SAVE, obj)
        return obj

    def update(self, obj: ModelT) -> ModelT:
        self.changes.stage(ChangeSet.SAVE, obj)
        return obj

    def delete(self, obj: ModelT) -> None:
        self.changes.stage(ChangeSet.DELETE, obj)

    def commit(self) -> None:
        self.changes.flush()
