# src/gantt_sync/tasks/reconciler.py

from __future__ import annotations

"""
Task reconciliation engine.

Every operation follows the same path:
- locate the task in the caller's snapshot (TaskNotFound if absent),
- short-circuit when the candidate value is unchanged (no remote call, same snapshot),
- resolve person identities (person-set fields only, all-or-nothing),
- encode the field for the list store and write that single field,
- merge the accepted value into a new snapshot that replaces only the target task.

The reconciler never keeps a snapshot of its own. Callers must issue operations
sequentially from one control point; two concurrent operations on the same task
race and the last merge wins.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..core.ports import ListLocator, TaskListStore
from .equality import is_unchanged
from .errors import PersistenceFailure, TaskNotFound
from .field_codec import encode
from .identity import IdentityResolver
from .status import derive_status
from .task_models import (
    FieldKind,
    FieldSpec,
    Person,
    Predecessor,
    Task,
    UnknownField,
    field_spec,
    find_task_index,
    get_field,
    with_field,
)

logger = logging.getLogger(__name__)

STATUS_FIELD = "status"
PREDECESSORS_FIELD = "predecessors"


class Outcome(StrEnum):
    NOOP = "noop"
    MERGED = "merged"


@dataclass(slots=True, frozen=True)
class ReconcileResult:
    snapshot: Sequence[Task]
    outcome: Outcome
    task: Task

    @property
    def changed(self) -> bool:
        return self.outcome == Outcome.MERGED


class Reconciler:
    def __init__(
            self,
            store: TaskListStore,
            locator: ListLocator,
            resolver: IdentityResolver | None = None,
    ) -> None:
        self._store = store
        self._locator = locator
        self._resolver = resolver or IdentityResolver(store, locator)

    # ---- public operations ----

    async def on_scalar_field_change(
            self, snapshot: Sequence[Task], task_id: int, field_name: str, value: Any
    ) -> ReconcileResult:
        """Scalar and date fields (title, dates, percentComplete, status, priority)."""
        spec = self._expect(field_name, FieldKind.SCALAR, FieldKind.DATE)
        return await self._reconcile(snapshot, task_id, spec, value)

    async def on_person_field_change(
            self, snapshot: Sequence[Task], task_id: int, field_name: str, persons: Sequence[Person]
    ) -> ReconcileResult:
        spec = self._expect(field_name, FieldKind.PERSON_SET)
        return await self._reconcile(snapshot, task_id, spec, tuple(persons))

    async def on_predecessor_field_change(
            self, snapshot: Sequence[Task], task_id: int, predecessors: Sequence[Predecessor]
    ) -> ReconcileResult:
        spec = self._expect(PREDECESSORS_FIELD, FieldKind.PREDECESSOR_SET)
        return await self._reconcile(snapshot, task_id, spec, tuple(predecessors))

    async def on_completion_toggle(
            self, snapshot: Sequence[Task], task_id: int, mark_complete: bool
    ) -> ReconcileResult:
        index = self._locate(snapshot, task_id)
        status = derive_status(mark_complete, snapshot[index].percent_complete)
        return await self.on_scalar_field_change(snapshot, task_id, STATUS_FIELD, status)

    # ---- internals ----

    @staticmethod
    def _expect(field_name: str, *kinds: FieldKind) -> FieldSpec:
        spec = field_spec(field_name)
        if spec.kind not in kinds:
            raise UnknownField(f"Field {field_name!r} is {spec.kind.value}, expected {'/'.join(kinds)}")
        return spec

    @staticmethod
    def _locate(snapshot: Sequence[Task], task_id: int) -> int:
        index = find_task_index(snapshot, task_id)
        if index is None:
            raise TaskNotFound(task_id)
        return index

    async def _reconcile(
            self, snapshot: Sequence[Task], task_id: int, spec: FieldSpec, value: Any
    ) -> ReconcileResult:
        index = self._locate(snapshot, task_id)
        task = snapshot[index]

        if is_unchanged(spec.kind, get_field(task, spec.name), value):
            logger.debug("Task %s field=%s unchanged; skipping update", task_id, spec.name)
            return ReconcileResult(snapshot=snapshot, outcome=Outcome.NOOP, task=task)

        if spec.kind == FieldKind.PERSON_SET:
            # LookupFailure propagates from here, before any remote write.
            value = tuple(await self._resolver.resolve_all(value))

        encoded = encode(spec.name, spec.kind, value)

        try:
            await self._store.persist_field(self._locator, task_id, encoded.name, encoded.value)
        except Exception as e:
            logger.warning(
                "Remote update failed task_id=%s field=%s (%s)", task_id, encoded.name, e.__class__.__name__
            )
            raise PersistenceFailure(task_id, encoded.name) from e

        updated = with_field(task, spec.name, value)
        new_snapshot = list(snapshot)
        new_snapshot[index] = updated
        logger.info("Task %s: %s updated", task_id, spec.name)
        return ReconcileResult(snapshot=new_snapshot, outcome=Outcome.MERGED, task=updated)
