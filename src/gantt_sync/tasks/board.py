# src/gantt_sync/tasks/board.py

from __future__ import annotations

"""
Caller-side owner of the task snapshot.

The board loads the list once, then routes every field edit through the
Reconciler and swaps in the returned snapshot. On failure the exception
propagates and the previous snapshot stays in place.

Precondition: edits are awaited one at a time from a single control point
(the console loop). The board takes no lock.
"""

import logging
from collections.abc import Sequence
from typing import Any

from ..core.ports import ListLocator, TaskListStore
from .reconciler import Reconciler, ReconcileResult
from .task_models import ChoiceOption, Person, Predecessor, Task, find_task_index

logger = logging.getLogger(__name__)


class TaskBoard:
    def __init__(self, store: TaskListStore, locator: ListLocator, reconciler: Reconciler | None = None) -> None:
        self.locator = locator
        self._store = store
        self._reconciler = reconciler or Reconciler(store, locator)

        self.tasks: Sequence[Task] | None = None
        self.status_options: list[ChoiceOption] = []
        self.priority_options: list[ChoiceOption] = []
        self.predecessor_options: list[ChoiceOption] = []

    @property
    def is_loaded(self) -> bool:
        return self.tasks is not None

    async def load(self) -> Sequence[Task]:
        tasks = await self._store.fetch_tasks(self.locator)
        self.status_options = await self._store.fetch_status_options(self.locator)
        self.priority_options = await self._store.fetch_priority_options(self.locator)
        self.predecessor_options = [ChoiceOption(key=str(t.id), text=t.title) for t in tasks]
        self.tasks = list(tasks)
        logger.info("Loaded %d tasks from list=%s", len(self.tasks), self.locator.list_title)
        return self.tasks

    def get_task(self, task_id: int) -> Task | None:
        tasks = self._require_tasks()
        index = find_task_index(tasks, task_id)
        return None if index is None else tasks[index]

    def _require_tasks(self) -> Sequence[Task]:
        if self.tasks is None:
            raise RuntimeError("TaskBoard is not loaded; call load() first.")
        return self.tasks

    def _apply(self, result: ReconcileResult) -> ReconcileResult:
        if result.changed:
            self.tasks = result.snapshot
        return result

    async def on_scalar_field_change(self, task_id: int, field_name: str, value: Any) -> ReconcileResult:
        result = await self._reconciler.on_scalar_field_change(self._require_tasks(), task_id, field_name, value)
        return self._apply(result)

    async def on_person_field_change(
            self, task_id: int, field_name: str, persons: Sequence[Person]
    ) -> ReconcileResult:
        result = await self._reconciler.on_person_field_change(self._require_tasks(), task_id, field_name, persons)
        return self._apply(result)

    async def on_predecessor_field_change(self, task_id: int, predecessors: Sequence[Predecessor]) -> ReconcileResult:
        result = await self._reconciler.on_predecessor_field_change(self._require_tasks(), task_id, predecessors)
        return self._apply(result)

    async def on_completion_toggle(self, task_id: int, mark_complete: bool) -> ReconcileResult:
        result = await self._reconciler.on_completion_toggle(self._require_tasks(), task_id, mark_complete)
        return self._apply(result)
