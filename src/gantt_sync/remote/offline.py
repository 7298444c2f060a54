# src/gantt_sync/remote/offline.py

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any

from ..core.ports import ListLocator
from ..tasks.field_codec import IDENTITY_SUFFIX, PREDECESSORS_REMOTE_FIELD, RESULTS_KEY
from ..tasks.task_models import (
    TASK_FIELDS,
    ChoiceOption,
    FieldKind,
    Predecessor,
    ResolvedPerson,
    Task,
    TaskStatus,
)

DEMO_DIRECTORY: dict[str, ResolvedPerson] = {
    p.account_name: p
    for p in (
        ResolvedPerson(id=11, account_name="jdoe", display_name="John Doe"),
        ResolvedPerson(id=12, account_name="asmith", display_name="Anna Smith"),
        ResolvedPerson(id=13, account_name="mlee", display_name="Min Lee"),
    )
}


def _demo_tasks() -> list[Task]:
    jdoe, asmith = DEMO_DIRECTORY["jdoe"], DEMO_DIRECTORY["asmith"]
    return [
        Task(
            id=1,
            title="Requirements",
            start_date=datetime(2024, 1, 2, 9, 0),
            due_date=datetime(2024, 1, 5, 17, 0),
            percent_complete=100,
            status=TaskStatus.COMPLETED,
            priority="(1) High",
            assigned_to=(jdoe,),
        ),
        Task(
            id=2,
            title="Design",
            start_date=datetime(2024, 1, 8, 9, 0),
            due_date=datetime(2024, 1, 19, 17, 0),
            percent_complete=40,
            status=TaskStatus.IN_PROGRESS,
            priority="(2) Normal",
            assigned_to=(asmith,),
            predecessors=(Predecessor(id=1, title="Requirements"),),
        ),
        Task(
            id=3,
            title="Build",
            start_date=datetime(2024, 1, 22, 9, 0),
            due_date=datetime(2024, 2, 16, 17, 0),
            percent_complete=0,
            status=TaskStatus.NOT_STARTED,
            priority="(2) Normal",
            predecessors=(Predecessor(id=2, title="Design"),),
        ),
    ]


class OfflineTaskList:
    """
    Offline deterministic list store used for demos when no site is configured.

    Behavior:
    - A fixed three-task schedule and a three-person directory
    - Writes decode the same field encoding the real list receives and update
      the in-memory rows, so a reload shows them
    - Every write is recorded in `writes` for inspection
    """

    def __init__(self, tasks: list[Task] | None = None, directory: dict[str, ResolvedPerson] | None = None) -> None:
        self._tasks: dict[int, Task] = {t.id: t for t in (tasks if tasks is not None else _demo_tasks())}
        self._directory = dict(DEMO_DIRECTORY if directory is None else directory)
        self.writes: list[tuple[int, str, Any]] = []

    async def fetch_tasks(self, locator: ListLocator) -> list[Task]:
        return list(self._tasks.values())

    async def fetch_status_options(self, locator: ListLocator) -> list[ChoiceOption]:
        return [ChoiceOption(key=s.value, text=s.value) for s in TaskStatus]

    async def fetch_priority_options(self, locator: ListLocator) -> list[ChoiceOption]:
        return [ChoiceOption(key=p, text=p) for p in ("(1) High", "(2) Normal", "(3) Low")]

    async def lookup_identity_by_account_name(self, locator: ListLocator, account_name: str) -> int:
        person = self._directory.get(account_name)
        if person is None:
            raise KeyError(f"No such account: {account_name}")
        return person.id

    async def persist_field(
            self,
            locator: ListLocator,
            task_id: int,
            remote_field_name: str,
            remote_value: Any,
    ) -> None:
        task = self._tasks.get(task_id)
        if task is None:
            raise KeyError(f"No list item with id {task_id}")

        self.writes.append((task_id, remote_field_name, remote_value))

        if remote_field_name == PREDECESSORS_REMOTE_FIELD:
            ids = remote_value[RESULTS_KEY]
            preds = tuple(Predecessor(id=i, title=self._title_of(i)) for i in ids)
            self._tasks[task_id] = replace(task, predecessors=preds)
            return

        if remote_field_name == "assignedTo" + IDENTITY_SUFFIX:
            by_id = {p.id: p for p in self._directory.values()}
            people = tuple(by_id.get(i) or ResolvedPerson(id=i, account_name=str(i)) for i in remote_value[RESULTS_KEY])
            self._tasks[task_id] = replace(task, assigned_to=people)
            return

        spec = TASK_FIELDS.get(remote_field_name)
        if spec is None or spec.kind not in (FieldKind.SCALAR, FieldKind.DATE):
            raise ValueError(f"Field {remote_field_name!r} is not writable")
        self._tasks[task_id] = replace(task, **{spec.attr: remote_value})

    def _title_of(self, task_id: int) -> str:
        t = self._tasks.get(task_id)
        return t.title if t is not None else ""
