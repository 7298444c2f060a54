# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gantt_sync.core.ports import ListLocator
from gantt_sync.tasks.task_models import ChoiceOption, Task


@dataclass(slots=True)
class PersistCall:
    task_id: int
    field_name: str
    value: Any


class FakeTaskListStore:
    """
    Deterministic list store for unit tests.

    - Captures lookups and writes for assertions
    - Directory maps account name -> id; unknown accounts raise KeyError
    - `persist_error` (if set) is raised by every write
    """

    def __init__(
        self,
        tasks: list[Task] | None = None,
        directory: dict[str, int] | None = None,
        persist_error: Exception | None = None,
    ) -> None:
        self.tasks = list(tasks or [])
        self.directory = dict(directory or {})
        self.persist_error = persist_error
        self.lookups: list[str] = []
        self.writes: list[PersistCall] = []

    async def fetch_tasks(self, locator: ListLocator) -> list[Task]:
        return list(self.tasks)

    async def fetch_status_options(self, locator: ListLocator) -> list[ChoiceOption]:
        return [ChoiceOption(key=s, text=s) for s in ("Not Started", "In Progress", "Completed")]

    async def fetch_priority_options(self, locator: ListLocator) -> list[ChoiceOption]:
        return [ChoiceOption(key=p, text=p) for p in ("(1) High", "(2) Normal")]

    async def lookup_identity_by_account_name(self, locator: ListLocator, account_name: str) -> int:
        self.lookups.append(account_name)
        if account_name not in self.directory:
            raise KeyError(account_name)
        return self.directory[account_name]

    async def persist_field(
        self,
        locator: ListLocator,
        task_id: int,
        remote_field_name: str,
        remote_value: Any,
    ) -> None:
        if self.persist_error is not None:
            raise self.persist_error
        self.writes.append(PersistCall(task_id=task_id, field_name=remote_field_name, value=remote_value))


@dataclass(slots=True)
class Emitted:
    lines: list[str] = field(default_factory=list)

    def __call__(self, text: str) -> None:
        self.lines.append(text)
