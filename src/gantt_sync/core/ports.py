# src/gantt_sync/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The reconciliation engine depends on Protocols instead of concrete list clients.
This keeps the remote store swappable (SharePoint REST, offline demo list) and
makes testing easier.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from ..tasks.task_models import ChoiceOption, Task


@dataclass(slots=True, frozen=True)
class ListLocator:
    """Where the task list lives: site URL + list title."""

    site_url: str
    list_title: str


class PersonDirectory(Protocol):
    """Resolves an account (login) name to the site's numeric user id."""

    async def lookup_identity_by_account_name(self, locator: ListLocator, account_name: str) -> int: ...


class TaskListStore(PersonDirectory, Protocol):
    """
    Remote list store.

    Failures are raised (any exception); the engine converts them into
    LookupFailure / PersistenceFailure at its own boundary.
    """

    async def fetch_tasks(self, locator: ListLocator) -> list[Task]: ...

    async def fetch_status_options(self, locator: ListLocator) -> list[ChoiceOption]: ...

    async def fetch_priority_options(self, locator: ListLocator) -> list[ChoiceOption]: ...

    async def persist_field(
            self,
            locator: ListLocator,
            task_id: int,
            remote_field_name: str,
            remote_value: Any,
    ) -> None: ...
