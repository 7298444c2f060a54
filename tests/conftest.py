# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from gantt_sync.core.ports import ListLocator
from gantt_sync.tasks.task_models import (
    Predecessor,
    ResolvedPerson,
    Task,
    TaskStatus,
    UnresolvedPerson,
)

from .fakes import FakeTaskListStore


@pytest.fixture()
def locator() -> ListLocator:
    return ListLocator(site_url="https://contoso.sharepoint.com/sites/pmo", list_title="Tasks")


@pytest.fixture()
def snapshot() -> list[Task]:
    """
    Small schedule used across reconciler/board tests.

    Task 7 has one assignee that arrived without an id (picked in the UI, never saved).
    """
    return [
        Task(
            id=1,
            title="Kickoff",
            start_date=datetime(2024, 1, 2, 9, 0),
            due_date=datetime(2024, 1, 3, 17, 0),
            percent_complete=100,
            status=TaskStatus.COMPLETED,
            priority="(2) Normal",
            assigned_to=(ResolvedPerson(id=1, account_name="pm"),),
        ),
        Task(
            id=3,
            title="Design",
            start_date=datetime(2024, 1, 5, 8, 0),
            due_date=datetime(2024, 1, 12, 17, 0),
            percent_complete=60,
            status=TaskStatus.COMPLETED,
            priority="(1) High",
            predecessors=(Predecessor(id=1, title="Kickoff"),),
        ),
        Task(
            id=5,
            title="Review",
            percent_complete=0,
            status=TaskStatus.NOT_STARTED,
        ),
        Task(
            id=7,
            title="Build",
            start_date=datetime(2024, 1, 15, 9, 0),
            due_date=None,
            percent_complete=10,
            status=TaskStatus.IN_PROGRESS,
            assigned_to=(UnresolvedPerson(account_name="jdoe"),),
            predecessors=(Predecessor(id=3, title="Design"), Predecessor(id=5, title="Review")),
        ),
    ]


@pytest.fixture()
def store(snapshot: list[Task]) -> FakeTaskListStore:
    return FakeTaskListStore(tasks=snapshot, directory={"jdoe": 21, "asmith": 22, "mlee": 23})


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap.

    A SimpleNamespace rather than the real config keeps tests isolated from
    the process environment.
    """
    return SimpleNamespace(
        app_name="gantt-test",
        log_level="INFO",
        data_dir=tmp_path / "data",
        site_url="",
        list_title="Tasks",
        access_token=None,
        http_timeout_seconds=5.0,
        verify_tls=True,
        offline_mode=True,
    )
