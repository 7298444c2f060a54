# tests/test_offline_store.py

from __future__ import annotations

import pytest

from gantt_sync.core.ports import ListLocator
from gantt_sync.remote.offline import OfflineTaskList
from gantt_sync.tasks.board import TaskBoard
from gantt_sync.tasks.task_models import ResolvedPerson, UnresolvedPerson

LOCATOR = ListLocator(site_url="offline://demo", list_title="Tasks")


@pytest.mark.asyncio
async def test_offline_list_applies_encoded_writes() -> None:
    store = OfflineTaskList()
    board = TaskBoard(store, LOCATOR)
    await board.load()

    await board.on_person_field_change(
        3, "assignedTo", [UnresolvedPerson(account_name="mlee"), UnresolvedPerson(account_name="jdoe")]
    )
    await board.on_completion_toggle(3, True)

    assert store.writes == [
        (3, "assignedToId", {"results": [13, 11]}),
        (3, "status", "Completed"),
    ]

    reloaded = {t.id: t for t in await store.fetch_tasks(LOCATOR)}
    assert [p.account_name for p in reloaded[3].assigned_to] == ["mlee", "jdoe"]
    assert reloaded[3].status == "Completed"
    assert board.get_task(3).assigned_to[0] == ResolvedPerson(id=13, account_name="mlee")


@pytest.mark.asyncio
async def test_offline_directory_rejects_unknown_accounts() -> None:
    with pytest.raises(KeyError):
        await OfflineTaskList().lookup_identity_by_account_name(LOCATOR, "nobody")


@pytest.mark.asyncio
async def test_offline_list_rejects_unknown_rows_and_fields() -> None:
    store = OfflineTaskList()
    with pytest.raises(KeyError):
        await store.persist_field(LOCATOR, 99, "title", "x")
    with pytest.raises(ValueError):
        await store.persist_field(LOCATOR, 1, "Body", "x")
