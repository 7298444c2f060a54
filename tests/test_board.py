# tests/test_board.py

from __future__ import annotations

import pytest

from gantt_sync.tasks.board import TaskBoard
from gantt_sync.tasks.errors import LookupFailure, PersistenceFailure
from gantt_sync.tasks.task_models import ChoiceOption, Predecessor, UnresolvedPerson

from .fakes import FakeTaskListStore


@pytest.mark.asyncio
async def test_load_fills_snapshot_and_options(store: FakeTaskListStore, locator) -> None:
    board = TaskBoard(store, locator)
    assert not board.is_loaded

    tasks = await board.load()

    assert board.is_loaded
    assert [t.id for t in tasks] == [1, 3, 5, 7]
    assert [o.text for o in board.status_options] == ["Not Started", "In Progress", "Completed"]
    assert board.priority_options[0] == ChoiceOption(key="(1) High", text="(1) High")
    assert board.predecessor_options[1] == ChoiceOption(key="3", text="Design")


def test_board_requires_load(store: FakeTaskListStore, locator) -> None:
    with pytest.raises(RuntimeError):
        TaskBoard(store, locator).get_task(1)


@pytest.mark.asyncio
async def test_edits_swap_in_the_new_snapshot(store: FakeTaskListStore, locator) -> None:
    board = TaskBoard(store, locator)
    await board.load()
    before = board.tasks

    await board.on_completion_toggle(5, True)
    assert board.tasks is not before
    assert board.get_task(5).status == "Completed"

    await board.on_predecessor_field_change(5, [Predecessor(id=3, title="Design")])
    assert board.get_task(5).predecessors == (Predecessor(id=3, title="Design"),)
    assert board.get_task(5).status == "Completed"


@pytest.mark.asyncio
async def test_noop_keeps_snapshot_identity(store: FakeTaskListStore, locator) -> None:
    board = TaskBoard(store, locator)
    await board.load()
    before = board.tasks

    result = await board.on_scalar_field_change(3, "title", "Design")

    assert not result.changed
    assert board.tasks is before


@pytest.mark.asyncio
async def test_failures_keep_previous_snapshot(locator, snapshot) -> None:
    store = FakeTaskListStore(tasks=snapshot, directory={}, persist_error=ConnectionError("offline"))
    board = TaskBoard(store, locator)
    await board.load()
    before = board.tasks

    with pytest.raises(LookupFailure):
        await board.on_person_field_change(5, "assignedTo", [UnresolvedPerson(account_name="unknown_user")])
    with pytest.raises(PersistenceFailure):
        await board.on_scalar_field_change(5, "title", "x")

    assert board.tasks is before
    assert store.writes == []
