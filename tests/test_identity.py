# tests/test_identity.py

from __future__ import annotations

import pytest

from gantt_sync.tasks.errors import LookupFailure
from gantt_sync.tasks.identity import IdentityResolver
from gantt_sync.tasks.task_models import ResolvedPerson, UnresolvedPerson

from .fakes import FakeTaskListStore


@pytest.mark.asyncio
async def test_resolve_identity_uses_directory(store: FakeTaskListStore, locator) -> None:
    resolver = IdentityResolver(store, locator)
    assert await resolver.resolve_identity("asmith") == 22
    assert store.lookups == ["asmith"]


@pytest.mark.asyncio
async def test_unknown_account_raises_lookup_failure(store: FakeTaskListStore, locator) -> None:
    resolver = IdentityResolver(store, locator)
    with pytest.raises(LookupFailure) as ei:
        await resolver.resolve_identity("unknown_user")
    assert ei.value.account_name == "unknown_user"
    assert isinstance(ei.value.__cause__, KeyError)


@pytest.mark.asyncio
async def test_empty_account_name_fails_without_lookup(store: FakeTaskListStore, locator) -> None:
    with pytest.raises(LookupFailure):
        await IdentityResolver(store, locator).resolve_identity("  ")
    assert store.lookups == []


@pytest.mark.asyncio
async def test_resolve_all_only_looks_up_unresolved(store: FakeTaskListStore, locator) -> None:
    resolver = IdentityResolver(store, locator)
    out = await resolver.resolve_all(
        [ResolvedPerson(id=21, account_name="jdoe"), UnresolvedPerson(account_name="mlee", display_name="Min Lee")]
    )
    assert out == [
        ResolvedPerson(id=21, account_name="jdoe"),
        ResolvedPerson(id=23, account_name="mlee", display_name="Min Lee"),
    ]
    assert store.lookups == ["mlee"]


@pytest.mark.asyncio
async def test_resolve_all_stops_at_first_failure(store: FakeTaskListStore, locator) -> None:
    resolver = IdentityResolver(store, locator)
    with pytest.raises(LookupFailure):
        await resolver.resolve_all(
            [
                UnresolvedPerson(account_name="ghost"),
                UnresolvedPerson(account_name="asmith"),
            ]
        )
    assert store.lookups == ["ghost"]
