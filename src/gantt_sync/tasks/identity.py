# src/gantt_sync/tasks/identity.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.ports import ListLocator, PersonDirectory
from .errors import LookupFailure
from .task_models import Person, ResolvedPerson

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Turns account names into numeric site identities via the directory port."""

    def __init__(self, directory: PersonDirectory, locator: ListLocator) -> None:
        self._directory = directory
        self._locator = locator

    async def resolve_identity(self, account_name: str) -> int:
        name = (account_name or "").strip()
        if not name:
            raise LookupFailure(account_name, "empty account name")

        try:
            raw = await self._directory.lookup_identity_by_account_name(self._locator, name)
        except Exception as e:
            logger.warning("Identity lookup failed account=%s (%s)", name, e.__class__.__name__)
            raise LookupFailure(name, str(e)) from e

        try:
            identity = int(raw)
        except (TypeError, ValueError):
            raise LookupFailure(name, f"directory returned {raw!r}") from None

        logger.debug("Resolved account=%s -> id=%s", name, identity)
        return identity

    async def resolve_all(self, persons: Iterable[Person]) -> list[ResolvedPerson]:
        """
        Resolve every unresolved person, in input order.

        All-or-nothing: the first LookupFailure propagates and nothing is returned.
        """
        out: list[ResolvedPerson] = []
        for p in persons:
            if isinstance(p, ResolvedPerson):
                out.append(p)
                continue
            identity = await self.resolve_identity(p.account_name)
            out.append(ResolvedPerson(id=identity, account_name=p.account_name, display_name=p.display_name))
        return out
