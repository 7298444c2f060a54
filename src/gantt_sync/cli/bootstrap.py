# src/gantt_sync/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- picks the list store (SharePoint when a site is configured, offline demo list otherwise),
- wires the store into a TaskBoard on AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import ListLocator, TaskListStore
from ..core.state import AppState
from ..remote.offline import OfflineTaskList
from ..remote.sharepoint import SharePointTaskList
from ..tasks.board import TaskBoard

logger = logging.getLogger(__name__)

OFFLINE_SITE_URL = "offline://demo"


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def build_store(settings) -> TaskListStore:
    if settings.offline_mode:
        logger.info("No site configured (GANTT_SITE_URL); using the offline demo list.")
        return OfflineTaskList()
    return SharePointTaskList(
        access_token=settings.access_token,
        timeout_seconds=settings.http_timeout_seconds,
        verify_tls=settings.verify_tls,
    )


def create_initial_state(*, settings=None, store: TaskListStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Settings and store are injectable to keep tests free of hidden config reads
    and network access. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if store is None:
        store = build_store(settings)

    site_url = settings.site_url or OFFLINE_SITE_URL
    locator = ListLocator(site_url=site_url, list_title=settings.list_title)

    return AppState(settings=settings, store=store, board=TaskBoard(store, locator))


async def close_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    aclose = getattr(state.store, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception:
        logger.debug("Store close failed.", exc_info=True)
