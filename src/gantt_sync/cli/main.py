# src/gantt_sync/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the task list, then runs the
console REPL on a single event loop.
"""

from __future__ import annotations

import asyncio
import logging

from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging
from .bootstrap import close_state, create_initial_state

logger = logging.getLogger(__name__)


async def _run(state: AppState) -> int:
    try:
        try:
            await state.board.load()
        except Exception:
            logger.exception("Failed to load tasks from %s", state.board.locator.site_url)
            return 1

        await run_console_loop(state)
        return 0
    finally:
        await close_state(state)


def main() -> int:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        code = asyncio.run(_run(state))
    except KeyboardInterrupt:
        code = 130

    logger.info("Bye.")
    return code


if __name__ == "__main__":
    raise SystemExit(main())
