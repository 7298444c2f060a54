# src/gantt_sync/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.board import TaskBoard
from .ports import TaskListStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules.
    settings: Any

    store: TaskListStore
    board: TaskBoard
