# src/gantt_sync/tasks/status.py

from __future__ import annotations

from .task_models import TaskStatus


def derive_status(mark_complete: bool, current_percent_complete: int | float) -> TaskStatus:
    """
    Status label for the completion toggle.

    Marking complete always yields Completed; un-marking falls back to progress:
    any progress -> In Progress, none -> Not Started.
    """
    if mark_complete:
        return TaskStatus.COMPLETED
    if current_percent_complete > 0:
        return TaskStatus.IN_PROGRESS
    return TaskStatus.NOT_STARTED
