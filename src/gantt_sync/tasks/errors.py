# src/gantt_sync/tasks/errors.py

from __future__ import annotations

"""
Failures raised by the reconciliation engine.

An unchanged value is not an error: it is reported as Outcome.NOOP on the result.
"""


class ReconcileError(Exception):
    """Base class for reconciliation failures surfaced to the caller."""


class LookupFailure(ReconcileError):
    """An account name could not be resolved to a site identity."""

    def __init__(self, account_name: str, reason: str = "") -> None:
        self.account_name = account_name
        msg = f"Could not resolve account {account_name!r}"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class PersistenceFailure(ReconcileError):
    """The remote store rejected the write, or the transport failed."""

    def __init__(self, task_id: int, remote_field_name: str) -> None:
        self.task_id = task_id
        self.remote_field_name = remote_field_name
        super().__init__(f"Failed to update {remote_field_name!r} on task {task_id}")


class TaskNotFound(ReconcileError, LookupError):
    """
    Target task id is absent from the supplied snapshot.

    This means the caller and the engine disagree about the current snapshot;
    it is a contract violation and must not be silently ignored.
    """

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} is not in the snapshot")
