"""gantt-sync: keeps a local task-list snapshot in step with a remote list store."""

__version__ = "0.1.0"
