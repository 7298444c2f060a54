# src/gantt_sync/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from typing import Any, Sequence


class TaskStatus(StrEnum):
    """
    Status labels the engine derives itself.

    Notes:
    - Task.status stays a plain str: the remote choice list may offer extra labels
      (e.g. "Deferred") that must round-trip untouched.
    """

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class FieldKind(StrEnum):
    """Governs how a field is compared and encoded."""

    SCALAR = "scalar"
    DATE = "date"
    PERSON_SET = "person_set"
    PREDECESSOR_SET = "predecessor_set"


class UnknownField(ValueError):
    """Field name outside the task field registry, or used with the wrong kind."""


@dataclass(slots=True, frozen=True)
class ResolvedPerson:
    id: int
    account_name: str
    display_name: str = ""


@dataclass(slots=True, frozen=True)
class UnresolvedPerson:
    """A person picked in the UI that has no numeric site identity yet."""

    account_name: str
    display_name: str = ""


Person = ResolvedPerson | UnresolvedPerson


def person_id(person: Person) -> int | None:
    return person.id if isinstance(person, ResolvedPerson) else None


def same_person(a: Person, b: Person) -> bool:
    """Identities match (when both have one) or account names match."""
    a_id, b_id = person_id(a), person_id(b)
    if a_id is not None and a_id == b_id:
        return True
    return a.account_name == b.account_name


@dataclass(slots=True, frozen=True)
class Predecessor:
    id: int
    title: str = ""


@dataclass(slots=True, frozen=True)
class ChoiceOption:
    """One entry of an enumerated choice source (status, priority, predecessor)."""

    key: str
    text: str


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    title: str

    start_date: datetime | None = None
    due_date: datetime | None = None

    percent_complete: int = 0
    status: str = TaskStatus.NOT_STARTED
    priority: str | None = None

    assigned_to: tuple[Person, ...] = field(default_factory=tuple)
    predecessors: tuple[Predecessor, ...] = field(default_factory=tuple)


@dataclass(slots=True, frozen=True)
class FieldSpec:
    name: str
    attr: str
    kind: FieldKind


# UI-level field name -> Task attribute + kind. The UI names double as the
# remote store's field names (before the identity suffix for relational fields).
TASK_FIELDS: dict[str, FieldSpec] = {
    spec.name: spec
    for spec in (
        FieldSpec("title", "title", FieldKind.SCALAR),
        FieldSpec("startDate", "start_date", FieldKind.DATE),
        FieldSpec("dueDate", "due_date", FieldKind.DATE),
        FieldSpec("percentComplete", "percent_complete", FieldKind.SCALAR),
        FieldSpec("status", "status", FieldKind.SCALAR),
        FieldSpec("priority", "priority", FieldKind.SCALAR),
        FieldSpec("assignedTo", "assigned_to", FieldKind.PERSON_SET),
        FieldSpec("predecessors", "predecessors", FieldKind.PREDECESSOR_SET),
    )
}


def field_spec(field_name: str) -> FieldSpec:
    try:
        return TASK_FIELDS[field_name]
    except KeyError:
        raise UnknownField(f"Unknown task field: {field_name!r}") from None


def get_field(task: Task, field_name: str) -> Any:
    return getattr(task, field_spec(field_name).attr)


def with_field(task: Task, field_name: str, value: Any) -> Task:
    """Copy `task`, replacing one named field. Other field values are shared, not copied."""
    spec = field_spec(field_name)
    if spec.kind in (FieldKind.PERSON_SET, FieldKind.PREDECESSOR_SET):
        value = tuple(value)
    return replace(task, **{spec.attr: value})


def find_task_index(tasks: Sequence[Task], task_id: int) -> int | None:
    for i, t in enumerate(tasks):
        if t.id == task_id:
            return i
    return None
