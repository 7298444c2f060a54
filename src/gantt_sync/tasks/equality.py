# src/gantt_sync/tasks/equality.py

from __future__ import annotations

"""
Change detection per field kind.

Set-valued fields use a member-coverage test under confirmed equal sizes. The
coverage test runs in both directions, so a current list with duplicate keys
cannot "cover" a candidate that holds a member it never matched.
"""

from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import Any, TypeVar

from .task_models import FieldKind, Person, Predecessor, same_person

T = TypeVar("T")


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def equal_dates_no_time(a: date | datetime | None, b: date | datetime | None) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return _as_date(a) == _as_date(b)


def _covers(left: Sequence[T], right: Sequence[T], same: Callable[[T, T], bool]) -> bool:
    return all(any(same(x, y) for y in right) for x in left)


def _same_members(current: Sequence[T], candidate: Sequence[T], same: Callable[[T, T], bool]) -> bool:
    if len(current) != len(candidate):
        return False
    return _covers(current, candidate, same) and _covers(candidate, current, same)


def same_person_lists(current: Sequence[Person], candidate: Sequence[Person]) -> bool:
    return _same_members(current, candidate, same_person)


def same_predecessor_lists(current: Sequence[Predecessor], candidate: Sequence[Predecessor]) -> bool:
    return _same_members(current, candidate, lambda a, b: a.id == b.id)


def is_unchanged(kind: FieldKind, current: Any, candidate: Any) -> bool:
    """True when `candidate` would not change the field holding `current`."""
    if kind == FieldKind.DATE:
        return equal_dates_no_time(current, candidate)
    if kind == FieldKind.PERSON_SET:
        return same_person_lists(current or (), candidate or ())
    if kind == FieldKind.PREDECESSOR_SET:
        return same_predecessor_lists(current or (), candidate or ())
    return current == candidate
