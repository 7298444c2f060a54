# src/gantt_sync/tasks/field_codec.py

from __future__ import annotations

"""
UI-level field -> remote list field encoding.

Boundary contract with the list store:
- relational fields are written through their id column: "<field>Id"
- the value is an id-list envelope: {"results": [1, 2, ...]}
- predecessors always go to "predecessorsId"
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .task_models import FieldKind, Person, Predecessor, ResolvedPerson

IDENTITY_SUFFIX = "Id"
PREDECESSORS_REMOTE_FIELD = "predecessorsId"
RESULTS_KEY = "results"


@dataclass(slots=True, frozen=True)
class EncodedField:
    name: str
    value: Any


def id_envelope(ids: Iterable[int]) -> dict[str, list[int]]:
    return {RESULTS_KEY: [int(i) for i in ids]}


def _person_ids(persons: Iterable[Person]) -> list[int]:
    ids: list[int] = []
    for p in persons:
        if not isinstance(p, ResolvedPerson):
            raise ValueError(f"Person {p.account_name!r} must be resolved before encoding")
        ids.append(p.id)
    return ids


def encode(field_name: str, kind: FieldKind, value: Any) -> EncodedField:
    if kind == FieldKind.PERSON_SET:
        return EncodedField(f"{field_name}{IDENTITY_SUFFIX}", id_envelope(_person_ids(value)))

    if kind == FieldKind.PREDECESSOR_SET:
        preds: Iterable[Predecessor] = value
        return EncodedField(PREDECESSORS_REMOTE_FIELD, id_envelope(p.id for p in preds))

    # Scalars and dates pass through; the store adapter owns wire formatting.
    return EncodedField(field_name, value)
