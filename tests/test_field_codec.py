# tests/test_field_codec.py

from __future__ import annotations

from datetime import datetime

import pytest

from gantt_sync.tasks.field_codec import EncodedField, encode
from gantt_sync.tasks.task_models import FieldKind, Predecessor, ResolvedPerson, UnresolvedPerson


def test_scalars_and_dates_pass_through() -> None:
    assert encode("title", FieldKind.SCALAR, "Build") == EncodedField("title", "Build")
    due = datetime(2024, 2, 1, 17, 0)
    assert encode("dueDate", FieldKind.DATE, due) == EncodedField("dueDate", due)


def test_person_set_uses_id_suffix_and_results_envelope() -> None:
    people = [ResolvedPerson(id=21, account_name="jdoe"), ResolvedPerson(id=22, account_name="asmith")]
    enc = encode("assignedTo", FieldKind.PERSON_SET, people)
    assert enc.name == "assignedToId"
    assert enc.value == {"results": [21, 22]}


def test_empty_person_set_clears_with_empty_envelope() -> None:
    assert encode("assignedTo", FieldKind.PERSON_SET, []).value == {"results": []}


def test_unresolved_person_cannot_be_encoded() -> None:
    with pytest.raises(ValueError):
        encode("assignedTo", FieldKind.PERSON_SET, [UnresolvedPerson(account_name="jdoe")])


def test_predecessors_go_to_fixed_field() -> None:
    enc = encode("predecessors", FieldKind.PREDECESSOR_SET, [Predecessor(id=3), Predecessor(id=5)])
    assert enc == EncodedField("predecessorsId", {"results": [3, 5]})
