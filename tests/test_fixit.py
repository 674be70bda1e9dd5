# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for fix-it hint construction rules."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from diagnoseit import FixItHint, Modification, Range


def test_mark_hint_rejects_text() -> None:
    with pytest.raises(ValidationError):
        FixItHint(modification=Modification.MARK, range=Range(index=1), text="x")


def test_remove_hint_rejects_text() -> None:
    with pytest.raises(ValidationError):
        FixItHint(modification=Modification.REMOVE, range=Range(index=1, length=2), text="x")


@pytest.mark.parametrize("length", [0, 2, 5])
def test_insert_hint_requires_unit_length(length: int) -> None:
    with pytest.raises(ValidationError):
        FixItHint(modification=Modification.INSERT, range=Range(index=3, length=length), text="e")


@pytest.mark.parametrize("modification", [Modification.INSERT, Modification.REPLACE])
def test_text_required_for_insert_and_replace(modification: Modification) -> None:
    with pytest.raises(ValidationError):
        FixItHint(modification=modification, range=Range(index=1))


def test_range_rejects_non_positive_index() -> None:
    with pytest.raises(ValidationError):
        Range(index=0)
    with pytest.raises(ValidationError):
        Range(index=1, length=-1)


def test_factories_build_expected_hints() -> None:
    mark = FixItHint.create(Range(index=2, length=3))
    insertion = FixItHint.create_insertion(4, "e 2")
    replacement = FixItHint.create_replacement(Range(index=1, length=3), "Line")
    removal = FixItHint.create_removal(Range(index=3, length=2))

    assert (mark.modification, mark.text) == (Modification.MARK, None)
    assert insertion.range == Range(index=4, length=1)
    assert insertion.text == "e 2"
    assert replacement.modification is Modification.REPLACE
    assert removal.text is None


def test_range_geometry() -> None:
    span = Range(index=3, length=2)
    assert span.end == 5
    assert [column for column in range(1, 7) if span.covers(column)] == [3, 4]


@pytest.mark.parametrize(
    ("first", "second", "touching"),
    [
        (Range(index=1, length=2), Range(index=3, length=1), True),
        (Range(index=1, length=2), Range(index=2, length=1), True),
        (Range(index=1, length=2), Range(index=4, length=1), False),
        (Range(index=5, length=1), Range(index=1, length=2), False),
    ],
)
def test_range_touches_is_symmetric(first: Range, second: Range, touching: bool) -> None:
    assert first.touches(second) is touching
    assert second.touches(first) is touching


def test_hint_is_immutable() -> None:
    hint = FixItHint.create_insertion(1, "x")
    with pytest.raises(ValidationError):
        hint.text = "y"  # type: ignore[misc]
