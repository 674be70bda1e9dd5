# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for creating and applying fix-it patches."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pytest

from diagnoseit import (
    DiagnosticMessage,
    FixItHint,
    MissingContextError,
    PatchApplyError,
    Range,
    apply_patch,
    create_patch,
)
from diagnoseit.patch import patch_target

NOW = datetime(2020, 1, 1)
SOURCE = "Line 1\nLine 2\nLine 3"
HEADER = "--- example.py 01/01/2020, 00:00:00\n+++ example.py.fix 01/01/2020, 00:00:00\n@@ -1,3 +1,3 @@\n"


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def _message(*hints: FixItHint) -> DiagnosticMessage:
    message = DiagnosticMessage.error("example.py", "Subject", line=1, column=1).with_context(1, SOURCE)
    for hint in hints:
        message = message.with_fixit_hint(hint)
    return message


@pytest.mark.parametrize(
    ("hints", "body", "fixed"),
    [
        pytest.param((), " Line 1\n Line 2\n Line 3", SOURCE, id="no-hints"),
        pytest.param(
            (FixItHint.create_insertion(1, "First "),),
            "-Line 1\n+First Line 1\n Line 2\n Line 3",
            "First Line 1\nLine 2\nLine 3",
            id="insertion",
        ),
        pytest.param(
            (FixItHint.create_removal(Range(index=5, length=2)),),
            "-Line 1\n+Line\n Line 2\n Line 3",
            "Line\nLine 2\nLine 3",
            id="removal",
        ),
        pytest.param(
            (FixItHint.create_replacement(Range(index=1, length=6), "First"),),
            "-Line 1\n+First\n Line 2\n Line 3",
            "First\nLine 2\nLine 3",
            id="replacement",
        ),
        pytest.param(
            (FixItHint.create_insertion(1, "First "), FixItHint.create_removal(Range(index=5, length=2))),
            "-Line 1\n+First Line\n Line 2\n Line 3",
            "First Line\nLine 2\nLine 3",
            id="multiple",
        ),
    ],
)
def test_create_and_apply_patch(hints: tuple[FixItHint, ...], body: str, fixed: str) -> None:
    patch = create_patch(_message(*hints), now=NOW)

    assert patch == HEADER + body
    assert apply_patch(patch, source=SOURCE) == fixed


def test_scenario_patch_at_line_99(three_lines: list[str]) -> None:
    message = (
        DiagnosticMessage.create("example.py", "Subject", line=99, column=1)
        .with_context(99, three_lines)
        .with_fixit_hint(FixItHint.create_insertion(1, "First "))
    )

    lines = create_patch(message, now=NOW).splitlines()

    assert lines[2] == "@@ -99,3 +99,3 @@"
    assert lines[3:] == ["-Line 1", "+First Line 1", " Line 2", " Line 3"]


def test_create_patch_uses_file_mtime(tmp_path: Path) -> None:
    target = tmp_path / "example.py"
    target.write_text(SOURCE, encoding="utf-8")
    stamp = datetime(2019, 6, 15, 12, 30, 45).timestamp()
    os.utime(target, (stamp, stamp))

    patch = create_patch(_message(), now=NOW)

    assert patch.splitlines()[0] == "--- example.py 15/06/2019, 12:30:45"


def test_apply_patch_reads_target_file(tmp_path: Path) -> None:
    (tmp_path / "example.py").write_text(SOURCE + "\n", encoding="utf-8")
    patch = create_patch(_message(FixItHint.create_insertion(1, "First ")), now=NOW)

    assert apply_patch(patch) == "First Line 1\nLine 2\nLine 3\n"


def test_apply_patch_keeps_lines_outside_hunk() -> None:
    message = (
        DiagnosticMessage.create("example.py", "s", line=3)
        .with_context(2, ["b", "c"])
        .with_fixit_hint(FixItHint.create_replacement(Range(index=1, length=1), "C"))
    )
    patch = create_patch(message, now=NOW)

    assert apply_patch(patch, source="a\nb\nc\nd\n") == "a\nb\nC\nd\n"


def test_create_patch_requires_context() -> None:
    with pytest.raises(MissingContextError):
        create_patch(DiagnosticMessage.create("example.py", "Subject"), now=NOW)


def test_apply_patch_rejects_mismatched_source() -> None:
    patch = create_patch(_message(FixItHint.create_insertion(1, "First ")), now=NOW)

    with pytest.raises(PatchApplyError):
        apply_patch(patch, source="Other 1\nLine 2\nLine 3")


@pytest.mark.parametrize(
    "patch",
    [
        "",
        "+++ example.py.fix\n--- example.py\n",
        "--- example.py 01/01/2020, 00:00:00\n+++ example.py.fix 01/01/2020, 00:00:00\n",
        "--- example.py 01/01/2020, 00:00:00\n+++ example.py.fix 01/01/2020, 00:00:00\n Line 1",
        HEADER + "?Line 1\n Line 2\n Line 3",
        HEADER + " Line 1\n Line 2",
    ],
)
def test_apply_patch_rejects_malformed_patches(patch: str) -> None:
    with pytest.raises(PatchApplyError):
        apply_patch(patch, source=SOURCE)


def test_patch_target() -> None:
    assert patch_target(HEADER) == "example.py"


def test_round_trip_with_form_feed_line() -> None:
    message = (
        DiagnosticMessage.create("example.py", "Extra space", line=3, column=4)
        .with_context(1, ["int a;", "\x0c", "int  b;"])
        .with_fixit_hint(FixItHint.create_removal(Range(index=4, length=1)))
    )
    patch = create_patch(message, now=NOW)

    assert patch.splitlines()[2] == "@@ -1,3 +1,3 @@"
    assert apply_patch(patch, source="int a;\n\x0c\nint  b;\n") == "int a;\n\x0c\nint b;\n"


def test_apply_patch_accepts_crlf_source() -> None:
    patch = create_patch(_message(FixItHint.create_insertion(1, "First ")), now=NOW)

    assert apply_patch(patch, source="Line 1\r\nLine 2\r\nLine 3\r\n") == "First Line 1\nLine 2\nLine 3\n"
