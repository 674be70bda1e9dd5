# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Create and apply minimal unified-diff patches from fix-it hints.

This is not a general diff engine: a patch produced by :func:`create_patch`
has exactly one hunk spanning the message context, with at most one
removed/added line pair for the diagnosed line.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Final

from .errors import MissingContextError, PatchApplyError
from .messages import DiagnosticMessage, apply_hint, split_lines

LOGGER = logging.getLogger(__name__)

TIMESTAMP_FORMAT: Final[str] = "%d/%m/%Y, %H:%M:%S"
FIX_SUFFIX: Final[str] = ".fix"
_OLD_HEADER_PREFIX: Final[str] = "--- "
_HUNK_HEADER: Final[re.Pattern[str]] = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_count>\d+))? \+(?P<new_start>\d+)(?:,(?P<new_count>\d+))? @@",
)
_NO_NEWLINE_MARKER: Final[str] = "\\"


def fixed_line(message: DiagnosticMessage) -> str:
    """Return the diagnosed line with every hint applied left to right.

    Each edit shifts the remaining hints by the length it added or removed,
    so hints keep pointing at their columns in the original line.
    """
    result = message.focus_line
    offset = 0
    for hint in message.fixit_hints:
        before = len(result)
        result = apply_hint(result, hint, offset)
        offset += len(result) - before
    return result


def create_patch(message: DiagnosticMessage, *, now: datetime | None = None) -> str:
    """Return a single-hunk patch applying ``message``'s fix-it hints.

    Args:
        message: Message carrying a context and, optionally, fix-it hints.
        now: Timestamp of the fixed side; defaults to the current time.

    Returns:
        str: Patch text without a trailing newline.

    Raises:
        MissingContextError: ``message`` has no context.
    """
    context = message.context
    if context is None:
        raise MissingContextError("cannot create a patch without a context")

    timestamp = now or datetime.now()
    source = Path(message.file)
    mtime = datetime.fromtimestamp(source.stat().st_mtime) if message.file and source.is_file() else timestamp

    original = message.focus_line
    expected = fixed_line(message)
    focus_offset = message.line - context.start_line
    count = len(context.lines)

    rows = [
        f"--- {message.file} {mtime.strftime(TIMESTAMP_FORMAT)}",
        f"+++ {message.file}{FIX_SUFFIX} {timestamp.strftime(TIMESTAMP_FORMAT)}",
        f"@@ -{context.start_line},{count} +{context.start_line},{count} @@",
    ]
    for offset, line in enumerate(context.lines):
        if offset == focus_offset and original != expected:
            rows.append(f"-{line}")
            rows.append(f"+{expected}")
        else:
            rows.append(f" {line}")
    return "\n".join(rows)


@dataclass(slots=True)
class _Hunk:
    """One ``@@`` block of a unified diff."""

    old_start: int
    old_count: int
    body: list[str]


def patch_target(patch: str) -> str:
    """Return the file named on the ``---`` header line of ``patch``."""
    lines = _text_lines(patch)
    if not lines or not lines[0].startswith(_OLD_HEADER_PREFIX):
        raise PatchApplyError("patch does not start with a '---' header")
    parts = lines[0].split(" ")
    if len(parts) < 2 or not parts[1]:
        raise PatchApplyError("patch header does not name a file")
    return parts[1]


def apply_patch(patch: str, *, source: str | None = None) -> str:
    """Apply ``patch`` and return the patched file contents.

    Args:
        patch: Patch text as produced by :func:`create_patch`.
        source: Current file contents; read from the file named in the patch
            header when omitted.

    Returns:
        str: Patched text, keeping the source's trailing newline (if any).

    Raises:
        PatchApplyError: The patch is malformed or does not match ``source``.
    """
    target = patch_target(patch)
    if source is None:
        source = Path(target).read_text(encoding="utf-8")

    source_lines = _text_lines(source)
    output: list[str] = []
    cursor = 0
    for hunk in _parse_hunks(_text_lines(patch)):
        start = max(hunk.old_start - 1, 0) if hunk.old_count else hunk.old_start
        if start < cursor or start > len(source_lines):
            raise PatchApplyError(f"hunk at line {hunk.old_start} is outside the source")
        output.extend(source_lines[cursor:start])
        cursor = _apply_hunk(hunk, source_lines, start, output)

    output.extend(source_lines[cursor:])
    LOGGER.debug("applied patch to %s", target)
    result = "\n".join(output)
    if source.endswith("\n"):
        result += "\n"
    return result


def _text_lines(text: str) -> list[str]:
    """Split ``text`` on line feeds only, dropping the empty tail after a final break."""
    lines = list(split_lines(text))
    if lines[-1] == "":
        lines.pop()
    return lines


def _parse_hunks(lines: Sequence[str]) -> list[_Hunk]:
    hunks: list[_Hunk] = []
    for line in lines[2:]:
        match = _HUNK_HEADER.match(line)
        if match:
            old_count = match.group("old_count")
            hunks.append(
                _Hunk(
                    old_start=int(match.group("old_start")),
                    old_count=int(old_count) if old_count is not None else 1,
                    body=[],
                ),
            )
            continue
        if not hunks:
            raise PatchApplyError(f"unexpected line before the first hunk: {line!r}")
        hunks[-1].body.append(line)
    if not hunks:
        raise PatchApplyError("patch contains no hunks")
    return hunks


def _apply_hunk(hunk: _Hunk, source_lines: Sequence[str], start: int, output: list[str]) -> int:
    position = start
    for row in hunk.body:
        marker, text = (row[:1], row[1:]) if row else (" ", "")
        if marker == _NO_NEWLINE_MARKER:
            continue
        if marker == "+":
            output.append(text)
            continue
        if marker not in {" ", "-"}:
            raise PatchApplyError(f"invalid hunk line: {row!r}")
        if position >= len(source_lines) or source_lines[position] != text:
            raise PatchApplyError(f"patch does not match the source at line {position + 1}")
        if marker == " ":
            output.append(text)
        position += 1
    if position - start != hunk.old_count:
        raise PatchApplyError(
            f"hunk at line {hunk.old_start} expected {hunk.old_count} source lines, found {position - start}",
        )
    return position


__all__ = ["FIX_SUFFIX", "TIMESTAMP_FORMAT", "apply_patch", "create_patch", "fixed_line", "patch_target"]
