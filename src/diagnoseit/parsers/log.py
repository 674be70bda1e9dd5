# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scan compiler-style logs for expressive diagnostic headers.

A header looks like ``<file>:<line>:<column>: <error|warning|note>: <text>``.
The line that follows a header is taken as its source context, the way
compilers print the offending line right below the diagnostic::

    example.yaml:9:5: error: Invalid keyword 'neds'
      - neds: [build, test]
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from typing import Final

from ..messages import DiagnosticMessage
from ..severity import Severity

LOGGER = logging.getLogger(__name__)

HEADER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?P<file>[\w.\-/\\]+):(?P<line>[0-9]+):(?P<column>[0-9]+): "
    r"(?P<level>error|warning|note): (?P<message>.*)",
)

_HEADER_LEVELS: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "note": Severity.NOTE,
}


def _header_message(match: re.Match[str]) -> DiagnosticMessage:
    return DiagnosticMessage.create(
        match.group("file"),
        match.group("message"),
        level=_HEADER_LEVELS[match.group("level")],
        line=int(match.group("line")),
        column=int(match.group("column")),
    )


def _strip_indent(line: str, indent: int) -> str:
    """Drop up to ``indent`` leading whitespace characters from ``line``."""
    stripped = 0
    while stripped < indent and stripped < len(line) and line[stripped].isspace():
        stripped += 1
    return line[stripped:]


class LogScanner(Iterator[DiagnosticMessage]):
    """Pull-based scanner turning log lines into diagnostic messages.

    The scanner holds at most one pending message. A header starts a pending
    message; the next non-header line becomes its one-line context and the
    message is emitted. A header arriving while a message is pending flushes
    the pending message (without context) before starting the new one, and
    the end of input flushes whatever is pending. Lines read while nothing is
    pending are ignored.

    The underlying line source is consumed incrementally and only once.
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = iter(lines)
        self._pending: DiagnosticMessage | None = None
        self._indent = 0
        self._exhausted = False

    def __iter__(self) -> LogScanner:
        return self

    def __next__(self) -> DiagnosticMessage:
        while not self._exhausted:
            try:
                raw_line = next(self._lines)
            except StopIteration:
                self._exhausted = True
                break
            emitted = self._feed(raw_line.rstrip("\r\n"))
            if emitted is not None:
                return emitted
        if self._pending is not None:
            pending, self._pending = self._pending, None
            return pending
        raise StopIteration

    @property
    def pending(self) -> DiagnosticMessage | None:
        """Return the message waiting for its context line, if any."""
        return self._pending

    def _feed(self, line: str) -> DiagnosticMessage | None:
        match = HEADER_PATTERN.search(line)
        if match is not None:
            flushed = self._pending
            if flushed is not None:
                LOGGER.debug("flushing %s:%d without context", flushed.file, flushed.line)
            self._pending = _header_message(match)
            self._indent = match.start()
            return flushed
        if self._pending is None:
            return None
        message = self._pending.with_context(self._pending.line, [_strip_indent(line, self._indent)])
        self._pending = None
        return message


def extract_from_lines(lines: Iterable[str]) -> LogScanner:
    """Return a :class:`LogScanner` over ``lines``."""
    return LogScanner(lines)


__all__ = ["HEADER_PATTERN", "LogScanner", "extract_from_lines"]
