# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic message model, its mutators and fix-it application.

A :class:`DiagnosticMessage` is an immutable value. The fluent mutators
(:meth:`DiagnosticMessage.with_context`, :meth:`DiagnosticMessage.with_fixit_hint`
and friends) validate their input and return a new message, so a rejected
call never leaves a half-updated object behind::

    message = (
        DiagnosticMessage.error("example.yaml", "Invalid keyword 'neds'", line=7, column=5)
        .with_context(5, lines)
        .with_fixit_hint(FixItHint.create_replacement(Range(index=5, length=4), "needs"))
    )
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import ContextRangeError, MissingContextError, OverlappingHintError
from .fixit import FixItHint, Modification
from .severity import Severity

_LINE_BREAK: Final[re.Pattern[str]] = re.compile(r"\r?\n")


class Location(BaseModel):
    """Message text with an optional line and column (both 1-based)."""

    model_config = ConfigDict(frozen=True)

    text: str
    line: int | None = Field(default=None, ge=1)
    column: int | None = Field(default=None, ge=1)

    @field_validator("text")
    @classmethod
    def _single_line(cls, value: str) -> str:
        if "\n" in value or "\r" in value:
            raise ValueError("message text cannot contain newlines")
        return value

    @property
    def effective_line(self) -> int:
        """Return the line number, defaulting to ``1``."""
        return self.line if self.line is not None else 1

    @property
    def effective_column(self) -> int:
        """Return the column number, defaulting to ``1``."""
        return self.column if self.column is not None else 1


class Context(BaseModel):
    """Contiguous source lines starting at ``start_line``."""

    model_config = ConfigDict(frozen=True)

    start_line: int = Field(ge=1)
    lines: tuple[str, ...]

    @property
    def end_line(self) -> int:
        """Return the number of the last line in the window."""
        return self.start_line + len(self.lines) - 1

    def contains(self, line: int) -> bool:
        """Return ``True`` when ``line`` lies inside the window."""
        return self.start_line <= line <= self.end_line

    def line_at(self, line: int) -> str:
        """Return the text of absolute line number ``line``."""
        return self.lines[line - self.start_line]


def split_lines(lines: str | Sequence[str]) -> tuple[str, ...]:
    """Normalise a block of text or a sequence of lines into a tuple of lines."""
    if isinstance(lines, str):
        return tuple(_LINE_BREAK.split(lines))
    return tuple(str(line) for line in lines)


class DiagnosticMessage(BaseModel):
    """A single expressive diagnostic attached to a file."""

    model_config = ConfigDict(frozen=True)

    file: str
    level: Severity = Severity.NOTE
    location: Location
    context: Context | None = None
    hints: tuple[FixItHint, ...] = ()

    @field_validator("file")
    @classmethod
    def _valid_file(cls, value: str) -> str:
        if "\n" in value or "\r" in value:
            raise ValueError("file name cannot contain newlines")
        if any(char.isspace() for char in value):
            raise ValueError("file name cannot contain whitespace")
        return value

    @field_validator("hints")
    @classmethod
    def _sorted_hints(cls, value: tuple[FixItHint, ...]) -> tuple[FixItHint, ...]:
        return tuple(sorted(value, key=_hint_index))

    @model_validator(mode="after")
    def _check_geometry(self) -> DiagnosticMessage:
        if self.context is not None and not self.context.contains(self.line):
            raise ValueError(_context_mismatch(self.line, self.context))
        if self.hints:
            if self.context is None:
                raise ValueError("fix-it hints require a context")
            _check_no_overlap(self.hints)
        return self

    # -- Factories -------------------------------------------------------------

    @classmethod
    def create(
        cls,
        file: str,
        text: str,
        *,
        level: Severity = Severity.NOTE,
        line: int | None = None,
        column: int | None = None,
    ) -> DiagnosticMessage:
        """Return a message for ``file`` reporting ``text`` at ``line``/``column``."""
        return cls(file=file, level=level, location=Location(text=text, line=line, column=column))

    @classmethod
    def error(cls, file: str, text: str, *, line: int | None = None, column: int | None = None) -> DiagnosticMessage:
        """Return an ``ERROR`` message; see :meth:`create`."""
        return cls.create(file, text, level=Severity.ERROR, line=line, column=column)

    @classmethod
    def warning(cls, file: str, text: str, *, line: int | None = None, column: int | None = None) -> DiagnosticMessage:
        """Return a ``WARNING`` message; see :meth:`create`."""
        return cls.create(file, text, level=Severity.WARNING, line=line, column=column)

    @classmethod
    def note(cls, file: str, text: str, *, line: int | None = None, column: int | None = None) -> DiagnosticMessage:
        """Return a ``NOTE`` message; see :meth:`create`."""
        return cls.create(file, text, level=Severity.NOTE, line=line, column=column)

    # -- Accessors -------------------------------------------------------------

    @property
    def text(self) -> str:
        """Return the message text."""
        return self.location.text

    @property
    def line(self) -> int:
        """Return the message line, ``1`` when unset."""
        return self.location.effective_line

    @property
    def column(self) -> int:
        """Return the message column, ``1`` when unset."""
        return self.location.effective_column

    @property
    def fixit_hints(self) -> tuple[FixItHint, ...]:
        """Return the hints ordered by ascending start column."""
        return self.hints

    @property
    def focus_line(self) -> str:
        """Return the context line the message points at."""
        if self.context is None:
            raise MissingContextError("message has no context")
        return self.context.line_at(self.line)

    # -- Fluent mutators -------------------------------------------------------

    def with_file(self, file: str) -> DiagnosticMessage:
        """Return a copy reported against ``file``."""
        return self._replace(file=file)

    def with_level(self, level: Severity) -> DiagnosticMessage:
        """Return a copy with severity ``level``."""
        return self._replace(level=level)

    def with_context(self, start_line: int, lines: str | Sequence[str]) -> DiagnosticMessage:
        """Return a copy carrying ``lines`` as context starting at ``start_line``.

        Args:
            start_line: Line number of the first context line.
            lines: Either one block of text, split on line breaks, or a sequence of lines.

        Raises:
            ContextRangeError: ``start_line`` is not positive or the window does not
                contain the message line.
        """
        if start_line <= 0:
            raise ContextRangeError("context start line must be greater than 0")
        context = Context(start_line=start_line, lines=split_lines(lines))
        if not context.contains(self.line):
            raise ContextRangeError(_context_mismatch(self.line, context))
        return self._replace(context=context)

    def with_fixit_hint(self, hint: FixItHint) -> DiagnosticMessage:
        """Return a copy with ``hint`` added in column order.

        Raises:
            MissingContextError: No context has been attached yet.
            OverlappingHintError: ``hint`` touches or overlaps an existing hint.
        """
        if self.context is None:
            raise MissingContextError("cannot add a fix-it hint without a context")
        _check_no_overlap((*self.hints, hint))
        return self._replace(hints=tuple(sorted((*self.hints, hint), key=_hint_index)))

    def _replace(self, **changes: Any) -> DiagnosticMessage:
        fields = {name: getattr(self, name) for name in type(self).model_fields}
        fields.update(changes)
        return type(self)(**fields)

    # -- Behaviour -------------------------------------------------------------

    def apply_fixit_hints(self) -> str:
        """Return the focus line with every fix-it hint applied.

        Edits run from the rightmost hint to the leftmost one so that no edit
        moves the start offset of a hint still waiting to be applied.
        """
        if self.context is None:
            raise MissingContextError("cannot apply fix-it hints without a context")
        result = self.focus_line
        for hint in reversed(self.hints):
            result = apply_hint(result, hint)
        return result

    def render(self, **options: Any) -> str:
        """Return the formatted message; see :func:`diagnoseit.rendering.render`."""
        from .rendering import render

        return render(self, **options)

    def __str__(self) -> str:
        return self.render()


def apply_hint(line: str, hint: FixItHint, offset: int = 0) -> str:
    """Return ``line`` with ``hint`` applied, its start shifted by ``offset``."""
    start = hint.range.index - 1 + offset
    stop = start + hint.range.length
    match hint.modification:
        case Modification.INSERT:
            return line[:start] + (hint.text or "") + line[start:]
        case Modification.REMOVE:
            return line[:start] + line[stop:]
        case Modification.REPLACE:
            return line[:start] + (hint.text or "") + line[stop:]
        case _:
            return line


def _hint_index(hint: FixItHint) -> int:
    return hint.range.index


def _check_no_overlap(hints: Sequence[FixItHint]) -> None:
    for position, hint in enumerate(hints):
        for other in hints[position + 1 :]:
            if hint.range.touches(other.range):
                raise OverlappingHintError(
                    f"fix-it hint at column {other.range.index} overlaps the hint at column {hint.range.index}",
                )


def _context_mismatch(line: int, context: Context) -> str:
    return (
        f"line {line} is outside the context window "
        f"(lines {context.start_line}-{context.end_line})"
    )


__all__ = ["Context", "DiagnosticMessage", "Location", "apply_hint", "split_lines"]
