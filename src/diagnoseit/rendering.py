# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render diagnostic messages in the compiler "expressive diagnostics" layout.

Example output::

    example.yaml:7:5: error: Invalid keyword 'neds'

    5 |     name: Example failure
    6 |     runs-on: ubuntu-latest
    7 |     neds: [build, test]
      |     ^~~~
      |     needs
    8 |     steps:

Styling is resolved per :class:`StyleRole` through a :data:`StyleResolver`,
which returns a rich style string (or ``None`` for unstyled text).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Final

from rich.color import ColorSystem
from rich.style import Style

from .errors import RenderError
from .fixit import FixItHint, Modification
from .messages import DiagnosticMessage
from .severity import ColorClass, Severity


class StyleRole(str, Enum):
    """Parts of a rendered message that can be styled independently."""

    LOCATION = "location"
    LEVEL = "level"
    MESSAGE = "message"
    CONTEXT_LINE = "context_line"
    FOCUS_LINE = "focus_line"
    CARET = "caret"
    MARK = "mark"
    INSERT = "insert"
    REMOVE = "remove"
    REPLACE = "replace"
    SUGGESTION = "suggestion"


StyleResolver = Callable[[Severity, StyleRole], str | None]

GUTTER_SEPARATOR: Final[str] = " | "
_ANSI_PATTERN: Final[re.Pattern[str]] = re.compile(r"\x1b\[[0-9;]*m")

_LEVEL_STYLES: Final[dict[ColorClass, str]] = {
    ColorClass.MUTED: "bold bright_black",
    ColorClass.INFORMATIONAL: "bold blue",
    ColorClass.CAUTION: "bold yellow",
    ColorClass.DANGER: "bold red",
}

_ROLE_STYLES: Final[dict[StyleRole, str | None]] = {
    StyleRole.LOCATION: "bold",
    StyleRole.MESSAGE: "bold",
    StyleRole.CONTEXT_LINE: "bold bright_black",
    StyleRole.FOCUS_LINE: "bold bright_white",
    StyleRole.CARET: "bold green",
    StyleRole.MARK: "red",
    StyleRole.INSERT: "green",
    StyleRole.REMOVE: "red",
    StyleRole.REPLACE: "yellow",
    StyleRole.SUGGESTION: None,
}

_MODIFICATION_ROLES: Final[dict[Modification, StyleRole]] = {
    Modification.MARK: StyleRole.MARK,
    Modification.INSERT: StyleRole.INSERT,
    Modification.REMOVE: StyleRole.REMOVE,
    Modification.REPLACE: StyleRole.REPLACE,
}


def default_styles(severity: Severity, role: StyleRole) -> str | None:
    """Return the built-in rich style for ``role``."""
    if role is StyleRole.LEVEL:
        return _LEVEL_STYLES[severity.color_class]
    return _ROLE_STYLES.get(role)


def strip_ansi(text: str) -> str:
    """Remove ANSI style sequences from ``text``."""
    return _ANSI_PATTERN.sub("", text)


class _Painter:
    """Apply resolved styles to text fragments."""

    def __init__(self, severity: Severity, styles: StyleResolver, color: bool) -> None:
        self._severity = severity
        self._styles = styles
        self._color = color

    def __call__(self, text: str, role: StyleRole) -> str:
        if not self._color or not text:
            return text
        token = self._styles(self._severity, role)
        if not token:
            return text
        return Style.parse(token).render(text, color_system=ColorSystem.STANDARD)

    def runs(self, cells: Iterable[tuple[str, StyleRole | None]]) -> str:
        """Paint consecutive cells sharing a role as a single fragment."""
        parts: list[str] = []
        buffer = ""
        current: StyleRole | None = None
        for char, role in cells:
            if role is not current and buffer:
                parts.append(self(buffer, current) if current is not None else buffer)
                buffer = ""
            current = role
            buffer += char
        if buffer:
            parts.append(self(buffer, current) if current is not None else buffer)
        return "".join(parts)


def render(
    message: DiagnosticMessage,
    *,
    styles: StyleResolver | None = None,
    color: bool = True,
) -> str:
    """Return ``message`` formatted as an expressive diagnostic.

    Args:
        message: Message to render.
        styles: Style resolver; defaults to :func:`default_styles`.
        color: When ``False`` the output carries no ANSI sequences.

    Returns:
        str: Header line, followed by a blank line and the context block when
        the message has a context.

    Raises:
        RenderError: The file id or the message text is empty, or hints are
            present without a context.
    """
    if not message.file:
        raise RenderError("no file has been provided")
    if not message.text:
        raise RenderError("no message text has been provided")
    if message.hints and message.context is None:
        raise RenderError("fix-it hints cannot be rendered without a context")

    paint = _Painter(message.level, styles or default_styles, color)
    header = (
        paint(f"{message.file}:{message.line}:{message.column}: ", StyleRole.LOCATION)
        + paint(f"{message.level.label}: ", StyleRole.LEVEL)
        + paint(message.text, StyleRole.MESSAGE)
    )
    return "\n".join([header, *_context_rows(message, paint)])


def _context_rows(message: DiagnosticMessage, paint: _Painter) -> list[str]:
    context = message.context
    if context is None:
        return []
    width = len(str(context.end_line))
    rows = [""]
    for offset, text in enumerate(context.lines):
        number = context.start_line + offset
        focused = number == message.line
        role = StyleRole.FOCUS_LINE if focused else StyleRole.CONTEXT_LINE
        rows.append(paint(f"{number:>{width}}{GUTTER_SEPARATOR}{text}", role))
        if focused:
            rows.extend(_hint_rows(message, paint, " " * width))
    return rows


def _hint_rows(message: DiagnosticMessage, paint: _Painter, padding: str) -> list[str]:
    hints = message.hints
    max_width = max(
        [
            message.column,
            len(message.text),
            *(hint.range.end for hint in hints),
            *(hint.range.index + len(hint.text or "") for hint in hints),
        ],
    )

    markers: list[tuple[str, StyleRole | None]] = []
    suggestion: list[str] = []
    for column in range(1, max_width + 1):
        covering = _covering(hints, column)
        if column == message.column and (covering is None or covering.modification is not Modification.MARK):
            role = _MODIFICATION_ROLES[covering.modification] if covering else StyleRole.CARET
            markers.append(("^", role))
        elif covering is not None:
            markers.append(("~", _MODIFICATION_ROLES[covering.modification]))
        else:
            markers.append((" ", None))
        suggestion.append(_suggestion_char(hints, column))

    while markers and markers[-1][0] == " ":
        markers.pop()
    rows = [_gutter(padding, paint.runs(markers))]
    suggested = "".join(suggestion).rstrip()
    if suggested:
        rows.append(_gutter(padding, paint(suggested, StyleRole.SUGGESTION)))
    return rows


def _gutter(padding: str, content: str) -> str:
    prefix = f"{padding}{GUTTER_SEPARATOR}"
    return prefix + content if content else prefix.rstrip()


def _covering(hints: Iterable[FixItHint], column: int) -> FixItHint | None:
    return next((hint for hint in hints if hint.range.covers(column)), None)


def _suggestion_char(hints: Iterable[FixItHint], column: int) -> str:
    for hint in hints:
        if hint.text and hint.range.index <= column < hint.range.index + len(hint.text):
            return hint.text[column - hint.range.index]
    return " "


__all__ = [
    "GUTTER_SEPARATOR",
    "StyleResolver",
    "StyleRole",
    "default_styles",
    "render",
    "strip_ansi",
]
