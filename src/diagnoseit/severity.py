# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class ColorClass(str, Enum):
    """Semantic colour classes a severity can be displayed with."""

    MUTED = "muted"
    INFORMATIONAL = "informational"
    CAUTION = "caution"
    DANGER = "danger"


class Severity(str, Enum):
    """Diagnostic levels, ordered from least to most severe."""

    IGNORED = "ignored"
    NOTE = "note"
    REMARK = "remark"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def label(self) -> str:
        """Return the label printed in rendered headers."""
        return self.value

    @property
    def rank(self) -> int:
        """Return the display rank; equal ranks are equally severe."""
        return _SEVERITY_RANK[self]

    @property
    def color_class(self) -> ColorClass:
        """Return the semantic colour class of the level."""
        return _SEVERITY_COLOR_CLASS[self]

    @property
    def is_blocking(self) -> bool:
        """Return ``True`` for levels that should fail a run."""
        return self.rank >= _SEVERITY_RANK[Severity.ERROR]


_SEVERITY_RANK: Final[dict[Severity, int]] = {
    Severity.IGNORED: 0,
    Severity.NOTE: 1,
    Severity.REMARK: 1,
    Severity.WARNING: 2,
    Severity.ERROR: 3,
    Severity.FATAL: 3,
}

_SEVERITY_COLOR_CLASS: Final[dict[Severity, ColorClass]] = {
    Severity.IGNORED: ColorClass.MUTED,
    Severity.NOTE: ColorClass.INFORMATIONAL,
    Severity.REMARK: ColorClass.INFORMATIONAL,
    Severity.WARNING: ColorClass.CAUTION,
    Severity.ERROR: ColorClass.DANGER,
    Severity.FATAL: ColorClass.DANGER,
}


def severity_from_label(label: object, default: Severity = Severity.WARNING) -> Severity:
    """Return the :class:`Severity` named by ``label``.

    Args:
        label: Level text such as ``"error"``; matching is case-insensitive.
        default: Severity returned when ``label`` is missing or unknown.

    Returns:
        Severity: Matching severity or ``default``.
    """
    if not isinstance(label, str):
        return default
    try:
        return Severity(label.strip().lower())
    except ValueError:
        return default


_SARIF_LEVEL_TO_SEVERITY: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "note": Severity.NOTE,
    "none": Severity.IGNORED,
}

_SEVERITY_TO_SARIF_LEVEL: Final[dict[Severity, str]] = {
    Severity.IGNORED: "none",
    Severity.NOTE: "note",
    Severity.REMARK: "note",
    Severity.WARNING: "warning",
    Severity.ERROR: "error",
    Severity.FATAL: "error",
}


def severity_from_sarif(level: object) -> Severity:
    """Map a SARIF result level onto :class:`Severity`.

    Unknown or missing levels fall back to :attr:`Severity.WARNING`, the
    SARIF default.
    """
    if isinstance(level, str):
        return _SARIF_LEVEL_TO_SEVERITY.get(level.lower(), Severity.WARNING)
    return Severity.WARNING


def severity_to_sarif(severity: Severity) -> str:
    """Map :class:`Severity` to a SARIF reporting level."""
    return _SEVERITY_TO_SARIF_LEVEL.get(severity, "warning")


__all__ = [
    "ColorClass",
    "Severity",
    "severity_from_label",
    "severity_from_sarif",
    "severity_to_sarif",
]
