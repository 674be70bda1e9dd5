# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by diagnoseit."""

from __future__ import annotations


class DiagnosticsError(Exception):
    """Base class for every error raised by diagnoseit itself."""


class ContextRangeError(DiagnosticsError, ValueError):
    """Raised when a context window does not contain the message line."""


class OverlappingHintError(DiagnosticsError, ValueError):
    """Raised when a fix-it hint touches or overlaps an existing hint."""


class MissingContextError(DiagnosticsError, RuntimeError):
    """Raised when an operation needs a context that was never attached."""


class RenderError(DiagnosticsError, RuntimeError):
    """Raised when a message lacks the fields required for rendering."""


class PatchApplyError(DiagnosticsError):
    """Raised when a patch cannot be reconciled with the source text."""


class SarifFormatError(DiagnosticsError, ValueError):
    """Raised when a SARIF document does not expose the expected runs."""


class ConfigError(DiagnosticsError):
    """Raised when configuration input is invalid."""


__all__ = [
    "ConfigError",
    "ContextRangeError",
    "DiagnosticsError",
    "MissingContextError",
    "OverlappingHintError",
    "PatchApplyError",
    "RenderError",
    "SarifFormatError",
]
