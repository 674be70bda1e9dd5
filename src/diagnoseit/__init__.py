# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Expressive compiler-style diagnostics with fix-it hints and patches."""

from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("diagnoseit")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

from .errors import (
    ContextRangeError,
    DiagnosticsError,
    MissingContextError,
    OverlappingHintError,
    PatchApplyError,
    RenderError,
    SarifFormatError,
)
from .fixit import FixItHint, Modification, Range
from .messages import Context, DiagnosticMessage, Location
from .parsers import extract_from_file, extract_from_lines, extract_from_sarif
from .patch import apply_patch, create_patch
from .rendering import StyleRole, default_styles, render, strip_ansi
from .severity import Severity

__all__ = [
    "Context",
    "ContextRangeError",
    "DiagnosticMessage",
    "DiagnosticsError",
    "FixItHint",
    "Location",
    "MissingContextError",
    "Modification",
    "OverlappingHintError",
    "PatchApplyError",
    "Range",
    "RenderError",
    "SarifFormatError",
    "Severity",
    "StyleRole",
    "__version__",
    "apply_patch",
    "create_patch",
    "default_styles",
    "extract_from_file",
    "extract_from_lines",
    "extract_from_sarif",
    "render",
    "strip_ansi",
]
