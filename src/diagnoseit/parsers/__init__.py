# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Extract diagnostic messages from compiler logs and SARIF documents."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from ..config import DiagnoseConfig
from ..messages import DiagnosticMessage
from .log import HEADER_PATTERN, LogScanner, extract_from_lines
from .sarif import extract_from_sarif, load_sarif


def extract_from_file(path: Path | str, *, config: DiagnoseConfig | None = None) -> Iterator[DiagnosticMessage]:
    """Return a lazy iterator of the messages found in ``path``.

    Files whose name ends with one of the configured SARIF extensions are
    parsed as SARIF (last run); every other file is scanned line by line
    without being read into memory at once.
    """
    target = Path(path)
    settings = config or DiagnoseConfig()
    if settings.is_sarif(target):
        return extract_from_sarif(load_sarif(target))
    return _scan_file(target)


def _scan_file(path: Path) -> Iterator[DiagnosticMessage]:
    with path.open(encoding="utf-8") as handle:
        yield from LogScanner(handle)


__all__ = [
    "HEADER_PATTERN",
    "LogScanner",
    "extract_from_file",
    "extract_from_lines",
    "extract_from_sarif",
    "load_sarif",
]
