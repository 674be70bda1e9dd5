# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Emit machine-readable reports for diagnostic messages."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path

from .. import __version__
from ..messages import DiagnosticMessage
from ..severity import severity_to_sarif

SARIF_VERSION = "2.1.0"
SARIF_SCHEMA = "https://schemastore.azurewebsites.net/schemas/json/sarif-2.1.0.json"
DEFAULT_TOOL_NAME = "diagnoseit"


def serialize_message(message: DiagnosticMessage) -> dict[str, object]:
    """Convert a message into a JSON-friendly mapping."""
    payload: dict[str, object] = {
        "file": message.file,
        "level": message.level.value,
        "message": message.text,
        "line": message.line,
        "column": message.column,
    }
    if message.context is not None:
        payload["context"] = {
            "start_line": message.context.start_line,
            "lines": list(message.context.lines),
        }
    if message.hints:
        payload["hints"] = [
            {
                "modification": hint.modification.value,
                "index": hint.range.index,
                "length": hint.range.length,
                "text": hint.text,
            }
            for hint in message.hints
        ]
    return payload


def write_json_report(messages: Iterable[DiagnosticMessage], path: Path) -> None:
    """Write a JSON array of serialized messages."""
    payload = [serialize_message(message) for message in messages]
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def build_sarif_document(
    messages: Sequence[DiagnosticMessage],
    *,
    tool_name: str = DEFAULT_TOOL_NAME,
) -> dict[str, object]:
    """Return a single-run SARIF document describing ``messages``."""
    return {
        "version": SARIF_VERSION,
        "$schema": SARIF_SCHEMA,
        "runs": [
            {
                "tool": {"driver": {"name": tool_name, "version": __version__}},
                "results": [_sarif_result(message) for message in messages],
            },
        ],
    }


def write_sarif_report(
    messages: Iterable[DiagnosticMessage],
    path: Path,
    *,
    tool_name: str = DEFAULT_TOOL_NAME,
) -> None:
    """Emit a SARIF document compatible with GitHub and other tools."""
    document = build_sarif_document(list(messages), tool_name=tool_name)
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")


def _sarif_result(message: DiagnosticMessage) -> dict[str, object]:
    region: dict[str, object] = {
        "startLine": message.line,
        "startColumn": message.column,
    }
    if message.context is not None:
        region["snippet"] = {"text": message.focus_line}
    physical_location: dict[str, object] = {"region": region}
    if message.file:
        physical_location["artifactLocation"] = {"uri": message.file}
    return {
        "level": severity_to_sarif(message.level),
        "message": {"text": message.text},
        "locations": [{"physicalLocation": physical_location}],
    }


__all__ = [
    "SARIF_SCHEMA",
    "SARIF_VERSION",
    "build_sarif_document",
    "serialize_message",
    "write_json_report",
    "write_sarif_report",
]
