# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Extract diagnostic messages from SARIF documents."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import cast

from ..errors import SarifFormatError
from ..messages import DiagnosticMessage
from ..severity import Severity, severity_from_sarif
from .base import JsonValue, get_int, get_mapping, get_str, is_sequence, iter_dicts

LOGGER = logging.getLogger(__name__)


def load_sarif(path: Path | str) -> JsonValue:
    """Parse the SARIF file at ``path``; decoding errors propagate unchanged."""
    return cast(JsonValue, json.loads(Path(path).read_text(encoding="utf-8")))


def extract_from_sarif(document: JsonValue, *, run_index: int | None = None) -> Iterator[DiagnosticMessage]:
    """Return a lazy iterator of messages for one run of a SARIF document.

    One message is produced per result location that has both a message text
    and a physical location, in ``results`` then ``locations`` order. A region
    snippet, when present, becomes the message context starting at the
    region's start line.

    Args:
        document: Parsed SARIF document; it is never modified.
        run_index: Index into ``runs``; the last run when omitted. Negative
            indexes count from the end.

    Raises:
        SarifFormatError: ``runs`` is missing, not a list, or has no entry at
            ``run_index``.
    """
    runs = document.get("runs") if isinstance(document, Mapping) else None
    if not is_sequence(runs):
        raise SarifFormatError("SARIF document has no 'runs' list")
    run_list = list(cast("list[JsonValue]", runs))
    index = len(run_list) - 1 if run_index is None else run_index
    try:
        run = run_list[index]
    except IndexError:
        raise SarifFormatError(f"SARIF document has no run at index {index}") from None
    if not isinstance(run, Mapping):
        raise SarifFormatError(f"SARIF run {index} is not an object")
    return _iter_run(run)


def _iter_run(run: Mapping[str, JsonValue]) -> Iterator[DiagnosticMessage]:
    for result in iter_dicts(run.get("results")):
        text = get_str(get_mapping(result, "message"), "text")
        level = severity_from_sarif(result.get("level"))
        for location in iter_dicts(result.get("locations")):
            physical = get_mapping(location, "physicalLocation")
            if not text or physical is None:
                LOGGER.debug("skipping SARIF location without message text or physical location")
                continue
            yield _build_message(text, level, physical)


def _build_message(text: str, level: Severity, physical: Mapping[str, JsonValue]) -> DiagnosticMessage:
    uri = get_str(get_mapping(physical, "artifactLocation"), "uri") or ""
    region = get_mapping(physical, "region")
    line = get_int(region, "startLine")
    message = DiagnosticMessage.create(
        uri,
        text,
        level=level,
        line=line,
        column=get_int(region, "startColumn"),
    )
    snippet = get_str(get_mapping(region, "snippet"), "text")
    if snippet is not None:
        message = message.with_context(line, snippet.rstrip("\r\n"))
    return message


__all__ = ["extract_from_sarif", "load_sarif"]
