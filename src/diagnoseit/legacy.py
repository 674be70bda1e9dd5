# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Conversion of the legacy "expressive message" payload shape.

Version 1 payloads look like::

    {
        "id": "workflow.yaml",
        "type": "error",
        "message": "Invalid keyword 'neds'",
        "lineNumber": 9,
        "caret": {"index": 7, "length": 4},
        "hint": "needs",
        "context": {"index": 7, "lines": ["...", "...", "..."]},
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from .fixit import FixItHint, Range
from .messages import DiagnosticMessage
from .severity import Severity, severity_from_label

LEGACY_SHAPE_VERSION: Final[int] = 1


def convert_legacy_message(payload: Mapping[str, Any], *, version: int = LEGACY_SHAPE_VERSION) -> DiagnosticMessage:
    """Return the :class:`DiagnosticMessage` equivalent of a legacy payload.

    The caret column becomes the message column. A caret wider than one
    column is kept as a ``MARK`` hint over the columns after the caret when a
    context is available. The free-form ``hint`` text has no equivalent and is
    dropped.

    Raises:
        ValueError: ``version`` is not supported, or the payload fails validation.
    """
    if version != LEGACY_SHAPE_VERSION:
        raise ValueError(f"unsupported legacy message version: {version}")

    caret = payload.get("caret") or {}
    column = int(caret.get("index", 1))
    width = int(caret.get("length", 1))
    message = DiagnosticMessage.create(
        str(payload["id"]),
        str(payload["message"]),
        level=severity_from_label(payload.get("type"), default=Severity.NOTE),
        line=int(payload.get("lineNumber", 1)),
        column=column,
    )

    context = payload.get("context")
    if context is None:
        return message
    message = message.with_context(int(context.get("index", 1)), context.get("lines", []))
    if width > 1:
        message = message.with_fixit_hint(FixItHint.create(Range(index=column + 1, length=width - 1)))
    return message


__all__ = ["LEGACY_SHAPE_VERSION", "convert_legacy_message"]
