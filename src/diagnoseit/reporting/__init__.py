# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporting helpers for diagnostic messages."""

from __future__ import annotations

from .emitters import (
    SARIF_SCHEMA,
    SARIF_VERSION,
    build_sarif_document,
    serialize_message,
    write_json_report,
    write_sarif_report,
)

__all__ = [
    "SARIF_SCHEMA",
    "SARIF_VERSION",
    "build_sarif_document",
    "serialize_message",
    "write_json_report",
    "write_sarif_report",
]
