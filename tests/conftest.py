# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from diagnoseit import DiagnosticMessage


@pytest.fixture
def three_lines() -> list[str]:
    """Return the three-line context used across rendering and patch tests."""
    return ["Line 1", "Line 2", "Line 3"]


@pytest.fixture
def subject() -> DiagnosticMessage:
    """Return a minimal note without location or context."""
    return DiagnosticMessage.create("test.ts", "Subject", line=1, column=1)
