# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for extracting diagnostics from SARIF documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from diagnoseit import SarifFormatError, Severity, extract_from_file, extract_from_sarif
from diagnoseit.config import DiagnoseConfig


def _result(level: str | None, uri: str | None, **region: Any) -> dict[str, Any]:
    physical: dict[str, Any] = {"region": region}
    if uri is not None:
        physical["artifactLocation"] = {"uri": uri}
    result: dict[str, Any] = {"message": {"text": "Something broke"}, "locations": [{"physicalLocation": physical}]}
    if level is not None:
        result["level"] = level
    return result


def _document(*runs: list[dict[str, Any]]) -> dict[str, Any]:
    return {"version": "2.1.0", "runs": [{"tool": {"driver": {"name": "t"}}, "results": results} for results in runs]}


def test_scenario_single_result() -> None:
    document = _document([_result("error", "a.c", startLine=3, startColumn=2)])

    (message,) = extract_from_sarif(document)

    assert message.file == "a.c"
    assert message.level is Severity.ERROR
    assert (message.line, message.column) == (3, 2)
    assert message.text == "Something broke"
    assert message.context is None


def test_snippet_becomes_context() -> None:
    document = _document([_result("note", "a.c", startLine=7, snippet={"text": "int x;\n"})])

    (message,) = extract_from_sarif(document)

    assert message.context is not None
    assert message.context.start_line == 7
    assert message.focus_line == "int x;"


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        ("warning", Severity.WARNING),
        ("note", Severity.NOTE),
        ("none", Severity.IGNORED),
        ("bogus", Severity.WARNING),
        (None, Severity.WARNING),
    ],
)
def test_levels(level: str | None, expected: Severity) -> None:
    (message,) = extract_from_sarif(_document([_result(level, "a.c")]))
    assert message.level is expected


def test_missing_region_defaults_to_first_line() -> None:
    (message,) = extract_from_sarif(_document([_result("error", None)]))

    assert message.file == ""
    assert (message.line, message.column) == (1, 1)


def test_results_without_text_or_location_are_skipped() -> None:
    results = [
        {"message": {"text": ""}, "locations": [{"physicalLocation": {"region": {}}}]},
        {"message": {"text": "no location"}, "locations": [{"logicalLocations": []}]},
        {"message": {"text": "two places"}, "locations": [
            {"physicalLocation": {"artifactLocation": {"uri": "x.c"}}},
            {"physicalLocation": {"artifactLocation": {"uri": "y.c"}}},
        ]},
    ]

    messages = list(extract_from_sarif(_document(results)))

    assert [message.file for message in messages] == ["x.c", "y.c"]


def test_last_run_is_default() -> None:
    document = _document([_result("error", "first.c")], [_result("error", "last.c")])

    assert [m.file for m in extract_from_sarif(document)] == ["last.c"]
    assert [m.file for m in extract_from_sarif(document, run_index=0)] == ["first.c"]


def test_document_is_not_modified() -> None:
    document = _document([_result("error", "a.c", startLine=2)])
    snapshot = json.dumps(document, sort_keys=True)

    list(extract_from_sarif(document))

    assert json.dumps(document, sort_keys=True) == snapshot


@pytest.mark.parametrize(
    ("document", "run_index"),
    [
        ({}, None),
        ({"runs": {}}, None),
        ({"runs": []}, None),
        ({"runs": [{}]}, 3),
        ({"runs": ["text"]}, None),
        ([], None),
    ],
)
def test_malformed_documents(document: Any, run_index: int | None) -> None:
    with pytest.raises(SarifFormatError):
        extract_from_sarif(document, run_index=run_index)


def test_extract_from_file_detects_sarif(tmp_path: Path) -> None:
    report = tmp_path / "scan.sarif"
    report.write_text(json.dumps(_document([_result("warning", "b.py", startLine=4)])), encoding="utf-8")

    (message,) = extract_from_file(report)

    assert (message.file, message.line) == ("b.py", 4)


def test_extract_from_file_honours_configured_extensions(tmp_path: Path) -> None:
    report = tmp_path / "scan.json"
    report.write_text(json.dumps(_document([_result("error", "c.py")])), encoding="utf-8")

    messages = list(extract_from_file(report, config=DiagnoseConfig(sarif_extensions=("json",))))

    assert [message.file for message in messages] == ["c.py"]


@pytest.mark.parametrize("region", [{"startLine": 0}, {"startLine": -4}, {"startLine": 2, "startColumn": 0}])
def test_non_positive_positions_fail_validation(region: dict[str, Any]) -> None:
    document = _document([_result("error", "a.c", **region)])

    with pytest.raises(ValidationError):
        list(extract_from_sarif(document))


def test_non_integer_position_is_rejected() -> None:
    document = _document([_result("error", "a.c", startLine="3")])

    with pytest.raises(ValueError, match="startLine"):
        list(extract_from_sarif(document))
