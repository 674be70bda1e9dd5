# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line interface for rendering, patching and converting diagnostics."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import typer

from .config import DiagnoseConfig, load_config
from .errors import DiagnosticsError
from .logging import fail, ok, warn
from .messages import DiagnosticMessage
from .parsers import extract_from_file
from .patch import create_patch
from .reporting import write_sarif_report

app = typer.Typer(
    name="diagnoseit",
    help="Render expressive diagnostics from compiler logs and SARIF files.",
    no_args_is_help=True,
    add_completion=False,
)


def _load(config_path: Path | None) -> DiagnoseConfig:
    try:
        return load_config(config_path)
    except DiagnosticsError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def _existing(path: Path) -> Path:
    resolved = path.expanduser()
    if not resolved.is_file():
        raise typer.BadParameter(f"{path} not found or unreadable")
    return resolved


@app.command("render")
def render_command(
    path: Path = typer.Argument(..., metavar="FILE", help="Compiler log or SARIF file."),
    color: bool | None = typer.Option(None, "--color/--no-color", help="Force colour output on or off."),
    config_path: Path | None = typer.Option(None, "--config", help="pyproject.toml to read settings from."),
) -> None:
    """Print every diagnostic found in FILE."""
    cfg = _load(config_path)
    if color is not None:
        cfg.color = color
    use_color = cfg.use_color()
    styles = cfg.style_resolver()

    blocking = 0
    count = 0
    for message in extract_from_file(_existing(path), config=cfg):
        try:
            typer.echo(message.render(styles=styles, color=use_color))
        except DiagnosticsError as exc:
            warn(f"skipping unrenderable diagnostic: {exc}", use_emoji=cfg.emoji, use_color=use_color)
            continue
        typer.echo("")
        count += 1
        if message.level.is_blocking:
            blocking += 1

    if blocking:
        fail(f"{count} diagnostic(s), {blocking} error(s)", use_emoji=cfg.emoji, use_color=use_color)
        raise typer.Exit(code=1)
    ok(f"{count} diagnostic(s), no errors", use_emoji=cfg.emoji, use_color=use_color)


@app.command("patch")
def patch_command(
    path: Path = typer.Argument(..., metavar="FILE", help="Compiler log or SARIF file."),
    index: int = typer.Option(1, "--index", "-n", min=1, help="1-based position of the diagnostic to patch."),
    config_path: Path | None = typer.Option(None, "--config", help="pyproject.toml to read settings from."),
) -> None:
    """Print the patch derived from the fix-it hints of one diagnostic."""
    cfg = _load(config_path)
    message = _nth(extract_from_file(_existing(path), config=cfg), index)
    if message is None:
        raise typer.BadParameter(f"FILE holds fewer than {index} diagnostic(s)", param_hint="--index")
    try:
        typer.echo(create_patch(message))
    except DiagnosticsError as exc:
        fail(str(exc), use_emoji=cfg.emoji, use_color=cfg.use_color())
        raise typer.Exit(code=1) from exc


@app.command("sarif")
def sarif_command(
    path: Path = typer.Argument(..., metavar="FILE", help="Compiler log or SARIF file."),
    output: Path = typer.Option(..., "--output", "-o", help="Destination SARIF file."),
    config_path: Path | None = typer.Option(None, "--config", help="pyproject.toml to read settings from."),
) -> None:
    """Convert the diagnostics found in FILE into a SARIF report."""
    cfg = _load(config_path)
    messages = list(extract_from_file(_existing(path), config=cfg))
    write_sarif_report(messages, output)
    ok(f"wrote {len(messages)} result(s) to {output}", use_emoji=cfg.emoji, use_color=cfg.use_color())


def _nth(messages: Iterable[DiagnosticMessage], index: int) -> DiagnosticMessage | None:
    for position, message in enumerate(messages, start=1):
        if position == index:
            return message
    return None


__all__ = ["app"]
