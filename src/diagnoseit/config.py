# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and ``[tool.diagnoseit]`` loading."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .console import detect_tty
from .errors import ConfigError
from .rendering import StyleResolver, StyleRole, default_styles
from .severity import Severity

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
CONFIG_SECTION: Final[str] = "diagnoseit"


class DiagnoseConfig(BaseModel):
    """Presentation and extraction settings."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    color: bool | None = None
    emoji: bool = True
    sarif_extensions: tuple[str, ...] = (".sarif",)
    styles: dict[str, str] = Field(default_factory=dict)

    @field_validator("sarif_extensions")
    @classmethod
    def _normalise_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        normalised: list[str] = []
        for extension in value:
            token = extension.strip().lower()
            if not token:
                raise ValueError("SARIF extensions cannot be empty")
            normalised.append(token if token.startswith(".") else f".{token}")
        return tuple(normalised)

    @field_validator("styles")
    @classmethod
    def _known_roles(cls, value: dict[str, str]) -> dict[str, str]:
        known = {role.value for role in StyleRole}
        unknown = sorted(set(value) - known)
        if unknown:
            raise ValueError(f"unknown style roles: {', '.join(unknown)}")
        return value

    def use_color(self) -> bool:
        """Return the effective colour flag, detecting a TTY when unset."""
        return detect_tty() if self.color is None else self.color

    def is_sarif(self, path: Path) -> bool:
        """Return ``True`` when ``path`` should be read as a SARIF document."""
        name = path.name.lower()
        return any(name.endswith(extension) for extension in self.sarif_extensions)

    def style_resolver(self) -> StyleResolver:
        """Return a resolver layering the configured overrides on the defaults."""
        overrides = {StyleRole(role): style for role, style in self.styles.items()}
        if not overrides:
            return default_styles

        def resolve(severity: Severity, role: StyleRole) -> str | None:
            if role in overrides:
                return overrides[role] or None
            return default_styles(severity, role)

        return resolve


def load_config(path: Path | None = None) -> DiagnoseConfig:
    """Load ``[tool.diagnoseit]`` from a ``pyproject.toml`` file.

    Args:
        path: TOML file to read; ``pyproject.toml`` in the working directory
            when omitted.

    Returns:
        DiagnoseConfig: Parsed settings, or the defaults when the file or the
        section is missing.

    Raises:
        ConfigError: The file is not valid TOML or the section holds invalid values.
    """
    target = path or Path.cwd() / PYPROJECT_FILENAME
    if not target.is_file():
        return DiagnoseConfig()
    try:
        with target.open("rb") as handle:
            document = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{target}: {exc}") from exc

    section = _section(document)
    try:
        return DiagnoseConfig.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(f"{target}: invalid [tool.{CONFIG_SECTION}] settings\n{exc}") from exc


def _section(document: Mapping[str, Any]) -> dict[str, Any]:
    tool = document.get("tool")
    if not isinstance(tool, MutableMapping):
        return {}
    section = tool.get(CONFIG_SECTION)
    if section is None:
        return {}
    if not isinstance(section, MutableMapping):
        raise ConfigError(f"[tool.{CONFIG_SECTION}] must be a table")
    return {str(key).replace("-", "_"): value for key, value in section.items()}


__all__ = ["CONFIG_SECTION", "DiagnoseConfig", "load_config"]
