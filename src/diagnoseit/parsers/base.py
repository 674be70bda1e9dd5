# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared helpers for walking parsed JSON payloads."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import TypeAlias

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | Sequence["JsonValue"] | Mapping[str, "JsonValue"]


def is_sequence(value: object) -> bool:
    """Return ``True`` for list-like values that are not text."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def iter_dicts(value: JsonValue) -> Iterator[Mapping[str, JsonValue]]:
    """Yield mapping items from ``value`` when it is a sequence of dict-like objects."""
    if is_sequence(value):
        for item in value:  # type: ignore[union-attr]
            if isinstance(item, Mapping):
                yield item


def get_mapping(value: JsonValue, key: str) -> Mapping[str, JsonValue] | None:
    """Return ``value[key]`` when both are mappings, otherwise ``None``."""
    if not isinstance(value, Mapping):
        return None
    entry = value.get(key)
    return entry if isinstance(entry, Mapping) else None


def get_str(value: Mapping[str, JsonValue] | None, key: str) -> str | None:
    """Return ``value[key]`` when it is a string."""
    if value is None:
        return None
    entry = value.get(key)
    return entry if isinstance(entry, str) else None


def get_int(value: Mapping[str, JsonValue] | None, key: str, default: int = 1) -> int:
    """Return ``value[key]`` as an integer, or ``default`` when the key is absent.

    Range checks are left to the model receiving the value.

    Raises:
        ValueError: The entry is present but is not an integer.
    """
    if value is None:
        return default
    entry = value.get(key)
    if entry is None:
        return default
    if isinstance(entry, bool) or not isinstance(entry, int):
        raise ValueError(f"{key} must be an integer, got {entry!r}")
    return entry


__all__ = [
    "JsonScalar",
    "JsonValue",
    "get_int",
    "get_mapping",
    "get_str",
    "is_sequence",
    "iter_dicts",
]
