# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fix-it hints: single textual edits proposed on a diagnosed line."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Modification(str, Enum):
    """Kind of edit described by a :class:`FixItHint`."""

    MARK = "mark"
    INSERT = "insert"
    REMOVE = "remove"
    REPLACE = "replace"


_TEXT_REQUIRED = frozenset({Modification.INSERT, Modification.REPLACE})


class Range(BaseModel):
    """1-based half-open character range ``[index, index + length)``."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=1)
    length: int = Field(default=1, ge=0)

    @property
    def end(self) -> int:
        """Return the first column after the range."""
        return self.index + self.length

    def covers(self, column: int) -> bool:
        """Return ``True`` when ``column`` falls inside the range."""
        return self.index <= column < self.end

    def touches(self, other: Range) -> bool:
        """Return ``True`` when either range starts inside the other, boundaries included."""
        return (
            self.index <= other.index <= self.end
            or other.index <= self.index <= other.end
        )


class FixItHint(BaseModel):
    """Immutable description of one edit over a :class:`Range`.

    ``INSERT`` and ``REPLACE`` hints carry the text to splice in; ``MARK`` and
    ``REMOVE`` hints must not. An insertion point is modelled as a range of
    length one.
    """

    model_config = ConfigDict(frozen=True)

    modification: Modification
    range: Range
    text: str | None = None

    @model_validator(mode="after")
    def _check_text_contract(self) -> FixItHint:
        if self.modification in _TEXT_REQUIRED:
            if self.text is None:
                raise ValueError(f"text is required for {self.modification.name} hints")
        elif self.text is not None:
            raise ValueError(f"text is not supported for {self.modification.name} hints")
        if self.modification is Modification.INSERT and self.range.length != 1:
            raise ValueError("INSERT hints must have a range length of 1")
        return self

    @classmethod
    def create(cls, range: Range) -> FixItHint:
        """Return a ``MARK`` hint that only underlines ``range``."""
        return cls(modification=Modification.MARK, range=range)

    @classmethod
    def create_insertion(cls, index: int, text: str) -> FixItHint:
        """Return a hint inserting ``text`` before column ``index``."""
        return cls(modification=Modification.INSERT, range=Range(index=index, length=1), text=text)

    @classmethod
    def create_replacement(cls, range: Range, text: str) -> FixItHint:
        """Return a hint replacing the characters in ``range`` with ``text``."""
        return cls(modification=Modification.REPLACE, range=range, text=text)

    @classmethod
    def create_removal(cls, range: Range) -> FixItHint:
        """Return a hint deleting the characters in ``range``."""
        return cls(modification=Modification.REMOVE, range=range)


__all__ = ["FixItHint", "Modification", "Range"]
