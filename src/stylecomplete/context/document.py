"""Minimal document model used by the context detector.

A host only needs to return the text of a line and, optionally, the word
range at a position. ``TextBuffer`` implements that over a plain string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

WORD_PATTERN = re.compile(r"[\w-]+")


@dataclass(frozen=True, slots=True)
class Position:
    """Zero-based line/character position."""

    line: int
    character: int


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open span between two positions."""

    start: Position
    end: Position

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {
            "start": {"line": self.start.line, "character": self.start.character},
            "end": {"line": self.end.line, "character": self.end.character},
        }


@runtime_checkable
class TextDocument(Protocol):
    """Capability interface the detector reads documents through."""

    @property
    def line_count(self) -> int: ...

    def line_at(self, line: int) -> str: ...

    def word_range_at(self, position: Position) -> Range | None: ...


class TextBuffer:
    """In-memory ``TextDocument`` over a string.

    ``word_range_at`` mirrors editor behaviour: a run of word characters
    (``-`` included) touching the position, or None when there is none.
    Pass ``word_ranges=False`` to model a host without word ranges.
    """

    def __init__(self, text: str, *, word_ranges: bool = True) -> None:
        self._lines = text.split("\n")
        self._word_ranges = word_ranges

    @classmethod
    def from_path(cls, path: str, **kwargs: bool) -> TextBuffer:
        with open(path, encoding="utf-8") as f:
            return cls(f.read(), **kwargs)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, line: int) -> str:
        return self._lines[line].rstrip("\r")

    def end_position(self) -> Position:
        last = self.line_count - 1
        return Position(last, len(self.line_at(last)))

    def word_range_at(self, position: Position) -> Range | None:
        if not self._word_ranges:
            return None
        text = self.line_at(position.line)
        for match in WORD_PATTERN.finditer(text):
            if match.start() <= position.character <= match.end():
                return Range(
                    Position(position.line, match.start()),
                    Position(position.line, match.end()),
                )
            if match.start() > position.character:
                break
        return None
