"""Lexical symbol extraction from stylesheet text.

Each symbol kind owns one compiled pattern with a ``name`` group. The
identifier body (``[a-zA-Z][a-zA-Z0-9_-]*``) is validated on its own, after
the sigil, so ``@define-mixin 2invalid`` yields nothing.
"""

from __future__ import annotations

import re
from enum import Enum

IDENTIFIER = r"[a-zA-Z][a-zA-Z0-9_-]*"

CLASS_PATTERN = re.compile(rf"\.(?P<name>{IDENTIFIER})")
MIXIN_PATTERN = re.compile(rf"@define-mixin\s+(?P<name>{IDENTIFIER})")


class SymbolKind(Enum):
    """Kind of symbol a registry holds."""

    CSS_CLASS = "class"
    MIXIN = "mixin"

    @property
    def detail(self) -> str:
        """Category tag shown next to completion candidates."""
        return _DETAILS[self]

    @property
    def pattern(self) -> re.Pattern[str]:
        return _PATTERNS[self]


_DETAILS = {
    SymbolKind.CSS_CLASS: "CSS class",
    SymbolKind.MIXIN: "PostCSS Mixin",
}

_PATTERNS = {
    SymbolKind.CSS_CLASS: CLASS_PATTERN,
    SymbolKind.MIXIN: MIXIN_PATTERN,
}


def extract(text: str, pattern: re.Pattern[str]) -> list[str]:
    """Return every ``name`` match of ``pattern`` in first-occurrence order.

    Duplicates are kept; the registry de-duplicates per file.
    """
    return [match.group("name") for match in pattern.finditer(text)]


def extract_class_names(text: str) -> list[str]:
    return extract(text, CLASS_PATTERN)


def extract_mixin_names(text: str) -> list[str]:
    return extract(text, MIXIN_PATTERN)
