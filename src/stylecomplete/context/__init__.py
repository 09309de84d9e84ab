"""Completion context detection over plain text documents."""

from stylecomplete.context.detector import (
    NO_MATCH,
    ContextConfig,
    ContextMatch,
    NestingPolicy,
    in_call_context,
    is_in_context,
    text_before_open_quote,
)
from stylecomplete.context.document import Position, Range, TextBuffer, TextDocument

__all__ = [
    "NO_MATCH",
    "ContextConfig",
    "ContextMatch",
    "NestingPolicy",
    "Position",
    "Range",
    "TextBuffer",
    "TextDocument",
    "in_call_context",
    "is_in_context",
    "text_before_open_quote",
]
