"""Lexical completion-context detection.

Decides from the text around the cursor alone whether a completion request
sits in a position where style symbols make sense:

- after a configured at-rule in a stylesheet (``@mixin bu|``)
- inside the open quote of a configured attribute (``className="he|``)
- inside a quoted argument of a configured call, possibly opened on an
  earlier line (``clsx(\\n  "a",\\n  active && "he|``)

No parser is involved. Quotes are paired left to right on the cursor line
and parentheses are balanced backwards line by line, bounded by
``lookback_lines``. Back-tick strings are never treated as quoted text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from stylecomplete.context.document import Position, Range, TextDocument

# `<identifier>=` right before the open quote
ENDS_WITH_ATTR = re.compile(r"([\w-]+)=$")

# `@rule <partial>` up to the cursor
ENDS_WITH_AT_RULE = re.compile(r"@([\w-]+)\s+[\w-]*$")

# Call opens (`name(`), bare grouping opens (`(`) and closes (`)`)
CALL_TOKEN = re.compile(r"([\w$]*)\(|\)")

TYPED_PREFIX = re.compile(r"[\w-]*$")

DEFAULT_LOOKBACK_LINES = 10


class NestingPolicy(Enum):
    """How the unresolved call stack is turned into a verdict.

    INNERMOST: the innermost unresolved named call decides, whatever the depth.
    DEPTH_ONE: only a stack holding exactly one unresolved open decides.
    """

    INNERMOST = "innermost"
    DEPTH_ONE = "depth_one"


@dataclass(frozen=True, slots=True)
class ContextConfig:
    """Per-language detection settings."""

    attribute_names: frozenset[str] = frozenset()
    function_names: frozenset[str] = frozenset()
    require_quote: bool = True
    lookback_lines: int = DEFAULT_LOOKBACK_LINES
    at_rules: frozenset[str] = frozenset()
    nesting: NestingPolicy = NestingPolicy.INNERMOST


@dataclass(frozen=True, slots=True)
class ContextMatch:
    """Detector verdict plus what the user has typed so far."""

    matched: bool
    typed_prefix: str = ""
    replace_range: Range | None = None


NO_MATCH = ContextMatch(matched=False)


def text_before_open_quote(text: str) -> str | None:
    """Return the text before the unterminated quote, or None if all quotes pair."""
    quote: str | None = None
    start = 0
    for i, ch in enumerate(text):
        if quote is None:
            if ch in "\"'":
                quote = ch
                start = i
        elif ch == quote:
            quote = None
    return text[:start] if quote is not None else None


def _scan_calls(text: str) -> tuple[list[str], int]:
    """Tokenize one line.

    Returns the opens left unresolved by the line's own closes (outermost
    first, ``""`` for a bare grouping) and the number of closes that found
    nothing to pop on this line.
    """
    opens: list[str] = []
    unmatched_closes = 0
    for token in CALL_TOKEN.finditer(text):
        name = token.group(1)
        if name is None:
            if opens:
                opens.pop()
            else:
                unmatched_closes += 1
        else:
            opens.append(name)
    return opens, unmatched_closes


def _verdict(unresolved: list[str], config: ContextConfig) -> bool | None:
    """True/False once the stack decides, None to keep scanning backwards."""
    if config.nesting is NestingPolicy.DEPTH_ONE:
        if not unresolved:
            return None
        if len(unresolved) > 1:
            return False
        return bool(unresolved[0]) and unresolved[0] in config.function_names
    for name in reversed(unresolved):
        if name:
            return name in config.function_names
    return None


def in_call_context(
    document: TextDocument,
    position: Position,
    head: str,
    config: ContextConfig,
) -> bool:
    """Check whether ``head`` (the cursor line up to the argument) sits in a configured call.

    Lines are examined newest first. Closes that could not be matched in a
    newer line are carried over and consume the innermost unresolved opens
    of the next older line; what is left of that line's opens goes beneath
    the opens already unresolved.
    """
    unresolved: list[str] = []
    carry = 0
    for offset in range(config.lookback_lines):
        line = position.line - offset
        if line < 0:
            break
        text = head if offset == 0 else document.line_at(line)
        opens, closes = _scan_calls(text)
        consumed = min(carry, len(opens))
        del opens[len(opens) - consumed :]
        carry = carry - consumed + closes
        unresolved[:0] = opens
        verdict = _verdict(unresolved, config)
        if verdict is not None:
            return verdict
    return False


def _with_prefix(document: TextDocument, position: Position, before_cursor: str) -> ContextMatch:
    match = TYPED_PREFIX.search(before_cursor)
    prefix = match.group() if match else ""
    return ContextMatch(
        matched=True,
        typed_prefix=prefix,
        replace_range=document.word_range_at(position),
    )


def is_in_context(
    document: TextDocument,
    position: Position,
    config: ContextConfig,
) -> ContextMatch:
    """Decide whether ``position`` is a completion position under ``config``."""
    before_cursor = document.line_at(position.line)[: position.character]

    if config.at_rules:
        at_rule = ENDS_WITH_AT_RULE.search(before_cursor)
        if at_rule and at_rule.group(1) in config.at_rules:
            return _with_prefix(document, position, before_cursor)

    head = text_before_open_quote(before_cursor)
    if head is None:
        if config.require_quote:
            return NO_MATCH
        head = before_cursor

    if config.attribute_names:
        attr = ENDS_WITH_ATTR.search(head)
        if attr:
            if attr.group(1) in config.attribute_names:
                return _with_prefix(document, position, before_cursor)
            return NO_MATCH

    if not config.function_names:
        return NO_MATCH

    if in_call_context(document, position, head, config):
        return _with_prefix(document, position, before_cursor)
    return NO_MATCH
