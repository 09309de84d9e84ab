"""Turn a detector verdict and a ranked symbol list into candidates."""

from __future__ import annotations

from collections.abc import Iterable

from stylecomplete.completion.models import CompletionItem
from stylecomplete.context.detector import ContextMatch
from stylecomplete.symbols.extractor import SymbolKind


def assemble(
    match: ContextMatch,
    symbols: Iterable[str],
    kind: SymbolKind,
) -> list[CompletionItem] | None:
    """Build candidates for ``symbols`` in the order given.

    Returns None when the position is not a completion context. Symbols are
    kept when they start with the typed prefix, ignoring case; the incoming
    (recency) order is preserved.
    """
    if not match.matched:
        return None

    prefix = match.typed_prefix
    lowered = prefix.lower()
    items: list[CompletionItem] = []
    for symbol in symbols:
        if not symbol.lower().startswith(lowered):
            continue
        if match.replace_range is None:
            items.append(
                CompletionItem(label=symbol, detail=kind.detail, insert_text=symbol[len(prefix) :])
            )
        else:
            items.append(
                CompletionItem(
                    label=symbol,
                    detail=kind.detail,
                    insert_text=symbol,
                    filter_text=symbol,
                    range=match.replace_range,
                )
            )
    return items
