"""Incremental per-file symbol registry with a recency-ranked merged view.

The registry keeps one ordered entry per style file. Ordering is the
recency of the last successful update: updating a file removes and
reinserts it, so the most recently touched file is always last in the
mapping. ``items()`` walks the mapping newest-first and keeps the first
occurrence of every symbol, so names from recently edited files rank first.

Reads happen in a worker thread and are the only suspension points; state
mutation and ``items()`` are serialized with a lock so a reader never sees a
half-applied update.
"""

from __future__ import annotations

import asyncio
import threading
from collections import OrderedDict
from collections.abc import Callable, Iterable
from pathlib import Path

import structlog

from stylecomplete.core.errors import SymbolReadError
from stylecomplete.symbols.extractor import SymbolKind, extract

logger = structlog.get_logger()

ErrorHandler = Callable[[SymbolReadError], None]


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class SymbolRegistry:
    """Per-file symbol sets for one symbol kind.

    Usage::

        registry = SymbolRegistry(SymbolKind.CSS_CLASS)
        registry.update("/app/a.css", ".header {}")
        await registry.update_from_file(Path("/app/b.css"))
        registry.items()  # b.css symbols first, then a.css
    """

    def __init__(self, kind: SymbolKind, *, on_error: ErrorHandler | None = None) -> None:
        self._kind = kind
        self._on_error = on_error
        self._entries: OrderedDict[str, tuple[str, ...]] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def kind(self) -> SymbolKind:
        return self._kind

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, file_id: object) -> bool:
        with self._lock:
            return file_id in self._entries

    def _symbols_from(self, text: str) -> tuple[str, ...]:
        return tuple(dict.fromkeys(extract(text, self._kind.pattern)))

    def update(self, file_id: str, text: str) -> None:
        """Replace the file's symbols and move it to the most recent position."""
        symbols = self._symbols_from(text)
        with self._lock:
            self._entries.pop(file_id, None)
            self._entries[file_id] = symbols
        logger.debug("symbols_updated", kind=self._kind.value, file=file_id, count=len(symbols))

    async def update_from_file(self, path: Path) -> bool:
        """Read ``path`` and update its entry.

        Returns False when the file could not be read or decoded; the
        previous entry is left untouched and the failure is reported.
        """
        try:
            text = await asyncio.to_thread(_read_text, path)
        except (OSError, UnicodeDecodeError) as e:
            self._report(SymbolReadError.read_failed(str(path), str(e)))
            return False
        self.update(str(path), text)
        return True

    def remove(self, file_id: str) -> None:
        with self._lock:
            removed = self._entries.pop(file_id, None)
        if removed is not None:
            logger.debug("symbols_removed", kind=self._kind.value, file=file_id)

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()

    async def rebuild(self, paths: Iterable[Path]) -> int:
        """Replace all entries with freshly read ``paths``.

        Files are read first and swapped in together, so ``items()`` never
        shows a half-built registry. The last path ends up most recent.
        Unreadable files are reported and skipped. Returns the number of
        files loaded.
        """
        fresh: OrderedDict[str, tuple[str, ...]] = OrderedDict()
        for path in paths:
            try:
                text = await asyncio.to_thread(_read_text, path)
            except (OSError, UnicodeDecodeError) as e:
                self._report(SymbolReadError.read_failed(str(path), str(e)))
                continue
            fresh.pop(str(path), None)
            fresh[str(path)] = self._symbols_from(text)
        with self._lock:
            self._entries = fresh
        return len(fresh)

    def items(self) -> list[str]:
        """Merged symbols, most recently updated file first, de-duplicated."""
        with self._lock:
            entries = list(self._entries.values())
        merged: dict[str, None] = {}
        for symbols in reversed(entries):
            for symbol in symbols:
                merged.setdefault(symbol, None)
        return list(merged)

    def files(self) -> list[str]:
        """File ids, most recently updated first."""
        with self._lock:
            return list(reversed(self._entries))

    def symbols_for(self, file_id: str) -> tuple[str, ...]:
        with self._lock:
            return self._entries.get(file_id, ())

    def _report(self, error: SymbolReadError) -> None:
        logger.warning(
            "symbol_read_failed",
            kind=self._kind.value,
            path=error.details["path"],
            reason=error.details["reason"],
        )
        if self._on_error is not None:
            self._on_error(error)
