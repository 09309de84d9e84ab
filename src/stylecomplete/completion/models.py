"""Completion candidate records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stylecomplete.context.document import Range


@dataclass(frozen=True, slots=True)
class CompletionItem:
    """One candidate handed back to the host editor.

    Exactly one of two shapes:
    - suffix mode: ``insert_text`` is the untyped remainder, no ``range``
    - replace mode: ``insert_text`` is the full symbol and ``range`` covers
      the partially typed word, with ``filter_text`` for host-side filtering
    """

    label: str
    detail: str
    insert_text: str
    filter_text: str | None = None
    range: Range | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "label": self.label,
            "detail": self.detail,
            "insert_text": self.insert_text,
        }
        if self.filter_text is not None:
            data["filter_text"] = self.filter_text
        if self.range is not None:
            data["range"] = self.range.to_dict()
        return data
