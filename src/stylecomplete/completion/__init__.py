"""Completion candidate assembly."""

from stylecomplete.completion.assembler import assemble
from stylecomplete.completion.models import CompletionItem

__all__ = ["CompletionItem", "assemble"]
