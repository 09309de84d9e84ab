"""Symbol extraction, registry and workspace scanning."""

from stylecomplete.symbols.extractor import (
    CLASS_PATTERN,
    MIXIN_PATTERN,
    SymbolKind,
    extract,
    extract_class_names,
    extract_mixin_names,
)
from stylecomplete.symbols.registry import SymbolRegistry
from stylecomplete.symbols.scanner import PathMatcher, expand_braces, find_files

__all__ = [
    "CLASS_PATTERN",
    "MIXIN_PATTERN",
    "PathMatcher",
    "SymbolKind",
    "SymbolRegistry",
    "expand_braces",
    "extract",
    "extract_class_names",
    "extract_mixin_names",
    "find_files",
]
