"""Completion service: registries, language profiles and change handling.

One ``CompletionService`` per workspace. It owns a registry per symbol kind,
keeps them fresh from file change events, rebuilds them on startup and on
configuration changes, and answers completion requests by routing the
document's language to a profile (which symbols, which context rules).
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from stylecomplete.completion.assembler import assemble
from stylecomplete.completion.models import CompletionItem
from stylecomplete.config.loader import load_config
from stylecomplete.config.models import CompletionConfig, StyleCompleteConfig
from stylecomplete.config.user_config import repo_config_path
from stylecomplete.context.detector import ContextConfig, NestingPolicy, is_in_context
from stylecomplete.context.document import Position, TextDocument
from stylecomplete.core.errors import ConfigError, SymbolReadError
from stylecomplete.core.logging import clear_request_id, set_request_id
from stylecomplete.service.watcher import FileChangeEvent, FileChangeKind, FileWatcher
from stylecomplete.symbols.extractor import SymbolKind
from stylecomplete.symbols.registry import SymbolRegistry
from stylecomplete.symbols.scanner import PathMatcher, find_files, is_pruned

logger = structlog.get_logger()

JSX_LANGUAGES: frozenset[str] = frozenset({"javascriptreact", "typescriptreact"})
HTML_LANGUAGES: frozenset[str] = frozenset({"html"})
STYLESHEET_LANGUAGES: frozenset[str] = frozenset({"css", "postcss"})

LANGUAGE_BY_SUFFIX: dict[str, str] = {
    ".jsx": "javascriptreact",
    ".tsx": "typescriptreact",
    ".html": "html",
    ".htm": "html",
    ".css": "css",
    ".pcss": "postcss",
    ".postcss": "postcss",
}

MAX_DIAGNOSTICS = 100


def language_for_path(path: Path) -> str | None:
    """Infer a language id from a file suffix."""
    return LANGUAGE_BY_SUFFIX.get(path.suffix.lower())


@dataclass(frozen=True, slots=True)
class CompletionProfile:
    """What to complete for a language and when."""

    kind: SymbolKind
    context: ContextConfig


def build_profiles(config: CompletionConfig) -> dict[str, CompletionProfile]:
    """Map language ids to profiles.

    JSX/TSX complete class names in attributes and helper calls, HTML in
    attributes only, stylesheets complete mixin names after ``@mixin``.
    """
    lookback = config.lookback_lines
    nesting = NestingPolicy(config.nesting)
    jsx = ContextConfig(
        attribute_names=frozenset(config.attribute_names),
        function_names=frozenset(config.function_names),
        require_quote=config.require_quote,
        lookback_lines=lookback,
        nesting=nesting,
    )
    html = ContextConfig(
        attribute_names=frozenset(config.attribute_names),
        require_quote=config.require_quote,
        lookback_lines=lookback,
        nesting=nesting,
    )
    stylesheet = ContextConfig(
        require_quote=False,
        lookback_lines=lookback,
        at_rules=frozenset(config.mixin_at_rules),
    )

    profiles: dict[str, CompletionProfile] = {}
    for language in JSX_LANGUAGES:
        profiles[language] = CompletionProfile(SymbolKind.CSS_CLASS, jsx)
    for language in HTML_LANGUAGES:
        profiles[language] = CompletionProfile(SymbolKind.CSS_CLASS, html)
    for language in STYLESHEET_LANGUAGES:
        profiles[language] = CompletionProfile(SymbolKind.MIXIN, stylesheet)
    return profiles


class CompletionService:
    """Workspace-level facade over registries, detector and assembler.

    Usage::

        service = CompletionService(Path("/repo"))
        await service.rescan()
        items = service.complete(TextBuffer(text), Position(3, 17), "typescriptreact")
    """

    def __init__(
        self,
        root: Path,
        config: StyleCompleteConfig | None = None,
        *,
        config_file: Path | None = None,
    ) -> None:
        self._root = root.resolve()
        self._config_file = config_file.resolve() if config_file is not None else None
        self._config_path = self._config_file or repo_config_path(self._root)
        self._diagnostics: deque[SymbolReadError] = deque(maxlen=MAX_DIAGNOSTICS)
        self._registries = {
            kind: SymbolRegistry(kind, on_error=self._diagnostics.append) for kind in SymbolKind
        }
        self._watcher: FileWatcher | None = None
        self._apply_config(config or self._load_config())

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config(self) -> StyleCompleteConfig:
        return self._config

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def diagnostics(self) -> list[SymbolReadError]:
        """Most recent read failures, oldest first."""
        return list(self._diagnostics)

    def registry(self, kind: SymbolKind) -> SymbolRegistry:
        return self._registries[kind]

    def profile_for(self, language_id: str) -> CompletionProfile | None:
        return self._profiles.get(language_id)

    def _load_config(self) -> StyleCompleteConfig:
        return load_config(self._root, config_file=self._config_file)

    def _apply_config(self, config: StyleCompleteConfig) -> None:
        self._config = config
        self._profiles = build_profiles(config.completion)
        self._matchers = {
            SymbolKind.CSS_CLASS: PathMatcher(config.files.class_patterns),
            SymbolKind.MIXIN: PathMatcher(config.files.mixin_patterns),
        }

    def _patterns_for(self, kind: SymbolKind) -> list[str]:
        if kind is SymbolKind.CSS_CLASS:
            return self._config.files.class_patterns
        return self._config.files.mixin_patterns

    async def rescan(self) -> dict[SymbolKind, int]:
        """Rebuild every registry from a fresh workspace scan."""
        counts: dict[SymbolKind, int] = {}
        for kind, registry in self._registries.items():
            paths = find_files(self._root, self._patterns_for(kind), self._config.files.exclude_dirs)
            counts[kind] = await registry.rebuild(paths)
        logger.info(
            "rescan_complete",
            root=str(self._root),
            **{f"{kind.value}_files": count for kind, count in counts.items()},
        )
        return counts

    async def reload_config(self, config: StyleCompleteConfig | None = None) -> None:
        """Swap in a new configuration and rescan.

        Raises:
            ConfigError: If ``config`` is None and the config files are invalid.
        """
        self._apply_config(config or self._load_config())
        if self._watcher is not None:
            self._watcher.reconfigure(**self._watcher_settings())
        logger.info("config_reloaded", root=str(self._root))
        await self.rescan()

    async def apply_changes(self, events: list[FileChangeEvent]) -> None:
        """Route a batch of file change events to the registries."""
        if any(event.path == self._config_path for event in events):
            try:
                await self.reload_config()
            except ConfigError as e:
                logger.warning("config_reload_failed", error=str(e), details=e.details)
            else:
                return

        for event in events:
            await self._apply_change(event)

    async def _apply_change(self, event: FileChangeEvent) -> None:
        try:
            rel_path = event.path.relative_to(self._root)
        except ValueError:
            return
        if is_pruned(rel_path, self._config.files.exclude_dirs):
            return

        for kind, matcher in self._matchers.items():
            if not matcher.matches(rel_path):
                continue
            registry = self._registries[kind]
            if event.kind is FileChangeKind.DELETED:
                registry.remove(str(event.path))
            else:
                await registry.update_from_file(event.path)

    def _watcher_settings(self) -> dict[str, Any]:
        return {
            "exclude_dirs": tuple(self._config.files.exclude_dirs),
            "debounce_window": self._config.watcher.debounce_sec,
            "max_debounce_wait": self._config.watcher.max_debounce_wait_sec,
        }

    def watcher(self) -> FileWatcher:
        """Return the watcher wired to ``apply_changes``, creating it on first use.

        The service keeps it in step with config reloads.
        """
        if self._watcher is None:
            self._watcher = FileWatcher(
                root=self._root,
                on_change=self.apply_changes,
                config_path=self._config_path,
                **self._watcher_settings(),
            )
        return self._watcher

    def complete(
        self,
        document: TextDocument,
        position: Position,
        language_id: str,
    ) -> list[CompletionItem] | None:
        """Answer a completion request; None means render nothing."""
        profile = self._profiles.get(language_id)
        if profile is None:
            return None

        set_request_id()
        try:
            match = is_in_context(document, position, profile.context)
            if not match.matched:
                logger.debug("completion_out_of_context", language=language_id)
                return None
            items = assemble(match, self._registries[profile.kind].items(), profile.kind)
            logger.debug(
                "completion_served",
                language=language_id,
                prefix=match.typed_prefix,
                count=len(items or ()),
            )
            return items
        finally:
            clear_request_id()
