"""Tests for the workspace completion service."""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio

from stylecomplete.config.models import CompletionConfig, FilesConfig, StyleCompleteConfig
from stylecomplete.context.detector import NestingPolicy
from stylecomplete.context.document import TextBuffer
from stylecomplete.core.errors import ErrorCode
from stylecomplete.service.service import (
    CompletionService,
    build_profiles,
    language_for_path,
)
from stylecomplete.service.watcher import FileChangeEvent, FileChangeKind, _collect_watch_dirs
from stylecomplete.symbols.extractor import SymbolKind


@pytest.fixture(autouse=True)
def _no_global_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "stylecomplete.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml"
    )


@pytest_asyncio.fixture
async def service(workspace: Path) -> CompletionService:
    svc = CompletionService(workspace, StyleCompleteConfig())
    await svc.rescan()
    return svc


def complete_at_end(service: CompletionService, text: str, language_id: str) -> list[str] | None:
    buffer = TextBuffer(text)
    items = service.complete(buffer, buffer.end_position(), language_id)
    return None if items is None else [item.label for item in items]


class TestLanguageProfiles:
    """Tests for language routing."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("App.tsx", "typescriptreact"),
            ("App.jsx", "javascriptreact"),
            ("index.HTML", "html"),
            ("base.css", "css"),
            ("mixins.pcss", "postcss"),
            ("README.md", None),
        ],
    )
    def test_language_for_path(self, name: str, expected: str | None) -> None:
        assert language_for_path(Path(name)) == expected

    def test_jsx_profile_completes_classes_in_attributes_and_calls(self) -> None:
        profile = build_profiles(CompletionConfig())["typescriptreact"]

        assert profile.kind is SymbolKind.CSS_CLASS
        assert "className" in profile.context.attribute_names
        assert "clsx" in profile.context.function_names
        assert profile.context.require_quote is True

    def test_html_profile_has_no_calls(self) -> None:
        profile = build_profiles(CompletionConfig())["html"]

        assert profile.kind is SymbolKind.CSS_CLASS
        assert profile.context.function_names == frozenset()

    def test_stylesheet_profile_completes_mixins(self) -> None:
        profile = build_profiles(CompletionConfig())["postcss"]

        assert profile.kind is SymbolKind.MIXIN
        assert profile.context.at_rules == frozenset({"mixin"})
        assert profile.context.require_quote is False

    def test_nesting_and_lookback_flow_through(self) -> None:
        config = CompletionConfig(nesting="depth_one", lookback_lines=3)

        context = build_profiles(config)["javascriptreact"].context

        assert context.nesting is NestingPolicy.DEPTH_ONE
        assert context.lookback_lines == 3


class TestRescan:
    """Tests for the startup scan."""

    @pytest.mark.asyncio
    async def test_counts_files_per_kind(self, workspace: Path) -> None:
        service = CompletionService(workspace, StyleCompleteConfig())

        counts = await service.rescan()

        assert counts == {SymbolKind.CSS_CLASS: 1, SymbolKind.MIXIN: 2}

    @pytest.mark.asyncio
    async def test_vendored_styles_are_skipped(self, service: CompletionService) -> None:
        assert "vendor-only" not in service.registry(SymbolKind.CSS_CLASS).items()

    @pytest.mark.asyncio
    async def test_loads_repo_config_when_none_given(self, workspace: Path) -> None:
        config_file = workspace / ".stylecomplete" / "config.yaml"
        config_file.parent.mkdir()
        config_file.write_text('files:\n  class_patterns: ["**/*.pcss"]\n')

        service = CompletionService(workspace)

        assert service.config.files.class_patterns == ["**/*.pcss"]


class TestComplete:
    """Tests for completion requests."""

    @pytest.mark.asyncio
    async def test_class_name_in_attribute(self, service: CompletionService) -> None:
        buffer = TextBuffer('<div className="he')

        items = service.complete(buffer, buffer.end_position(), "typescriptreact")

        assert items is not None
        assert [item.label for item in items] == ["header"]
        assert items[0].insert_text == "header"
        assert items[0].range is not None

    @pytest.mark.asyncio
    async def test_class_name_in_multi_line_call(self, service: CompletionService) -> None:
        text = "const c = clsx(\n  'a',\n  active && '"

        assert complete_at_end(service, text, "javascriptreact") == ["header", "footer"]

    @pytest.mark.asyncio
    async def test_mixin_after_at_rule(self, service: CompletionService) -> None:
        assert complete_at_end(service, ".btn {\n  @mixin ", "postcss") == ["button", "card"]

    @pytest.mark.asyncio
    async def test_out_of_context_is_none(self, service: CompletionService) -> None:
        assert complete_at_end(service, "const x = 1", "typescriptreact") is None

    @pytest.mark.asyncio
    async def test_unknown_language_is_none(self, service: CompletionService) -> None:
        assert complete_at_end(service, '<div className="', "python") is None

    @pytest.mark.asyncio
    async def test_no_matching_symbols_is_empty(self, service: CompletionService) -> None:
        assert complete_at_end(service, '<div className="zzz', "typescriptreact") == []


class TestApplyChanges:
    """Tests for routing file change events."""

    @pytest.mark.asyncio
    async def test_created_file_ranks_first(self, service: CompletionService) -> None:
        path = service.root / "src" / "styles" / "theme.css"
        path.write_text(".hero {}")

        await service.apply_changes([FileChangeEvent(path, FileChangeKind.CREATED)])

        assert service.registry(SymbolKind.CSS_CLASS).items() == ["hero", "header", "footer"]

    @pytest.mark.asyncio
    async def test_modified_file_is_replaced(self, service: CompletionService) -> None:
        path = service.root / "src" / "styles" / "base.css"
        path.write_text(".banner {}")

        await service.apply_changes([FileChangeEvent(path, FileChangeKind.MODIFIED)])

        assert service.registry(SymbolKind.CSS_CLASS).items() == ["banner"]
        assert service.registry(SymbolKind.MIXIN).items() == ["button", "card"]

    @pytest.mark.asyncio
    async def test_deleted_file_is_removed(self, service: CompletionService) -> None:
        path = service.root / "src" / "styles" / "mixins.pcss"
        path.unlink()

        await service.apply_changes([FileChangeEvent(path, FileChangeKind.DELETED)])

        assert service.registry(SymbolKind.MIXIN).items() == []

    @pytest.mark.asyncio
    async def test_unmatched_and_pruned_paths_are_ignored(self, service: CompletionService) -> None:
        scss = service.root / "src" / "styles" / "extra.scss"
        scss.write_text(".scss-only {}")
        vendor = service.root / "node_modules" / "lib" / "vendor.css"

        await service.apply_changes(
            [
                FileChangeEvent(scss, FileChangeKind.CREATED),
                FileChangeEvent(vendor, FileChangeKind.MODIFIED),
            ]
        )

        assert service.registry(SymbolKind.CSS_CLASS).items() == ["header", "footer"]

    @pytest.mark.asyncio
    async def test_unreadable_file_is_diagnosed(self, service: CompletionService) -> None:
        path = service.root / "src" / "styles" / "gone.css"

        await service.apply_changes([FileChangeEvent(path, FileChangeKind.MODIFIED)])

        assert [d.code for d in service.diagnostics] == [ErrorCode.SYMBOL_READ_FAILED]
        assert service.registry(SymbolKind.CSS_CLASS).items() == ["header", "footer"]

    @pytest.mark.asyncio
    async def test_config_change_reloads(self, service: CompletionService) -> None:
        service.config_path.parent.mkdir()
        service.config_path.write_text('completion:\n  function_names: ["tw"]\n')

        await service.apply_changes(
            [FileChangeEvent(service.config_path, FileChangeKind.CREATED)]
        )

        assert service.config.completion.function_names == ["tw"]
        assert complete_at_end(service, 'tw("he', "typescriptreact") == ["header"]
        assert complete_at_end(service, 'clsx("he', "typescriptreact") is None

    @pytest.mark.asyncio
    async def test_invalid_config_keeps_previous(self, service: CompletionService) -> None:
        """A broken config is logged; the rest of the batch still applies."""
        service.config_path.parent.mkdir()
        service.config_path.write_text("completion:\n  lookback_lines: 0\n")
        css = service.root / "src" / "styles" / "base.css"
        css.write_text(".banner {}")

        await service.apply_changes(
            [
                FileChangeEvent(service.config_path, FileChangeKind.MODIFIED),
                FileChangeEvent(css, FileChangeKind.MODIFIED),
            ]
        )

        assert service.config.completion.lookback_lines == 10
        assert service.registry(SymbolKind.CSS_CLASS).items() == ["banner"]


class TestWatcherFactory:
    @pytest.mark.asyncio
    async def test_watcher_uses_service_settings(self, service: CompletionService) -> None:
        watcher = service.watcher()

        assert watcher.root == service.root
        assert watcher.config_path == service.config_path
        assert watcher.debounce_window == service.config.watcher.debounce_sec
        assert watcher.is_running is False

    @pytest.mark.asyncio
    async def test_watcher_is_created_once(self, service: CompletionService) -> None:
        assert service.watcher() is service.watcher()

    @pytest.mark.asyncio
    async def test_config_reload_updates_watcher(self, workspace: Path) -> None:
        """Dropping an exclude makes the directory both scanned and watched."""
        service = CompletionService(
            workspace, StyleCompleteConfig(files=FilesConfig(exclude_dirs=["styles"]))
        )
        await service.rescan()
        watcher = service.watcher()
        styles = service.root / "src" / "styles"
        assert styles not in _collect_watch_dirs(service.root, watcher._pruned)

        service.config_path.parent.mkdir()
        service.config_path.write_text("watcher:\n  debounce_sec: 0.25\n")
        await service.apply_changes(
            [FileChangeEvent(service.config_path, FileChangeKind.CREATED)]
        )

        assert "styles" not in watcher._pruned
        assert styles in _collect_watch_dirs(service.root, watcher._pruned)
        assert watcher.debounce_window == 0.25
        assert service.registry(SymbolKind.CSS_CLASS).items() == ["header", "footer"]


class TestExplicitConfigFile:
    @pytest.mark.asyncio
    async def test_reloads_from_explicit_file(self, workspace: Path, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("completion:\n  lookback_lines: 5\n")
        service = CompletionService(workspace, config_file=config_file)

        assert service.config_path == config_file.resolve()
        assert service.config.completion.lookback_lines == 5

        config_file.write_text("completion:\n  lookback_lines: 6\n")
        await service.apply_changes(
            [FileChangeEvent(service.config_path, FileChangeKind.MODIFIED)]
        )

        assert service.config.completion.lookback_lines == 6
