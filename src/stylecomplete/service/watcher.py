"""File watcher using watchfiles for async filesystem monitoring.

Design:
- Python walks the workspace tree, pruning VCS and vendored directories
- Builds an explicit list of directories to watch
- Passes them to awatch with recursive=False (one inotify watch per dir)
- Restarts awatch when a new directory appears so it gets a watch too
- Buffers events in a sliding debounce window and delivers them in batches
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import time
from collections import Counter
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import structlog
from watchfiles import Change, awatch

from stylecomplete.core.excludes import prunable_dirs

logger = structlog.get_logger()

# Debouncing configuration
DEBOUNCE_WINDOW_SEC = 0.5  # Sliding window for batching rapid changes
MAX_DEBOUNCE_WAIT_SEC = 2.0  # Maximum wait before forcing flush


class FileChangeKind(Enum):
    """Kind of file change detected."""

    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"


_CHANGE_KINDS = {
    Change.added: FileChangeKind.CREATED,
    Change.modified: FileChangeKind.MODIFIED,
    Change.deleted: FileChangeKind.DELETED,
}


@dataclass(frozen=True, slots=True)
class FileChangeEvent:
    """A file change event with an absolute path."""

    path: Path
    kind: FileChangeKind


ChangeCallback = Callable[[list[FileChangeEvent]], Awaitable[None]]


def _collect_watch_dirs(root: Path, pruned: frozenset[str]) -> list[Path]:
    """Walk the tree and collect all directories to watch.

    Returns a flat list of directories. The root itself is always included.
    Each directory gets a single non-recursive inotify watch.
    """
    dirs: list[Path] = [root]
    try:
        for dirpath, dirnames, _filenames in os.walk(root):
            # Prune in-place: remove dirs we should skip
            dirnames[:] = [d for d in dirnames if d not in pruned]
            for d in dirnames:
                dirs.append(Path(dirpath) / d)
    except OSError:
        pass
    return dirs


def _summarize_changes_by_type(paths: list[Path]) -> str:
    """Summarize file changes by extension, e.g. "2 CSS files, 1 PostCSS file"."""
    ext_names: dict[str, str] = {
        ".css": "CSS",
        ".pcss": "PostCSS",
        ".postcss": "PostCSS",
        ".scss": "SCSS",
        ".yaml": "config",
        ".yml": "config",
    }

    ext_counts: Counter[str] = Counter()
    for p in paths:
        ext_counts[p.suffix.lower()] += 1

    parts: list[str] = []
    for ext, count in ext_counts.most_common(3):
        name = ext_names.get(ext, ext.lstrip(".").upper() if ext else "other")
        word = "file" if count == 1 else "files"
        parts.append(f"{count} {name} {word}")

    shown_count = sum(count for _, count in ext_counts.most_common(3))
    remaining = len(paths) - shown_count
    if remaining > 0:
        word = "other" if remaining == 1 else "others"
        parts.append(f"{remaining} {word}")

    return ", ".join(parts)


@dataclass
class FileWatcher:
    """
    Async file watcher with sliding-window debouncing.

    Changes are buffered until ``debounce_window`` seconds of quiet time, or
    ``max_debounce_wait`` seconds after the first buffered change, then
    handed to ``on_change`` as one batch. Within a batch the latest event for
    a path wins.
    """

    root: Path
    on_change: ChangeCallback
    exclude_dirs: tuple[str, ...] = ()
    # Passed through even though it lives in a pruned directory
    config_path: Path | None = None
    debounce_window: float = DEBOUNCE_WINDOW_SEC
    max_debounce_wait: float = MAX_DEBOUNCE_WAIT_SEC

    _pruned: frozenset[str] = field(init=False)
    _watch_task: asyncio.Task[None] | None = field(default=None, init=False)
    _stop_event: asyncio.Event = field(default_factory=asyncio.Event, init=False)
    # Ends the current awatch pass; set on stop and on reconfigure
    _awatch_stop: asyncio.Event = field(default_factory=asyncio.Event, init=False)
    # Debouncing state
    _pending_changes: dict[Path, FileChangeKind] = field(default_factory=dict, init=False)
    _last_change_time: float = field(default=0.0, init=False)
    _first_change_time: float = field(default=0.0, init=False)
    _debounce_task: asyncio.Task[None] | None = field(default=None, init=False)
    # Watched directory set for non-recursive mode
    _watched_dirs: set[Path] = field(default_factory=set, init=False)

    def __post_init__(self) -> None:
        self._pruned = prunable_dirs(self.exclude_dirs)

    @property
    def is_running(self) -> bool:
        return self._watch_task is not None and not self._watch_task.done()

    async def start(self) -> None:
        """Start watching for file changes."""
        if self._watch_task is not None:
            return

        self._stop_event.clear()
        self._watch_task = asyncio.create_task(self._watch_loop())
        logger.info(
            "file_watcher_started",
            root=str(self.root),
            debounce_window=self.debounce_window,
        )

    async def stop(self) -> None:
        """Stop watching and flush anything still buffered."""
        self._stop_event.set()
        self._awatch_stop.set()

        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._debounce_task
            self._debounce_task = None

        if self._pending_changes:
            await self._flush_pending()

        if self._watch_task is not None:
            self._watch_task.cancel()
            with contextlib.suppress(asyncio.CancelledError, asyncio.TimeoutError):
                await asyncio.wait_for(self._watch_task, timeout=2.0)
            self._watch_task = None

        logger.info("file_watcher_stopped")

    def reconfigure(
        self,
        *,
        exclude_dirs: tuple[str, ...],
        debounce_window: float,
        max_debounce_wait: float,
    ) -> None:
        """Apply new settings; a running watch loop re-collects its directories."""
        self.exclude_dirs = exclude_dirs
        self._pruned = prunable_dirs(exclude_dirs)
        self.debounce_window = debounce_window
        self.max_debounce_wait = max_debounce_wait
        if self.is_running:
            logger.info("watcher_restart_requested", reason="config_reloaded")
            self._awatch_stop.set()

    def _queue_change(self, path: Path, kind: FileChangeKind) -> None:
        """Queue a change for debounced delivery."""
        now = time.monotonic()

        if not self._pending_changes:
            self._first_change_time = now

        self._pending_changes[path] = kind
        self._last_change_time = now

    def _should_flush(self) -> bool:
        if not self._pending_changes:
            return False

        now = time.monotonic()
        time_since_last = now - self._last_change_time
        time_since_first = now - self._first_change_time

        # Flush if quiet window elapsed OR max wait exceeded
        return time_since_last >= self.debounce_window or time_since_first >= self.max_debounce_wait

    async def _flush_pending(self) -> None:
        if not self._pending_changes:
            return

        events = [FileChangeEvent(path, kind) for path, kind in self._pending_changes.items()]
        self._pending_changes.clear()
        self._first_change_time = 0.0
        self._last_change_time = 0.0

        summary = _summarize_changes_by_type([e.path for e in events])
        logger.info("changes_detected", count=len(events), summary=summary)

        try:
            await self.on_change(events)
        except Exception as e:
            # Keep the watcher alive; the next batch may succeed
            logger.error(
                "change_callback_failed",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )

    async def _debounce_flush_loop(self) -> None:
        """Background task that flushes when debounce window elapses."""
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(0.1)

                if self._should_flush():
                    await self._flush_pending()
        except asyncio.CancelledError:
            pass

    async def _watch_loop(self) -> None:
        """Main watch loop using watchfiles with non-recursive inotify."""
        self._debounce_task = asyncio.create_task(self._debounce_flush_loop())

        try:
            while not self._stop_event.is_set():
                self._awatch_stop = asyncio.Event()
                watch_dirs = _collect_watch_dirs(self.root, self._pruned)
                if self.config_path is not None and self.config_path.parent.is_dir():
                    watch_dirs.append(self.config_path.parent)
                self._watched_dirs = set(watch_dirs)
                logger.debug("watch_dirs_collected", count=len(watch_dirs), root=str(self.root))

                try:
                    async for changes in awatch(
                        *watch_dirs,
                        recursive=False,
                        step=100,
                        stop_event=self._awatch_stop,
                        ignore_permission_denied=True,
                    ):
                        if self._handle_changes(changes):
                            logger.info("watcher_restart_requested", reason="new_directories")
                            break  # Re-collect dirs
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    if self._stop_event.is_set():
                        return
                    logger.error("watcher_error", error=str(e))
                    # Brief backoff before retry
                    await asyncio.sleep(1.0)
        except asyncio.CancelledError:
            pass
        finally:
            if self._debounce_task:
                self._debounce_task.cancel()

    def _handle_changes(self, changes: set[tuple[Change, str]]) -> bool:
        """Queue a batch of raw changes.

        Returns True if a watcher restart is needed (new directories detected).
        """
        needs_restart = False

        for change_type, path_str in changes:
            path = Path(path_str)
            if path == self.config_path:
                self._queue_change(path, _CHANGE_KINDS[change_type])
                continue

            try:
                rel_path = path.relative_to(self.root)
            except ValueError:
                continue

            if any(part in self._pruned for part in rel_path.parent.parts):
                continue

            if change_type == Change.added and path.is_dir():
                watchable = path.name not in self._pruned or (
                    self.config_path is not None and path == self.config_path.parent
                )
                if watchable and path not in self._watched_dirs:
                    logger.info("new_directory_detected", path=str(rel_path))
                    needs_restart = True
                continue  # Directories themselves don't get queued as file changes

            self._queue_change(path, _CHANGE_KINDS[change_type])
            logger.debug("path_queued", path=str(rel_path), change_type=change_type.name)

        return needs_restart
