"""Workspace service and file watching."""

from stylecomplete.service.service import (
    CompletionProfile,
    CompletionService,
    build_profiles,
    language_for_path,
)
from stylecomplete.service.watcher import FileChangeEvent, FileChangeKind, FileWatcher

__all__ = [
    "CompletionProfile",
    "CompletionService",
    "FileChangeEvent",
    "FileChangeKind",
    "FileWatcher",
    "build_profiles",
    "language_for_path",
]
