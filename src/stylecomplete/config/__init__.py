"""Config module exports."""

from stylecomplete.config.loader import StyleCompleteSettings, load_config
from stylecomplete.config.models import (
    CompletionConfig,
    FilesConfig,
    LoggingConfig,
    StyleCompleteConfig,
    WatcherConfig,
)
from stylecomplete.config.user_config import repo_config_path, write_default_config

__all__ = [
    "load_config",
    "repo_config_path",
    "write_default_config",
    "CompletionConfig",
    "FilesConfig",
    "LoggingConfig",
    "StyleCompleteConfig",
    "StyleCompleteSettings",
    "WatcherConfig",
]
