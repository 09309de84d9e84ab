"""Shared fixtures for CLI tests."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ignore the user's global config and keep INFO logs off the output."""
    monkeypatch.setattr(
        "stylecomplete.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml"
    )
    monkeypatch.setenv("STYLECOMPLETE__LOGGING__LEVEL", "WARNING")
