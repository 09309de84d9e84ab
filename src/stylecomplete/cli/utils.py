"""CLI utilities."""

from pathlib import Path
from typing import Any

import click

from stylecomplete.config.loader import load_config
from stylecomplete.config.models import StyleCompleteConfig
from stylecomplete.core.errors import ConfigError
from stylecomplete.core.logging import configure_logging


def _root_options(ctx: click.Context) -> dict[str, Any]:
    return ctx.find_root().obj or {}


def config_file_option(ctx: click.Context) -> Path | None:
    """The group-level ``--config`` value, if any."""
    return _root_options(ctx).get("config_file")


def load_workspace_config(ctx: click.Context, root: Path) -> StyleCompleteConfig:
    """Load config for ``root`` and apply its logging section.

    ``--verbose`` on the group forces DEBUG regardless of the config file.

    Raises:
        click.ClickException: If the config files are invalid or missing
    """
    try:
        config = load_config(root, config_file=config_file_option(ctx))
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    logging_config = config.logging
    if _root_options(ctx).get("verbose"):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    return config
