"""stylecomplete init command - write a starter config file."""

from pathlib import Path

import click

from stylecomplete.config.user_config import repo_config_path, write_default_config


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
def init_command(path: Path, force: bool) -> None:
    """Create .stylecomplete/config.yaml with commented defaults.

    PATH is the workspace root (default: current directory).
    """
    config_path = repo_config_path(path.resolve())
    if config_path.exists() and not force:
        click.echo(f"Already initialized: {config_path}")
        click.echo("Use --force to overwrite")
        return

    write_default_config(config_path)
    click.echo(f"Wrote {config_path}")
