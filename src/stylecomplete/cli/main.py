"""stylecomplete CLI."""

from pathlib import Path

import click

from stylecomplete import __version__
from stylecomplete.cli.complete import complete_command
from stylecomplete.cli.init import init_command
from stylecomplete.cli.symbols import symbols_command
from stylecomplete.cli.watch import watch_command
from stylecomplete.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="stylecomplete")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file to use instead of .stylecomplete/config.yaml",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_file: Path | None) -> None:
    """stylecomplete - CSS class and PostCSS mixin completion from your stylesheets."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_file"] = config_file
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(init_command, name="init")
cli.add_command(symbols_command, name="symbols")
cli.add_command(complete_command, name="complete")
cli.add_command(watch_command, name="watch")


if __name__ == "__main__":
    cli()
