"""stylecomplete watch command - keep registries fresh and log updates."""

import asyncio
from pathlib import Path

import click
import structlog

from stylecomplete.cli.utils import config_file_option, load_workspace_config
from stylecomplete.service.service import CompletionService

logger = structlog.get_logger()


async def _run(service: CompletionService) -> None:
    await service.rescan()
    watcher = service.watcher()
    await watcher.start()
    try:
        # Runs until cancelled (Ctrl+C)
        await asyncio.Event().wait()
    finally:
        await watcher.stop()


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def watch_command(ctx: click.Context, path: Path) -> None:
    """Scan PATH, then watch it for style file changes until interrupted."""
    config = load_workspace_config(ctx, path)
    service = CompletionService(path, config, config_file=config_file_option(ctx))
    click.echo(f"Watching {service.root} (Ctrl+C to stop)")
    try:
        asyncio.run(_run(service))
    except KeyboardInterrupt:
        logger.info("watch_interrupted")
