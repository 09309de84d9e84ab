"""stylecomplete symbols command - list the merged symbols of a workspace."""

import asyncio
import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from stylecomplete.cli.utils import config_file_option, load_workspace_config
from stylecomplete.service.service import CompletionService
from stylecomplete.symbols.extractor import SymbolKind


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--kind",
    type=click.Choice([kind.value for kind in SymbolKind]),
    default=SymbolKind.CSS_CLASS.value,
    show_default=True,
    help="Which symbols to list",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def symbols_command(ctx: click.Context, path: Path, kind: str, as_json: bool) -> None:
    """Scan PATH and list its symbols, most recently updated file first."""
    config = load_workspace_config(ctx, path)
    service = CompletionService(path, config, config_file=config_file_option(ctx))
    asyncio.run(service.rescan())

    symbol_kind = SymbolKind(kind)
    registry = service.registry(symbol_kind)
    symbols = registry.items()

    if as_json:
        click.echo(
            json.dumps(
                {
                    "kind": symbol_kind.value,
                    "files": len(registry),
                    "symbols": symbols,
                }
            )
        )
        return

    table = Table(title=f"{symbol_kind.detail} symbols ({len(registry)} files)")
    table.add_column("#", justify="right")
    table.add_column("Symbol")
    for index, symbol in enumerate(symbols, start=1):
        table.add_row(str(index), symbol)
    Console().print(table)
