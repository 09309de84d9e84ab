"""stylecomplete complete command - run one completion request from the shell."""

import asyncio
import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from stylecomplete.cli.utils import config_file_option, load_workspace_config
from stylecomplete.context.document import Position, TextBuffer
from stylecomplete.service.service import CompletionService, language_for_path


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("line", type=click.IntRange(min=0))
@click.argument("column", type=click.IntRange(min=0))
@click.option(
    "--root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Workspace root to scan for style files",
)
@click.option("--language", "language_id", help="Language id (default: from file suffix)")
@click.option("--no-word-range", is_flag=True, help="Emulate a host without word ranges")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def complete_command(
    ctx: click.Context,
    file: Path,
    line: int,
    column: int,
    root: Path,
    language_id: str | None,
    no_word_range: bool,
    as_json: bool,
) -> None:
    """Print completions for FILE at zero-based LINE and COLUMN."""
    language_id = language_id or language_for_path(file)
    if language_id is None:
        raise click.ClickException(f"Cannot infer language for {file}; pass --language")

    document = TextBuffer(file.read_text(encoding="utf-8"), word_ranges=not no_word_range)
    if line >= document.line_count:
        raise click.ClickException(f"Line {line} is past the end of {file}")
    column = min(column, len(document.line_at(line)))

    config = load_workspace_config(ctx, root)
    service = CompletionService(root, config, config_file=config_file_option(ctx))
    asyncio.run(service.rescan())

    items = service.complete(document, Position(line, column), language_id)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "in_context": items is not None,
                    "items": [item.to_dict() for item in items or []],
                }
            )
        )
        return

    if items is None:
        click.echo("Not a completion position.")
        return

    table = Table(title=f"{len(items)} candidates")
    table.add_column("Label")
    table.add_column("Insert")
    table.add_column("Detail")
    for item in items:
        table.add_row(item.label, item.insert_text, item.detail)
    Console().print(table)
