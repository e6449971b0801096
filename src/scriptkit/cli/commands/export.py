"""Convert a screenplay to another format."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptkit.cli.commands.parse import ConfigOption
from scriptkit.cli.handler import CLIHandler
from scriptkit.exceptions import ScriptKitError
from scriptkit.export import EXPORTERS
from scriptkit.importer import parse_file

console = Console()


class ExportFormat(str, Enum):
    FOUNTAIN = "fountain"
    FDX = "fdx"


def export_command(
    path: Annotated[
        Path,
        typer.Argument(help="Screenplay file (.fountain, .txt, .fdx or .pdf)"),
    ],
    to: Annotated[
        ExportFormat,
        typer.Option("--to", "-t", help="Target format"),
    ] = ExportFormat.FOUNTAIN,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to this file instead of stdout"),
    ] = None,
    auto_fix: Annotated[
        bool,
        typer.Option("--auto-fix", help="Apply mechanical fixes before export"),
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Export a screenplay as Fountain or Final Draft XML."""
    handler = CLIHandler(console)
    handler.load_config(config)
    try:
        result = parse_file(path, auto_fix=True if auto_fix else None)
    except ScriptKitError as e:
        handler.handle_error(e)

    rendered = EXPORTERS[to.value](result.document)
    if output is None:
        text = rendered.decode("utf-8") if isinstance(rendered, bytes) else rendered
        typer.echo(text, nl=False)
        return

    if isinstance(rendered, bytes):
        output.write_bytes(rendered)
    else:
        output.write_text(rendered, encoding="utf-8")
    console.print(f"[green]Wrote {to.value} to {output}[/green]")
