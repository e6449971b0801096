"""Lay a screenplay out onto pages."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptkit.cli.commands.parse import ConfigOption
from scriptkit.cli.formatters import LayoutFormatter
from scriptkit.cli.handler import CLIHandler
from scriptkit.exceptions import ScriptKitError
from scriptkit.importer import parse_file
from scriptkit.pagination import render_text

console = Console()


def paginate_command(
    path: Annotated[
        Path,
        typer.Argument(help="Screenplay file (.fountain, .txt, .fdx or .pdf)"),
    ],
    auto_fix: Annotated[
        bool,
        typer.Option("--auto-fix", help="Apply mechanical fixes before layout"),
    ] = False,
    text: Annotated[
        bool,
        typer.Option("--text", help="Print the laid out pages as plain text"),
    ] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    config: ConfigOption = None,
) -> None:
    """Paginate a screenplay and show how elements fall onto pages."""
    handler = CLIHandler(console)
    handler.load_config(config)
    try:
        result = parse_file(path, auto_fix=True if auto_fix else None)
    except ScriptKitError as e:
        handler.handle_error(e, json_output)

    layout = result.document.paginate()
    if json_output:
        console.print(
            handler.json_formatter.format(layout), markup=False, soft_wrap=True
        )
    elif text:
        typer.echo(render_text(layout))
    else:
        LayoutFormatter(console).print_table(layout)
