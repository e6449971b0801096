"""Main CLI entry point."""

from __future__ import annotations

import typer
from rich.console import Console

from scriptkit import __version__
from scriptkit.cli.commands import (
    export_command,
    paginate_command,
    parse_command,
    validate_command,
)

console = Console()

app = typer.Typer(
    name="scriptkit",
    help="Screenplay import, validation and pagination",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="parse")(parse_command)
app.command(name="validate")(validate_command)
app.command(name="paginate")(paginate_command)
app.command(name="export")(export_command)


@app.command()
def version() -> None:
    """Show the scriptkit version."""
    console.print(f"scriptkit {__version__}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
