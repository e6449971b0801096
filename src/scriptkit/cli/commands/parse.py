"""Import a screenplay and show what was recognised."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptkit.cli.formatters import ReportFormatter
from scriptkit.cli.handler import CLIHandler
from scriptkit.exceptions import ScriptKitError
from scriptkit.importer import parse_file

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration file (YAML, TOML, or JSON)",
    ),
]


def parse_command(
    path: Annotated[
        Path,
        typer.Argument(help="Screenplay file (.fountain, .txt, .fdx or .pdf)"),
    ],
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail if error-severity issues remain"),
    ] = False,
    auto_fix: Annotated[
        bool,
        typer.Option("--auto-fix", help="Apply mechanical fixes before validating"),
    ] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    config: ConfigOption = None,
) -> None:
    """Parse a screenplay into elements and report its validation status."""
    handler = CLIHandler(console)
    handler.load_config(config)
    try:
        result = parse_file(
            path,
            strict=True if strict else None,
            auto_fix=True if auto_fix else None,
        )
    except ScriptKitError as e:
        handler.handle_error(e, json_output)

    if json_output:
        console.print(
            handler.json_formatter.format(result), markup=False, soft_wrap=True
        )
        return
    ReportFormatter(console).print_import(result)


def validate_command(
    path: Annotated[
        Path,
        typer.Argument(help="Screenplay file (.fountain, .txt, .fdx or .pdf)"),
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    config: ConfigOption = None,
) -> None:
    """Validate a screenplay; exits with code 1 when errors are found."""
    handler = CLIHandler(console)
    handler.load_config(config)
    try:
        result = parse_file(path, strict=False)
    except ScriptKitError as e:
        handler.handle_error(e, json_output)

    report = result.validation_report
    if json_output:
        console.print(
            handler.json_formatter.format(report), markup=False, soft_wrap=True
        )
    else:
        ReportFormatter(console).print_report(report)
    if not report.valid:
        raise typer.Exit(1)
