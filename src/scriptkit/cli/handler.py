"""Unified CLI handler for standardized error handling and output."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from scriptkit.cli.formatters.json_formatter import JsonFormatter
from scriptkit.config import get_logger
from scriptkit.config.settings import ScriptKitSettings, set_settings
from scriptkit.exceptions import ScriptKitError, ScriptValidationFailed

logger = get_logger(__name__)


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def load_config(self, config: Path | None) -> None:
        """Install settings from an explicit config file, if one was given."""
        if config is None:
            return
        try:
            settings = ScriptKitSettings.from_multiple_sources(config_files=[config])
        except ScriptKitError as e:
            self.handle_error(e)
        set_settings(settings)

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> NoReturn:
        """Print an error consistently and exit.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use
        """
        logger.error("Command failed", error=str(error))

        if json_output:
            self.console.print(
                self.json_formatter.format_error_response(error, exit_code),
                markup=False,
                soft_wrap=True,
            )
        elif isinstance(error, ScriptValidationFailed):
            self.console.print(f"[red]Validation Error: {escape(error.message)}[/red]")
            self.console.print(error.report.format_console(), markup=False)
        elif isinstance(error, ScriptKitError):
            self.console.print(f"[red]{escape(error.format_error())}[/red]")
        else:
            self.console.print(f"[red]Error: {escape(str(error))}[/red]")

        raise typer.Exit(exit_code)
