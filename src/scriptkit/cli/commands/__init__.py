"""scriptkit CLI commands."""

from __future__ import annotations

from scriptkit.cli.commands.export import export_command
from scriptkit.cli.commands.paginate import paginate_command
from scriptkit.cli.commands.parse import parse_command, validate_command

__all__ = [
    "export_command",
    "paginate_command",
    "parse_command",
    "validate_command",
]
