"""Output formatters for the CLI."""

from scriptkit.cli.formatters.base import OutputFormat, OutputFormatter
from scriptkit.cli.formatters.json_formatter import JsonFormatter
from scriptkit.cli.formatters.report_formatter import LayoutFormatter, ReportFormatter

__all__ = [
    "JsonFormatter",
    "LayoutFormatter",
    "OutputFormat",
    "OutputFormatter",
    "ReportFormatter",
]
