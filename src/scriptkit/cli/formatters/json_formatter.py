"""JSON output formatter for CLI."""

from __future__ import annotations

import json
from typing import Any

from scriptkit.cli.formatters.base import OutputFormat, OutputFormatter


class JsonFormatter(OutputFormatter[Any]):
    """Generic JSON formatter for CLI output."""

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.JSON) -> str:  # noqa: ARG002
        """Format data as JSON, preferring an object's own ``to_dict``."""
        if hasattr(data, "to_dict"):
            return json.dumps(data.to_dict(), default=str, indent=2)
        if hasattr(data, "model_dump"):
            return json.dumps(data.model_dump(mode="json"), default=str, indent=2)
        if isinstance(data, dict | list | tuple):
            return json.dumps(data, default=str, indent=2)
        return json.dumps({"value": data}, default=str, indent=2)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        error_msg = str(error) if isinstance(error, Exception) else error
        response = {"success": False, "error": error_msg, "code": code}
        return json.dumps(response, indent=2)
