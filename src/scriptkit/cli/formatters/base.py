"""Shared pieces of the CLI formatters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, TypeVar

from rich.console import Console

T = TypeVar("T")


class OutputFormat(str, Enum):
    """Plain text, JSON or rich table output."""

    TEXT = "text"
    JSON = "json"
    TABLE = "table"


class OutputFormatter(ABC, Generic[T]):
    """Render one kind of result; ``print_*`` helpers write to ``console``."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    @abstractmethod
    def format(self, data: T, format_type: OutputFormat) -> str:
        """Render ``data`` as a string in ``format_type``."""
