"""scriptkit command line interface."""

from scriptkit.cli.main import app, main

__all__ = ["app", "main"]
