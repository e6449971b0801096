"""Main entry point for scriptkit CLI when run as a module."""

from scriptkit.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
