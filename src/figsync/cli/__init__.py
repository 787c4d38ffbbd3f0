"""figsync command-line interface."""

from figsync.cli.main import cli

__all__ = ["cli"]
