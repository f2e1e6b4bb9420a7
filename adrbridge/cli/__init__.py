"""Command-line interface for adrbridge."""

from adrbridge.cli.main import main, run

__all__ = ["main", "run"]
