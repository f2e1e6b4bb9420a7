"""Shared rich Console instances for adrbridge output."""

from __future__ import annotations

from rich.console import Console

_console: Console | None = None
_error_console: Console | None = None


def get_console() -> Console:
    """Get the shared stdout Console, creating it on first access."""
    global _console
    if _console is None:
        _console = Console(highlight=False, markup=True)
    return _console


def get_error_console() -> Console:
    """Get the shared stderr Console used for error messages."""
    global _error_console
    if _error_console is None:
        _error_console = Console(stderr=True, highlight=False, markup=True)
    return _error_console


def set_console(console: Console | None, error_console: Console | None = None) -> None:
    """Replace the shared consoles.

    Useful for testing (e.g. ``Console(file=io.StringIO())``). Passing None
    resets to lazily created defaults.
    """
    global _console, _error_console
    _console = console
    _error_console = error_console
