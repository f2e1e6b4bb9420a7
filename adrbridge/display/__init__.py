"""Terminal output: shared consoles and record formatting."""

from adrbridge.display.console import get_console, get_error_console, set_console
from adrbridge.display.records import format_description, format_details, records_table
from adrbridge.display.text_safety import sanitize_for_display, strip_terminal_escapes

__all__ = [
    "format_description",
    "format_details",
    "get_console",
    "get_error_console",
    "records_table",
    "sanitize_for_display",
    "set_console",
    "strip_terminal_escapes",
]
