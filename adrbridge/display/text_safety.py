"""Sanitization of tool output before it reaches a rich console.

Record titles, tags and bodies come straight from the ADR tool and the
repository, so they are treated as untrusted: terminal escape sequences are
removed and rich markup brackets are escaped.
"""

import re

from rich.markup import escape as rich_escape

ANSI_ESCAPE_PATTERN = re.compile(
    r"""
    \x1b\[[0-9;]*[ABCDEFGHJKSTfmnsu]       # CSI: colours, cursor moves, erasing lines
    | \x1b\[\?[0-9;]*[hl]                  # private modes: alternate screen, hidden cursor
    | \x1b\][^\x07\x1b]*(?:\x07|\x1b\\)    # OSC: window title, clipboard writes, hyperlinks
    | \x1b[PX^_][^\x1b]*\x1b\\             # DCS/SOS/PM/APC: strings the terminal interprets
    """,
    re.VERBOSE,
)

# Bare controls left after the sequences above can still ring the bell or
# move the cursor. Tab, newline and carriage return are kept for layout.
CONTROL_CHAR_PATTERN = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')


def strip_terminal_escapes(text: str) -> str:
    """Remove ANSI escape sequences and control characters.

    Examples:
        >>> strip_terminal_escapes("\\x1b[31mRed\\x1b[0m")
        'Red'
        >>> strip_terminal_escapes("Line1\\nLine2")
        'Line1\\nLine2'
    """
    text = ANSI_ESCAPE_PATTERN.sub('', text)
    return CONTROL_CHAR_PATTERN.sub('', text)


def sanitize_for_display(text: str) -> str:
    """Strip terminal escapes, then escape rich markup.

    Examples:
        >>> sanitize_for_display("\\x1b[31m[red]attack[/red]\\x1b[0m")
        '\\\\[red]attack\\\\[/red]'
    """
    return rich_escape(strip_terminal_escapes(text))
