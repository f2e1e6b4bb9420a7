"""Repair of raw control characters inside JSON string literals.

Some releases of the ADR tool write titles containing literal newlines or
tabs straight into their JSON output. Strict JSON forbids unescaped control
characters in strings, so the output is rewritten before parsing: control
characters inside string literals become escape sequences, everything else
is copied through untouched.
"""

_SHORT_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _escape_control(char: str) -> str:
    short = _SHORT_ESCAPES.get(char)
    if short is not None:
        return short
    return f"\\u{ord(char):04x}"


def escape_control_chars_in_strings(text: str) -> str:
    """Escape raw control characters that appear inside JSON string literals.

    String spans are found by tracking unescaped double quotes. Existing
    escape sequences (backslash plus the next character) are copied as-is,
    so the function is idempotent and never double-escapes.
    """
    out: list[str] = []
    in_string = False
    escaped = False

    for char in text:
        if not in_string:
            out.append(char)
            if char == '"':
                in_string = True
            continue

        if escaped:
            out.append(char)
            escaped = False
        elif char == "\\":
            out.append(char)
            escaped = True
        elif char == '"':
            out.append(char)
            in_string = False
        elif char < " ":
            out.append(_escape_control(char))
        else:
            out.append(char)

    return "".join(out)
