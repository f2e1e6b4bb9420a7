"""Heuristic parser for plain ``git adr list`` output.

Used when the JSON listing is unavailable or unreadable. Each non-blank line
becomes one record; the first matching layout wins:

    001 | Use TypeScript      (pipe)
    001: Use TypeScript       (colon)
    001 Use TypeScript        (whitespace)
    anything else             (whole line as id and title)
"""

import re

from adrbridge.core.types import DecisionRecord

_LINE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("pipe", re.compile(r"^([^\s|]+)\s*\|\s*(.+)$")),
    ("colon", re.compile(r"^([^\s:]+)\s*:\s*(.+)$")),
    ("space", re.compile(r"^(\S+)\s+(.+)$")),
)


def parse_record_line(line: str) -> DecisionRecord | None:
    """Parse one output line; returns None for blank lines."""
    text = line.strip()
    if not text:
        return None

    for _name, pattern in _LINE_PATTERNS:
        match = pattern.match(text)
        if match:
            return DecisionRecord(
                id=match.group(1).strip(),
                title=match.group(2).strip(),
                raw=line,
            )

    return DecisionRecord(id=text, title=text, raw=line)


def parse_records_text(output: str) -> list[DecisionRecord]:
    """Parse free-text list output, one record per non-blank line.

    Never raises: unrecognised lines still produce a record whose id and
    title are the whole line.
    """
    records = []
    for line in output.splitlines():
        record = parse_record_line(line)
        if record is not None:
            records.append(record)
    return records
