"""Human-readable formatting of DecisionRecord values.

format_description() and format_details() return plain text (suitable for
list labels and tooltips in a host UI); records_table() builds a rich Table
for the command line, sanitizing every tool-supplied string.
"""

from collections.abc import Iterable

from rich.table import Table

from adrbridge.core.types import ABSENT, DecisionRecord, RelationRef
from adrbridge.display.text_safety import sanitize_for_display

SEPARATOR = " • "

# Linked commits shown before collapsing into "and N more"
MAX_LINKED_REFS_SHOWN = 3


def format_description(record: DecisionRecord) -> str:
    """One-line summary: ``status • date • tags``, skipping missing parts.

    Examples:
        >>> format_description(DecisionRecord(status="accepted", date="2025-12-17"))
        'accepted • 2025-12-17'
    """
    parts: list[str] = []
    if record.status:
        parts.append(record.status)
    if record.date:
        parts.append(record.date)
    if record.tags:
        parts.append(", ".join(record.tags))
    return SEPARATOR.join(parts)


def _relation_text(value: RelationRef) -> str:
    return value if isinstance(value, str) else "(none)"


def format_details(record: DecisionRecord) -> str:
    """Multi-line summary of every known metadata field.

    Relations the tool did not report are omitted; relations it reported
    as null are shown as ``(none)``.
    """
    lines = [f"ID: {record.id}"]

    if record.status:
        lines.append(f"Status: {record.status}")
    if record.date:
        lines.append(f"Date: {record.date}")
    if record.tags:
        lines.append(f"Tags: {', '.join(record.tags)}")

    if record.linked_refs:
        shown = ", ".join(record.linked_refs[:MAX_LINKED_REFS_SHOWN])
        remaining = len(record.linked_refs) - MAX_LINKED_REFS_SHOWN
        if remaining > 0:
            lines.append(f"Linked commits: {shown} and {remaining} more")
        else:
            lines.append(f"Linked commits: {shown}")

    if record.supersedes is not ABSENT:
        lines.append(f"Supersedes: {_relation_text(record.supersedes)}")
    if record.superseded_by is not ABSENT:
        lines.append(f"Superseded by: {_relation_text(record.superseded_by)}")

    return "\n".join(lines)


def records_table(records: Iterable[DecisionRecord], title: str | None = None) -> Table:
    """Build a rich Table with one row per record."""
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Status", style="green")
    table.add_column("Date", style="dim")
    table.add_column("Tags", style="magenta")

    for record in records:
        table.add_row(
            sanitize_for_display(record.id),
            sanitize_for_display(record.title),
            sanitize_for_display(record.status or ""),
            sanitize_for_display(record.date or ""),
            sanitize_for_display(", ".join(record.tags)),
        )
    return table
