"""Strict parser for ``git adr list -f json`` output.

Expected wire format, one object per record:

    [
      {
        "id": "20251217-rename-homebrew-tap",
        "title": "Rename Homebrew tap to follow naming conventions",
        "status": "proposed",
        "date": "2025-12-17",
        "tags": ["infrastructure"],
        "linked_commits": ["abc123"],
        "supersedes": null,
        "superseded_by": null
      }
    ]

Unknown fields are ignored so newer tool versions keep working.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from adrbridge.core.errors import MalformedOutputError, UnexpectedShapeError
from adrbridge.core.types import ABSENT, DecisionRecord, RelationRef
from adrbridge.parsing.sanitize import escape_control_chars_in_strings

logger = logging.getLogger(__name__)


def _to_text(value: Any) -> str:
    """Coerce a JSON scalar the way the tool renders it as text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _optional_text(raw: Mapping[str, Any], key: str) -> str | None:
    value = raw.get(key)
    return None if value is None else _to_text(value)


def _text_list(raw: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = raw.get(key)
    if not isinstance(value, list):
        return ()
    return tuple(_to_text(item) for item in value if item is not None)


def _relation(raw: Mapping[str, Any], key: str) -> RelationRef:
    # Absent, explicit null and an id are three different answers.
    if key not in raw:
        return ABSENT
    value = raw[key]
    if value is None:
        return None
    return _to_text(value)


def _json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def normalize_record(raw: Mapping[str, Any]) -> DecisionRecord:
    """Convert one decoded JSON object into a DecisionRecord.

    - id/title: coerced to str, "" when missing or null
    - status/date: str when present, None otherwise
    - tags/linked_commits: tuple of str, () when missing or not a list
    - supersedes/superseded_by: ABSENT, None or str, mirroring the source
    """
    return DecisionRecord(
        id=_optional_text(raw, "id") or "",
        title=_optional_text(raw, "title") or "",
        status=_optional_text(raw, "status"),
        date=_optional_text(raw, "date"),
        tags=_text_list(raw, "tags"),
        linked_refs=_text_list(raw, "linked_commits"),
        supersedes=_relation(raw, "supersedes"),
        superseded_by=_relation(raw, "superseded_by"),
    )


def parse_records_json(output: str) -> list[DecisionRecord]:
    """Parse JSON list output into decision records.

    Args:
        output: Raw stdout of the JSON listing.

    Returns:
        Records in source order. Empty or whitespace-only output yields [].

    Raises:
        MalformedOutputError: The (sanitized) output is not valid JSON.
        UnexpectedShapeError: The JSON is valid but not a top-level array.
    """
    if not output.strip():
        return []

    try:
        data = json.loads(escape_control_chars_in_strings(output))
    except json.JSONDecodeError as e:
        raise MalformedOutputError(f"{e.msg} (line {e.lineno}, column {e.colno})") from e

    if not isinstance(data, list):
        raise UnexpectedShapeError(_json_type_name(data))

    records: list[DecisionRecord] = []
    for index, item in enumerate(data):
        if not isinstance(item, Mapping):
            logger.warning(
                "Skipping ADR list entry %d: expected object, got %s",
                index, _json_type_name(item),
            )
            continue
        records.append(normalize_record(item))
    return records
