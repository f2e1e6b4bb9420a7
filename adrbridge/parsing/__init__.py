"""Interpretation of ADR tool output into DecisionRecord values."""

from adrbridge.parsing.json_output import normalize_record, parse_records_json
from adrbridge.parsing.sanitize import escape_control_chars_in_strings
from adrbridge.parsing.text_output import parse_record_line, parse_records_text

__all__ = [
    "escape_control_chars_in_strings",
    "normalize_record",
    "parse_record_line",
    "parse_records_json",
    "parse_records_text",
]
