"""Tests for control character repair inside JSON strings."""

import json

import pytest

from adrbridge.parsing.sanitize import escape_control_chars_in_strings


class TestEscapeControlChars:
    def test_raw_newline_in_string_matches_escaped_form(self):
        raw = '[{"title": "line one\nline two"}]'
        escaped = '[{"title": "line one\\nline two"}]'

        sanitized = escape_control_chars_in_strings(raw)

        assert sanitized == escaped
        assert json.loads(sanitized) == json.loads(escaped)

    @pytest.mark.parametrize(
        ("char", "expected"),
        [("\n", "\\n"), ("\r", "\\r"), ("\t", "\\t"), ("\x01", "\\u0001")],
    )
    def test_each_control_char(self, char: str, expected: str):
        assert escape_control_chars_in_strings(f'"a{char}b"') == f'"a{expected}b"'

    def test_structure_whitespace_outside_strings_untouched(self):
        text = '[\n\t{"id": "1"},\r\n\t{"id": "2"}\n]'
        assert escape_control_chars_in_strings(text) == text

    def test_existing_escapes_preserved(self):
        text = r'["already\nescaped", "quote \" inside", "backslash \\"]'
        assert escape_control_chars_in_strings(text) == text

    def test_escaped_quote_does_not_end_string(self):
        raw = '["say \\"hi\nthere\\""]'
        sanitized = escape_control_chars_in_strings(raw)
        assert json.loads(sanitized) == ['say "hi\nthere"']

    def test_idempotent(self):
        raw = '[{"title": "a\nb\tc", "body": "x\\ny"}]'
        once = escape_control_chars_in_strings(raw)
        assert escape_control_chars_in_strings(once) == once

    def test_empty_input(self):
        assert escape_control_chars_in_strings("") == ""
