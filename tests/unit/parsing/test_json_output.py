"""Tests for the strict JSON listing parser."""

import json
import logging

import pytest

from adrbridge.core.errors import ErrorKind, MalformedOutputError, UnexpectedShapeError
from adrbridge.core.types import ABSENT, DecisionRecord
from adrbridge.parsing.json_output import normalize_record, parse_records_json


class TestParseRecordsJson:
    def test_minimal_record(self):
        records = parse_records_json('[{"id":"1","title":"T"}]')

        assert records == [
            DecisionRecord(
                id="1",
                title="T",
                status=None,
                date=None,
                tags=(),
                linked_refs=(),
                supersedes=ABSENT,
                superseded_by=ABSENT,
            )
        ]

    def test_full_record(self):
        payload = [
            {
                "id": "20251217-rename-homebrew-tap",
                "title": "Rename Homebrew tap",
                "status": "proposed",
                "date": "2025-12-17",
                "tags": ["infrastructure", "release"],
                "linked_commits": ["abc123", "def456"],
                "supersedes": "20240101-old-tap",
                "superseded_by": None,
            }
        ]

        [record] = parse_records_json(json.dumps(payload))

        assert record.id == "20251217-rename-homebrew-tap"
        assert record.status == "proposed"
        assert record.date == "2025-12-17"
        assert record.tags == ("infrastructure", "release")
        assert record.linked_refs == ("abc123", "def456")
        assert record.supersedes == "20240101-old-tap"
        assert record.superseded_by is None
        assert record.raw is None

    @pytest.mark.parametrize("output", ["", "   ", "\n\t\n"])
    def test_blank_output_is_empty(self, output: str):
        assert parse_records_json(output) == []

    def test_empty_array(self):
        assert parse_records_json("[]") == []

    def test_explicit_null_supersedes_preserved(self):
        [record] = parse_records_json('[{"id":"1","title":"T","supersedes":null}]')
        assert record.supersedes is None
        assert record.superseded_by is ABSENT

    def test_raw_newline_in_title_is_repaired(self):
        [record] = parse_records_json('[{"id":"1","title":"Two\nlines"}]')
        assert record.title == "Two\nlines"

    def test_malformed_json(self):
        with pytest.raises(MalformedOutputError) as exc_info:
            parse_records_json('[{"id": "1",')
        assert exc_info.value.kind is ErrorKind.MALFORMED_OUTPUT
        assert "line 1" in exc_info.value.detail

    def test_plain_text_is_malformed(self):
        with pytest.raises(MalformedOutputError):
            parse_records_json("001 | Use TypeScript")

    @pytest.mark.parametrize(
        ("output", "found"),
        [('{"id": "1"}', "object"), ('"text"', "string"), ("42", "number"), ("null", "null")],
    )
    def test_wrong_top_level_shape(self, output: str, found: str):
        with pytest.raises(UnexpectedShapeError) as exc_info:
            parse_records_json(output)
        assert exc_info.value.found == found

    def test_non_object_elements_skipped(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="adrbridge.parsing.json_output"):
            records = parse_records_json('[{"id":"1","title":"A"}, 7, null, {"id":"2","title":"B"}]')

        assert [r.id for r in records] == ["1", "2"]
        assert "Skipping ADR list entry 1" in caplog.text

    def test_unknown_fields_ignored(self):
        [record] = parse_records_json('[{"id":"1","title":"T","author":"someone","score":3}]')
        assert record == DecisionRecord(id="1", title="T")


class TestNormalizeRecord:
    def test_missing_id_and_title_default_to_empty(self):
        record = normalize_record({})
        assert record.id == ""
        assert record.title == ""

    def test_null_id_defaults_to_empty(self):
        assert normalize_record({"id": None, "title": None}).id == ""

    def test_numeric_id_coerced(self):
        assert normalize_record({"id": 7, "title": "T"}).id == "7"
        assert normalize_record({"id": 7.0, "title": "T"}).id == "7"

    def test_boolean_coerced_like_json(self):
        assert normalize_record({"id": "1", "title": True}).title == "true"

    def test_status_and_date_only_when_present(self):
        record = normalize_record({"id": "1", "title": "T", "status": None})
        assert record.status is None
        assert record.date is None

    def test_non_list_arrays_default_to_empty(self):
        record = normalize_record({"tags": "security", "linked_commits": {"sha": "abc"}})
        assert record.tags == ()
        assert record.linked_refs == ()

    def test_array_items_coerced_to_strings(self):
        record = normalize_record({"tags": ["a", 1, None, False]})
        assert record.tags == ("a", "1", "false")

    @pytest.mark.parametrize(
        ("source", "expected"),
        [({}, ABSENT), ({"supersedes": None}, None), ({"supersedes": "001"}, "001"), ({"supersedes": 1}, "1")],
    )
    def test_supersedes_three_way(self, source: dict, expected: object):
        assert normalize_record(source).supersedes == expected
        if expected is ABSENT or expected is None:
            assert normalize_record(source).supersedes is expected
