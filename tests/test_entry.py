"""Tests for the entry model."""

from datetime import datetime, timezone

import pytest

from diary.core.entry import Entry, format_tags, parse_tags
from diary.errors import CorruptStateError


@pytest.fixture
def created():
    return datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)


class TestParseTags:
    def test_trims_each_piece(self):
        assert parse_tags("work, ideas ,  ") == ["work", "ideas", ""]

    def test_empty_string_gives_one_empty_tag(self):
        assert parse_tags("") == [""]

    def test_whitespace_only(self):
        assert parse_tags("   ") == [""]

    def test_single(self):
        assert parse_tags("travel") == ["travel"]

    def test_keeps_order(self):
        assert parse_tags("b,a,c") == ["b", "a", "c"]

    def test_format_round_trip(self):
        tags = ["work", "ideas"]
        assert parse_tags(format_tags(tags)) == tags


class TestMatches:
    def test_content_case_insensitive(self, created):
        entry = Entry(1, created, "Went to the Beach", ["summer"])
        assert entry.matches("beach")
        assert entry.matches("BEACH")

    def test_tag_substring(self, created):
        entry = Entry(1, created, "text", ["Holiday"])
        assert entry.matches("holi")

    def test_no_match(self, created):
        entry = Entry(1, created, "text", ["tag"])
        assert not entry.matches("missing")

    def test_empty_query_matches(self, created):
        assert Entry(1, created, "", [""]).matches("")


class TestPreview:
    def test_short_single_line(self, created):
        assert Entry(1, created, "hello").preview() == "hello"

    def test_multiline_marks_more(self, created):
        assert Entry(1, created, "first\nsecond").preview() == "first..."

    def test_truncates(self, created):
        preview = Entry(1, created, "x" * 80).preview(20)
        assert preview == "x" * 17 + "..."
        assert len(preview) == 20


class TestSerialization:
    def test_to_dict(self, created):
        entry = Entry(3, created, "body\nmore", ["a", "b"])
        assert entry.to_dict() == {
            "id": 3,
            "created_at": "2025-01-15T09:30:00+00:00",
            "content": "body\nmore",
            "tags": ["a", "b"],
        }

    def test_from_dict(self, created):
        entry = Entry.from_dict({
            "id": 3,
            "created_at": "2025-01-15T09:30:00+00:00",
            "content": "body",
            "tags": ["a"],
        })
        assert entry == Entry(3, created, "body", ["a"])

    def test_missing_field(self):
        with pytest.raises(CorruptStateError, match="missing field"):
            Entry.from_dict({"id": 1, "content": "x", "tags": []})

    def test_bad_timestamp(self):
        with pytest.raises(CorruptStateError, match="timestamp"):
            Entry.from_dict({"id": 1, "created_at": "yesterday", "content": "x", "tags": []})

    @pytest.mark.parametrize("bad_id", [0, -1, "1", True, None])
    def test_bad_id(self, bad_id):
        with pytest.raises(CorruptStateError):
            Entry.from_dict({
                "id": bad_id,
                "created_at": "2025-01-15T09:30:00+00:00",
                "content": "x",
                "tags": [],
            })

    def test_bad_tags(self):
        with pytest.raises(CorruptStateError, match="tags"):
            Entry.from_dict({
                "id": 1,
                "created_at": "2025-01-15T09:30:00+00:00",
                "content": "x",
                "tags": "a, b",
            })

    def test_not_an_object(self):
        with pytest.raises(CorruptStateError):
            Entry.from_dict(["id", 1])
