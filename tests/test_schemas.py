# tests/test_schemas.py
"""Unit tests for request body validation."""
import pytest

from notes_core.errors import ValidationError
from notes_core.schemas import NoteInput, StarInput, normalize_tags, parse_model


class TestNormalizeTags:
    def test_trims_and_deduplicates(self):
        assert normalize_tags([" work", "work ", "urgent", "", "  "]) == ["work", "urgent"]

    def test_none(self):
        assert normalize_tags(None) == []


class TestNoteInput:
    def test_defaults(self):
        data = parse_model(NoteInput, {"title": "t", "content": "c"})
        assert data.tags == []
        assert data.attachment is None

    def test_null_tags(self):
        assert parse_model(NoteInput, {"title": "t", "content": "c", "tags": None}).tags == []

    def test_blank_attachment_is_none(self):
        assert parse_model(NoteInput, {"title": "t", "content": "c", "attachment": "  "}).attachment is None

    @pytest.mark.parametrize("field", ["title", "content"])
    def test_blank_required_field(self, field):
        body = {"title": "t", "content": "c"}
        body[field] = ""
        with pytest.raises(ValidationError, match=field):
            parse_model(NoteInput, body)

    def test_missing_content(self):
        with pytest.raises(ValidationError, match="content"):
            parse_model(NoteInput, {"title": "t"})

    def test_tags_must_be_strings(self):
        with pytest.raises(ValidationError):
            parse_model(NoteInput, {"title": "t", "content": "c", "tags": [1, 2]})

    def test_body_must_be_object(self):
        with pytest.raises(ValidationError, match="JSON object"):
            parse_model(NoteInput, ["t", "c"])


class TestStarInput:
    def test_boolean(self):
        assert parse_model(StarInput, {"starred": False}).starred is False

    @pytest.mark.parametrize("value", ["true", 1, None])
    def test_rejects_non_boolean(self, value):
        with pytest.raises(ValidationError, match="starred"):
            parse_model(StarInput, {"starred": value})
