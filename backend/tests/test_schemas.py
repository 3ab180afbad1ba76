"""
Notes API — Schema & Validation Tests
=======================================

What:  Input sanitization (trim + escape) and the translation of Pydantic
       errors into field-level violations.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from notes_api.schemas.note import NoteCreate, NoteUpdate, escape_html, sanitize_text
from notes_api.validation import to_violation, validation_error_from


class TestSanitization:

    def test_escape_covers_special_characters(self):
        assert escape_html("<a href='x'>\"&\"</a>") == (
            "&lt;a href=&#x27;x&#x27;&gt;&quot;&amp;&quot;&lt;&#x2F;a&gt;"
        )

    def test_escape_backslash_and_backtick(self):
        assert escape_html("a\\b`c") == "a&#x5C;b&#96;c"

    def test_sanitize_trims_before_escaping(self):
        assert sanitize_text("  <x>  ") == "&lt;x&gt;"

    def test_plain_text_unchanged(self):
        assert sanitize_text("Hello world") == "Hello world"

    def test_create_model_sanitizes_both_fields(self):
        note = NoteCreate(title=" a&b ", content="\n<c>\t")
        assert note.title == "a&amp;b"
        assert note.content == "&lt;c&gt;"

    def test_update_model_leaves_omitted_fields_none(self):
        note = NoteUpdate(title=" t ")
        assert note.title == "t"
        assert note.content is None

    def test_create_rejects_non_strings(self):
        with pytest.raises(PydanticValidationError):
            NoteCreate(title=1, content="x")


class TestViolationTranslation:

    def test_missing_body_field(self):
        violation = to_violation({"type": "missing", "loc": ("body", "title"), "msg": "Field required"})
        assert violation == {"field": "title", "message": "Title is required", "location": "body"}

    def test_path_id_not_integer(self):
        violation = to_violation({
            "type": "int_parsing",
            "loc": ("path", "note_id"),
            "msg": "Input should be a valid integer",
        })
        assert violation == {"field": "id", "message": "ID must be an integer", "location": "path"}

    def test_empty_keyword(self):
        violation = to_violation({
            "type": "string_too_short",
            "loc": ("query", "keyword"),
            "msg": "String should have at least 1 character",
        })
        assert violation["message"] == "Keyword is required"

    def test_whole_body_missing(self):
        violation = to_violation({"type": "missing", "loc": ("body",), "msg": "Field required"})
        assert violation == {"field": "body", "message": "Request body is required", "location": "body"}

    def test_unknown_type_falls_back_to_pydantic_message(self):
        violation = to_violation({"type": "weird", "loc": ("body", "extra"), "msg": "Odd input"})
        assert violation == {"field": "extra", "message": "Odd input", "location": "body"}

    def test_error_collects_every_violation(self):
        exc = validation_error_from([
            {"type": "missing", "loc": ("body", "title"), "msg": ""},
            {"type": "string_type", "loc": ("body", "content"), "msg": ""},
        ])
        assert [e["field"] for e in exc.errors] == ["title", "content"]
        assert exc.context["errors"] == exc.errors
