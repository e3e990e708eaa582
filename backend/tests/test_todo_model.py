"""
Todo REST Backend — Todo Model Unit Tests
===========================================

What we test:
    ✅ CSV serialization of a todo
    ✅ CSV row parsing, including the accepted boolean spellings
    ✅ Type-strict JSON decoding (no coercion, zero-value defaults)
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from todo_api.models.todo import Todo, parse_bool


class TestSerialize:

    def test_serialize(self, sample_todo):
        assert sample_todo.serialize() == ["99", "Test1", "Beschrieb", "false"]

    def test_serialize_terminated_lowercase(self):
        todo = Todo(id="3", title="Done", description="", terminated=True)
        assert todo.serialize() == ["3", "Done", "", "true"]

    def test_serialized_row_parses_back(self, sample_todo):
        assert Todo.from_row(sample_todo.serialize()) == sample_todo


class TestFromRow:

    def test_from_row(self):
        todo = Todo.from_row(["7", "Buy milk", "2 litres", "true"])
        assert todo.id == "7"
        assert todo.title == "Buy milk"
        assert todo.description == "2 litres"
        assert todo.terminated is True

    def test_from_row_short_row_rejected(self):
        with pytest.raises(ValueError, match="Expected 4 columns"):
            Todo.from_row(["1", "only title"])

    @pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
    def test_parse_bool_true(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "f", "F", "FALSE", "false", "False", "yes", ""])
    def test_parse_bool_false_or_unknown(self, value):
        assert parse_bool(value) is False


class TestJsonDecoding:

    def test_missing_fields_take_zero_values(self):
        todo = Todo.model_validate_json(b'{"title": "Only a title"}')
        assert todo == Todo(id="", title="Only a title", description="", terminated=False)

    def test_null_fields_take_zero_values(self):
        todo = Todo.model_validate_json(
            b'{"id": null, "title": null, "description": "d", "terminated": null}'
        )
        assert todo == Todo(description="d")

    def test_null_document_rejected(self):
        with pytest.raises(PydanticValidationError):
            Todo.model_validate_json(b"null")

    def test_unknown_fields_ignored(self):
        todo = Todo.model_validate_json(b'{"title": "x", "priority": 5}')
        assert todo.title == "x"

    def test_string_bool_rejected(self):
        with pytest.raises(PydanticValidationError):
            Todo.model_validate_json(b'{"terminated": "true"}')

    def test_number_title_rejected(self):
        with pytest.raises(PydanticValidationError):
            Todo.model_validate_json(b'{"title": 5}')

    def test_non_object_rejected(self):
        with pytest.raises(PydanticValidationError):
            Todo.model_validate_json(b'[1, 2]')
