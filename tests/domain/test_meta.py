"""Tests for MetaValue: required/type checks, lookup, and copy-on-write."""

import pytest

from docsclient.domain.errors import InvalidShape, MissingRequiredField, SchemaFieldNotFound
from docsclient.domain.meta import MetaValue

SCHEMA = {
    "title": {"type": "text", "required": True},
    "count": {"type": "number", "required": False},
    "tags": {"type": "multi-text", "required": False},
    "status": {"type": "select-text", "required": False, "options": ["draft", "done"]},
    "author": {"type": "relation", "required": False, "path": "../users"},
}


class TestConstruction:
    def test_valid(self) -> None:
        meta = MetaValue({"title": "Hello", "count": 3}, SCHEMA)
        assert meta.field("title") == "Hello"
        assert meta.field("count") == 3

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredField) as exc_info:
            MetaValue({"count": 1}, SCHEMA)
        assert str(exc_info.value) == 'Required field "title" is missing'
        assert exc_info.value.key == "title"

    def test_type_mismatch_names_key(self) -> None:
        with pytest.raises(InvalidShape) as exc_info:
            MetaValue({"title": "Hello", "count": "3"}, SCHEMA)
        assert exc_info.value.key == "count"

    def test_required_check_runs_before_type_check(self) -> None:
        with pytest.raises(MissingRequiredField):
            MetaValue({"count": "not a number"}, SCHEMA)

    def test_optional_none_allowed(self) -> None:
        meta = MetaValue({"title": "Hello", "count": None}, SCHEMA)
        assert meta.field("count") is None

    def test_extra_keys_preserved(self) -> None:
        meta = MetaValue({"title": "Hello", "icon": "📚"}, SCHEMA)
        assert meta.field("icon") == "📚"
        assert meta.keys == ["title", "icon"]

    def test_input_is_copied(self) -> None:
        data = {"title": "Hello", "tags": ["a"]}
        meta = MetaValue(data, SCHEMA)
        data["tags"].append("b")
        data["title"] = "Changed"
        assert meta.field("tags") == ["a"]
        assert meta.field("title") == "Hello"

    def test_empty_uses_defaults(self) -> None:
        meta = MetaValue.empty(SCHEMA)
        assert meta.to_dict() == {"title": "", "count": 0, "tags": [], "status": "", "author": ""}


class TestFromYamlText:
    def test_missing_optional_defaults(self) -> None:
        meta = MetaValue.from_yaml_text("title: Hello\n", SCHEMA)
        assert meta.field("count") == 0
        assert meta.field("tags") == []

    def test_invalid_optional_defaults(self) -> None:
        meta = MetaValue.from_yaml_text("title: Hello\ncount: many\nstatus: lost\n", SCHEMA)
        assert meta.field("count") == 0
        assert meta.field("status") == ""

    def test_invalid_required_raises(self) -> None:
        with pytest.raises(InvalidShape) as exc_info:
            MetaValue.from_yaml_text("title: 12\n", SCHEMA)
        assert exc_info.value.key == "title"

    def test_missing_required_takes_default(self) -> None:
        meta = MetaValue.from_yaml_text("count: 2\n", SCHEMA)
        assert meta.field("title") == ""

    def test_date_scalar_stays_text(self) -> None:
        meta = MetaValue.from_yaml_text("title: 2024-01-01\n", SCHEMA)
        assert meta.field("title") == "2024-01-01"
        assert meta.text("title") == "2024-01-01"

    def test_datetime_scalar_stays_text(self) -> None:
        meta = MetaValue.from_yaml_text("title: 2024-01-01T10:30:00Z\n", SCHEMA)
        assert meta.field("title") == "2024-01-01T10:30:00Z"


class TestLookup:
    def test_schema_field(self) -> None:
        meta = MetaValue({"title": "Hello"}, SCHEMA)
        assert meta.schema_field("author").path == "../users"

    def test_schema_field_not_found(self) -> None:
        meta = MetaValue({"title": "Hello", "icon": "x"}, SCHEMA)
        with pytest.raises(SchemaFieldNotFound) as exc_info:
            meta.schema_field("icon")
        assert str(exc_info.value) == 'Field "icon" does not exist in schema'

    def test_has_key_ignores_schema(self) -> None:
        meta = MetaValue({"title": "Hello", "icon": "x"}, SCHEMA)
        assert meta.has_key("icon")
        assert not meta.has_key("count")

    def test_field_absent(self) -> None:
        assert MetaValue({"title": "Hello"}, SCHEMA).field("count") is None

    def test_value_is_a_copy(self) -> None:
        meta = MetaValue({"title": "Hello", "tags": ["a"]}, SCHEMA)
        snapshot = meta.value
        snapshot["tags"].append("b")
        assert meta.field("tags") == ["a"]


class TestWithProperty:
    def test_returns_new_instance(self) -> None:
        meta = MetaValue({"title": "Hello"}, SCHEMA)
        updated = meta.with_property("count", 5)
        assert updated.field("count") == 5
        assert meta.field("count") is None
        assert updated is not meta

    def test_idempotent(self) -> None:
        meta = MetaValue({"title": "Hello"}, SCHEMA)
        once = meta.with_property("tags", ["a", "b"])
        twice = once.with_property("tags", ["a", "b"])
        assert once.to_dict() == twice.to_dict()

    def test_rejects_wrong_type(self) -> None:
        meta = MetaValue({"title": "Hello"}, SCHEMA)
        with pytest.raises(InvalidShape):
            meta.with_property("count", "five")

    def test_rejects_unknown_key(self) -> None:
        meta = MetaValue({"title": "Hello"}, SCHEMA)
        with pytest.raises(SchemaFieldNotFound):
            meta.with_property("icon", "x")

    def test_rejects_value_outside_options(self) -> None:
        meta = MetaValue({"title": "Hello"}, SCHEMA)
        with pytest.raises(InvalidShape):
            meta.with_property("status", "lost")
        assert meta.with_property("status", "done").field("status") == "done"


class TestTypedAccessors:
    def test_accessors(self) -> None:
        meta = MetaValue(
            {"title": "Hello", "count": 2, "tags": ["a"], "author": "alice"},
            SCHEMA,
        )
        assert meta.text("title") == "Hello"
        assert meta.number("count") == 2
        assert meta.multi_text("tags") == ["a"]
        assert meta.relation("author") == "alice"
        assert meta.boolean("missing") is None
        assert meta.multi_relation("missing") == []

    def test_wrong_type(self) -> None:
        meta = MetaValue({"title": "Hello", "flag": "yes"}, SCHEMA)
        with pytest.raises(InvalidShape):
            meta.boolean("flag")
        with pytest.raises(InvalidShape):
            meta.number("title")


class TestSerialization:
    def test_yaml_round_trip(self) -> None:
        meta = MetaValue({"title": "Hello", "tags": ["a", "b"], "count": 1}, SCHEMA)
        restored = MetaValue.from_yaml_text(meta.to_yaml(), SCHEMA)
        assert restored.field("title") == "Hello"
        assert restored.field("tags") == ["a", "b"]
        assert restored.field("count") == 1

    def test_date_text_round_trip(self) -> None:
        meta = MetaValue({"title": "2024-01-01"}, SCHEMA)
        restored = MetaValue.from_yaml_text(meta.to_yaml(), SCHEMA)
        assert restored.field("title") == "2024-01-01"

    def test_empty_yaml(self) -> None:
        assert MetaValue().to_yaml() == ""
