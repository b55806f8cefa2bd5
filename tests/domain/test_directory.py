"""Tests for DirectoryMetaValue."""

import pytest

from docsclient.domain.directory import DEFAULT_INDEX_ICON, DirectoryMetaValue
from docsclient.domain.errors import InvalidShape
from docsclient.domain.types import FieldType


class TestDirectoryMetaValue:
    def test_defaults(self) -> None:
        meta = DirectoryMetaValue.from_record({})
        assert meta.icon == DEFAULT_INDEX_ICON
        assert meta.schema == {}
        assert meta.to_dict() == {}

    def test_configured_default_icon(self) -> None:
        assert DirectoryMetaValue.from_record({}, default_icon="📁").icon == "📁"

    def test_from_json(self) -> None:
        meta = DirectoryMetaValue.from_json(
            '{"icon": "📝", "schema": {"author": {"type": "relation", "path": "../users"}}}'
        )
        assert meta.icon == "📝"
        assert meta.schema["author"].type is FieldType.RELATION
        assert meta.to_dict()["schema"]["author"]["path"] == "../users"

    def test_invalid_json(self) -> None:
        with pytest.raises(InvalidShape):
            DirectoryMetaValue.from_json("{not json")

    def test_icon_must_be_string(self) -> None:
        with pytest.raises(InvalidShape):
            DirectoryMetaValue.from_record({"icon": 3})

    def test_bad_schema(self) -> None:
        with pytest.raises(InvalidShape):
            DirectoryMetaValue.from_record({"schema": {"x": {"type": "date"}}})

    def test_not_an_object(self) -> None:
        with pytest.raises(InvalidShape):
            DirectoryMetaValue.from_json("[]")
