"""Front matter value object.

:class:`MetaValue` pairs the parsed front-matter mapping of one document
with the schema that governs it. The schema is authoritative for which
fields exist; the data may carry extra keys the schema does not model,
and those are preserved untouched.

Construction runs two independent checks:

1. every ``required`` schema key must be present (:class:`MissingRequiredField`);
2. every present schema-declared value must match its field type
   (:class:`InvalidShape` naming the key).
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from docsclient.domain.errors import (
    InvalidShape,
    MissingRequiredField,
    SchemaFieldNotFound,
)
from docsclient.domain.fields import FieldValueFactory
from docsclient.domain.markdown import dump_yaml_mapping, load_yaml_mapping
from docsclient.domain.schema import FieldSchemaEntry, parse_schema

_factory = FieldValueFactory()


@dataclass(frozen=True)
class MetaValue:
    """Immutable front matter plus its schema."""

    data: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    schema: Mapping[str, FieldSchemaEntry] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        schema = parse_schema(self.schema)
        data = {str(key): _copy(value) for key, value in dict(self.data).items()}
        _check_required(data, schema)
        _check_types(data, schema)
        object.__setattr__(self, "data", MappingProxyType(data))
        object.__setattr__(self, "schema", MappingProxyType(schema))

    # --- Construction ---

    @classmethod
    def empty(cls, schema: Mapping[str, Any] | None = None) -> MetaValue:
        """Every schema field set to its default value."""
        parsed = parse_schema(schema)
        return cls({key: entry.default_value() for key, entry in parsed.items()}, parsed)

    @classmethod
    def from_yaml_text(cls, text: str, schema: Mapping[str, Any] | None = None) -> MetaValue:
        """Parse a YAML front matter block and reconcile it with *schema*.

        Missing or invalid optional values fall back to the field default.
        A missing required value also takes the default; a present but
        invalid required value raises :class:`InvalidShape`. Keys the
        schema does not model are kept as-is.
        """
        parsed = parse_schema(schema)
        record = load_yaml_mapping(text)
        for key, entry in parsed.items():
            value = record.get(key)
            if value is None:
                record[key] = entry.default_value()
            elif not entry.accepts(value):
                if entry.required:
                    msg = f'Field "{key}" expects {entry.type.value}, got {value!r}'
                    raise InvalidShape(msg, key=key)
                record[key] = entry.default_value()
        return cls(record, parsed)

    # --- Lookup ---

    @property
    def value(self) -> dict[str, Any]:
        """A fresh copy of the data mapping."""
        return self.to_dict()

    @property
    def keys(self) -> list[str]:
        return list(self.data)

    def field(self, key: str) -> Any:
        """Raw stored value for *key*, ``None`` when absent."""
        return _copy(self.data.get(key))

    def schema_field(self, key: str) -> FieldSchemaEntry:
        try:
            return self.schema[key]
        except KeyError:
            raise SchemaFieldNotFound(key) from None

    def has_key(self, key: str) -> bool:
        """Presence in the data; the schema is not consulted."""
        return key in self.data

    # --- Copy-on-write ---

    def with_property(self, key: str, value: Any) -> MetaValue:
        """New instance with *key* set; *key* must be declared in the schema."""
        entry = self.schema_field(key)
        checked = _factory.from_value(key, entry.type, value)
        if not entry.accepts(checked.value):
            msg = f'Field "{key}" value {value!r} is not one of {list(entry.options)!r}'
            raise InvalidShape(msg, key=key)
        return MetaValue({**self.data, key: checked.value}, self.schema)

    # --- Typed accessors ---

    def text(self, key: str) -> str | None:
        return self._typed(key, str)

    def number(self, key: str) -> int | float | None:
        value = self.data.get(key)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int | float):
            msg = f'Field "{key}" is not a number: {value!r}'
            raise InvalidShape(msg, key=key)
        return value

    def boolean(self, key: str) -> bool | None:
        return self._typed(key, bool)

    def relation(self, key: str) -> str | None:
        return self._typed(key, str)

    def multi_text(self, key: str) -> list[str]:
        return self._typed_list(key, str)

    def multi_number(self, key: str) -> list[int | float]:
        values = self._typed_list(key, int | float)
        if any(isinstance(item, bool) for item in values):
            msg = f'Field "{key}" is not a list of numbers'
            raise InvalidShape(msg, key=key)
        return values

    def multi_relation(self, key: str) -> list[str]:
        return self._typed_list(key, str)

    def _typed(self, key: str, kind: Any) -> Any:
        value = self.data.get(key)
        if value is None:
            return None
        if not isinstance(value, kind):
            msg = f'Field "{key}" has unexpected type {type(value).__name__}'
            raise InvalidShape(msg, key=key)
        return value

    def _typed_list(self, key: str, kind: Any) -> list[Any]:
        value = self.data.get(key)
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(item, kind) for item in value):
            msg = f'Field "{key}" has unexpected type {type(value).__name__}'
            raise InvalidShape(msg, key=key)
        return list(value)

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        return {key: _copy(value) for key, value in self.data.items()}

    def to_yaml(self) -> str:
        """Block-style YAML of the data; ``""`` when empty."""
        return dump_yaml_mapping(self.to_dict())


def _copy(value: Any) -> Any:
    if isinstance(value, list | tuple):
        return [_copy(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _copy(item) for key, item in value.items()}
    return value


def _check_required(data: Mapping[str, Any], schema: Mapping[str, FieldSchemaEntry]) -> None:
    for key, entry in schema.items():
        if entry.required and key not in data:
            raise MissingRequiredField(key)


def _check_types(data: Mapping[str, Any], schema: Mapping[str, FieldSchemaEntry]) -> None:
    for key, entry in schema.items():
        if key not in data:
            continue
        value = data[key]
        if value is None and not entry.required:
            continue
        if not entry.type.validate_value(value):
            msg = (
                f'Field "{key}" expects {entry.type.value}, '
                f"got {type(value).__name__}: {value!r}"
            )
            raise InvalidShape(msg, key=key)
