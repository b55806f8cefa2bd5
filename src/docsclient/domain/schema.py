"""Field schema declarations.

A schema maps a front-matter property name to a :class:`FieldSchemaEntry`.
The same mapping is consumed by :class:`~docsclient.domain.meta.MetaValue`,
the field value factory, and relation resolution. It is authored per
directory (inside ``.meta.json``) or passed in per document.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from docsclient.domain.errors import InvalidShape
from docsclient.domain.relations import RelationFieldValue
from docsclient.domain.types import FieldType


class FieldSchemaEntry(BaseModel):
    """Declaration of one front-matter field."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: FieldType
    required: bool = False
    title: str | None = None
    description: str | None = None
    # Target directory; only meaningful for relation types.
    path: str | None = None
    default: Any = None
    options: tuple[str | int | float, ...] = Field(default_factory=tuple)

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value: object) -> FieldType:
        return FieldType.from_tag(value)

    @property
    def field_type(self) -> FieldType:
        return self.type

    def default_value(self) -> Any:
        """Declared default when valid for the type, else the type default."""
        if self.default is not None and self.type.validate_value(self.default):
            return self.default
        return self.type.default_value()

    def accepts(self, value: object) -> bool:
        """Type check plus the ``options`` constraint for select fields."""
        if not self.type.validate_value(value):
            return False
        if not self.options or "select-" not in self.type.value:
            return True
        items = value if isinstance(value, list) else [value]
        return all(item in self.options for item in items)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True, exclude_defaults=False)


Schema = Mapping[str, FieldSchemaEntry]


def parse_schema(raw: Mapping[str, Any] | None) -> dict[str, FieldSchemaEntry]:
    """Validate a raw ``{name: {type, required, ...}}`` mapping.

    Entries that are already :class:`FieldSchemaEntry` instances pass
    through unchanged.

    Raises:
        InvalidShape: If an entry is malformed or names an unknown type.
    """
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        msg = f"Schema must be a mapping, got {type(raw).__name__}"
        raise InvalidShape(msg)

    schema: dict[str, FieldSchemaEntry] = {}
    for key, entry in raw.items():
        if isinstance(entry, FieldSchemaEntry):
            schema[str(key)] = entry
            continue
        if not isinstance(entry, Mapping):
            msg = f'Schema entry "{key}" must be a mapping'
            raise InvalidShape(msg, key=str(key))
        try:
            schema[str(key)] = FieldSchemaEntry.model_validate(dict(entry))
        except ValidationError as exc:
            msg = f'Invalid schema entry "{key}": {exc.errors()[0]["msg"]}'
            raise InvalidShape(msg, key=str(key)) from exc
    return schema


def relation_fields(schema: Schema) -> list[RelationFieldValue]:
    """Relation descriptors for every relation-typed entry in *schema*."""
    return [
        RelationFieldValue(
            field_name=key,
            file_path=entry.path or "",
            is_array=entry.type.is_array,
        )
        for key, entry in schema.items()
        if entry.type.is_relation
    ]
