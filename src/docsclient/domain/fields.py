"""Field values: one immutable value class per :class:`FieldType`.

Each class wraps a front-matter key and a raw value of the type's runtime
shape. Instances are built with ``empty(key)`` (the type default) or
``from_record(key, record)`` (read from a raw ``{"type", "value"}``
mapping) and are never changed afterwards.

:class:`FieldValueFactory` is the single dispatch point over the tag. To add
a field type: add the :class:`FieldType` member, one value class below, and
one ``case`` in each of the factory's two dispatch tables.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Self

from docsclient.domain.errors import InvalidFieldType, InvalidShape, UnknownFieldType
from docsclient.domain.types import FieldType


@dataclass(frozen=True)
class _FieldValue:
    """Shared behaviour for every field value class."""

    field_type: ClassVar[FieldType]

    key: str
    value: Any

    def __post_init__(self) -> None:
        if isinstance(self.value, tuple):
            object.__setattr__(self, "value", list(self.value))
        elif isinstance(self.value, list):
            object.__setattr__(self, "value", list(self.value))
        if not self.field_type.validate_value(self.value):
            msg = (
                f'Field "{self.key}" expects {self.field_type.value}, '
                f"got {type(self.value).__name__}: {self.value!r}"
            )
            raise InvalidShape(msg, key=self.key)

    @property
    def type(self) -> str:
        return self.field_type.value

    @classmethod
    def default_value(cls) -> Any:
        return cls.field_type.default_value()

    @classmethod
    def empty(cls, key: str) -> Self:
        return cls(key, cls.default_value())

    @classmethod
    def of(cls, key: str, value: Any) -> Self:
        """Build from a bare value; ``None`` becomes the type default."""
        if value is None:
            return cls.empty(key)
        return cls(key, value)

    @classmethod
    def from_record(cls, key: str, record: Mapping[str, Any]) -> Self:
        """Extract ``record["value"]`` and build an instance from it."""
        declared = record.get("type")
        if declared is not None and FieldType.from_tag(declared) is not cls.field_type:
            msg = f'Field "{key}" record declares {declared!r}, expected {cls.field_type.value!r}'
            raise InvalidShape(msg, key=key)
        return cls.of(key, record.get("value"))

    def with_value(self, value: Any) -> Self:
        return type(self).of(self.key, value)

    def to_dict(self) -> dict[str, Any]:
        value = list(self.value) if isinstance(self.value, list) else self.value
        return {"type": self.type, "value": value}


@dataclass(frozen=True)
class TextFieldValue(_FieldValue):
    field_type: ClassVar[FieldType] = FieldType.TEXT
    value: str


@dataclass(frozen=True)
class NumberFieldValue(_FieldValue):
    field_type: ClassVar[FieldType] = FieldType.NUMBER
    value: int | float


@dataclass(frozen=True)
class BooleanFieldValue(_FieldValue):
    field_type: ClassVar[FieldType] = FieldType.BOOLEAN
    value: bool


@dataclass(frozen=True)
class SelectTextFieldValue(_FieldValue):
    field_type: ClassVar[FieldType] = FieldType.SELECT_TEXT
    value: str


@dataclass(frozen=True)
class SelectNumberFieldValue(_FieldValue):
    field_type: ClassVar[FieldType] = FieldType.SELECT_NUMBER
    value: int | float


@dataclass(frozen=True)
class RelationKeyFieldValue(_FieldValue):
    """Single relation: the key of one document in the target directory."""

    field_type: ClassVar[FieldType] = FieldType.RELATION
    value: str


@dataclass(frozen=True)
class MultiTextFieldValue(_FieldValue):
    field_type: ClassVar[FieldType] = FieldType.MULTI_TEXT
    value: list[str]


@dataclass(frozen=True)
class MultiNumberFieldValue(_FieldValue):
    field_type: ClassVar[FieldType] = FieldType.MULTI_NUMBER
    value: list[int | float]


@dataclass(frozen=True)
class MultiSelectTextFieldValue(_FieldValue):
    field_type: ClassVar[FieldType] = FieldType.MULTI_SELECT_TEXT
    value: list[str]


@dataclass(frozen=True)
class MultiSelectNumberFieldValue(_FieldValue):
    field_type: ClassVar[FieldType] = FieldType.MULTI_SELECT_NUMBER
    value: list[int | float]


@dataclass(frozen=True)
class MultiRelationKeyFieldValue(_FieldValue):
    """Multiple relations: document keys in the target directory."""

    field_type: ClassVar[FieldType] = FieldType.MULTI_RELATION
    value: list[str]


FieldValue = (
    TextFieldValue
    | NumberFieldValue
    | BooleanFieldValue
    | SelectTextFieldValue
    | SelectNumberFieldValue
    | RelationKeyFieldValue
    | MultiTextFieldValue
    | MultiNumberFieldValue
    | MultiSelectTextFieldValue
    | MultiSelectNumberFieldValue
    | MultiRelationKeyFieldValue
)


class FieldValueFactory:
    """Construct the concrete field value for a field type tag."""

    def value_class(self, tag: object) -> type[FieldValue]:
        try:
            field_type = FieldType.from_tag(tag)
        except InvalidFieldType:
            raise UnknownFieldType(tag) from None
        match field_type:
            case FieldType.TEXT:
                return TextFieldValue
            case FieldType.NUMBER:
                return NumberFieldValue
            case FieldType.BOOLEAN:
                return BooleanFieldValue
            case FieldType.SELECT_TEXT:
                return SelectTextFieldValue
            case FieldType.SELECT_NUMBER:
                return SelectNumberFieldValue
            case FieldType.RELATION:
                return RelationKeyFieldValue
            case FieldType.MULTI_TEXT:
                return MultiTextFieldValue
            case FieldType.MULTI_NUMBER:
                return MultiNumberFieldValue
            case FieldType.MULTI_SELECT_TEXT:
                return MultiSelectTextFieldValue
            case FieldType.MULTI_SELECT_NUMBER:
                return MultiSelectNumberFieldValue
            case FieldType.MULTI_RELATION:
                return MultiRelationKeyFieldValue
        raise UnknownFieldType(tag)

    def default_value(self, tag: object) -> Any:
        try:
            field_type = FieldType.from_tag(tag)
        except InvalidFieldType:
            raise UnknownFieldType(tag) from None
        match field_type:
            case FieldType.TEXT | FieldType.SELECT_TEXT | FieldType.RELATION:
                return ""
            case FieldType.NUMBER | FieldType.SELECT_NUMBER:
                return 0
            case FieldType.BOOLEAN:
                return False
            case (
                FieldType.MULTI_TEXT
                | FieldType.MULTI_NUMBER
                | FieldType.MULTI_SELECT_TEXT
                | FieldType.MULTI_SELECT_NUMBER
                | FieldType.MULTI_RELATION
            ):
                return []
        raise UnknownFieldType(tag)

    def empty(self, key: str, tag: object) -> FieldValue:
        return self.value_class(tag).empty(key)

    def from_record(self, key: str, record: Mapping[str, Any]) -> FieldValue:
        """Dispatch on ``record["type"]``."""
        if "type" not in record:
            msg = f'Field "{key}" record has no "type" discriminator'
            raise InvalidShape(msg, key=key)
        return self.value_class(record["type"]).from_record(key, record)

    def from_value(self, key: str, tag: object, value: Any) -> FieldValue:
        return self.value_class(tag).of(key, value)
