"""Field type enumeration.

The eleven field types a schema may declare. ``multi-*`` tags carry array
cardinality, ``select-*`` tags a constrained value set, and ``relation`` /
``multi-relation`` a pointer into another directory of documents.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from docsclient.domain.errors import InvalidFieldType


class FieldType(StrEnum):
    """Closed set of front-matter field types."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT_TEXT = "select-text"
    SELECT_NUMBER = "select-number"
    RELATION = "relation"
    MULTI_TEXT = "multi-text"
    MULTI_NUMBER = "multi-number"
    MULTI_SELECT_TEXT = "multi-select-text"
    MULTI_SELECT_NUMBER = "multi-select-number"
    MULTI_RELATION = "multi-relation"

    @classmethod
    def from_tag(cls, tag: object) -> FieldType:
        """Parse a raw tag, raising :class:`InvalidFieldType` when unknown."""
        if isinstance(tag, FieldType):
            return tag
        if not isinstance(tag, str):
            raise InvalidFieldType(tag)
        try:
            return cls(tag)
        except ValueError:
            raise InvalidFieldType(tag) from None

    @property
    def type(self) -> str:
        return self.value

    @property
    def is_array(self) -> bool:
        return self.value.startswith("multi-")

    @property
    def is_single(self) -> bool:
        return not self.is_array

    @property
    def is_select(self) -> bool:
        return self in (FieldType.SELECT_TEXT, FieldType.SELECT_NUMBER)

    @property
    def is_relation(self) -> bool:
        return self in (FieldType.RELATION, FieldType.MULTI_RELATION)

    @property
    def is_text(self) -> bool:
        return self is FieldType.TEXT

    @property
    def is_number(self) -> bool:
        return self is FieldType.NUMBER

    @property
    def is_boolean(self) -> bool:
        return self is FieldType.BOOLEAN

    @property
    def base_type(self) -> str:
        """Scalar kind with ``multi-`` and ``select-`` prefixes removed."""
        base = self.value.removeprefix("multi-")
        return base.removeprefix("select-")

    def default_value(self) -> Any:
        if self.is_array:
            return []
        match self.base_type:
            case "number":
                return 0
            case "boolean":
                return False
            case _:
                return ""

    def validate_value(self, value: object) -> bool:
        """Exact runtime type check; no coercion is attempted."""
        if self.is_array:
            if not isinstance(value, list):
                return False
            return all(_matches_scalar(self.base_type, item) for item in value)
        return _matches_scalar(self.base_type, value)


def _matches_scalar(base_type: str, value: object) -> bool:
    match base_type:
        case "text" | "relation":
            return isinstance(value, str)
        case "number":
            # bool is an int subclass; it is not a number here.
            return isinstance(value, int | float) and not isinstance(value, bool)
        case "boolean":
            return isinstance(value, bool)
    return False
