"""Relation values.

:class:`RelationFieldValue` describes one relation-typed schema field: which
front-matter key holds the pointer, which directory it points into, and
whether it holds one key or many. :class:`RelationFileValue` and
:class:`RelationValue` are the read side: the documents available as
targets of a relation, for building pickers and listings.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

from docsclient.domain.errors import InvalidShape


@dataclass(frozen=True)
class RelationFieldValue:
    """Descriptor of a relation field; compared structurally."""

    field_name: str
    file_path: str
    is_array: bool

    def __post_init__(self) -> None:
        if not isinstance(self.field_name, str):
            msg = f"field_name must be a string, got {type(self.field_name).__name__}"
            raise InvalidShape(msg, key="field_name")
        if not isinstance(self.file_path, str):
            msg = f"file_path must be a string, got {type(self.file_path).__name__}"
            raise InvalidShape(msg, key="file_path")
        if not isinstance(self.is_array, bool):
            msg = f"is_array must be a boolean, got {type(self.is_array).__name__}"
            raise InvalidShape(msg, key="is_array")

    @property
    def relation_path(self) -> str:
        return self.file_path

    @property
    def is_single(self) -> bool:
        return not self.is_array

    @property
    def is_multiple(self) -> bool:
        return self.is_array

    @property
    def target_directory_name(self) -> str:
        """Last ``/`` segment of ``file_path``; ``""`` when it ends in ``/``."""
        return self.file_path.split("/")[-1]

    def full_path(self, base_path: str) -> str:
        """``file_path`` when absolute, else ``base_path + "/" + file_path``.

        No normalization happens here.
        """
        if self.file_path.startswith("/"):
            return self.file_path
        return f"{base_path}/{self.file_path}"

    def equals(self, other: RelationFieldValue) -> bool:
        return self == other

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> RelationFieldValue:
        """Build from ``{"field_name", "file_path", "is_array"}``."""
        if not isinstance(record, Mapping):
            msg = f"Relation field must be a mapping, got {type(record).__name__}"
            raise InvalidShape(msg)
        for key in ("field_name", "file_path", "is_array"):
            if key not in record:
                msg = f'Relation field is missing "{key}"'
                raise InvalidShape(msg, key=key)
        return cls(
            field_name=record["field_name"],
            file_path=record["file_path"],
            is_array=record["is_array"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "field_name": self.field_name,
            "file_path": self.file_path,
            "is_array": self.is_array,
        }


class RelationFileValue(BaseModel):
    """One candidate target document of a relation."""

    model_config = {"frozen": True}

    name: str
    label: str | None = None
    value: str | None = None
    path: str | None = None

    @property
    def slug(self) -> str:
        return self.name

    @property
    def display_label(self) -> str:
        return self.label or self.name

    @classmethod
    def from_path(cls, file_path: str, title: str | None) -> RelationFileValue:
        """Slug from the file name (extension dropped), label from *title*."""
        name = _stem(file_path)
        return cls(name=name, label=title or name)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


class RelationValue(BaseModel):
    """Target directory of a relation plus its candidate documents."""

    model_config = {"frozen": True}

    path: str
    files: tuple[RelationFileValue, ...] = Field(default_factory=tuple)

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def is_empty(self) -> bool:
        return not self.files

    @classmethod
    def empty(cls, path: str) -> RelationValue:
        return cls(path=path)

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "files": [file.to_dict() for file in self.files]}


def _stem(file_path: str) -> str:
    name = file_path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    if dot > 0:
        return name[:dot]
    return name
