"""Directory meta value (``.meta.json``)."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from docsclient.domain.errors import InvalidShape
from docsclient.domain.schema import FieldSchemaEntry, parse_schema

DEFAULT_INDEX_ICON = "📃"


@dataclass(frozen=True)
class DirectoryMetaValue:
    """Parsed ``{icon?, schema?}`` of a directory meta file.

    *default_icon* is the configured fallback for a missing ``icon``.
    """

    raw_icon: str | None = None
    raw_schema: Mapping[str, FieldSchemaEntry] | None = None
    default_icon: str = field(default=DEFAULT_INDEX_ICON, compare=False)

    @property
    def icon(self) -> str:
        if self.raw_icon is None:
            return self.default_icon
        return self.raw_icon

    @property
    def schema(self) -> dict[str, FieldSchemaEntry]:
        return dict(self.raw_schema or {})

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        default_icon: str = DEFAULT_INDEX_ICON,
    ) -> DirectoryMetaValue:
        """Validate a decoded meta file.

        Raises:
            InvalidShape: If ``icon`` is not a string or ``schema`` is malformed.
        """
        if not isinstance(record, Mapping):
            msg = f"Directory meta must be an object, got {type(record).__name__}"
            raise InvalidShape(msg)
        icon = record.get("icon")
        if icon is not None and not isinstance(icon, str):
            msg = f"Directory meta icon must be a string, got {type(icon).__name__}"
            raise InvalidShape(msg, key="icon")
        raw_schema = record.get("schema")
        schema = parse_schema(raw_schema) if raw_schema is not None else None
        return cls(raw_icon=icon, raw_schema=schema, default_icon=default_icon)

    @classmethod
    def from_json(cls, text: str, default_icon: str = DEFAULT_INDEX_ICON) -> DirectoryMetaValue:
        try:
            record = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"Directory meta is not valid JSON: {exc}"
            raise InvalidShape(msg) from exc
        return cls.from_record(record, default_icon)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.raw_icon is not None:
            result["icon"] = self.raw_icon
        if self.raw_schema is not None:
            result["schema"] = {key: entry.to_dict() for key, entry in self.raw_schema.items()}
        return result
