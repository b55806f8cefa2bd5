"""Entity for files that are not markdown: kept as opaque text."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from docsclient.entities.path import FilePathValue


@dataclass(frozen=True)
class UnknownFileEntity:
    path: FilePathValue
    content: str
    is_archived: bool = False

    @property
    def type(self) -> str:
        return "unknown"

    @property
    def extension(self) -> str:
        return self.path.extension

    def with_content(self, content: str) -> UnknownFileEntity:
        return replace(self, content=content)

    def with_path(self, path: FilePathValue) -> UnknownFileEntity:
        return replace(self, path=path)

    def to_text(self) -> str:
        return self.content

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "content": self.content,
            "path": self.path.to_dict(),
            "extension": self.extension,
            "is_archived": self.is_archived,
        }
