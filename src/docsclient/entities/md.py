"""Markdown file entity."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from docsclient.domain.content import ContentValue
from docsclient.domain.meta import MetaValue
from docsclient.entities.path import FilePathValue


@dataclass(frozen=True)
class MdFileEntity:
    """A markdown file as read: where it lives and what it says."""

    path: FilePathValue
    content: ContentValue
    is_archived: bool = False

    @property
    def type(self) -> str:
        return "markdown"

    @property
    def title(self) -> str:
        return self.content.title

    @property
    def description(self) -> str:
        return self.content.description

    @property
    def body(self) -> str:
        return self.content.body

    @property
    def meta(self) -> MetaValue:
        return self.content.meta

    def with_content(
        self, content: ContentValue | Callable[[ContentValue], ContentValue]
    ) -> MdFileEntity:
        updated = content(self.content) if callable(content) else content
        return replace(self, content=updated)

    def with_path(self, path: FilePathValue) -> MdFileEntity:
        return replace(self, path=path)

    def to_text(self) -> str:
        return self.content.to_text()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "content": self.content.to_dict(),
            "path": self.path.to_dict(),
            "is_archived": self.is_archived,
        }
