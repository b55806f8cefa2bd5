"""Markdown document content.

:class:`ContentValue` is one markdown document split into its front matter
(:class:`~docsclient.domain.meta.MetaValue`) and its body. ``title`` and
``description`` are views over the body: the first ``# `` heading and the
first line after it. They are never cut out of ``body``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from docsclient.domain.markdown import (
    extract_body,
    extract_description,
    extract_front_matter,
    extract_title,
    render_frontmatter,
    update_description,
    update_title,
)
from docsclient.domain.meta import MetaValue

CONTENT_TYPE: Literal["markdown-content"] = "markdown-content"


@dataclass(frozen=True)
class ContentValue:
    """Immutable ``{body, title, description, meta}`` of a markdown file."""

    body: str
    title: str
    description: str
    meta: MetaValue

    @property
    def type(self) -> str:
        return CONTENT_TYPE

    @property
    def schema(self) -> Mapping[str, Any]:
        return self.meta.schema

    # --- Construction ---

    @classmethod
    def from_markdown(cls, text: str, schema: Mapping[str, Any] | None = None) -> ContentValue:
        """Split *text* into front matter and body.

        Schema fields missing from the front matter take their defaults.
        """
        yaml_text = extract_front_matter(text)
        if yaml_text is None:
            meta = MetaValue.empty(schema)
        else:
            meta = MetaValue.from_yaml_text(yaml_text, schema)
        return cls(
            body=extract_body(text),
            title=extract_title(text) or "",
            description=extract_description(text) or "",
            meta=meta,
        )

    @classmethod
    def empty(cls, title: str, schema: Mapping[str, Any] | None = None) -> ContentValue:
        """A document holding only ``# title`` and default front matter."""
        return cls(
            body=f"# {title}",
            title=title,
            description="",
            meta=MetaValue.empty(schema),
        )

    # --- Copy-on-write ---

    def with_title(self, title: str) -> ContentValue:
        return ContentValue(
            body=update_title(self.body, title),
            title=title,
            description=self.description,
            meta=self.meta,
        )

    def with_description(self, description: str, default_title: str | None = None) -> ContentValue:
        """Replace the description line.

        A body without a heading gets ``# default_title`` (or the current
        title) inserted above the description.
        """
        body = update_description(self.body, description, default_title or self.title)
        return ContentValue(
            body=body,
            title=extract_title(body) or self.title,
            description=description,
            meta=self.meta,
        )

    def with_body(self, body: str) -> ContentValue:
        """Replace the body; title and description are derived again."""
        return ContentValue(
            body=body,
            title=extract_title(body) or "",
            description=extract_description(body) or "",
            meta=self.meta,
        )

    def with_content(self, content: str) -> ContentValue:
        return self.with_body(content)

    def with_meta(self, meta: MetaValue | Callable[[MetaValue], MetaValue]) -> ContentValue:
        """Replace the front matter, or transform it with a callable."""
        updated = meta(self.meta) if callable(meta) else meta
        return ContentValue(
            body=self.body,
            title=self.title,
            description=self.description,
            meta=updated,
        )

    def with_meta_property(self, key: str, value: Any) -> ContentValue:
        return self.with_meta(self.meta.with_property(key, value))

    # --- Serialization ---

    def to_text(self) -> str:
        """Front matter block (omitted when empty) followed by the body."""
        return render_frontmatter(self.meta.to_dict(), self.body)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "body": self.body,
            "title": self.title,
            "description": self.description,
            "meta": self.meta.to_dict(),
        }
