"""Reference to the target directory of a relation field."""

from __future__ import annotations

import logging

from docsclient.domain.errors import NotFound
from docsclient.domain.markdown import extract_body, extract_title
from docsclient.domain.relations import RelationValue, RelationFileValue
from docsclient.references._base import ReferenceContext

logger = logging.getLogger(__name__)


class RelationReference:
    """The documents a relation field may point at.

    Every markdown file directly inside the directory except the index file
    is a candidate; its slug is the file name and its label the document's
    first heading.
    """

    def __init__(self, path: str, context: ReferenceContext) -> None:
        self.context = context
        self.path = context.clean(path)

    def __repr__(self) -> str:
        return f"RelationReference({self.path!r})"

    async def read(self) -> RelationValue:
        files = await self.read_files()
        return RelationValue(path=self.path, files=tuple(files))

    async def read_files(self) -> list[RelationFileValue]:
        fs = self.context.file_system
        entries = await fs.read_directory(self.path)
        if isinstance(entries, NotFound):
            logger.debug("Relation directory %s does not exist", self.path)
            return []

        files: list[RelationFileValue] = []
        for entry in entries:
            if entry.is_directory or not entry.name.endswith(".md"):
                continue
            if entry.name == self.context.config.index_file_name:
                continue
            text = await fs.read_file(entry.path)
            title = None if isinstance(text, NotFound) else extract_title(extract_body(text))
            files.append(RelationFileValue.from_path(entry.path, title))
        return files

    async def read_slugs(self) -> list[str]:
        return [file.slug for file in await self.read_files()]

    async def exists(self, slug: str) -> bool:
        return slug in await self.read_slugs()

    async def count(self) -> int:
        return len(await self.read_files())

    async def is_empty(self) -> bool:
        return await self.count() == 0
