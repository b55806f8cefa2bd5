"""Reference to a non-markdown file, read and written as plain text."""

from __future__ import annotations

from docsclient.domain.errors import FileSystemError, NotFound
from docsclient.entities.path import FilePathValue
from docsclient.entities.unknown import UnknownFileEntity
from docsclient.references._base import ReferenceContext


class UnknownFileReference:
    def __init__(self, path: str, context: ReferenceContext) -> None:
        self.context = context
        self.path = context.clean(path)

    def __repr__(self) -> str:
        return f"UnknownFileReference({self.path!r})"

    @property
    def name(self) -> str:
        return self.context.path_system.basename(self.path)

    @property
    def extension(self) -> str:
        return self.context.path_system.extname(self.path)

    @property
    def full_path(self) -> str:
        return self.context.full_path(self.path)

    async def exists(self) -> bool:
        return await self.context.file_system.file_exists(self.path)

    async def read(self) -> UnknownFileEntity | NotFound:
        text = await self.context.file_system.read_file(self.path)
        if isinstance(text, NotFound):
            return text
        path = FilePathValue.from_path(
            self.path,
            self.context.path_system,
            self.context.base_path or None,
            archive_directory_name=self.context.config.archive_directory_name,
        )
        return UnknownFileEntity(path=path, content=text, is_archived=path.is_archived)

    async def write(self, entity: UnknownFileEntity) -> FileSystemError | None:
        return await self.write_text(entity.content)

    async def write_text(self, text: str) -> FileSystemError | None:
        return await self.context.file_system.write_file(self.path, text)

    async def delete(self) -> FileSystemError | None:
        return await self.context.file_system.delete_file(self.path)
