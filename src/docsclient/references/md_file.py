"""Markdown file reference."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from docsclient.domain.content import ContentValue
from docsclient.domain.errors import (
    FileSystemError,
    InvalidMetaFile,
    InvalidShape,
    NotFound,
    WriteFailure,
)
from docsclient.domain.meta import MetaValue
from docsclient.domain.relations import RelationFieldValue
from docsclient.domain.schema import FieldSchemaEntry, parse_schema
from docsclient.domain.types import FieldType
from docsclient.entities.md import MdFileEntity
from docsclient.entities.path import FilePathValue
from docsclient.infrastructure.filesystem.base import FileStat
from docsclient.references._base import ReferenceContext, ensure_md

if TYPE_CHECKING:
    from docsclient.references.directory import DirectoryReference

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Write your content here."


class MdFileReference:
    """Lazy handle on a markdown file.

    The front-matter schema is either given explicitly or read from the
    ``.meta.json`` of the file's directory at read time. A file that has
    been archived (moved into the archive subdirectory) is still found by
    :meth:`read` through its original path.
    """

    def __init__(
        self,
        path: str,
        context: ReferenceContext,
        schema: Mapping[str, Any] | None = None,
    ) -> None:
        self.context = context
        self.path = context.clean(path)
        self._schema = parse_schema(schema) if schema is not None else None

    def __repr__(self) -> str:
        return f"MdFileReference({self.path!r})"

    # --- Naming ---

    @property
    def name(self) -> str:
        return self.context.path_system.basename(self.path, ".md")

    @property
    def name_with_extension(self) -> str:
        return f"{self.name}.md"

    @property
    def full_path(self) -> str:
        return self.context.full_path(self.path)

    @property
    def directory_path(self) -> str:
        return self.context.clean(self.context.path_system.dirname(self.path))

    @property
    def is_archived(self) -> bool:
        paths = self.context.path_system
        return paths.basename(self.directory_path) == self.context.config.archive_directory_name

    @property
    def archived_path(self) -> str:
        return self.context.join(
            self.directory_path,
            self.context.config.archive_directory_name,
            self.name_with_extension,
        )

    def _path_value(self, path: str) -> FilePathValue:
        return FilePathValue.from_path(
            path,
            self.context.path_system,
            self.context.base_path or None,
            archive_directory_name=self.context.config.archive_directory_name,
        )

    # --- Navigation ---

    def directory(self) -> DirectoryReference:
        """The directory owning this file; the archive folder maps to its parent."""
        from docsclient.references.directory import DirectoryReference

        path = self.directory_path
        if self.is_archived:
            path = self.context.clean(self.context.path_system.dirname(path))
        return DirectoryReference(path, self.context, self._schema)

    async def read_schema(self) -> dict[str, FieldSchemaEntry] | InvalidMetaFile:
        if self._schema is not None:
            return dict(self._schema)
        return await self.directory().read_schema()

    # --- Reads ---

    async def exists(self) -> bool:
        fs = self.context.file_system
        if await fs.file_exists(self.path):
            return True
        return not self.is_archived and await fs.file_exists(self.archived_path)

    async def read(self) -> MdFileEntity | NotFound | InvalidMetaFile:
        """Parse the file, falling back to its archived copy."""
        schema = await self.read_schema()
        if isinstance(schema, InvalidMetaFile):
            return schema

        fs = self.context.file_system
        actual_path = self.path
        text = await fs.read_file(self.path)
        if isinstance(text, NotFound) and not self.is_archived:
            actual_path = self.archived_path
            text = await fs.read_file(actual_path)
        if isinstance(text, NotFound):
            return NotFound(path=self.path, message=f"File not found: {self.path} (nor in archive)")

        return MdFileEntity(
            path=self._path_value(actual_path),
            content=ContentValue.from_markdown(text, schema),
            is_archived=actual_path != self.path or self.is_archived,
        )

    async def read_text(self) -> str | NotFound | InvalidMetaFile:
        """Body of the document, front matter excluded."""
        entity = await self.read()
        if isinstance(entity, FileSystemError):
            return entity
        return entity.body

    async def read_front_matter(self) -> MetaValue | NotFound | InvalidMetaFile:
        entity = await self.read()
        if isinstance(entity, FileSystemError):
            return entity
        return entity.meta

    async def stat(self) -> FileStat | NotFound:
        return await self.context.file_system.stat(self.path)

    def empty(self, schema: Mapping[str, Any] | None = None) -> MdFileEntity:
        """An unsaved entity for this path with default front matter."""
        return MdFileEntity(
            path=self._path_value(self.path),
            content=ContentValue.empty("", schema if schema is not None else self._schema),
        )

    # --- Writes ---

    async def write(self, entity: MdFileEntity) -> FileSystemError | None:
        return await self.context.file_system.write_file(self.path, entity.to_text())

    async def write_text(self, text: str) -> FileSystemError | None:
        return await self.context.file_system.write_file(self.path, text)

    async def write_default(self) -> FileSystemError | None:
        """Write a ``# name`` stub with a placeholder description."""
        schema = await self.read_schema()
        if isinstance(schema, InvalidMetaFile):
            return schema
        content = ContentValue.empty(self.name, schema).with_description(DEFAULT_DESCRIPTION)
        return await self.context.file_system.write_file(self.path, content.to_text())

    async def update_front_matter(self, key: str, value: Any) -> MdFileReference | FileSystemError:
        """Set one front-matter property and write the file back in place."""
        entity = await self.read()
        if isinstance(entity, FileSystemError):
            return entity
        updated = entity.with_content(lambda content: content.with_meta_property(key, value))
        error = await self.context.file_system.write_file(updated.path.path, updated.to_text())
        if error is not None:
            return error
        return self

    async def delete(self) -> FileSystemError | None:
        return await self.context.file_system.delete_file(self.path)

    async def copy_to(self, destination: str) -> FileSystemError | None:
        return await self.context.file_system.copy_file(self.path, self.context.clean(destination))

    async def move_to(self, destination: str) -> FileSystemError | None:
        return await self.context.file_system.move_file(self.path, self.context.clean(destination))

    async def archive(self) -> MdFileReference | FileSystemError:
        """Move into the archive subdirectory; returns the archived reference."""
        if self.is_archived:
            return WriteFailure.at(self.path, "already archived")
        target = self.archived_path
        error = await self.move_to(target)
        if error is not None:
            return error
        logger.debug("Archived %s -> %s", self.path, target)
        return MdFileReference(target, self.context, self._schema)

    async def restore(self) -> MdFileReference | FileSystemError:
        """Move out of the archive subdirectory; returns the restored reference."""
        if not self.is_archived:
            return WriteFailure.at(self.path, "not in the archive directory")
        parent = self.context.path_system.dirname(self.directory_path)
        target = self.context.join(parent, self.name_with_extension)
        error = await self.move_to(target)
        if error is not None:
            return error
        logger.debug("Restored %s -> %s", self.path, target)
        return MdFileReference(target, self.context, self._schema)

    # --- Relations ---

    def relation_directory(self, key: str, entry: FieldSchemaEntry) -> str:
        """Tree-relative directory a relation field points into.

        A relative schema ``path`` is taken from this file's directory; an
        absolute one from the tree root.
        """
        field = RelationFieldValue(
            field_name=key,
            file_path=entry.path or "",
            is_array=entry.type.is_array,
        )
        return self.context.clean(field.full_path(self.directory().path or "."))

    async def relation(
        self,
        key: str,
        schema: Mapping[str, Any] | None = None,
    ) -> MdFileReference | None | NotFound | InvalidMetaFile:
        """Reference to the document named by relation field *key*.

        ``None`` when the field is empty. *schema* is the target's schema.

        Raises:
            SchemaFieldNotFound: If *key* is not in this file's schema.
            InvalidShape: If *key* is not a ``relation`` field.
        """
        entity = await self.read()
        if isinstance(entity, FileSystemError):
            return entity
        entry = entity.meta.schema_field(key)
        if entry.type is not FieldType.RELATION:
            msg = f'Field "{key}" is {entry.type.value}, not relation'
            raise InvalidShape(msg, key=key)
        slug = entity.meta.relation(key)
        if not slug:
            return None
        directory = self.relation_directory(key, entry)
        return MdFileReference(self.context.join(directory, ensure_md(slug)), self.context, schema)

    async def relations(
        self,
        key: str,
        schema: Mapping[str, Any] | None = None,
    ) -> list[MdFileReference] | NotFound | InvalidMetaFile:
        """References to every document named by multi-relation field *key*.

        Raises:
            SchemaFieldNotFound: If *key* is not in this file's schema.
            InvalidShape: If *key* is not a ``multi-relation`` field.
        """
        entity = await self.read()
        if isinstance(entity, FileSystemError):
            return entity
        entry = entity.meta.schema_field(key)
        if entry.type is not FieldType.MULTI_RELATION:
            msg = f'Field "{key}" is {entry.type.value}, not multi-relation'
            raise InvalidShape(msg, key=key)
        directory = self.relation_directory(key, entry)
        return [
            MdFileReference(self.context.join(directory, ensure_md(slug)), self.context, schema)
            for slug in entity.meta.multi_relation(key)
            if slug
        ]
