"""Directory reference."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from docsclient.domain.directory import DirectoryMetaValue
from docsclient.domain.errors import FileSystemError, InvalidMetaFile, InvalidShape, NotFound
from docsclient.domain.markdown import extract_title, parse_frontmatter
from docsclient.domain.schema import FieldSchemaEntry, parse_schema
from docsclient.domain.tree import TreeDirectoryNode, TreeFileNode
from docsclient.entities.md import MdFileEntity
from docsclient.entities.unknown import UnknownFileEntity
from docsclient.infrastructure.filesystem.base import DirectoryEntry
from docsclient.references._base import ReferenceContext, ensure_md
from docsclient.references.md_file import MdFileReference
from docsclient.references.unknown_file import UnknownFileReference

logger = logging.getLogger(__name__)

FileReference = MdFileReference | UnknownFileReference


class DirectoryReference:
    """Lazy handle on a directory of documents.

    Listings skip the index file, the directory meta file, the archive
    subdirectory, and any directory named in ``config.directory_excludes``.
    Archived documents are listed after the live ones.
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
        return f"DirectoryReference({self.path!r})"

    @property
    def name(self) -> str:
        return self.context.path_system.basename(self.path)

    @property
    def full_path(self) -> str:
        return self.context.full_path(self.path)

    @property
    def archive_path(self) -> str:
        return self.context.join(self.path, self.context.config.archive_directory_name)

    async def exists(self) -> bool:
        return await self.context.file_system.directory_exists(self.path)

    # --- Meta / schema ---

    async def read_meta(self) -> DirectoryMetaValue | NotFound | InvalidMetaFile:
        config = self.context.config
        record = await self.context.file_system.read_directory_meta(self.path, config.meta_file_name)
        if isinstance(record, FileSystemError):
            return record
        try:
            return DirectoryMetaValue.from_record(record, config.default_index_icon)
        except InvalidShape as exc:
            meta_path = self.context.join(self.path, config.meta_file_name)
            return InvalidMetaFile.at(meta_path, exc)

    async def read_schema(self) -> dict[str, FieldSchemaEntry] | InvalidMetaFile:
        """Explicit schema if given, else the meta file's, else ``{}``."""
        if self._schema is not None:
            return dict(self._schema)
        meta = await self.read_meta()
        if isinstance(meta, InvalidMetaFile):
            logger.debug("Ignoring schema of %s: %s", self.path, meta)
            return meta
        if isinstance(meta, NotFound):
            return {}
        return meta.schema

    # --- Listings ---

    def _is_listed_file(self, name: str) -> bool:
        config = self.context.config
        return "." in name and name not in (config.index_file_name, config.meta_file_name)

    async def file_names(self) -> list[str] | NotFound:
        entries = await self.context.file_system.read_directory(self.path)
        if isinstance(entries, NotFound):
            return entries
        return [e.name for e in entries if not e.is_directory and self._is_listed_file(e.name)]

    async def archived_file_names(self) -> list[str]:
        entries = await self.context.file_system.read_directory(self.archive_path)
        if isinstance(entries, NotFound):
            return []
        return [e.name for e in entries if not e.is_directory and self._is_listed_file(e.name)]

    async def directory_names(self) -> list[str]:
        entries = await self.context.file_system.read_directory(self.path)
        if isinstance(entries, NotFound):
            return []
        config = self.context.config
        return [
            e.name
            for e in entries
            if e.is_directory
            and e.name != config.archive_directory_name
            and e.name not in config.directory_excludes
        ]

    async def files(self) -> list[FileReference]:
        names = await self.file_names()
        if isinstance(names, NotFound):
            return []
        refs = [self.file(name) for name in names]
        for name in await self.archived_file_names():
            refs.append(self._file_at(self.context.join(self.archive_path, name)))
        return refs

    async def md_files(self) -> list[MdFileReference]:
        return [ref for ref in await self.files() if isinstance(ref, MdFileReference)]

    async def read_md_files(self) -> list[MdFileEntity]:
        """Entities of every readable markdown file.

        Missing files and files whose front matter does not parse or does not
        fit the schema are skipped.
        """
        entities: list[MdFileEntity] = []
        for ref in await self.md_files():
            try:
                entity = await ref.read()
            except InvalidShape as exc:
                logger.debug("Skipping %s: %s", ref.path, exc)
                continue
            if isinstance(entity, FileSystemError):
                logger.debug("Skipping %s: %s", ref.path, entity)
                continue
            entities.append(entity)
        return entities

    async def directories(self) -> list[DirectoryReference]:
        return [self.directory(name) for name in await self.directory_names()]

    # --- Children ---

    def directory(self, name: str, schema: Mapping[str, Any] | None = None) -> DirectoryReference:
        """Subdirectory reference; inherits this directory's explicit schema unless given one."""
        return DirectoryReference(
            self.context.join(self.path, name),
            self.context,
            schema if schema is not None else self._schema,
        )

    def file(self, file_name: str) -> FileReference:
        return self._file_at(self.context.join(self.path, file_name))

    def md_file(self, file_name: str) -> MdFileReference:
        return MdFileReference(
            self.context.join(self.path, ensure_md(file_name)),
            self.context,
            self._schema,
        )

    def _file_at(self, path: str) -> FileReference:
        if path.endswith(".md"):
            return MdFileReference(path, self.context, self._schema)
        return UnknownFileReference(path, self.context)

    # --- Writes ---

    async def write_file(self, entity: MdFileEntity | UnknownFileEntity) -> FileSystemError | None:
        """Write *entity* into this directory under its file name."""
        path = self.context.join(self.path, entity.path.name_with_extension)
        return await self.context.file_system.write_file(path, entity.to_text())

    async def create_md_file(self, file_name: str | None = None) -> MdFileReference | FileSystemError:
        """Create a stub document; a unique name is generated when none is given."""
        name = ensure_md(file_name or f"document-{uuid.uuid4().hex[:8]}")
        ref = self.md_file(name)
        error = await ref.write_default()
        if error is not None:
            return error
        return ref

    # --- Tree ---

    async def build_file_tree(self) -> list[TreeFileNode | TreeDirectoryNode] | NotFound:
        """Nested nodes for every file and subdirectory below this one.

        The archive subdirectory, the meta file, and ``config.directory_excludes``
        are left out; the index file is listed like any other file. A
        markdown file is titled by its first heading, a directory by the
        heading and ``icon`` of its index file, falling back to the name and
        ``config.default_index_icon``.
        """
        return await self._build_tree(self.path, include_files=True)

    async def build_directory_tree(self) -> list[TreeDirectoryNode] | NotFound:
        """:meth:`build_file_tree` restricted to directories."""
        nodes = await self._build_tree(self.path, include_files=False)
        if isinstance(nodes, NotFound):
            return nodes
        return [node for node in nodes if isinstance(node, TreeDirectoryNode)]

    async def _build_tree(
        self, path: str, *, include_files: bool
    ) -> list[TreeFileNode | TreeDirectoryNode] | NotFound:
        entries = await self.context.file_system.read_directory(path)
        if isinstance(entries, NotFound):
            return entries
        config = self.context.config
        skipped = {config.archive_directory_name, config.meta_file_name, *config.directory_excludes}

        nodes: list[TreeFileNode | TreeDirectoryNode] = []
        for entry in entries:
            if entry.name in skipped:
                continue
            if entry.is_directory:
                nodes.append(await self._directory_node(entry, include_files=include_files))
            elif include_files:
                nodes.append(await self._file_node(entry))
        return nodes

    async def _file_node(self, entry: DirectoryEntry) -> TreeFileNode:
        title = entry.name
        if entry.name.endswith(".md"):
            text = await self.context.file_system.read_file(entry.path)
            if not isinstance(text, NotFound):
                title = extract_title(text) or entry.name
        return TreeFileNode(name=entry.name, path=entry.path, title=title)

    async def _directory_node(self, entry: DirectoryEntry, *, include_files: bool) -> TreeDirectoryNode:
        config = self.context.config
        title = entry.name
        icon = config.default_index_icon
        index_path = self.context.join(entry.path, config.index_file_name)
        text = await self.context.file_system.read_file(index_path)
        if not isinstance(text, NotFound):
            title = extract_title(text) or entry.name
            try:
                front_matter, _ = parse_frontmatter(text)
            except InvalidShape as exc:
                logger.debug("Ignoring front matter of %s: %s", index_path, exc)
            else:
                raw_icon = front_matter.get("icon")
                if isinstance(raw_icon, str) and raw_icon:
                    icon = raw_icon

        children = await self._build_tree(entry.path, include_files=include_files)
        if isinstance(children, NotFound):
            children = []
        return TreeDirectoryNode(
            name=entry.name,
            path=entry.path,
            icon=icon,
            title=title,
            children=tuple(children),
        )
