"""In-memory backend for tests and fixtures.

A :class:`MemoryStore` maps normalized relative paths to file records and
is shared by the reader and the writer, so writes are visible to reads
immediately. Directories exist implicitly as prefixes of stored files, or
explicitly after ``create_directory``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime

from docsclient.domain.errors import FileSystemError, NotFound, WriteFailure
from docsclient.infrastructure.filesystem.base import (
    DirectoryEntry,
    FileStat,
    FileSystem,
    FileSystemReader,
    FileSystemWriter,
    clean_path,
    parent_paths,
)
from docsclient.infrastructure.paths import PathSystem

logger = logging.getLogger(__name__)

DEFAULT_FILES: dict[str, str] = {
    "docs/index.md": "---\nicon: 📚\n---\n\n# Documentation\n\nWelcome to the documentation!",
    "docs/guide/index.md": "---\nicon: 📖\n---\n\n# Guide\n\nThis is a guide.",
    "docs/guide/getting-started.md": "# Getting Started\n\nLet's get started!",
    "docs/guide/advanced.md": "# Advanced\n\nAdvanced topics here.",
    "docs/api/index.md": "---\nicon: 🔧\n---\n\n# API\n\nAPI documentation.",
    "docs/api/reference.md": "# API Reference\n\nComplete API reference.",
}


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass
class MemoryFile:
    content: str
    created_at: datetime = field(default_factory=_now)
    modified_at: datetime = field(default_factory=_now)

    @property
    def size(self) -> int:
        return len(self.content.encode("utf-8"))


class MemoryStore:
    """Mutable path -> content mapping shared by reader and writer."""

    def __init__(
        self,
        files: Mapping[str, str] | None = None,
        path_system: PathSystem | None = None,
    ) -> None:
        self.path_system = path_system or PathSystem()
        self.files: dict[str, MemoryFile] = {}
        self.directories: set[str] = set()
        if files:
            self.seed(files)

    def key(self, path: str) -> str:
        return clean_path(path, self.path_system)

    def seed(self, files: Mapping[str, str]) -> None:
        for path, content in files.items():
            self.files[self.key(path)] = MemoryFile(content)

    def clear(self) -> None:
        self.files.clear()
        self.directories.clear()

    def is_file(self, path: str) -> bool:
        return self.key(path) in self.files

    def is_directory(self, path: str) -> bool:
        key = self.key(path)
        if not key or key in self.directories:
            return True
        prefix = key + self.path_system.separator
        return any(p.startswith(prefix) for p in self._all_paths())

    def file_ancestor(self, path: str) -> str | None:
        """Nearest-the-root ancestor of *path* stored as a file, if any."""
        for parent in parent_paths(path, self.path_system):
            if parent in self.files:
                return parent
        return None

    def _all_paths(self) -> Iterator[str]:
        yield from self.files
        yield from self.directories

    def children(self, path: str) -> list[DirectoryEntry]:
        key = self.key(path)
        sep = self.path_system.separator
        prefix = key + sep if key else ""
        found: dict[str, bool] = {}
        for candidate in self._all_paths():
            if not candidate.startswith(prefix) or candidate == key:
                continue
            rest = candidate[len(prefix) :]
            name, _, tail = rest.partition(sep)
            is_dir = bool(tail) or candidate in self.directories
            found[name] = found.get(name, False) or is_dir
        return [
            DirectoryEntry(name=name, path=self.path_system.join(key, name), is_directory=is_dir)
            for name, is_dir in sorted(found.items())
        ]


class MemoryFileSystemReader(FileSystemReader):
    def __init__(self, store: MemoryStore) -> None:
        super().__init__(store.path_system)
        self.store = store

    async def exists(self, path: str) -> bool:
        return self.store.is_file(path) or self.store.is_directory(path)

    async def is_file(self, path: str) -> bool:
        return self.store.is_file(path)

    async def is_directory(self, path: str) -> bool:
        return self.store.is_directory(path)

    async def read_file(self, path: str) -> str | NotFound:
        record = self.store.files.get(self.store.key(path))
        if record is None:
            return NotFound.at(path)
        return record.content

    async def read_directory(self, path: str = "") -> list[DirectoryEntry] | NotFound:
        if not self.store.is_directory(path):
            return NotFound.at(path, "Directory")
        return self.store.children(path)

    async def stat(self, path: str) -> FileStat | NotFound:
        key = self.store.key(path)
        record = self.store.files.get(key)
        if record is None:
            return NotFound.at(path)
        return FileStat(
            path=key,
            size=record.size,
            created_at=record.created_at,
            modified_at=record.modified_at,
        )


class MemoryFileSystemWriter(FileSystemWriter):
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    async def write_file(self, path: str, content: str) -> FileSystemError | None:
        key = self.store.key(path)
        if not key or self.store.is_directory(key):
            return WriteFailure.at(path, "is a directory")
        blocker = self.store.file_ancestor(key)
        if blocker is not None:
            return WriteFailure.at(path, f"{blocker} is a file")
        existing = self.store.files.get(key)
        if existing is None:
            self.store.files[key] = MemoryFile(content)
        else:
            existing.content = content
            existing.modified_at = _now()
        return None

    async def delete_file(self, path: str) -> FileSystemError | None:
        key = self.store.key(path)
        if self.store.files.pop(key, None) is None:
            logger.debug("Delete of missing file %s", key)
            return NotFound.at(path)
        return None

    async def create_directory(self, path: str) -> FileSystemError | None:
        key = self.store.key(path)
        if self.store.is_file(key):
            return WriteFailure.at(path, "a file exists at this path")
        blocker = self.store.file_ancestor(key)
        if blocker is not None:
            return WriteFailure.at(path, f"{blocker} is a file")
        if key:
            self.store.directories.add(key)
        return None

    async def create_empty_directory(self, path: str) -> FileSystemError | None:
        key = self.store.key(path)
        if self.store.is_file(key) or self.store.is_directory(key):
            return WriteFailure.at(path, "already exists")
        blocker = self.store.file_ancestor(key)
        if blocker is not None:
            return WriteFailure.at(path, f"{blocker} is a file")
        self.store.directories.add(key)
        return None

    async def copy_file(self, source: str, destination: str) -> FileSystemError | None:
        record = self.store.files.get(self.store.key(source))
        if record is None:
            return NotFound.at(source)
        return await self.write_file(destination, record.content)

    async def move_file(self, source: str, destination: str) -> FileSystemError | None:
        error = await self.copy_file(source, destination)
        if error is not None:
            return error
        if self.store.key(source) != self.store.key(destination):
            return await self.delete_file(source)
        return None


class MemoryFileSystem(FileSystem):
    """Memory reader and writer over one store, with inspection helpers.

    Args:
        files: Initial ``{path: content}`` contents.
        default_files: Also seed :data:`DEFAULT_FILES` (a small ``docs/`` tree).
    """

    def __init__(
        self,
        files: Mapping[str, str] | None = None,
        *,
        default_files: bool = False,
        path_system: PathSystem | None = None,
    ) -> None:
        store = MemoryStore(path_system=path_system)
        if default_files:
            store.seed(DEFAULT_FILES)
        if files:
            store.seed(files)
        super().__init__(MemoryFileSystemReader(store), MemoryFileSystemWriter(store))
        self.store = store

    def has_file(self, path: str) -> bool:
        return self.store.is_file(path)

    def file_content(self, path: str) -> str | None:
        record = self.store.files.get(self.store.key(path))
        return record.content if record else None

    def all_file_paths(self) -> list[str]:
        return sorted(self.store.files)

    def file_count(self) -> int:
        return len(self.store.files)

    def clear(self) -> None:
        self.store.clear()

    def seed(self, files: Mapping[str, str]) -> None:
        self.store.seed(files)
