"""File-system capability interfaces.

Storage is split into two narrow capability sets: :class:`FileSystemReader`
and :class:`FileSystemWriter`. A backend may supply only a reader (a
read-only mirror, say) without stubbing write methods. :class:`FileSystem`
is the facade that pairs one of each.

All paths are strings relative to the backend root, using ``/``. A
leading ``/`` means "from the tree root" and is stripped. Operations never
raise for a missing path or an I/O problem; they return one of the
failure values from :mod:`docsclient.domain.errors`.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from docsclient.domain.errors import FileSystemError, InvalidMetaFile, NotFound
from docsclient.infrastructure.paths import PathSystem

logger = logging.getLogger(__name__)

DEFAULT_META_FILE_NAME = ".meta.json"


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class DirectoryEntry(BaseModel):
    """One child of a directory listing."""

    model_config = {"frozen": True}

    name: str
    path: str
    is_directory: bool

    @property
    def is_file(self) -> bool:
        return not self.is_directory


class FileStat(BaseModel):
    """Size and timestamps of a file; timestamps are ``None`` when unknown."""

    model_config = {"frozen": True}

    path: str
    size: int
    created_at: datetime | None = None
    modified_at: datetime | None = None


def clean_path(path: str, path_system: PathSystem | None = None) -> str:
    """Normalize *path* relative to the tree root; ``""`` is the root."""
    paths = path_system or PathSystem()
    normalized = paths.normalize(path)
    normalized = normalized.lstrip(paths.separator)
    if normalized == ".":
        return ""
    return normalized


def parent_paths(path: str, path_system: PathSystem | None = None) -> list[str]:
    """Proper ancestors of *path*, nearest the root first; the root is excluded."""
    paths = path_system or PathSystem()
    parents: list[str] = []
    parent = clean_path(paths.dirname(clean_path(path, paths)), paths)
    while parent:
        parents.append(parent)
        parent = clean_path(paths.dirname(parent), paths)
    return parents[::-1]


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------


class FileSystemReader(ABC):
    """Read capability over a tree of files."""

    def __init__(self, path_system: PathSystem | None = None) -> None:
        self.path_system = path_system or PathSystem()

    def clean(self, path: str) -> str:
        return clean_path(path, self.path_system)

    @abstractmethod
    async def exists(self, path: str) -> bool: ...

    @abstractmethod
    async def is_file(self, path: str) -> bool: ...

    @abstractmethod
    async def is_directory(self, path: str) -> bool: ...

    @abstractmethod
    async def read_file(self, path: str) -> str | NotFound:
        """Text content, or :class:`NotFound` naming the path."""

    @abstractmethod
    async def read_directory(self, path: str = "") -> list[DirectoryEntry] | NotFound:
        """Children sorted by name, or :class:`NotFound` for a missing directory."""

    @abstractmethod
    async def stat(self, path: str) -> FileStat | NotFound: ...

    # --- Derived helpers ---

    async def file_exists(self, path: str) -> bool:
        return await self.is_file(path)

    async def directory_exists(self, path: str) -> bool:
        return await self.is_directory(path)

    async def read_directory_names(self, path: str = "") -> list[str] | NotFound:
        entries = await self.read_directory(path)
        if isinstance(entries, NotFound):
            return entries
        return [entry.name for entry in entries]

    async def read_directory_file_paths(self, path: str = "") -> list[str] | NotFound:
        """Paths of the regular files directly inside *path*."""
        entries = await self.read_directory(path)
        if isinstance(entries, NotFound):
            return entries
        return [entry.path for entry in entries if not entry.is_directory]

    async def read_directory_meta(
        self,
        path: str,
        meta_file_name: str = DEFAULT_META_FILE_NAME,
    ) -> dict[str, Any] | NotFound | InvalidMetaFile:
        """Decode the JSON meta file of directory *path*."""
        meta_path = self.path_system.join(self.clean(path), meta_file_name)
        text = await self.read_file(meta_path)
        if isinstance(text, NotFound):
            return text
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.debug("Invalid JSON in %s: %s", meta_path, exc)
            return InvalidMetaFile.at(meta_path, exc)
        if not isinstance(data, dict):
            return InvalidMetaFile.at(meta_path, f"expected an object, got {type(data).__name__}")
        return data


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------


class FileSystemWriter(ABC):
    """Write capability over a tree of files.

    Every method returns ``None`` on success or a :class:`FileSystemError`.
    """

    @abstractmethod
    async def write_file(self, path: str, content: str) -> FileSystemError | None:
        """Create or replace a file, creating parent directories."""

    @abstractmethod
    async def delete_file(self, path: str) -> FileSystemError | None:
        """Remove a file; :class:`NotFound` when it does not exist."""

    @abstractmethod
    async def create_directory(self, path: str) -> FileSystemError | None:
        """Create a directory; succeeds when it already exists."""

    @abstractmethod
    async def create_empty_directory(self, path: str) -> FileSystemError | None:
        """Create a directory; fails when anything exists at *path*."""

    @abstractmethod
    async def copy_file(self, source: str, destination: str) -> FileSystemError | None: ...

    @abstractmethod
    async def move_file(self, source: str, destination: str) -> FileSystemError | None: ...


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


class FileSystem:
    """One reader plus one writer behind a single object."""

    def __init__(self, reader: FileSystemReader, writer: FileSystemWriter) -> None:
        self.reader = reader
        self.writer = writer

    @property
    def path_system(self) -> PathSystem:
        return self.reader.path_system

    # --- Reads ---

    async def exists(self, path: str) -> bool:
        return await self.reader.exists(path)

    async def is_file(self, path: str) -> bool:
        return await self.reader.is_file(path)

    async def is_directory(self, path: str) -> bool:
        return await self.reader.is_directory(path)

    async def file_exists(self, path: str) -> bool:
        return await self.reader.file_exists(path)

    async def directory_exists(self, path: str) -> bool:
        return await self.reader.directory_exists(path)

    async def read_file(self, path: str) -> str | NotFound:
        return await self.reader.read_file(path)

    async def read_directory(self, path: str = "") -> list[DirectoryEntry] | NotFound:
        return await self.reader.read_directory(path)

    async def read_directory_names(self, path: str = "") -> list[str] | NotFound:
        return await self.reader.read_directory_names(path)

    async def read_directory_file_paths(self, path: str = "") -> list[str] | NotFound:
        return await self.reader.read_directory_file_paths(path)

    async def read_directory_meta(
        self,
        path: str,
        meta_file_name: str = DEFAULT_META_FILE_NAME,
    ) -> dict[str, Any] | NotFound | InvalidMetaFile:
        return await self.reader.read_directory_meta(path, meta_file_name)

    async def stat(self, path: str) -> FileStat | NotFound:
        return await self.reader.stat(path)

    # --- Writes ---

    async def write_file(self, path: str, content: str) -> FileSystemError | None:
        return await self.writer.write_file(path, content)

    async def delete_file(self, path: str) -> FileSystemError | None:
        return await self.writer.delete_file(path)

    async def create_directory(self, path: str) -> FileSystemError | None:
        return await self.writer.create_directory(path)

    async def create_empty_directory(self, path: str) -> FileSystemError | None:
        return await self.writer.create_empty_directory(path)

    async def copy_file(self, source: str, destination: str) -> FileSystemError | None:
        return await self.writer.copy_file(source, destination)

    async def move_file(self, source: str, destination: str) -> FileSystemError | None:
        return await self.writer.move_file(source, destination)
