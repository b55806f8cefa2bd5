"""Local disk backend.

Blocking :mod:`pathlib` calls run in a worker thread through
:func:`asyncio.to_thread`. Every path is resolved under the backend root;
a path that escapes it is treated as missing on read and refused on write.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from datetime import UTC, datetime
from pathlib import Path

from docsclient.domain.errors import FileSystemError, NotFound, WriteFailure
from docsclient.infrastructure.filesystem.base import (
    DirectoryEntry,
    FileStat,
    FileSystem,
    FileSystemReader,
    FileSystemWriter,
)
from docsclient.infrastructure.paths import PathSystem

logger = logging.getLogger(__name__)


class DiskFileSystemReader(FileSystemReader):
    """Reads files below *root* on the local disk."""

    def __init__(self, root: Path | str, path_system: PathSystem | None = None) -> None:
        super().__init__(path_system)
        self.root = Path(root)

    def locate(self, path: str) -> Path | None:
        """Absolute disk path for *path*, or ``None`` if it escapes the root."""
        relative = self.clean(path)
        target = self.root / relative if relative else self.root
        root_resolved = self.root.resolve()
        if not target.resolve().is_relative_to(root_resolved):
            return None
        return target

    async def exists(self, path: str) -> bool:
        target = self.locate(path)
        return target is not None and await asyncio.to_thread(target.exists)

    async def is_file(self, path: str) -> bool:
        target = self.locate(path)
        return target is not None and await asyncio.to_thread(target.is_file)

    async def is_directory(self, path: str) -> bool:
        target = self.locate(path)
        return target is not None and await asyncio.to_thread(target.is_dir)

    async def read_file(self, path: str) -> str | NotFound:
        target = self.locate(path)
        if target is None:
            return NotFound.at(path)
        try:
            return await asyncio.to_thread(target.read_text, encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return NotFound.at(path)
        except OSError as exc:
            logger.debug("Failed to read %s: %s", target, exc)
            return NotFound(path=path, message=f"File not readable: {path} ({exc})")

    async def read_directory(self, path: str = "") -> list[DirectoryEntry] | NotFound:
        target = self.locate(path)
        if target is None or not await asyncio.to_thread(target.is_dir):
            return NotFound.at(path, "Directory")
        relative = self.clean(path)

        def _list() -> list[DirectoryEntry]:
            return [
                DirectoryEntry(
                    name=child.name,
                    path=self.path_system.join(relative, child.name),
                    is_directory=child.is_dir(),
                )
                for child in sorted(target.iterdir(), key=lambda p: p.name)
            ]

        try:
            return await asyncio.to_thread(_list)
        except OSError as exc:
            logger.debug("Failed to list %s: %s", target, exc)
            return NotFound.at(path, "Directory")

    async def stat(self, path: str) -> FileStat | NotFound:
        target = self.locate(path)
        if target is None:
            return NotFound.at(path)
        try:
            result = await asyncio.to_thread(target.stat)
        except OSError:
            return NotFound.at(path)
        return FileStat(
            path=self.clean(path),
            size=result.st_size,
            created_at=datetime.fromtimestamp(result.st_ctime, tz=UTC),
            modified_at=datetime.fromtimestamp(result.st_mtime, tz=UTC),
        )


class DiskFileSystemWriter(FileSystemWriter):
    """Writes below the root of its paired reader.

    The reader is consulted before copy and move so a missing source
    surfaces as :class:`NotFound` instead of an ``OSError``.
    """

    def __init__(self, reader: DiskFileSystemReader) -> None:
        self.reader = reader

    def _target(self, path: str) -> Path | WriteFailure:
        target = self.reader.locate(path)
        if target is None:
            return WriteFailure.at(path, "path escapes the document root")
        return target

    async def write_file(self, path: str, content: str) -> FileSystemError | None:
        target = self._target(path)
        if isinstance(target, WriteFailure):
            return target

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")

        try:
            await asyncio.to_thread(_write)
        except OSError as exc:
            logger.debug("Failed to write %s: %s", target, exc)
            return WriteFailure.at(path, exc)
        return None

    async def delete_file(self, path: str) -> FileSystemError | None:
        if not await self.reader.is_file(path):
            return NotFound.at(path)
        target = self._target(path)
        if isinstance(target, WriteFailure):
            return target
        try:
            await asyncio.to_thread(target.unlink)
        except FileNotFoundError:
            return NotFound.at(path)
        except OSError as exc:
            logger.debug("Failed to delete %s: %s", target, exc)
            return WriteFailure.at(path, exc)
        return None

    async def create_directory(self, path: str) -> FileSystemError | None:
        target = self._target(path)
        if isinstance(target, WriteFailure):
            return target
        try:
            await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            logger.debug("Failed to create directory %s: %s", target, exc)
            return WriteFailure.at(path, exc)
        return None

    async def create_empty_directory(self, path: str) -> FileSystemError | None:
        target = self._target(path)
        if isinstance(target, WriteFailure):
            return target
        if await self.reader.exists(path):
            return WriteFailure.at(path, "already exists")
        try:
            await asyncio.to_thread(target.mkdir, parents=True)
        except OSError as exc:
            logger.debug("Failed to create directory %s: %s", target, exc)
            return WriteFailure.at(path, exc)
        return None

    async def copy_file(self, source: str, destination: str) -> FileSystemError | None:
        return await self._transfer(source, destination, move=False)

    async def move_file(self, source: str, destination: str) -> FileSystemError | None:
        return await self._transfer(source, destination, move=True)

    async def _transfer(self, source: str, destination: str, *, move: bool) -> FileSystemError | None:
        if not await self.reader.is_file(source):
            return NotFound.at(source)
        src = self._target(source)
        if isinstance(src, WriteFailure):
            return src
        dst = self._target(destination)
        if isinstance(dst, WriteFailure):
            return dst
        if await self.reader.is_directory(destination):
            return WriteFailure.at(destination, "is a directory")

        def _run() -> None:
            dst.parent.mkdir(parents=True, exist_ok=True)
            if move:
                shutil.move(src, dst)
            else:
                shutil.copy2(src, dst)

        try:
            await asyncio.to_thread(_run)
        except OSError as exc:
            logger.debug("Failed to %s %s -> %s: %s", "move" if move else "copy", src, dst, exc)
            return WriteFailure.at(destination, exc)
        return None


class DiskFileSystem(FileSystem):
    """Disk reader and writer sharing one root."""

    def __init__(self, root: Path | str, path_system: PathSystem | None = None) -> None:
        reader = DiskFileSystemReader(root, path_system)
        super().__init__(reader, DiskFileSystemWriter(reader))
        self.root = reader.root
