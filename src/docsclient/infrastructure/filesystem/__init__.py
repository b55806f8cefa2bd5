"""File-system capability interfaces and the disk, memory, and remote backends."""

from docsclient.infrastructure.filesystem.base import (
    DirectoryEntry,
    FileStat,
    FileSystem,
    FileSystemReader,
    FileSystemWriter,
)
from docsclient.infrastructure.filesystem.disk import (
    DiskFileSystem,
    DiskFileSystemReader,
    DiskFileSystemWriter,
)
from docsclient.infrastructure.filesystem.memory import (
    MemoryFileSystem,
    MemoryFileSystemReader,
    MemoryFileSystemWriter,
)
from docsclient.infrastructure.filesystem.remote import (
    RemoteFileSystem,
    RemoteFileSystemReader,
    RemoteFileSystemWriter,
)

__all__ = [
    "DirectoryEntry",
    "DiskFileSystem",
    "DiskFileSystemReader",
    "DiskFileSystemWriter",
    "FileStat",
    "FileSystem",
    "FileSystemReader",
    "FileSystemWriter",
    "MemoryFileSystem",
    "MemoryFileSystemReader",
    "MemoryFileSystemWriter",
    "RemoteFileSystem",
    "RemoteFileSystemReader",
    "RemoteFileSystemWriter",
]
