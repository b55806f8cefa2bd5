"""DocsClient: the entry point for working with a document tree.

The client owns one :class:`~docsclient.infrastructure.filesystem.base.FileSystem`
and the naming conventions of the tree. Every reference it hands out shares
that file system, so a write through one reference is visible to a read
through any other.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from docsclient.config.logging import configure_logging
from docsclient.config.models import ClientConfig
from docsclient.infrastructure.filesystem.base import FileSystem
from docsclient.infrastructure.filesystem.disk import DiskFileSystem
from docsclient.infrastructure.filesystem.memory import MemoryFileSystem
from docsclient.infrastructure.filesystem.remote import RemoteFileSystem
from docsclient.references._base import ReferenceContext
from docsclient.references.directory import DirectoryReference, FileReference
from docsclient.references.md_file import MdFileReference
from docsclient.references.relation import RelationReference

if TYPE_CHECKING:
    from docsclient.config.settings import DocsClientSettings

logger = logging.getLogger(__name__)


class DocsClient:
    """Factory of references over one file system.

    Construct directly with any backend, or through :meth:`from_settings`,
    :meth:`disk`, and :meth:`memory`.
    """

    def __init__(
        self,
        file_system: FileSystem,
        config: ClientConfig | None = None,
        base_path: str = "",
    ) -> None:
        self._context = ReferenceContext(
            file_system=file_system,
            config=config or ClientConfig(),
            base_path=base_path,
        )

    @classmethod
    def from_settings(cls, settings: DocsClientSettings) -> DocsClient:
        """Build the backend named by ``settings.backend``.

        Logging is configured from the settings when ``verbose`` or
        ``log_json`` is set; otherwise the host application's logging is
        left alone.
        """
        if settings.verbose or settings.log_json:
            configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        file_system: FileSystem
        if settings.backend == "remote":
            file_system = RemoteFileSystem(settings.remote)
            base_path = settings.remote.root
        elif settings.backend == "memory":
            file_system = MemoryFileSystem()
            base_path = ""
        else:
            file_system = DiskFileSystem(settings.docs_root)
            base_path = str(settings.docs_root)
        logger.debug("Using %s backend (base path %r)", settings.backend, base_path)
        return cls(file_system, settings.client, base_path)

    @classmethod
    def disk(cls, root: Path | str, config: ClientConfig | None = None) -> DocsClient:
        return cls(DiskFileSystem(root), config, str(root))

    @classmethod
    def memory(
        cls,
        files: Mapping[str, str] | None = None,
        config: ClientConfig | None = None,
        *,
        default_files: bool = False,
    ) -> DocsClient:
        return cls(MemoryFileSystem(files, default_files=default_files), config)

    # --- Accessors ---

    @property
    def context(self) -> ReferenceContext:
        return self._context

    @property
    def file_system(self) -> FileSystem:
        return self._context.file_system

    @property
    def config(self) -> ClientConfig:
        return self._context.config

    @property
    def base_path(self) -> str:
        """Prefix of every reference's ``full_path``."""
        return self._context.base_path

    # --- References ---

    def directory(self, path: str = "", schema: Mapping[str, Any] | None = None) -> DirectoryReference:
        return DirectoryReference(path, self._context, schema)

    def file(self, path: str) -> FileReference:
        """Markdown reference for ``.md`` paths, plain-text reference otherwise."""
        paths = self._context.path_system
        return self.directory(paths.dirname(path)).file(paths.basename(path))

    def md_file(self, path: str, schema: Mapping[str, Any] | None = None) -> MdFileReference:
        paths = self._context.path_system
        return self.directory(paths.dirname(path), schema).md_file(paths.basename(path))

    def relation(self, path: str) -> RelationReference:
        return RelationReference(path, self._context)

    # --- Lifecycle ---

    async def aclose(self) -> None:
        """Release the remote backend's HTTP client, if any."""
        if isinstance(self.file_system, RemoteFileSystem):
            await self.file_system.aclose()

    async def __aenter__(self) -> DocsClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
