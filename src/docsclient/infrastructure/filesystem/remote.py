"""Remote backend over a GitHub-style repository contents API.

Files are read and written through ``/repos/{owner}/{repo}/contents/{path}``:

- ``GET`` returns a JSON object for a file (base64 ``content`` plus ``sha``)
  or a JSON array for a directory;
- ``PUT`` creates or updates a file, passing the current ``sha`` on update;
- ``DELETE`` removes a file identified by its ``sha``.

Git has no empty directories, so a directory is created by writing a
``.gitkeep`` placeholder, which listings then hide. A move is a copy
followed by a delete. HTTP errors are converted to failure values at this
boundary and never retried. A write onto a directory, or beneath a path
that is a file, is refused before any request that would change the tree.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx

from docsclient.config.models import RemoteConfig
from docsclient.domain.errors import FileSystemError, NotFound, WriteFailure
from docsclient.infrastructure.filesystem.base import (
    DirectoryEntry,
    FileStat,
    FileSystem,
    FileSystemReader,
    FileSystemWriter,
    parent_paths,
)
from docsclient.infrastructure.paths import PathSystem

logger = logging.getLogger(__name__)

PLACEHOLDER_FILE_NAME = ".gitkeep"


def build_client(config: RemoteConfig) -> httpx.AsyncClient:
    """An :class:`httpx.AsyncClient` with the API base URL and auth headers."""
    headers = {"Accept": "application/vnd.github+json"}
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    return httpx.AsyncClient(
        base_url=config.base_url,
        headers=headers,
        timeout=httpx.Timeout(config.timeout),
        follow_redirects=True,
    )


class RemoteFileSystemReader(FileSystemReader):
    """Reads through the contents API at ``config.branch``."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: RemoteConfig,
        path_system: PathSystem | None = None,
    ) -> None:
        super().__init__(path_system)
        self.client = client
        self.config = config

    def repo_path(self, path: str) -> str:
        """*path* prefixed with the configured root inside the repository."""
        relative = self.clean(path)
        root = self.clean(self.config.root)
        if root and relative:
            return self.path_system.join(root, relative)
        return root or relative

    def url(self, path: str) -> str:
        base = f"/repos/{self.config.owner}/{self.config.repo}/contents"
        repo_path = self.repo_path(path)
        return f"{base}/{repo_path}" if repo_path else base

    async def fetch(self, path: str) -> dict[str, Any] | list[dict[str, Any]] | None:
        """Decoded contents payload, ``None`` on 404.

        Raises:
            httpx.HTTPError: For transport errors and non-404 error statuses.
        """
        response = await self.client.get(self.url(path), params={"ref": self.config.branch})
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        return response.json()

    async def _safe_fetch(self, path: str) -> dict[str, Any] | list[dict[str, Any]] | None:
        try:
            return await self.fetch(path)
        except httpx.HTTPError as exc:
            logger.debug("Remote read of %s failed: %s", path, exc)
            return None

    async def exists(self, path: str) -> bool:
        return await self._safe_fetch(path) is not None

    async def is_file(self, path: str) -> bool:
        payload = await self._safe_fetch(path)
        return isinstance(payload, dict) and payload.get("type") == "file"

    async def is_directory(self, path: str) -> bool:
        return isinstance(await self._safe_fetch(path), list)

    async def read_file(self, path: str) -> str | NotFound:
        payload = await self._safe_fetch(path)
        if not isinstance(payload, dict) or payload.get("type") != "file":
            return NotFound.at(path)
        return _decode(payload)

    async def read_directory(self, path: str = "") -> list[DirectoryEntry] | NotFound:
        payload = await self._safe_fetch(path)
        if not isinstance(payload, list):
            return NotFound.at(path, "Directory")
        relative = self.clean(path)
        entries = [
            DirectoryEntry(
                name=item["name"],
                path=self.path_system.join(relative, item["name"]),
                is_directory=item.get("type") == "dir",
            )
            for item in payload
            if item.get("name") != PLACEHOLDER_FILE_NAME
        ]
        return sorted(entries, key=lambda entry: entry.name)

    async def stat(self, path: str) -> FileStat | NotFound:
        payload = await self._safe_fetch(path)
        if not isinstance(payload, dict):
            return NotFound.at(path)
        return FileStat(path=self.clean(path), size=int(payload.get("size", 0)))

    async def sha(self, path: str) -> str | None:
        payload = await self.fetch(path)
        if isinstance(payload, dict):
            return payload.get("sha")
        return None


class RemoteFileSystemWriter(FileSystemWriter):
    """Commits each write to ``config.branch``."""

    def __init__(self, reader: RemoteFileSystemReader) -> None:
        self.reader = reader

    @property
    def client(self) -> httpx.AsyncClient:
        return self.reader.client

    @property
    def config(self) -> RemoteConfig:
        return self.reader.config

    async def write_file(self, path: str, content: str) -> FileSystemError | None:
        try:
            payload = await self.reader.fetch(path)
            if isinstance(payload, list):
                return WriteFailure.at(path, "is a directory")
            if payload is None:
                blocker = await self._file_ancestor(path)
                if blocker is not None:
                    return WriteFailure.at(path, f"{blocker} is a file")
            sha = payload.get("sha") if payload else None
            body: dict[str, Any] = {
                "message": f"{'Update' if sha else 'Create'} {self.reader.clean(path)}",
                "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
                "branch": self.config.branch,
            }
            if sha:
                body["sha"] = sha
            response = await self.client.put(self.reader.url(path), json=body)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.debug("Remote write of %s failed: %s", path, exc)
            return WriteFailure.at(path, exc)
        return None

    async def delete_file(self, path: str) -> FileSystemError | None:
        try:
            sha = await self.reader.sha(path)
            if sha is None:
                return NotFound.at(path)
            response = await self.client.request(
                "DELETE",
                self.reader.url(path),
                json={
                    "message": f"Delete {self.reader.clean(path)}",
                    "sha": sha,
                    "branch": self.config.branch,
                },
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.debug("Remote delete of %s failed: %s", path, exc)
            return WriteFailure.at(path, exc)
        return None

    async def create_directory(self, path: str) -> FileSystemError | None:
        if await self.reader.is_directory(path):
            return None
        if await self.reader.is_file(path):
            return WriteFailure.at(path, "a file exists at this path")
        return await self.write_file(self._placeholder(path), "")

    async def create_empty_directory(self, path: str) -> FileSystemError | None:
        if await self.reader.exists(path):
            return WriteFailure.at(path, "already exists")
        return await self.write_file(self._placeholder(path), "")

    async def copy_file(self, source: str, destination: str) -> FileSystemError | None:
        content = await self.reader.read_file(source)
        if isinstance(content, NotFound):
            return content
        return await self.write_file(destination, content)

    async def move_file(self, source: str, destination: str) -> FileSystemError | None:
        error = await self.copy_file(source, destination)
        if error is not None:
            return error
        if self.reader.clean(source) == self.reader.clean(destination):
            return None
        return await self.delete_file(source)

    async def _file_ancestor(self, path: str) -> str | None:
        for parent in parent_paths(path, self.reader.path_system):
            if await self.reader.is_file(parent):
                return parent
        return None

    def _placeholder(self, path: str) -> str:
        return self.reader.path_system.join(self.reader.clean(path), PLACEHOLDER_FILE_NAME)


class RemoteFileSystem(FileSystem):
    """Remote reader and writer sharing one HTTP client.

    Pass *client* to inject a preconfigured (or mocked) client; otherwise
    one is built from *config* and closed by :meth:`aclose`.
    """

    def __init__(
        self,
        config: RemoteConfig,
        client: httpx.AsyncClient | None = None,
        path_system: PathSystem | None = None,
    ) -> None:
        self._owns_client = client is None
        http = client or build_client(config)
        reader = RemoteFileSystemReader(http, config, path_system)
        super().__init__(reader, RemoteFileSystemWriter(reader))
        self.client = http
        self.config = config

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> RemoteFileSystem:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _decode(payload: dict[str, Any]) -> str:
    content = payload.get("content") or ""
    if payload.get("encoding", "base64") != "base64":
        return content
    return base64.b64decode(content).decode("utf-8")
