"""Shared pytest fixtures and test helpers for docsclient tests."""

from __future__ import annotations

import base64
import hashlib
import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from docsclient.client import DocsClient
from docsclient.infrastructure.filesystem.disk import DiskFileSystem
from docsclient.infrastructure.filesystem.memory import MemoryFileSystem

# ---------------------------------------------------------------------------
# Sample tree
# ---------------------------------------------------------------------------

POSTS_META = """{
  "icon": "📝",
  "schema": {
    "author": {"type": "relation", "required": false, "path": "../users"},
    "tags": {"type": "multi-text", "required": false},
    "published": {"type": "boolean", "required": false},
    "rating": {"type": "number", "required": false},
    "reviewers": {"type": "multi-relation", "required": false, "path": "/docs/users"}
  }
}
"""

SAMPLE_FILES: dict[str, str] = {
    "docs/index.md": "---\nicon: 📚\n---\n\n# Documentation\n\nWelcome to the documentation!",
    "docs/posts/.meta.json": POSTS_META,
    "docs/posts/index.md": "# Posts\n\nAll posts.",
    "docs/posts/hello.md": (
        "---\nauthor: alice\ntags:\n- intro\n- news\npublished: true\nrating: 4\n"
        "reviewers:\n- bob\n---\n\n# Hello\n\nFirst post.\n\nMore text."
    ),
    "docs/posts/_/old.md": "# Old\n\nArchived post.",
    "docs/posts/notes.txt": "plain text",
    "docs/users/index.md": "# Users\n\nEveryone.",
    "docs/users/alice.md": "# Alice Smith\n\nWrites posts.",
    "docs/users/bob.md": "# Bob\n\nReviews posts.",
    "docs/.vitepress/config.md": "# Config",
}


def write_tree(root: Path, files: dict[str, str]) -> None:
    """Materialize *files* (``{relative_path: content}``) under *root*."""
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """Temporary document tree on disk holding :data:`SAMPLE_FILES`.

    This is the single source of truth for the on-disk layout; the disk
    fixtures below build on it.
    """
    write_tree(tmp_path, SAMPLE_FILES)
    return tmp_path


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """In-memory file system seeded with :data:`SAMPLE_FILES`."""
    return MemoryFileSystem(SAMPLE_FILES)


@pytest.fixture
def disk_fs(docs_root: Path) -> DiskFileSystem:
    return DiskFileSystem(docs_root)


@pytest.fixture
def client(memory_fs: MemoryFileSystem) -> DocsClient:
    return DocsClient(memory_fs)


def schema_of(**types: str) -> dict[str, Any]:
    """Build a schema of optional fields: ``schema_of(title="text")``."""
    return {key: {"type": tag, "required": False} for key, tag in types.items()}


# ---------------------------------------------------------------------------
# Contents API double
# ---------------------------------------------------------------------------

CONTENTS_PREFIX = "/repos/acme/handbook/contents"


class FakeContentsApi:
    """Just enough of a repository contents API to exercise the remote backend.

    Use as the handler of an :class:`httpx.MockTransport`. Directories exist
    only as prefixes of stored files, as in git.
    """

    def __init__(self, files: dict[str, str]) -> None:
        self.files = dict(files)
        self.requests: list[httpx.Request] = []
        self.fail_writes = False

    @staticmethod
    def sha_of(content: str) -> str:
        return hashlib.sha1(content.encode("utf-8")).hexdigest()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(CONTENTS_PREFIX).strip("/")
        if request.method == "GET":
            return self._get(path)
        if self.fail_writes:
            return httpx.Response(500, json={"message": "boom"})
        body = json.loads(request.content)
        if request.method == "PUT":
            existing = self.files.get(path)
            if existing is not None and body.get("sha") != self.sha_of(existing):
                return httpx.Response(409, json={"message": "sha mismatch"})
            self.files[path] = base64.b64decode(body["content"]).decode("utf-8")
            return httpx.Response(201, json={"content": {"path": path}})
        if request.method == "DELETE":
            existing = self.files.get(path)
            if existing is None or body.get("sha") != self.sha_of(existing):
                return httpx.Response(422, json={"message": "bad sha"})
            del self.files[path]
            return httpx.Response(200, json={})
        return httpx.Response(405)

    def _get(self, path: str) -> httpx.Response:
        if path in self.files:
            content = self.files[path]
            return httpx.Response(
                200,
                json={
                    "type": "file",
                    "name": path.rsplit("/", 1)[-1],
                    "path": path,
                    "sha": self.sha_of(content),
                    "size": len(content.encode("utf-8")),
                    "encoding": "base64",
                    "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
                },
            )
        prefix = f"{path}/" if path else ""
        children: dict[str, str] = {}
        for key in self.files:
            if not key.startswith(prefix):
                continue
            name, _, rest = key[len(prefix) :].partition("/")
            children[name] = "dir" if rest else "file"
        if not children:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(
            200,
            json=[{"name": name, "type": kind} for name, kind in children.items()],
        )
