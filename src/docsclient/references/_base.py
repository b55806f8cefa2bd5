"""Shared plumbing for references.

A reference is a lazy handle on a path: constructing one performs no I/O.
Every reference carries the same :class:`ReferenceContext` so that
references derived from it (a file's directory, a relation target) talk
to the same file system with the same naming conventions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from docsclient.config.models import ClientConfig
from docsclient.infrastructure.filesystem.base import FileSystem, clean_path
from docsclient.infrastructure.paths import PathSystem


@dataclass(frozen=True)
class ReferenceContext:
    file_system: FileSystem
    config: ClientConfig = field(default_factory=ClientConfig)
    # Prefix used for ``full_path`` values; the file system itself is rooted.
    base_path: str = ""

    @property
    def path_system(self) -> PathSystem:
        return self.file_system.path_system

    def clean(self, path: str) -> str:
        """Tree-relative normalized form of *path*; ``""`` is the root."""
        return clean_path(path, self.path_system)

    def join(self, *parts: str) -> str:
        return self.clean(self.path_system.join(*parts))

    def full_path(self, path: str) -> str:
        if self.base_path:
            return self.path_system.join(self.base_path, path)
        return path


def ensure_md(file_name: str) -> str:
    return file_name if file_name.endswith(".md") else f"{file_name}.md"
