"""File path value."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from docsclient.infrastructure.paths import PathSystem

INDEX_STEM = "index"


@dataclass(frozen=True)
class FilePathValue:
    """Name and location of one file in the tree.

    ``name`` is the file name without extension, except for ``index`` files,
    which take the name of their directory.
    """

    name: str
    path: str
    full_path: str
    name_with_extension: str
    archive_directory_name: str = "_"
    path_system: PathSystem = field(default_factory=PathSystem, compare=False, repr=False)

    @classmethod
    def from_path(
        cls,
        file_path: str,
        path_system: PathSystem | None = None,
        base_path: str | None = None,
        *,
        archive_directory_name: str = "_",
    ) -> FilePathValue:
        paths = path_system or PathSystem()
        name_with_extension = paths.basename(file_path)
        name = paths.basename(file_path, paths.extname(file_path))
        if name == INDEX_STEM and paths.separator in file_path:
            parent = paths.dirname(file_path)
            if paths.basename(parent) == archive_directory_name:
                parent = paths.dirname(parent)
            if parent != ".":
                name = paths.basename(parent)

        full_path = paths.join(base_path, file_path) if base_path else paths.resolve(file_path)
        return cls(
            name=name,
            path=file_path,
            full_path=full_path,
            name_with_extension=name_with_extension,
            archive_directory_name=archive_directory_name,
            path_system=paths,
        )

    @property
    def directory_path(self) -> str:
        return self.path_system.dirname(self.path)

    @property
    def extension(self) -> str:
        return self.path_system.extname(self.name_with_extension)

    @property
    def is_archived(self) -> bool:
        parent = self.path_system.basename(self.directory_path)
        return parent == self.archive_directory_name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "full_path": self.full_path,
            "name_with_extension": self.name_with_extension,
        }
