"""Tests for the local disk backend."""

from pathlib import Path

import pytest

from docsclient.domain.errors import InvalidMetaFile, NotFound, WriteFailure
from docsclient.infrastructure.filesystem.disk import DiskFileSystem


class TestDiskRead:
    async def test_read_file(self, disk_fs: DiskFileSystem) -> None:
        text = await disk_fs.read_file("docs/users/alice.md")
        assert text == "# Alice Smith\n\nWrites posts."

    async def test_missing_file(self, disk_fs: DiskFileSystem) -> None:
        assert isinstance(await disk_fs.read_file("docs/nope.md"), NotFound)

    async def test_directory_is_not_a_file(self, disk_fs: DiskFileSystem) -> None:
        assert isinstance(await disk_fs.read_file("docs/users"), NotFound)
        assert await disk_fs.directory_exists("docs/users")
        assert not await disk_fs.file_exists("docs/users")

    async def test_read_directory_sorted(self, disk_fs: DiskFileSystem) -> None:
        names = await disk_fs.read_directory_names("docs/users")
        assert names == ["alice.md", "bob.md", "index.md"]

    async def test_read_directory_entries(self, disk_fs: DiskFileSystem) -> None:
        entries = await disk_fs.read_directory("docs/posts")
        assert isinstance(entries, list)
        by_name = {entry.name: entry for entry in entries}
        assert by_name["_"].is_directory
        assert by_name["hello.md"].path == "docs/posts/hello.md"
        assert by_name["hello.md"].is_file

    async def test_read_missing_directory(self, disk_fs: DiskFileSystem) -> None:
        assert isinstance(await disk_fs.read_directory("docs/nope"), NotFound)

    async def test_directory_meta(self, disk_fs: DiskFileSystem) -> None:
        meta = await disk_fs.read_directory_meta("docs/posts")
        assert isinstance(meta, dict)
        assert meta["icon"] == "📝"

    async def test_invalid_directory_meta(self, disk_fs: DiskFileSystem, docs_root: Path) -> None:
        (docs_root / "docs" / "users" / ".meta.json").write_text("not json")
        assert isinstance(await disk_fs.read_directory_meta("docs/users"), InvalidMetaFile)

    async def test_stat(self, disk_fs: DiskFileSystem) -> None:
        stat = await disk_fs.stat("docs/users/bob.md")
        assert not isinstance(stat, NotFound)
        assert stat.path == "docs/users/bob.md"
        assert stat.size == len("# Bob\n\nReviews posts.")
        assert stat.modified_at is not None

    async def test_escaping_root_is_not_found(self, disk_fs: DiskFileSystem) -> None:
        assert isinstance(await disk_fs.read_file("../outside.md"), NotFound)


class TestDiskWrite:
    async def test_write_creates_parents(self, disk_fs: DiskFileSystem, docs_root: Path) -> None:
        assert await disk_fs.write_file("docs/new/deep/a.md", "# A") is None
        assert (docs_root / "docs" / "new" / "deep" / "a.md").read_text() == "# A"
        assert await disk_fs.read_file("docs/new/deep/a.md") == "# A"

    async def test_delete(self, disk_fs: DiskFileSystem, docs_root: Path) -> None:
        assert await disk_fs.delete_file("docs/users/bob.md") is None
        assert not (docs_root / "docs" / "users" / "bob.md").exists()

    async def test_delete_missing(self, disk_fs: DiskFileSystem) -> None:
        assert isinstance(await disk_fs.delete_file("docs/users/zoe.md"), NotFound)

    async def test_create_directory_idempotent(self, disk_fs: DiskFileSystem) -> None:
        assert await disk_fs.create_directory("docs/empty") is None
        assert await disk_fs.create_directory("docs/empty") is None
        assert await disk_fs.read_directory("docs/empty") == []

    async def test_create_empty_directory_fails_when_present(self, disk_fs: DiskFileSystem) -> None:
        assert isinstance(await disk_fs.create_empty_directory("docs/users"), WriteFailure)
        assert await disk_fs.create_empty_directory("docs/fresh") is None

    async def test_copy(self, disk_fs: DiskFileSystem) -> None:
        assert await disk_fs.copy_file("docs/users/bob.md", "docs/other/bob.md") is None
        assert await disk_fs.file_exists("docs/users/bob.md")
        assert await disk_fs.read_file("docs/other/bob.md") == "# Bob\n\nReviews posts."

    async def test_move(self, disk_fs: DiskFileSystem) -> None:
        assert await disk_fs.move_file("docs/users/bob.md", "docs/users/_/bob.md") is None
        assert not await disk_fs.file_exists("docs/users/bob.md")
        assert await disk_fs.file_exists("docs/users/_/bob.md")

    async def test_copy_missing_source(self, disk_fs: DiskFileSystem) -> None:
        assert isinstance(await disk_fs.copy_file("docs/x.md", "docs/y.md"), NotFound)

    async def test_copy_onto_directory_refused(self, disk_fs: DiskFileSystem) -> None:
        result = await disk_fs.copy_file("docs/users/bob.md", "docs/posts")
        assert isinstance(result, WriteFailure)
        assert "is a directory" in result.message
        assert not await disk_fs.file_exists("docs/posts/bob.md")

    async def test_write_outside_root_refused(self, disk_fs: DiskFileSystem) -> None:
        assert isinstance(await disk_fs.write_file("../escape.md", "x"), WriteFailure)


@pytest.mark.parametrize("path", ["docs/users/alice.md", "/docs/users/alice.md"])
async def test_leading_separator_is_tree_root(disk_fs: DiskFileSystem, path: str) -> None:
    assert await disk_fs.file_exists(path)
