"""Tests for FilePathValue and the file entities."""

from docsclient.domain.content import ContentValue
from docsclient.entities.md import MdFileEntity
from docsclient.entities.path import FilePathValue
from docsclient.entities.unknown import UnknownFileEntity
from docsclient.infrastructure.paths import MockPathSystem


class TestFilePathValue:
    def test_regular_file(self) -> None:
        value = FilePathValue.from_path("docs/posts/hello.md")
        assert value.name == "hello"
        assert value.name_with_extension == "hello.md"
        assert value.path == "docs/posts/hello.md"
        assert value.full_path == "docs/posts/hello.md"
        assert value.directory_path == "docs/posts"
        assert value.extension == ".md"
        assert not value.is_archived

    def test_index_takes_directory_name(self) -> None:
        assert FilePathValue.from_path("docs/posts/index.md").name == "posts"

    def test_archived_index_skips_archive_directory(self) -> None:
        value = FilePathValue.from_path("docs/posts/_/index.md")
        assert value.name == "posts"
        assert value.is_archived

    def test_root_index_keeps_stem(self) -> None:
        assert FilePathValue.from_path("index.md").name == "index"

    def test_base_path_prefixes_full_path(self) -> None:
        value = FilePathValue.from_path("docs/a.md", base_path="/srv/site")
        assert value.full_path == "/srv/site/docs/a.md"

    def test_mock_path_system_resolves_at_cwd(self) -> None:
        value = FilePathValue.from_path("docs/a.md", MockPathSystem())
        assert value.full_path == "/mock-cwd/docs/a.md"

    def test_custom_separator_drives_derived_parts(self) -> None:
        value = FilePathValue.from_path("docs\\posts\\_\\old.md", MockPathSystem("\\"))
        assert value.directory_path == "docs\\posts\\_"
        assert value.extension == ".md"
        assert value.is_archived

    def test_to_dict(self) -> None:
        assert FilePathValue.from_path("a/b.md").to_dict() == {
            "name": "b",
            "path": "a/b.md",
            "full_path": "a/b.md",
            "name_with_extension": "b.md",
        }


class TestMdFileEntity:
    def test_views(self) -> None:
        entity = MdFileEntity(
            path=FilePathValue.from_path("docs/a.md"),
            content=ContentValue.from_markdown("# A\n\nAbout A."),
        )
        assert entity.type == "markdown"
        assert entity.title == "A"
        assert entity.description == "About A."
        assert entity.to_text() == "# A\n\nAbout A."

    def test_with_content_callable(self) -> None:
        entity = MdFileEntity(
            path=FilePathValue.from_path("docs/a.md"),
            content=ContentValue.from_markdown("# A"),
        )
        updated = entity.with_content(lambda content: content.with_title("B"))
        assert updated.title == "B"
        assert entity.title == "A"

    def test_to_dict(self) -> None:
        entity = MdFileEntity(
            path=FilePathValue.from_path("docs/a.md"),
            content=ContentValue.from_markdown("# A"),
            is_archived=True,
        )
        data = entity.to_dict()
        assert data["type"] == "markdown"
        assert data["is_archived"] is True
        assert data["content"]["title"] == "A"


class TestUnknownFileEntity:
    def test_basics(self) -> None:
        entity = UnknownFileEntity(path=FilePathValue.from_path("docs/logo.svg"), content="<svg/>")
        assert entity.type == "unknown"
        assert entity.extension == ".svg"
        assert entity.with_content("<g/>").to_text() == "<g/>"
        assert entity.to_text() == "<svg/>"
