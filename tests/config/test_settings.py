"""Tests for DocsClientSettings: unified settings with TOML source."""

from pathlib import Path

import pytest

from docsclient.config.settings import DocsClientSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DOCSCLIENT_CONFIG", "DOCSCLIENT_BACKEND", "DOCSCLIENT_VERBOSE"):
        monkeypatch.delenv(name, raising=False)


class TestDocsClientSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = DocsClientSettings.load(docs_root=tmp_path)
        assert settings.docs_root == tmp_path
        assert settings.config_path is None
        assert settings.backend == "disk"
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.client.index_file_name == "index.md"
        assert settings.remote.branch == "main"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = DocsClientSettings.load(docs_root=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "docsclient.toml"
        toml.write_text('[client]\narchive_directory_name = "archive"\n[remote]\nrepo = "kb"\n')
        settings = DocsClientSettings.load(docs_root=tmp_path)
        assert settings.client.archive_directory_name == "archive"
        assert settings.remote.repo == "kb"
        assert settings.client.index_file_name == "index.md"  # default preserved
        assert settings.config_path == toml

    def test_top_level_flags_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "docsclient.toml").write_text('backend = "memory"\n')
        settings = DocsClientSettings.load(docs_root=tmp_path)
        assert settings.backend == "memory"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[remote]\nowner = "custom"\n')
        settings = DocsClientSettings.load(config_path=str(custom), docs_root=tmp_path)
        assert settings.remote.owner == "custom"
        assert settings.config_path == custom


class TestOverrides:
    def test_keyword_overrides(self, tmp_path: Path) -> None:
        settings = DocsClientSettings.load(docs_root=tmp_path, verbose=True, log_json=True)
        assert settings.verbose is True
        assert settings.log_json is True

    def test_keyword_overrides_toml(self, tmp_path: Path) -> None:
        (tmp_path / "docsclient.toml").write_text('backend = "remote"\n')
        settings = DocsClientSettings.load(docs_root=tmp_path, backend="memory")
        assert settings.backend == "memory"


class TestDocsRootResolution:
    def test_docs_root_from_toml_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """When no explicit root, use the parent of the discovered docsclient.toml."""
        subdir = tmp_path / "sub" / "deep"
        subdir.mkdir(parents=True)
        (tmp_path / "docsclient.toml").write_text("")
        monkeypatch.chdir(subdir)
        settings = DocsClientSettings.load()
        assert settings.docs_root == tmp_path.resolve()


class TestEnvVars:
    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCSCLIENT_VERBOSE", "true")
        settings = DocsClientSettings.load(docs_root=tmp_path)
        assert settings.verbose is True

    def test_nested_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCSCLIENT_REMOTE__BRANCH", "develop")
        settings = DocsClientSettings.load(docs_root=tmp_path)
        assert settings.remote.branch == "develop"

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "docsclient.toml").write_text('[remote]\nbranch = "release"\n')
        monkeypatch.setenv("DOCSCLIENT_REMOTE__BRANCH", "develop")
        settings = DocsClientSettings.load(docs_root=tmp_path)
        assert settings.remote.branch == "develop"
