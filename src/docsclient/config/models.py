"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, docsclient.toml only contains
overrides. A local docs tree needs no config file at all; the remote
backend needs at least [remote] owner and repo.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from docsclient.domain.directory import DEFAULT_INDEX_ICON

# --- docsclient.toml sections ---


class ClientConfig(BaseModel):
    """[client] section: naming conventions of the document tree."""

    model_config = {"frozen": True}

    default_index_icon: str = DEFAULT_INDEX_ICON
    index_file_name: str = "index.md"
    archive_directory_name: str = "_"
    default_directory_name: str = "Directory"
    index_meta_includes: list[str] = Field(default_factory=list)
    directory_excludes: list[str] = Field(default_factory=lambda: [".vitepress"])
    meta_file_name: str = ".meta.json"


class RemoteConfig(BaseModel):
    """[remote] section: repository contents API location."""

    model_config = {"frozen": True}

    base_url: str = "https://api.github.com"
    owner: str = ""
    repo: str = ""
    branch: str = "main"
    # Directory inside the repository that holds the document tree.
    root: str = ""
    token: str | None = None
    timeout: float = 30.0


class DocsClientConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    client: ClientConfig = Field(default_factory=ClientConfig)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
