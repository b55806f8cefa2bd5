"""Unified settings: keyword overrides, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: overrides passed to :meth:`DocsClientSettings.load`
  2. Env vars: ``DOCSCLIENT_*`` prefix, ``__`` for nested sections
  3. TOML file: ``docsclient.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`docsclient.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from docsclient.config.discovery import find_config, read_toml
from docsclient.config.models import ClientConfig, RemoteConfig

BackendName = Literal["disk", "memory", "remote"]


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``docsclient.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class DocsClientSettings(BaseSettings):
    """Unified settings for a docsclient session.

    Attributes:
        docs_root: Root of the document tree (parent of ``docsclient.toml``,
            or CWD if no config found). Ignored by the remote backend.
        config_path: The TOML file that was loaded, if any.
        backend: Which file-system backend :class:`~docsclient.client.DocsClient`
            builds from these settings.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DOCSCLIENT_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (not in TOML; derived from config location) ---
    docs_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- Runtime flags ---
    backend: BackendName = "disk"
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections (reuse the frozen models) ---
    client: ClientConfig = Field(default_factory=ClientConfig)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        docs_root: Path | None = None,
        **overrides: Any,
    ) -> DocsClientSettings:
        """Construct settings for a document tree.

        Discovers ``docsclient.toml`` via walk-up from *docs_root* (or uses
        an explicit *config_path*), resolves *docs_root* from the config
        file's parent directory when not given, and merges *overrides* as
        highest-priority values.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(docs_root)

        resolved_root = docs_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                docs_root=resolved_root,
                config_path=toml_path,
                **overrides,
            )
        finally:
            _tls.toml_path = None
