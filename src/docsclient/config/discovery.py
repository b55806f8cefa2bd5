"""Config file discovery and loading.

Walk-up finder locates docsclient.toml, similar to how git finds .git/.
Supports the DOCSCLIENT_CONFIG env var override.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from docsclient.config.models import DocsClientConfig
from docsclient.domain.errors import ConfigError

CONFIG_FILENAME = "docsclient.toml"
CONFIG_ENV_VAR = "DOCSCLIENT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for docsclient.toml.

    Returns the path to the config file, or None if not found.
    Checks DOCSCLIENT_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> DocsClientConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default DocsClientConfig if no file is found.

    Raises:
        ConfigError: If the file is not valid TOML or fails validation.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return DocsClientConfig()

    try:
        return DocsClientConfig.model_validate(read_toml(path))
    except ValidationError as exc:
        raise ConfigError(path, exc) from exc


def read_toml(path: Path) -> dict[str, Any]:
    """Decode a TOML file.

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(path, exc) from exc
