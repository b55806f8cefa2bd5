"""Error taxonomy for the document model.

Two families live here:

- Exceptions raised while *constructing* value objects. A value object
  never exists in an invalid state, so the constructor fails immediately.
- Failure *values* returned by file-system operations (see
  :mod:`docsclient.infrastructure.filesystem`). Readers and writers never
  raise for missing paths or I/O problems; they hand back one of these
  frozen models and callers check before using the result.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Construction-time exceptions
# ---------------------------------------------------------------------------


class DocsClientError(Exception):
    """Base class for every exception raised by docsclient."""


class InvalidShape(DocsClientError, ValueError):
    """Constructor input failed structural or type validation."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class InvalidFieldType(InvalidShape):
    """A raw field tag is outside the closed set of field types."""

    def __init__(self, tag: object) -> None:
        super().__init__(f"Invalid field type: {tag!r}")
        self.tag = tag


class UnknownFieldType(DocsClientError, ValueError):
    """The field value factory was asked to dispatch on an unknown tag."""

    def __init__(self, tag: object) -> None:
        super().__init__(f"Unknown field type: {tag!r}")
        self.tag = tag


class MissingRequiredField(DocsClientError, KeyError):
    """The schema marks a key required but the data omits it."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f'Required field "{self.key}" is missing'


class SchemaFieldNotFound(DocsClientError, KeyError):
    """A schema lookup was made for a key the schema does not model."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f'Field "{self.key}" does not exist in schema'


class ConfigError(DocsClientError):
    """A docsclient.toml file exists but cannot be parsed or validated."""

    def __init__(self, path: object, reason: object) -> None:
        super().__init__(f"Invalid config in {path}: {reason}")
        self.path = path


# ---------------------------------------------------------------------------
# File-system failure values
# ---------------------------------------------------------------------------


class FileSystemError(BaseModel):
    """Structured failure returned (never raised) by a file-system backend."""

    model_config = {"frozen": True}

    code: str
    message: str
    path: str
    detail: dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class NotFound(FileSystemError):
    """The requested path is absent at read time."""

    code: str = "not_found"

    @classmethod
    def at(cls, path: str, what: str = "File") -> NotFound:
        return cls(path=path, message=f"{what} not found: {path}")


class WriteFailure(FileSystemError):
    """Backend-level I/O problem: permission, disk full, remote error."""

    code: str = "write_failure"

    @classmethod
    def at(cls, path: str, reason: object) -> WriteFailure:
        return cls(path=path, message=f"Failed to write {path}: {reason}")


class InvalidMetaFile(FileSystemError):
    """A directory meta file exists but is not a JSON object."""

    code: str = "invalid_meta"

    @classmethod
    def at(cls, path: str, reason: object) -> InvalidMetaFile:
        return cls(path=path, message=f"Invalid directory meta file {path}: {reason}")
