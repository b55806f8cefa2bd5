"""Entities: value objects bound to a location in the document tree."""

from docsclient.entities.md import MdFileEntity
from docsclient.entities.path import FilePathValue
from docsclient.entities.unknown import UnknownFileEntity

__all__ = ["FilePathValue", "MdFileEntity", "UnknownFileEntity"]
