"""References: lazy handles on paths in the document tree.

References may import from domain, entities, infrastructure, and config.
They must never import from the client facade.
"""

from docsclient.references._base import ReferenceContext
from docsclient.references.directory import DirectoryReference
from docsclient.references.md_file import MdFileReference
from docsclient.references.relation import RelationReference
from docsclient.references.unknown_file import UnknownFileReference

__all__ = [
    "DirectoryReference",
    "MdFileReference",
    "ReferenceContext",
    "RelationReference",
    "UnknownFileReference",
]
