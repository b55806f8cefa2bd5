"""Document tree nodes.

A tree is a list of nodes, one per visible child of a directory. File nodes
are leaves; directory nodes carry their own children. Both serialize to
plain dicts tagged with ``type`` so a tree can be sent to a navigation UI
and rebuilt from JSON.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from docsclient.domain.errors import InvalidShape

DEFAULT_FILE_ICON = "📄"


class TreeFileNode(BaseModel):
    model_config = {"frozen": True}

    type: Literal["file"] = "file"
    name: str
    path: str
    icon: str = DEFAULT_FILE_ICON
    title: str

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class TreeDirectoryNode(BaseModel):
    """A directory; ``title`` and ``icon`` come from its index file when present."""

    model_config = {"frozen": True}

    type: Literal["directory"] = "directory"
    name: str
    path: str
    icon: str
    title: str
    children: tuple[TreeNode, ...] = ()

    @property
    def file_count(self) -> int:
        """Files anywhere below this directory."""
        return sum(
            child.file_count if isinstance(child, TreeDirectoryNode) else 1
            for child in self.children
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


TreeNode = Annotated[TreeFileNode | TreeDirectoryNode, Field(discriminator="type")]

TreeDirectoryNode.model_rebuild()

_tree_adapter: TypeAdapter[list[TreeNode]] = TypeAdapter(list[TreeNode])


def tree_from_records(records: list[dict[str, Any]]) -> list[TreeFileNode | TreeDirectoryNode]:
    """Rebuild a tree from :func:`tree_to_records` output.

    Raises:
        InvalidShape: If a record has an unknown ``type`` or misses a field.
    """
    try:
        return _tree_adapter.validate_python(records)
    except ValidationError as exc:
        msg = f"Invalid tree record: {exc}"
        raise InvalidShape(msg) from exc


def tree_to_records(nodes: list[TreeFileNode | TreeDirectoryNode]) -> list[dict[str, Any]]:
    return [node.to_dict() for node in nodes]
