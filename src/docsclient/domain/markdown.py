"""Front matter and markdown text utilities.

Pure string functions shared by :mod:`docsclient.domain.meta` and
:mod:`docsclient.domain.content`. A document is::

    ---
    <YAML mapping>
    ---

    # Title

    Description paragraph.

    Rest of the body...

The front matter block is optional; a file without the opening delimiter
is all body. Title is the first ``# `` heading of the body and description
is the first non-heading line after it. Nothing else of markdown is parsed.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor
from ruamel.yaml.error import YAMLError

from docsclient.domain.errors import InvalidShape

_FRONTMATTER_DELIMITER = "---"
_TITLE_RE = re.compile(r"^#\s+(.+)$")

# ---------------------------------------------------------------------------
# YAML parsers
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML emitter.

    A new instance per call avoids corrupted internal emitter state from
    propagating across operations (ruamel.yaml's YAML object is stateful
    and a failed dump can leave a shared instance in a broken state).
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


class _FrontMatterConstructor(SafeConstructor):
    """Safe constructor that leaves timestamp scalars as strings.

    ``date: 2024-01-01`` is a text value in front matter, not a
    :class:`datetime.date`.
    """

    def construct_yaml_timestamp(self, node, values=None):  # type: ignore[no-untyped-def]
        return self.construct_scalar(node)


_FrontMatterConstructor.add_constructor(
    "tag:yaml.org,2002:timestamp",
    _FrontMatterConstructor.construct_yaml_timestamp,
)


def _new_safe_yaml() -> YAML:
    """Create a fresh safe loader producing plain ``dict``/``list`` values."""
    y = YAML(typ="safe", pure=True)
    y.Constructor = _FrontMatterConstructor
    return y


def load_yaml_mapping(text: str) -> dict[str, Any]:
    """Load a YAML mapping, ``{}`` for blank input.

    Raises:
        InvalidShape: If the text is not valid YAML or not a mapping.
    """
    if not text.strip():
        return {}
    try:
        data = _new_safe_yaml().load(text)
    except YAMLError as exc:
        msg = f"Invalid front matter YAML: {exc}"
        raise InvalidShape(msg) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Front matter must be a mapping, got {type(data).__name__}"
        raise InvalidShape(msg)
    return {str(key): value for key, value in data.items()}


def dump_yaml_mapping(data: Mapping[str, Any]) -> str:
    """Dump a mapping as block-style YAML ending in a newline; ``""`` if empty."""
    if not data:
        return ""
    buf = StringIO()
    _new_yaml().dump(dict(data), buf)
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Front matter split
# ---------------------------------------------------------------------------


def _split(text: str) -> tuple[str, str] | None:
    """Return ``(yaml_block, body)`` or ``None`` when no block is present."""
    normalized = text.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return None

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return None

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    return yaml_block, body.lstrip("\n")


def extract_front_matter(text: str) -> str | None:
    """Raw YAML between the delimiters, or ``None`` without a block."""
    split = _split(text)
    if split is None:
        return None
    return split[0].strip()


def extract_body(text: str) -> str:
    """Text after the front matter block with leading blank lines removed.

    Title and description stay in place. Without a block the whole text is
    the body.
    """
    split = _split(text)
    if split is None:
        return text
    return split[1]


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter and body from markdown content.

    Handles both ``\\n`` and ``\\r\\n`` line endings.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. If no valid front matter
        delimiters are found, returns ``({}, content)``.
    """
    split = _split(content)
    if split is None:
        return {}, content
    yaml_block, body = split
    return load_yaml_mapping(yaml_block), body


def render_frontmatter(frontmatter: Mapping[str, Any], body: str) -> str:
    """Render a front matter mapping and body text into markdown.

    Keys keep their insertion order. An empty mapping emits no block.
    """
    yaml_text = dump_yaml_mapping(frontmatter)
    if not yaml_text:
        return body
    return f"{_FRONTMATTER_DELIMITER}\n{yaml_text}{_FRONTMATTER_DELIMITER}\n\n{body}"


# ---------------------------------------------------------------------------
# Title / description heuristics
# ---------------------------------------------------------------------------


def _title_index(lines: list[str]) -> int:
    for i, line in enumerate(lines):
        if _TITLE_RE.match(line):
            return i
    return -1


def _skip_blank(lines: list[str], start: int) -> int:
    index = start
    while index < len(lines) and not lines[index].strip():
        index += 1
    return index


def extract_title(text: str) -> str | None:
    """First ``# `` heading of the body, or ``None``."""
    lines = extract_body(text).split("\n")
    index = _title_index(lines)
    if index == -1:
        return None
    match = _TITLE_RE.match(lines[index])
    return match.group(1).strip() if match else None


def extract_description(text: str) -> str | None:
    """First non-blank, non-heading line after the title, or ``None``."""
    lines = extract_body(text).split("\n")
    title_idx = _title_index(lines)
    if title_idx == -1:
        return None
    desc_idx = _skip_blank(lines, title_idx + 1)
    if desc_idx < len(lines) and not lines[desc_idx].startswith("#"):
        return lines[desc_idx]
    return None


def update_title(body: str, title: str) -> str:
    """Replace the first heading of *body*, or prepend one."""
    lines = body.split("\n")
    title_idx = _title_index(lines)
    if title_idx == -1:
        return "\n".join([f"# {title}", "", *lines]) if body else f"# {title}"
    lines[title_idx] = f"# {title}"
    return "\n".join(lines)


def update_description(body: str, description: str, default_title: str) -> str:
    """Replace the description line of *body*, inserting it when absent.

    Without a heading a ``# default_title`` heading is created first.
    """
    lines = body.split("\n")
    title_idx = _title_index(lines)
    if title_idx == -1:
        return compose_markdown(default_title, description, body.strip())

    desc_idx = _skip_blank(lines, title_idx + 1)
    if desc_idx < len(lines) and lines[desc_idx] and not lines[desc_idx].startswith("#"):
        lines[desc_idx] = description
    else:
        lines[title_idx + 1 : title_idx + 1] = ["", description]
    return "\n".join(lines)


def compose_markdown(title: str, description: str, body: str) -> str:
    """Build ``# title``, blank line, description, blank line, body.

    Empty parts are skipped along with their separating blank line.
    """
    parts: list[str] = []
    if title:
        parts.append(f"# {title}")
    if description:
        if parts:
            parts.append("")
        parts.append(description)
    if body:
        if parts:
            parts.append("")
        parts.append(body)
    return "\n".join(parts)
