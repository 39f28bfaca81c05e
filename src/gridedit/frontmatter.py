"""Read and write the front-matter file of a node directory."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from gridedit.config import GRIDEDIT_INDEX_FILENAME, GRIDEDIT_MISSING_WEIGHT
from gridedit.exceptions import MalformedFrontMatterError

_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<head>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.MULTILINE | re.DOTALL,
)


@dataclass
class NodeDocument:
    """Parsed contents of a node's front-matter file.

    Attributes:
        fields: Front-matter mapping, in file order.
        body: Everything after the closing ``---`` line.
        has_front_matter: False when the file was missing or had no front-matter block.
    """

    fields: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    has_front_matter: bool = False

    def weight(self, missing: int = GRIDEDIT_MISSING_WEIGHT) -> int:
        return coerce_weight(self.fields.get("weight"), missing)

    @property
    def title(self) -> str:
        value = self.fields.get("title")
        return "" if value is None else str(value)


def coerce_weight(value: Any, missing: int = GRIDEDIT_MISSING_WEIGHT) -> int:
    """Interpret a front-matter weight, falling back to ``missing`` when unusable."""
    if isinstance(value, bool) or value is None:
        return missing
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if re.fullmatch(r"[+-]?\d+", text):
            return int(text)
    return missing


def split_front_matter(text: str) -> tuple[str | None, str, str]:
    """Split file text into ``(raw block, YAML head, body)``.

    The raw block is the exact ``---``-delimited prefix, or None when the text
    does not start with one (in which case the whole text is the body).
    """
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        return None, "", text
    return match.group(0), match.group("head"), text[match.end():]


def parse_front_matter(text: str, *, source: Path | None = None) -> NodeDocument:
    raw, head, body = split_front_matter(text)
    if raw is None:
        return NodeDocument(fields={}, body=body, has_front_matter=False)
    try:
        data = yaml.safe_load(head) if head.strip() else {}
    except yaml.YAMLError as exc:
        raise MalformedFrontMatterError(f"Unparsable front matter in {source or 'document'}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedFrontMatterError(f"Front matter in {source or 'document'} is not a mapping")
    return NodeDocument(fields=data, body=body, has_front_matter=True)


def render_document(document: NodeDocument) -> str:
    dumped = yaml.safe_dump(document.fields, sort_keys=False, allow_unicode=True).rstrip()
    if not document.fields:
        dumped = ""
    head = f"{dumped}\n" if dumped else ""
    return f"---\n{head}---\n{document.body}"


def index_path(node_dir: Path, index_filename: str = GRIDEDIT_INDEX_FILENAME) -> Path:
    return node_dir / index_filename


def read_node(node_dir: Path, index_filename: str = GRIDEDIT_INDEX_FILENAME) -> NodeDocument:
    """Read the front-matter file of ``node_dir``.

    A directory without the file reads as an empty document, so its weight
    falls back to the missing-weight sentinel.
    """
    path = index_path(node_dir, index_filename)
    if not path.is_file():
        return NodeDocument()
    return parse_front_matter(path.read_text(encoding="utf-8"), source=path)


def write_node(
    node_dir: Path,
    document: NodeDocument,
    index_filename: str = GRIDEDIT_INDEX_FILENAME,
) -> None:
    index_path(node_dir, index_filename).write_text(render_document(document), encoding="utf-8")


def update_node(
    node_dir: Path,
    updates: dict[str, Any],
    *,
    body: str | None = None,
    index_filename: str = GRIDEDIT_INDEX_FILENAME,
) -> NodeDocument:
    """Merge ``updates`` into the node's front matter, optionally replacing the body.

    Keys already present keep their place in the file; new keys are appended.
    """
    document = read_node(node_dir, index_filename)
    document.fields.update(updates)
    if body is not None:
        document.body = body
    write_node(node_dir, document, index_filename)
    return document
