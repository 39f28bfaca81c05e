"""Cell body handling: the ``{{< cell >}}`` shortcode wrapper and save-cell."""

from __future__ import annotations

from pathlib import Path

from gridedit.exceptions import MalformedFrontMatterError, NodeNotFoundError
from gridedit.frontmatter import split_front_matter
from gridedit.locks import group_lock
from gridedit.schemas import SaveResult
from gridedit.utils.logging_config import get_logger

logger = get_logger(__name__)

CELL_OPEN = "{{< cell >}}"
CELL_CLOSE = "{{< /cell >}}"


def wrap_cell_body(content: str) -> str:
    """Wrap Markdown in the cell shortcode, in the layout the site templates expect."""
    return f"\n{CELL_OPEN}\n\n{content}\n\n{CELL_CLOSE}\n"


def replace_cell_body(text: str, content: str) -> str:
    """Return ``text`` with its body replaced and its front-matter block kept verbatim.

    Raises:
        MalformedFrontMatterError: If ``text`` does not start with a front-matter block.
    """
    raw, _, _ = split_front_matter(text)
    if raw is None:
        raise MalformedFrontMatterError("Invalid markdown file format")
    if not raw.endswith("\n"):
        raw += "\n"
    return raw + wrap_cell_body(content)


def save_cell_content(file_path: Path, content: str) -> SaveResult:
    """Overwrite the body of a cell's front-matter file with editor content.

    Args:
        file_path: The cell's ``_index.md`` (already validated against the content root).
        content: Markdown produced by the browser editor.

    Raises:
        NodeNotFoundError: If the file does not exist.
        MalformedFrontMatterError: If the file has no front-matter block.
    """
    row_dir = file_path.parent.parent
    with group_lock(row_dir.parent, row_dir):
        if not file_path.is_file():
            raise NodeNotFoundError(f"File not found: {file_path}")
        text = file_path.read_text(encoding="utf-8")
        file_path.write_text(replace_cell_body(text, content), encoding="utf-8")

    logger.info("Saved cell content", extra={"path": str(file_path), "chars": len(content)})
    return SaveResult(path=file_path)
