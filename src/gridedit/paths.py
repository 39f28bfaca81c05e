"""Validate request paths against the managed content root."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from gridedit.config import GRIDEDIT_CONTENT_PREFIX, GRIDEDIT_INDEX_FILENAME, GRIDEDIT_SITE_ROOT
from gridedit.exceptions import InvalidPathError


def resolve_content_path(
    file_path: str,
    *,
    site_root: Path | None = None,
    prefix: str = GRIDEDIT_CONTENT_PREFIX,
) -> Path:
    """Resolve a site-relative path and make sure it stays inside the content root.

    Args:
        file_path: Path as sent by the browser, e.g. ``content/lab/exp/tab1/row1/cell2``.
        site_root: Directory holding the content tree. Defaults to ``GRIDEDIT_SITE_ROOT``.
        prefix: Allow-listed top-level directory.

    Returns:
        The absolute path.

    Raises:
        InvalidPathError: If the path is empty, absolute, does not start with
            the prefix, or escapes the content root after resolution.
    """
    root = (site_root or GRIDEDIT_SITE_ROOT).resolve()
    content_root = (root / prefix).resolve()

    cleaned = file_path.strip().replace("\\", "/")
    if not cleaned:
        raise InvalidPathError("Empty file path")
    relative = PurePosixPath(cleaned)
    if relative.is_absolute():
        raise InvalidPathError(f"Absolute paths are not allowed: {file_path!r}")
    if not cleaned.startswith(f"{prefix}/"):
        raise InvalidPathError(f"Invalid file path: {file_path!r}")

    resolved = (root / relative).resolve()
    if resolved == content_root or content_root not in resolved.parents:
        raise InvalidPathError(f"Path escapes the content root: {file_path!r}")
    return resolved


def node_dir_for(path: Path, index_filename: str = GRIDEDIT_INDEX_FILENAME) -> Path:
    """Return the node directory for a path that names either the directory or its index file."""
    if path.name == index_filename or path.suffix == ".md":
        return path.parent
    return path


def index_file_for(path: Path, index_filename: str = GRIDEDIT_INDEX_FILENAME) -> Path:
    """Return the front-matter file for a path that names either the directory or the file."""
    if path.suffix == ".md":
        return path
    return path / index_filename
