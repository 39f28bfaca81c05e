"""Filesystem helpers for node directories."""

from __future__ import annotations

import os
import shutil
from pathlib import Path


def node_exists(path: Path) -> bool:
    return path.is_dir()


def list_child_dirs(parent: Path) -> list[Path]:
    """List the immediate subdirectories of ``parent``, sorted by name.

    Args:
        parent: Directory to list.

    Returns:
        Child directory paths; files are skipped.

    Raises:
        FileNotFoundError: If ``parent`` does not exist.
    """
    return sorted((child for child in parent.iterdir() if child.is_dir()), key=lambda p: p.name)


def rename_node(source: Path, destination: Path) -> None:
    """Rename a node directory, refusing to replace an existing entry.

    ``os.rename`` silently replaces an empty destination directory on POSIX,
    so the destination is checked first.

    Raises:
        FileExistsError: If ``destination`` already exists.
        FileNotFoundError: If ``source`` does not exist.
    """
    if destination.exists():
        raise FileExistsError(f"Refusing to rename {source.name} onto existing {destination}")
    os.rename(source, destination)


def make_node_dir(path: Path) -> None:
    """Create a fresh node directory; the parent must already exist."""
    path.mkdir(parents=False, exist_ok=False)


def remove_node(path: Path) -> None:
    """Remove a node directory and everything below it."""
    shutil.rmtree(path)


def is_writable_dir(path: Path) -> bool:
    return os.access(path, os.W_OK | os.X_OK)

