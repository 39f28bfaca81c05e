"""Custom exceptions for gridedit."""

from __future__ import annotations


class GridEditError(Exception):
    """Base exception for gridedit operations."""


class InvalidPathError(GridEditError):
    """Path lies outside the managed content root."""


class NodeNotFoundError(GridEditError):
    """Parent directory or target node does not exist."""


class MalformedFrontMatterError(GridEditError):
    """Front-matter block cannot be parsed."""


class RenumberConflictError(GridEditError):
    """A planned shift cannot be carried out; nothing was changed."""


class PartialRenumberError(GridEditError):
    """An I/O error interrupted a shift and left the sibling group half renumbered.

    Attributes:
        parent: Directory holding the sibling group.
        committed: Final directory names already written.
        pending: ``(staging name, intended final name)`` pairs not yet committed.
    """

    def __init__(
        self,
        message: str,
        *,
        parent: str,
        committed: list[str],
        pending: list[tuple[str, str]],
    ) -> None:
        super().__init__(message)
        self.parent = parent
        self.committed = committed
        self.pending = pending
