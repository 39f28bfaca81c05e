"""Result models returned by engine operations."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from gridedit.schemas.nodes import NodeKind


class ShiftRecord(BaseModel):
    """One sibling moved by a renumber pass."""

    old_name: str
    new_name: str
    weight: int
    title: str


class InsertResult(BaseModel):
    """Outcome of an insert operation.

    Attributes:
        kind: Kind of the created node.
        name: Directory name of the created node (e.g. ``cell3``).
        path: Absolute path of the created node directory.
        position: Position of the new node within its sibling group.
        weight: Weight stored in the new node's front matter.
        title: Title stored in the new node's front matter.
        shifted: Siblings renamed or rewritten to make room.
        children: Names of child nodes created alongside (default cells of a row).
    """

    kind: NodeKind
    name: str
    path: Path
    position: int
    weight: int
    title: str
    shifted: list[ShiftRecord] = Field(default_factory=list)
    children: list[str] = Field(default_factory=list)


class DeleteResult(BaseModel):
    """Outcome of a delete operation."""

    success: bool = True
    kind: NodeKind
    removed: Path
    position: int
    shifted: list[ShiftRecord] = Field(default_factory=list)


class SaveResult(BaseModel):
    """Outcome of saving a cell body."""

    success: bool = True
    path: Path
    message: str = "File saved successfully"
