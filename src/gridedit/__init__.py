"""gridedit: keep a directory-backed content grid contiguously numbered."""

from gridedit.engine import EngineOptions, delete_cell, delete_row, insert_cell, insert_row
from gridedit.exceptions import (
    GridEditError,
    InvalidPathError,
    MalformedFrontMatterError,
    NodeNotFoundError,
    PartialRenumberError,
    RenumberConflictError,
)
from gridedit.labels import column_label
from gridedit.schemas import DeleteResult, InsertResult, NodeKind, SaveResult, ShiftRecord

__all__ = [
    "DeleteResult",
    "EngineOptions",
    "GridEditError",
    "InsertResult",
    "InvalidPathError",
    "MalformedFrontMatterError",
    "NodeKind",
    "NodeNotFoundError",
    "PartialRenumberError",
    "RenumberConflictError",
    "SaveResult",
    "ShiftRecord",
    "column_label",
    "delete_cell",
    "delete_row",
    "insert_cell",
    "insert_row",
]
