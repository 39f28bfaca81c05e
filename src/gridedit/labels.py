"""Names, labels and titles derived from a node's position."""

from __future__ import annotations

import re

from gridedit.schemas import NodeKind

_ORDINAL_RE = {kind: re.compile(rf"^{kind.value}(\d+)$") for kind in NodeKind}


def column_label(position: int) -> str:
    """Convert a 1-based column position to its bijective base-26 label.

    1 -> "A", 26 -> "Z", 27 -> "AA", 52 -> "AZ", 53 -> "BA". Positions below 1
    have no representation and fall back to "A".
    """
    letters = ""
    n = position
    while n > 0:
        n, remainder = divmod(n - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters or "A"


def row_title(position: int) -> str:
    return f"Row {position}"


def node_title(kind: NodeKind, position: int) -> str:
    """Title a node of ``kind`` carries at ``position``."""
    if kind is NodeKind.CELL:
        return column_label(position)
    return row_title(position)


def node_name(kind: NodeKind, ordinal: int) -> str:
    return f"{kind.value}{ordinal}"


def parse_ordinal(name: str, kind: NodeKind) -> int | None:
    """Return the ordinal encoded in ``name`` or None if it is not a ``kind`` node name."""
    match = _ORDINAL_RE[kind].match(name)
    if not match:
        return None
    return int(match.group(1))
