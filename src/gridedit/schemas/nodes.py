"""Node kinds of the content grid."""

from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    """Kind of a grid node; doubles as the directory-name prefix and ``type`` field."""

    TAB = "tab"
    ROW = "row"
    CELL = "cell"
