"""Load a sibling group of node directories and order it by weight."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from pathlib import Path

from gridedit.config import GRIDEDIT_INDEX_FILENAME, GRIDEDIT_MISSING_WEIGHT
from gridedit.frontmatter import NodeDocument, read_node
from gridedit.fs_utils import list_child_dirs
from gridedit.labels import parse_ordinal
from gridedit.schemas import NodeKind

_node_ids = itertools.count(1)


@dataclass
class Node:
    """One member of a sibling group as loaded from disk.

    ``node_id`` is assigned at load time and stays fixed while the node's
    directory name changes during a renumber pass.
    """

    node_id: int
    kind: NodeKind
    path: Path
    ordinal: int
    weight: int
    document: NodeDocument

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def title(self) -> str:
        return self.document.title


@dataclass
class SiblingGroup:
    """Members of one parent directory, in ascending weight order.

    Ties in weight are broken by ordinal and then by directory name so the
    order is deterministic.
    """

    parent: Path
    kind: NodeKind
    nodes: list[Node] = field(default_factory=list)
    foreign_names: set[str] = field(default_factory=set)

    def __len__(self) -> int:
        return len(self.nodes)

    def positions(self) -> dict[int, int]:
        """Map node_id to its 1-based position in weight order."""
        return {node.node_id: index for index, node in enumerate(self.nodes, start=1)}

    def find(self, path: Path) -> Node | None:
        name = Path(path).name
        for node in self.nodes:
            if node.name == name:
                return node
        return None

    def count_below(self, weight: int, *, exclude: Node | None = None) -> int:
        """Count members whose weight is strictly smaller than ``weight``."""
        return sum(1 for node in self.nodes if node is not exclude and node.weight < weight)

    def without(self, node: Node) -> SiblingGroup:
        return SiblingGroup(
            parent=self.parent,
            kind=self.kind,
            nodes=[member for member in self.nodes if member is not node],
            foreign_names=set(self.foreign_names),
        )


def load_group(
    parent: Path,
    kind: NodeKind,
    *,
    index_filename: str = GRIDEDIT_INDEX_FILENAME,
    missing_weight: int = GRIDEDIT_MISSING_WEIGHT,
) -> SiblingGroup:
    """Read every ``<kind><n>`` child directory of ``parent`` with its front matter.

    Entries that are not member directories (files, other directories,
    leftover staging directories) are recorded in ``foreign_names`` so a
    renumber plan can refuse to rename onto them.

    Raises:
        FileNotFoundError: If ``parent`` does not exist.
        MalformedFrontMatterError: If a member's front matter cannot be parsed.
    """
    nodes: list[Node] = []
    member_names: set[str] = set()
    for child in list_child_dirs(parent):
        ordinal = parse_ordinal(child.name, kind)
        if ordinal is None:
            continue
        document = read_node(child, index_filename)
        nodes.append(
            Node(
                node_id=next(_node_ids),
                kind=kind,
                path=child,
                ordinal=ordinal,
                weight=document.weight(missing_weight),
                document=document,
            )
        )
        member_names.add(child.name)

    nodes.sort(key=lambda node: (node.weight, node.ordinal, node.name))
    foreign = {entry.name for entry in parent.iterdir() if entry.name not in member_names}
    return SiblingGroup(parent=parent, kind=kind, nodes=nodes, foreign_names=foreign)
