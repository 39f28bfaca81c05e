"""Report sibling groups that break the numbering invariants.

After a ``PartialRenumberError`` the affected group needs manual inspection;
``audit_group`` lists exactly what is out of place.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gridedit.config import GRIDEDIT_INDEX_FILENAME, GRIDEDIT_MISSING_WEIGHT
from gridedit.fs_utils import list_child_dirs
from gridedit.headings import find_headings
from gridedit.labels import node_name, node_title, parse_ordinal
from gridedit.renumber import is_staging_name
from gridedit.schemas import NodeKind
from gridedit.siblings import load_group


@dataclass(frozen=True)
class AuditIssue:
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


def audit_group(
    parent: Path,
    kind: NodeKind,
    *,
    index_filename: str = GRIDEDIT_INDEX_FILENAME,
    missing_weight: int = GRIDEDIT_MISSING_WEIGHT,
    row_number: int | None = None,
) -> list[AuditIssue]:
    """Check one sibling group.

    Checks that ordinals are exactly 1..N, that weight equals position, that
    titles match position, that cell headings carry the right column (and
    ``row_number`` when given), and that no staging directories were left behind.
    """
    issues: list[AuditIssue] = []
    group = load_group(parent, kind, index_filename=index_filename, missing_weight=missing_weight)

    for name in sorted(group.foreign_names):
        if is_staging_name(name):
            issues.append(AuditIssue(parent / name, "leftover staging directory"))

    ordinals = sorted(node.ordinal for node in group.nodes)
    expected = list(range(1, len(group.nodes) + 1))
    if ordinals != expected:
        issues.append(AuditIssue(parent, f"ordinals {ordinals} are not {expected}"))

    for position, node in enumerate(group.nodes, start=1):
        if node.name != node_name(kind, position):
            issues.append(AuditIssue(node.path, f"at position {position} but named {node.name}"))
        if node.weight != position:
            issues.append(AuditIssue(node.path, f"weight {node.weight} != position {position}"))
        title = node_title(kind, position)
        if node.title != title:
            issues.append(AuditIssue(node.path, f"title {node.title!r} != {title!r}"))
        if kind is NodeKind.CELL:
            for row, column in find_headings(node.document.body):
                expected_row = row_number if row_number is not None else row
                if column != position or row != expected_row:
                    issues.append(
                        AuditIssue(node.path, f"heading R{row}C{column} out of sync with R{expected_row}C{position}")
                    )
    return issues


def audit_tab(
    tab_dir: Path,
    *,
    index_filename: str = GRIDEDIT_INDEX_FILENAME,
    missing_weight: int = GRIDEDIT_MISSING_WEIGHT,
) -> list[AuditIssue]:
    """Check the row group of a tab and the cell group of every row in it."""
    issues = audit_group(tab_dir, NodeKind.ROW, index_filename=index_filename, missing_weight=missing_weight)
    for row_dir in list_child_dirs(tab_dir):
        row_number = parse_ordinal(row_dir.name, NodeKind.ROW)
        if row_number is None:
            continue
        issues.extend(
            audit_group(
                row_dir,
                NodeKind.CELL,
                index_filename=index_filename,
                missing_weight=missing_weight,
                row_number=row_number,
            )
        )
    return issues


def find_tabs(root: Path) -> list[Path]:
    """Find every ``tab<n>`` directory below ``root``."""
    return sorted(
        path for path in root.rglob("tab*") if path.is_dir() and parse_ordinal(path.name, NodeKind.TAB) is not None
    )
