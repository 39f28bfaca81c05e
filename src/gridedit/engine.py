"""Insert and delete cells and rows while keeping sibling groups numbered.

Every operation follows the same shape: lock the sibling group, load it in
weight order, work out the gap to open or close from weights alone, plan and
validate the shift, then create or remove the node and apply the shift with
the two-phase protocol in ``gridedit.renumber``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

from gridedit.cells import wrap_cell_body
from gridedit.config import (
    GRIDEDIT_DEFAULT_ROW_CELLS,
    GRIDEDIT_INDEX_FILENAME,
    GRIDEDIT_MISSING_WEIGHT,
)
from gridedit.exceptions import InvalidPathError, NodeNotFoundError, PartialRenumberError
from gridedit.frontmatter import NodeDocument, write_node
from gridedit.fs_utils import make_node_dir, node_exists, remove_node
from gridedit.headings import format_heading
from gridedit.labels import column_label, node_name, parse_ordinal, row_title
from gridedit.locks import group_lock
from gridedit.renumber import apply_plan, plan_renumber
from gridedit.schemas import DeleteResult, InsertResult, NodeKind, ShiftRecord
from gridedit.siblings import Node, SiblingGroup, load_group
from gridedit.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class EngineOptions:
    """Options shared by the engine operations.

    Attributes:
        index_filename: Front-matter file inside each node directory.
        default_row_cells: Number of empty cells created with a new row.
        missing_weight: Weight assumed for nodes without a usable weight.
    """

    index_filename: str = GRIDEDIT_INDEX_FILENAME
    default_row_cells: int = GRIDEDIT_DEFAULT_ROW_CELLS
    missing_weight: int = GRIDEDIT_MISSING_WEIGHT


def insert_cell(cell_path: Path, after_weight: int, *, options: EngineOptions | None = None) -> InsertResult:
    """Insert a new cell right after the cell carrying ``after_weight``.

    Args:
        cell_path: Any cell path inside the target row; only its parent is used.
        after_weight: Weight of the cell the new one follows (0 inserts first).
        options: Engine options. Uses defaults if None.

    Returns:
        The created cell and the siblings shifted to make room for it.

    Raises:
        NodeNotFoundError: If the row directory does not exist.
        InvalidPathError: If the parent is not a ``row<n>`` directory.
        RenumberConflictError: If the shift cannot be planned safely.
        PartialRenumberError: If an I/O error interrupts the shift.
    """
    opts = options or EngineOptions()
    row_dir = Path(cell_path).parent
    row_number = _require_ordinal(row_dir, NodeKind.ROW)

    with group_lock(row_dir.parent, row_dir):
        group = _load(row_dir, NodeKind.CELL, opts)
        new_weight = after_weight + 1
        position = group.count_below(new_weight) + 1
        if position != new_weight:
            logger.warning(
                "Cell weights out of step with positions; storing position as weight",
                extra={"row": str(row_dir), "requested_weight": new_weight, "position": position},
            )

        plan = plan_renumber(
            group,
            position,
            1,
            reserved=[position],
            row_number=row_number,
            index_filename=opts.index_filename,
        )
        shifted = apply_plan(plan, index_filename=opts.index_filename)

        name = node_name(NodeKind.CELL, position)
        cell_dir = row_dir / name
        title = column_label(position)
        try:
            _create_cell(cell_dir, position, row_number, opts.index_filename)
        except OSError as exc:
            _raise_after_shift(row_dir, name, shifted, exc)

    logger.info(
        "Inserted cell",
        extra={"row": str(row_dir), "cell": name, "position": position, "shifted": len(shifted)},
    )
    return InsertResult(
        kind=NodeKind.CELL,
        name=name,
        path=cell_dir,
        position=position,
        weight=position,
        title=title,
        shifted=shifted,
    )


def delete_cell(cell_path: Path, weight: int, *, options: EngineOptions | None = None) -> DeleteResult:
    """Delete a cell and close the gap it leaves.

    The caller-supplied ``weight`` decides where the gap is: the gap position
    is one more than the number of remaining cells with a smaller weight, and
    every remaining cell after it moves down one position. A stored weight
    that differs from ``weight`` is logged but does not change that.

    Raises:
        NodeNotFoundError: If the row or the cell does not exist.
        RenumberConflictError: If the shift cannot be planned safely.
        PartialRenumberError: If an I/O error interrupts the shift.
    """
    opts = options or EngineOptions()
    cell_path = Path(cell_path)
    row_dir = cell_path.parent
    row_number = _require_ordinal(row_dir, NodeKind.ROW)

    with group_lock(row_dir.parent, row_dir):
        group = _load(row_dir, NodeKind.CELL, opts)
        target = _require_member(group, cell_path)
        if target.weight != weight:
            logger.warning(
                "Stale cell weight from caller; using it to locate the gap",
                extra={"cell": str(cell_path), "supplied_weight": weight, "stored_weight": target.weight},
            )

        remaining = group.without(target)
        gap = remaining.count_below(weight) + 1
        shifted = _close_gap(target, remaining, gap, row_number, opts)

    logger.info(
        "Deleted cell",
        extra={"row": str(row_dir), "cell": target.name, "position": gap, "shifted": len(shifted)},
    )
    return DeleteResult(kind=NodeKind.CELL, removed=target.path, position=gap, shifted=shifted)


def insert_row(row_path: Path, after_weight: int, *, options: EngineOptions | None = None) -> InsertResult:
    """Insert a new row after the row carrying ``after_weight``.

    The new row gets ``options.default_row_cells`` cells (A, B, C, ...), each
    with a ``## R<row>C<col>`` heading. Rows after it move down one position
    and the headings of their cells follow.

    Raises:
        NodeNotFoundError: If the tab directory does not exist.
        InvalidPathError: If ``row_path`` is not a ``row<n>`` directory.
        RenumberConflictError: If the shift cannot be planned safely.
        PartialRenumberError: If an I/O error interrupts the shift.
    """
    opts = options or EngineOptions()
    row_path = Path(row_path)
    tab_dir = row_path.parent
    reference = _require_ordinal(row_path, NodeKind.ROW)

    with group_lock(tab_dir):
        group = _load(tab_dir, NodeKind.ROW, opts)
        new_weight = after_weight + 1
        position = group.count_below(new_weight) + 1
        if reference + 1 != position:
            logger.warning(
                "Row ordinal disagrees with weight order; using weight",
                extra={"row": str(row_path), "ordinal_position": reference + 1, "weight_position": position},
            )

        plan = plan_renumber(group, position, 1, reserved=[position], index_filename=opts.index_filename)
        shifted = apply_plan(plan, index_filename=opts.index_filename)

        name = node_name(NodeKind.ROW, position)
        new_row = tab_dir / name
        try:
            children = _create_row(new_row, position, opts)
        except OSError as exc:
            _raise_after_shift(tab_dir, name, shifted, exc)

    logger.info(
        "Inserted row",
        extra={"tab": str(tab_dir), "row": name, "position": position, "shifted": len(shifted)},
    )
    return InsertResult(
        kind=NodeKind.ROW,
        name=name,
        path=new_row,
        position=position,
        weight=position,
        title=row_title(position),
        shifted=shifted,
        children=children,
    )


def delete_row(row_path: Path, *, options: EngineOptions | None = None) -> DeleteResult:
    """Delete a row with all of its cells and close the gap it leaves.

    The gap is the row's position in weight order. Rows after it move up one
    position and the headings of their cells follow.

    Raises:
        NodeNotFoundError: If the tab or the row does not exist.
        RenumberConflictError: If the shift cannot be planned safely.
        PartialRenumberError: If an I/O error interrupts the shift.
    """
    opts = options or EngineOptions()
    row_path = Path(row_path)
    tab_dir = row_path.parent

    with group_lock(tab_dir):
        group = _load(tab_dir, NodeKind.ROW, opts)
        target = _require_member(group, row_path)
        gap = group.positions()[target.node_id]
        shifted = _close_gap(target, group.without(target), gap, None, opts)

    logger.info(
        "Deleted row",
        extra={"tab": str(tab_dir), "row": target.name, "position": gap, "shifted": len(shifted)},
    )
    return DeleteResult(kind=NodeKind.ROW, removed=target.path, position=gap, shifted=shifted)


def _close_gap(
    target: Node,
    remaining: SiblingGroup,
    gap: int,
    row_number: int | None,
    opts: EngineOptions,
) -> list[ShiftRecord]:
    # Remaining siblings keep their pre-deletion positions around the hole at ``gap``.
    before = {
        node.node_id: index if index < gap else index + 1
        for index, node in enumerate(remaining.nodes, start=1)
    }
    plan = plan_renumber(
        remaining,
        gap + 1,
        -1,
        current_positions=before,
        row_number=row_number,
        index_filename=opts.index_filename,
    )
    remove_node(target.path)
    return apply_plan(plan, index_filename=opts.index_filename)


def _load(parent: Path, kind: NodeKind, opts: EngineOptions) -> SiblingGroup:
    if not node_exists(parent):
        raise NodeNotFoundError(f"Directory not found: {parent}")
    return load_group(
        parent,
        kind,
        index_filename=opts.index_filename,
        missing_weight=opts.missing_weight,
    )


def _require_member(group: SiblingGroup, path: Path) -> Node:
    if not node_exists(path):
        raise NodeNotFoundError(f"{group.kind.value.capitalize()} not found: {path}")
    node = group.find(path)
    if node is None:
        raise NodeNotFoundError(f"{path.name} is not a {group.kind.value} of {group.parent}")
    return node


def _require_ordinal(path: Path, kind: NodeKind) -> int:
    ordinal = parse_ordinal(path.name, kind)
    if ordinal is None:
        raise InvalidPathError(f"{path} is not a {kind.value} directory")
    return ordinal


def _create_cell(cell_dir: Path, position: int, row_number: int, index_filename: str) -> None:
    make_node_dir(cell_dir)
    document = NodeDocument(
        fields={"title": column_label(position), "weight": position, "type": NodeKind.CELL.value},
        body=wrap_cell_body(format_heading(row_number, position)),
        has_front_matter=True,
    )
    write_node(cell_dir, document, index_filename)


def _create_row(row_dir: Path, position: int, opts: EngineOptions) -> list[str]:
    make_node_dir(row_dir)
    document = NodeDocument(
        fields={"title": row_title(position), "weight": position, "type": NodeKind.ROW.value},
        has_front_matter=True,
    )
    write_node(row_dir, document, opts.index_filename)

    children: list[str] = []
    for column in range(1, opts.default_row_cells + 1):
        name = node_name(NodeKind.CELL, column)
        _create_cell(row_dir / name, column, position, opts.index_filename)
        children.append(name)
    return children


def _raise_after_shift(parent: Path, name: str, shifted: list[ShiftRecord], exc: OSError) -> NoReturn:
    committed = [record.new_name for record in shifted]
    logger.error(
        "Siblings shifted but the new node could not be created",
        extra={"parent": str(parent), "node": name, "committed": committed, "error": str(exc)},
    )
    raise PartialRenumberError(
        f"Shifted {len(committed)} sibling(s) in {parent} but could not create {name}: {exc}",
        parent=str(parent),
        committed=committed,
        pending=[],
    ) from exc
