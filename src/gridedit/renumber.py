"""Two-phase renumbering of a sibling group.

Directory names double as storage keys, so renaming ``cell2`` straight to
``cell3`` collides with a ``cell3`` that has not moved yet. Every shift is
therefore carried out in two phases:

1. stage: each affected sibling is renamed to a unique staging name
   (``.<kind>-stage-<token>-<n>``) that can never clash with a real node name;
2. commit: each staged sibling gets its new weight, title and cross-reference
   headings written, then is renamed to its final name.

All final states are computed and validated before the first rename. Nothing
is rolled back after that point: an I/O error during stage or commit is
logged with the exact partial state and raised as ``PartialRenumberError``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, NoReturn

from gridedit.config import GRIDEDIT_INDEX_FILENAME
from gridedit.exceptions import PartialRenumberError, RenumberConflictError
from gridedit.frontmatter import NodeDocument, read_node, write_node
from gridedit.fs_utils import is_writable_dir, list_child_dirs, rename_node
from gridedit.headings import rewrite_heading
from gridedit.labels import node_name, node_title, parse_ordinal
from gridedit.schemas import NodeKind, ShiftRecord
from gridedit.siblings import Node, SiblingGroup
from gridedit.utils.logging_config import get_logger

logger = get_logger(__name__)

STAGING_MARKER = "-stage-"


@dataclass
class ChildRewrite:
    """A cell below a moving row whose heading row component must change."""

    name: str
    document: NodeDocument


@dataclass
class PlannedMove:
    """Final state computed for one sibling before anything is touched."""

    node: Node
    position: int
    final_name: str
    weight: int
    title: str
    body: str
    children: list[ChildRewrite] = field(default_factory=list)
    staging_name: str | None = None


@dataclass
class RenumberPlan:
    group: SiblingGroup
    moves: list[PlannedMove]
    final_positions: dict[int, int]
    reserved: list[int] = field(default_factory=list)

    @property
    def parent(self) -> Path:
        return self.group.parent


def shifted_position(position: int, change_at: int, delta: int) -> int:
    """Position a sibling moves to when everything from ``change_at`` shifts by ``delta``."""
    return position + delta if position >= change_at else position


def staging_name(kind: NodeKind, token: str, counter: int) -> str:
    return f".{kind.value}{STAGING_MARKER}{token}-{counter}"


def is_staging_name(name: str) -> bool:
    return name.startswith(".") and STAGING_MARKER in name


def plan_renumber(
    group: SiblingGroup,
    change_at: int,
    delta: int,
    *,
    current_positions: dict[int, int] | None = None,
    reserved: Iterable[int] = (),
    row_number: int | None = None,
    index_filename: str = GRIDEDIT_INDEX_FILENAME,
) -> RenumberPlan:
    """Compute the final state of every sibling after a shift.

    Args:
        group: The loaded sibling group, in weight order.
        change_at: First position that moves.
        delta: +1 to open a slot, -1 to close one.
        current_positions: Position of each node_id before the shift. Defaults
            to the node's index in weight order; delete passes positions that
            leave a hole where the removed sibling was.
        reserved: Final positions kept free for nodes the caller will create.
        row_number: For a cell group, the row ordinal to write into headings.
        index_filename: Name of the front-matter file in each node directory.

    Returns:
        The plan. Siblings already in their final state are left out of
        ``moves`` and are not touched when the plan is applied.
    """
    if delta not in (1, -1):
        raise ValueError(f"delta must be +1 or -1, got {delta}")

    before = current_positions or group.positions()
    final_positions: dict[int, int] = {}
    moves: list[PlannedMove] = []

    for node in group.nodes:
        position = shifted_position(before[node.node_id], change_at, delta)
        final_positions[node.node_id] = position
        move = _plan_move(node, position, group.kind, row_number, index_filename)
        if move is not None:
            moves.append(move)

    plan = RenumberPlan(
        group=group,
        moves=moves,
        final_positions=final_positions,
        reserved=list(reserved),
    )
    validate_plan(plan)
    return plan


def _plan_move(
    node: Node,
    position: int,
    kind: NodeKind,
    row_number: int | None,
    index_filename: str,
) -> PlannedMove | None:
    final_name = node_name(kind, position)
    title = node_title(kind, position)
    body = node.document.body
    if kind is NodeKind.CELL:
        body = rewrite_heading(body, row=row_number, column=position)

    children: list[ChildRewrite] = []
    if kind is NodeKind.ROW:
        children = _plan_child_headings(node.path, position, index_filename)

    unchanged = (
        node.name == final_name
        and node.document.fields.get("weight") == position
        and node.title == title
        and body == node.document.body
        and not children
    )
    if unchanged:
        return None
    return PlannedMove(
        node=node,
        position=position,
        final_name=final_name,
        weight=position,
        title=title,
        body=body,
        children=children,
    )


def _plan_child_headings(row_dir: Path, row_position: int, index_filename: str) -> list[ChildRewrite]:
    rewrites: list[ChildRewrite] = []
    for child in list_child_dirs(row_dir):
        if parse_ordinal(child.name, NodeKind.CELL) is None:
            continue
        document = read_node(child, index_filename)
        body = rewrite_heading(document.body, row=row_position)
        if body != document.body:
            document.body = body
            rewrites.append(ChildRewrite(name=child.name, document=document))
    return rewrites


def validate_plan(plan: RenumberPlan) -> None:
    """Check that a plan can be applied without clobbering anything.

    Raises:
        RenumberConflictError: If two siblings or a reserved slot share a final
            name, a final name is held by an entry outside the group, or the
            parent directory is not writable.
    """
    group = plan.group
    claimed: dict[str, str] = {}

    for node in group.nodes:
        final = node_name(group.kind, plan.final_positions[node.node_id])
        if final in claimed:
            raise RenumberConflictError(
                f"{node.name} and {claimed[final]} would both become {final} in {group.parent}"
            )
        claimed[final] = node.name

    for position in plan.reserved:
        final = node_name(group.kind, position)
        if final in claimed:
            raise RenumberConflictError(f"Reserved slot {final} is claimed by {claimed[final]} in {group.parent}")
        claimed[final] = "<new>"

    for final in claimed:
        if final in group.foreign_names:
            raise RenumberConflictError(f"{final} in {group.parent} is occupied by an entry outside the group")

    if plan.moves and not is_writable_dir(group.parent):
        raise RenumberConflictError(f"{group.parent} is not writable")


def apply_plan(plan: RenumberPlan, *, index_filename: str = GRIDEDIT_INDEX_FILENAME) -> list[ShiftRecord]:
    """Stage then commit every planned move.

    Raises:
        PartialRenumberError: If any rename or write fails; the error and the
            log record name the siblings already committed and those still
            sitting at staging names.
    """
    parent = plan.parent
    token = uuid.uuid4().hex[:8]
    staged: list[PlannedMove] = []

    for counter, move in enumerate(plan.moves, start=1):
        name = staging_name(plan.group.kind, token, counter)
        try:
            rename_node(move.node.path, parent / name)
        except OSError as exc:
            _raise_partial(plan, exc, committed=[], staged=staged, phase="stage")
        move.staging_name = name
        staged.append(move)

    committed: list[str] = []
    records: list[ShiftRecord] = []
    for index, move in enumerate(staged):
        staged_dir = parent / move.staging_name
        try:
            _commit_move(move, staged_dir, index_filename)
            rename_node(staged_dir, parent / move.final_name)
        except OSError as exc:
            _raise_partial(plan, exc, committed=committed, staged=staged[index:], phase="commit")
        committed.append(move.final_name)
        records.append(
            ShiftRecord(
                old_name=move.node.name,
                new_name=move.final_name,
                weight=move.weight,
                title=move.title,
            )
        )
        logger.debug(
            "Committed sibling",
            extra={"parent": str(parent), "old_name": move.node.name, "new_name": move.final_name},
        )

    if records:
        logger.info(
            "Renumbered sibling group",
            extra={"parent": str(parent), "kind": plan.group.kind.value, "moved": len(records)},
        )
    return records


def _commit_move(move: PlannedMove, staged_dir: Path, index_filename: str) -> None:
    document = move.node.document
    document.fields["weight"] = move.weight
    document.fields["title"] = move.title
    document.fields.setdefault("type", move.node.kind.value)
    document.body = move.body
    write_node(staged_dir, document, index_filename)
    for child in move.children:
        write_node(staged_dir / child.name, child.document, index_filename)


def _raise_partial(
    plan: RenumberPlan,
    exc: OSError,
    *,
    committed: list[str],
    staged: list[PlannedMove],
    phase: str,
) -> NoReturn:
    pending = [(move.staging_name or move.node.name, move.final_name) for move in staged]
    logger.error(
        "Renumber interrupted; sibling group left partially renumbered",
        extra={
            "parent": str(plan.parent),
            "phase": phase,
            "committed": committed,
            "pending": pending,
            "error": str(exc),
        },
    )
    raise PartialRenumberError(
        f"Renumbering {plan.parent} failed during {phase}: {exc}. "
        f"Committed: {committed or 'none'}; still staged: {pending or 'none'}",
        parent=str(plan.parent),
        committed=committed,
        pending=pending,
    ) from exc


def renumber(
    group: SiblingGroup,
    change_at: int,
    delta: int,
    *,
    current_positions: dict[int, int] | None = None,
    reserved: Iterable[int] = (),
    row_number: int | None = None,
    index_filename: str = GRIDEDIT_INDEX_FILENAME,
) -> list[ShiftRecord]:
    """Shift every sibling at position >= ``change_at`` by ``delta`` and persist it."""
    plan = plan_renumber(
        group,
        change_at,
        delta,
        current_positions=current_positions,
        reserved=reserved,
        row_number=row_number,
        index_filename=index_filename,
    )
    return apply_plan(plan, index_filename=index_filename)
