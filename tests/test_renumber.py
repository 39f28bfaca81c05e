"""Tests for two-phase renumbering."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from gridedit import fs_utils
from gridedit.exceptions import PartialRenumberError, RenumberConflictError
from gridedit.renumber import (
    apply_plan,
    is_staging_name,
    plan_renumber,
    renumber,
    shifted_position,
    staging_name,
)
from gridedit.schemas import NodeKind
from gridedit.siblings import load_group


class TestHelpers:
    """Tests for small renumber helpers."""

    def test_staging_name_is_hidden_and_recognised(self) -> None:
        name = staging_name(NodeKind.CELL, "abcd1234", 2)

        assert name == ".cell-stage-abcd1234-2"
        assert is_staging_name(name)
        assert not is_staging_name("cell2")
        assert not is_staging_name(".hidden")

    @pytest.mark.parametrize(
        ("position", "change_at", "delta", "expected"),
        [(1, 2, 1, 1), (2, 2, 1, 3), (5, 2, 1, 6), (3, 3, -1, 2), (2, 3, -1, 2)],
    )
    def test_shifted_position(self, position: int, change_at: int, delta: int, expected: int) -> None:
        assert shifted_position(position, change_at, delta) == expected


class TestPlanRenumber:
    """Tests for plan_renumber and its validation."""

    def test_rejects_other_deltas(self, row_dir: Path) -> None:
        group = load_group(row_dir, NodeKind.CELL)

        with pytest.raises(ValueError):
            plan_renumber(group, 1, 2)

    def test_leaves_nodes_before_change_out(self, row_dir: Path) -> None:
        group = load_group(row_dir, NodeKind.CELL)

        plan = plan_renumber(group, 2, 1, reserved=[2], row_number=1)

        assert [(move.node.name, move.final_name) for move in plan.moves] == [("cell2", "cell3"), ("cell3", "cell4")]
        assert [move.title for move in plan.moves] == ["C", "D"]
        assert "## R1C3" in plan.moves[0].body

    def test_nothing_to_do_for_consistent_group(self, row_dir: Path) -> None:
        group = load_group(row_dir, NodeKind.CELL)

        plan = plan_renumber(group, 10, 1, row_number=1)

        assert plan.moves == []

    def test_foreign_entry_on_final_name_conflicts(self, row_dir: Path, read_state) -> None:
        """A file squatting on a target name aborts before any rename."""
        (row_dir / "cell4").write_text("not a node")
        before = read_state(row_dir)
        group = load_group(row_dir, NodeKind.CELL)

        with pytest.raises(RenumberConflictError, match="cell4"):
            renumber(group, 2, 1, reserved=[2], row_number=1)

        assert read_state(row_dir) == before
        assert (row_dir / "cell4").read_text() == "not a node"

    def test_reserved_slot_already_claimed_conflicts(self, row_dir: Path) -> None:
        group = load_group(row_dir, NodeKind.CELL)

        with pytest.raises(RenumberConflictError, match="Reserved slot cell2"):
            plan_renumber(group, 3, 1, reserved=[2], row_number=1)

    def test_two_siblings_on_one_name_conflict(self, row_dir: Path) -> None:
        group = load_group(row_dir, NodeKind.CELL)
        first, second, third = group.nodes
        positions = {first.node_id: 1, second.node_id: 1, third.node_id: 3}

        with pytest.raises(RenumberConflictError, match="would both become cell1"):
            plan_renumber(group, 5, 1, current_positions=positions, row_number=1)


class TestApplyPlan:
    """Tests for staging and committing a plan."""

    def test_opens_slot_in_cell_group(self, row_dir: Path, read_state, read_body) -> None:
        group = load_group(row_dir, NodeKind.CELL)

        records = renumber(group, 2, 1, reserved=[2], row_number=1)

        assert read_state(row_dir) == [("cell1", 1, "A"), ("cell3", 3, "C"), ("cell4", 4, "D")]
        assert [(r.old_name, r.new_name, r.weight, r.title) for r in records] == [
            ("cell2", "cell3", 3, "C"),
            ("cell3", "cell4", 4, "D"),
        ]
        body = read_body(row_dir / "cell4")
        assert "## R1C4" in body
        assert "content of R1C3" in body
        assert not any(is_staging_name(entry.name) for entry in row_dir.iterdir())

    def test_row_shift_rewrites_cell_headings(self, tab_dir: Path, read_state, read_body) -> None:
        group = load_group(tab_dir, NodeKind.ROW)

        renumber(group, 2, 1, reserved=[2])

        assert read_state(tab_dir) == [("row1", 1, "Row 1"), ("row3", 3, "Row 3"), ("row4", 4, "Row 4")]
        assert "## R3C2" in read_body(tab_dir / "row3" / "cell2")
        assert "content of R2C2" in read_body(tab_dir / "row3" / "cell2")
        assert "## R4C1" in read_body(tab_dir / "row4" / "cell1")
        assert "## R1C1" in read_body(tab_dir / "row1" / "cell1")

    def test_keeps_unrelated_front_matter(self, row_dir: Path, make_node, read_fields) -> None:
        make_node(row_dir / "cell3", title="C", weight=3, kind="cell", draft=True, author="someone")
        group = load_group(row_dir, NodeKind.CELL)

        renumber(group, 3, 1, reserved=[3], row_number=1)

        assert read_fields(row_dir / "cell4") == {
            "title": "D",
            "weight": 4,
            "type": "cell",
            "draft": True,
            "author": "someone",
        }

    def test_failure_while_committing_reports_partial_state(self, row_dir: Path) -> None:
        group = load_group(row_dir, NodeKind.CELL)
        plan = plan_renumber(group, 2, 1, reserved=[2], row_number=1)
        calls = []

        def flaky_rename(source: Path, destination: Path) -> None:
            calls.append(destination.name)
            if len(calls) == 4:
                raise PermissionError("denied")
            fs_utils.rename_node(source, destination)

        with patch("gridedit.renumber.rename_node", side_effect=flaky_rename):
            with pytest.raises(PartialRenumberError) as exc_info:
                apply_plan(plan)

        error = exc_info.value
        assert error.parent == str(row_dir)
        assert error.committed == ["cell3"]
        assert len(error.pending) == 1
        staged_name, final_name = error.pending[0]
        assert final_name == "cell4"
        assert is_staging_name(staged_name)
        assert (row_dir / staged_name).is_dir()
        assert (row_dir / "cell3").is_dir()

    def test_failure_while_staging_reports_nothing_committed(self, row_dir: Path, read_state) -> None:
        before = read_state(row_dir)
        group = load_group(row_dir, NodeKind.CELL)
        plan = plan_renumber(group, 2, 1, reserved=[2], row_number=1)

        with patch("gridedit.renumber.rename_node", side_effect=OSError("disk full")):
            with pytest.raises(PartialRenumberError, match="during stage") as exc_info:
                apply_plan(plan)

        assert exc_info.value.committed == []
        assert exc_info.value.pending == []
        assert read_state(row_dir) == before
