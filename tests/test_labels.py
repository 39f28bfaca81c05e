"""Tests for position-derived names and labels."""

from __future__ import annotations

import pytest

from gridedit.labels import column_label, node_name, node_title, parse_ordinal, row_title
from gridedit.schemas import NodeKind


@pytest.mark.parametrize(
    ("position", "label"),
    [
        (1, "A"),
        (2, "B"),
        (26, "Z"),
        (27, "AA"),
        (52, "AZ"),
        (53, "BA"),
        (702, "ZZ"),
        (703, "AAA"),
    ],
)
def test_column_label(position: int, label: str) -> None:
    assert column_label(position) == label


@pytest.mark.parametrize("position", [0, -1, -27])
def test_column_label_falls_back_to_a(position: int) -> None:
    assert column_label(position) == "A"


def test_row_title() -> None:
    assert row_title(4) == "Row 4"


def test_node_title_by_kind() -> None:
    assert node_title(NodeKind.CELL, 28) == "AB"
    assert node_title(NodeKind.ROW, 28) == "Row 28"


class TestOrdinals:
    """Tests for node_name and parse_ordinal."""

    def test_node_name(self) -> None:
        assert node_name(NodeKind.CELL, 3) == "cell3"
        assert node_name(NodeKind.ROW, 12) == "row12"

    @pytest.mark.parametrize(
        ("name", "kind", "ordinal"),
        [
            ("cell3", NodeKind.CELL, 3),
            ("row12", NodeKind.ROW, 12),
            ("tab1", NodeKind.TAB, 1),
            ("cell03", NodeKind.CELL, 3),
        ],
    )
    def test_parses_member_names(self, name: str, kind: NodeKind, ordinal: int) -> None:
        assert parse_ordinal(name, kind) == ordinal

    @pytest.mark.parametrize(
        ("name", "kind"),
        [
            ("cell", NodeKind.CELL),
            ("row3", NodeKind.CELL),
            ("cell3b", NodeKind.CELL),
            (".cell-stage-abc-1", NodeKind.CELL),
            ("images", NodeKind.ROW),
        ],
    )
    def test_rejects_other_names(self, name: str, kind: NodeKind) -> None:
        assert parse_ordinal(name, kind) is None
