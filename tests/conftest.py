"""Test setup for gridedit."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest
import yaml

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

INDEX = "_index.md"


def _write_index(node_dir: Path, fields: dict, body: str) -> None:
    node_dir.mkdir(parents=True, exist_ok=True)
    head = yaml.safe_dump(fields, sort_keys=False).rstrip()
    (node_dir / INDEX).write_text(f"---\n{head}\n---\n{body}", encoding="utf-8")


def cell_body(row: int, column: int, text: str | None = None) -> str:
    """Body of a cell as the site stores it, with a heading and some content."""
    text = text if text is not None else f"content of R{row}C{column}"
    return f"\n{{{{< cell >}}}}\n\n## R{row}C{column}\n\n{text}\n\n{{{{< /cell >}}}}\n"


@pytest.fixture
def make_node() -> Callable[..., Path]:
    """Create a node directory with front matter."""

    def _make(node_dir: Path, *, title: str, weight, kind: str, body: str = "", **extra) -> Path:
        fields = {"title": title, "weight": weight, "type": kind, **extra}
        _write_index(node_dir, fields, body)
        return node_dir

    return _make


@pytest.fixture
def make_row(make_node) -> Callable[..., Path]:
    """Create ``row<n>`` under a tab with ``cells`` consistently numbered cells."""

    def _make(tab_dir: Path, number: int, cells: int = 3) -> Path:
        row_dir = make_node(tab_dir / f"row{number}", title=f"Row {number}", weight=number, kind="row")
        for column in range(1, cells + 1):
            make_node(
                row_dir / f"cell{column}",
                title=chr(ord("A") + column - 1),
                weight=column,
                kind="cell",
                body=cell_body(number, column),
            )
        return row_dir

    return _make


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Site directory holding ``content/``."""
    (tmp_path / "content").mkdir()
    return tmp_path


@pytest.fixture
def tab_dir(site_root: Path, make_node, make_row) -> Path:
    """A tab with three rows of three cells each."""
    tab = make_node(site_root / "content" / "lab1" / "exp1" / "tab1", title="Tab 1", weight=1, kind="tab")
    for number in (1, 2, 3):
        make_row(tab, number)
    return tab


@pytest.fixture
def row_dir(tab_dir: Path) -> Path:
    return tab_dir / "row1"


def _read_fields(node_dir: Path) -> tuple[dict, str]:
    text = (node_dir / INDEX).read_text(encoding="utf-8")
    _, head, body = text.split("---\n", 2)
    return yaml.safe_load(head) or {}, body


@pytest.fixture
def read_state() -> Callable[[Path], list[tuple[str, int, str]]]:
    """Return ``(name, weight, title)`` for every child node, ordered by ordinal."""

    def _read(parent: Path) -> list[tuple[str, int, str]]:
        state = []
        for child in parent.iterdir():
            if not child.is_dir() or child.name.startswith("."):
                continue
            fields, _ = _read_fields(child)
            state.append((child.name, fields.get("weight"), fields.get("title")))
        return sorted(state, key=lambda item: int("".join(ch for ch in item[0] if ch.isdigit()) or 0))

    return _read


@pytest.fixture
def read_body() -> Callable[[Path], str]:
    def _read(node_dir: Path) -> str:
        return _read_fields(node_dir)[1]

    return _read


@pytest.fixture
def read_fields() -> Callable[[Path], dict]:
    def _read(node_dir: Path) -> dict:
        return _read_fields(node_dir)[0]

    return _read
