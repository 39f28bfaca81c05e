"""Inspect a content tree for numbering problems in every tab."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from gridedit.audit import audit_tab, find_tabs
from gridedit.fs_utils import list_child_dirs
from gridedit.labels import parse_ordinal
from gridedit.schemas import NodeKind


def main() -> None:
    parser = argparse.ArgumentParser(description="Report grid sizes and numbering problems below a content root.")
    parser.add_argument("root", nargs="?", default="content", help="Content directory (default: content)")
    parser.add_argument("--issues-only", action="store_true", help="Print only tabs with problems")
    args = parser.parse_args()

    root = Path(args.root)
    if not root.is_dir():
        parser.error(f"Not a directory: {root}")

    totals = Counter()
    for tab_dir in find_tabs(root):
        counts = count_nodes(tab_dir)
        issues = audit_tab(tab_dir)
        totals.update(counts)
        totals["issues"] += len(issues)
        if args.issues_only and not issues:
            continue
        print(f"{tab_dir}: {counts['rows']} rows, {counts['cells']} cells, {len(issues)} issues")
        for issue in issues:
            print(f"  {issue}")

    print(f"\nTotal: {totals['rows']} rows, {totals['cells']} cells, {totals['issues']} issues")


def count_nodes(tab_dir: Path) -> Counter:
    counts = Counter()
    for row_dir in list_child_dirs(tab_dir):
        if parse_ordinal(row_dir.name, NodeKind.ROW) is None:
            continue
        counts["rows"] += 1
        counts["cells"] += sum(
            1 for cell_dir in list_child_dirs(row_dir) if parse_ordinal(cell_dir.name, NodeKind.CELL) is not None
        )
    return counts


if __name__ == "__main__":
    main()
