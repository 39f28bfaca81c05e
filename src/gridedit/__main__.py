"""Command-line entry point: run grid operations against a local content tree."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from gridedit.audit import audit_group, audit_tab
from gridedit.cells import save_cell_content
from gridedit.config import GRIDEDIT_SITE_ROOT
from gridedit.engine import EngineOptions, delete_cell, delete_row, insert_cell, insert_row
from gridedit.exceptions import GridEditError
from gridedit.labels import parse_ordinal
from gridedit.paths import index_file_for, node_dir_for, resolve_content_path
from gridedit.schemas import NodeKind
from gridedit.utils.logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridedit",
        description="Insert, delete and audit cells and rows of a content grid.",
    )
    parser.add_argument("--site-root", type=Path, default=GRIDEDIT_SITE_ROOT, help="Directory holding content/")
    parser.add_argument("--log-level", default=None, help="Logging level (default from GRIDEDIT_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("insert-cell", "Insert a cell after the cell with WEIGHT"),
        ("delete-cell", "Delete the cell at PATH whose weight is WEIGHT"),
        ("insert-row", "Insert a row after the row with WEIGHT"),
    ):
        cmd = sub.add_parser(command, help=help_text)
        cmd.add_argument("path", help="Site-relative node path, e.g. content/lab/exp/tab1/row1/cell2")
        cmd.add_argument("weight", type=int)

    cmd = sub.add_parser("delete-row", help="Delete the row at PATH with all its cells")
    cmd.add_argument("path")

    cmd = sub.add_parser("save-cell", help="Replace a cell body with Markdown read from a file or stdin")
    cmd.add_argument("path")
    cmd.add_argument("--file", type=Path, help="Markdown file (default: stdin)")

    cmd = sub.add_parser("audit", help="Report numbering problems in a tab or a row")
    cmd.add_argument("path")
    return parser


def run(args: argparse.Namespace) -> int:
    target = node_dir_for(resolve_content_path(args.path, site_root=args.site_root))
    opts = EngineOptions()

    if args.command == "insert-cell":
        result = insert_cell(target, args.weight, options=opts)
    elif args.command == "delete-cell":
        result = delete_cell(target, args.weight, options=opts)
    elif args.command == "insert-row":
        result = insert_row(target, args.weight, options=opts)
    elif args.command == "delete-row":
        result = delete_row(target, options=opts)
    elif args.command == "save-cell":
        content = args.file.read_text(encoding="utf-8") if args.file else sys.stdin.read()
        result = save_cell_content(index_file_for(target), content.rstrip("\n"))
    else:
        return _run_audit(target)

    print(result.model_dump_json(indent=2))
    return 0


def _run_audit(target: Path) -> int:
    if parse_ordinal(target.name, NodeKind.ROW) is not None:
        issues = audit_group(target, NodeKind.CELL, row_number=parse_ordinal(target.name, NodeKind.ROW))
    else:
        issues = audit_tab(target)
    for issue in issues:
        print(issue)
    if not issues:
        print(f"{target}: ok")
    return 1 if issues else 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    try:
        return run(args)
    except (GridEditError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
