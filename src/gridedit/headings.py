"""Cross-reference headings (``## R<row>C<col>``) inside cell bodies."""

from __future__ import annotations

import re

HEADING_RE = re.compile(r"^(?P<prefix>##[ \t]*)R(?P<row>\d+)C(?P<col>\d+)[ \t]*$", re.MULTILINE)


def format_heading(row: int, column: int) -> str:
    return f"## R{row}C{column}"


def find_headings(body: str) -> list[tuple[int, int]]:
    """Return ``(row, column)`` for every cross-reference heading in ``body``."""
    return [(int(m.group("row")), int(m.group("col"))) for m in HEADING_RE.finditer(body)]


def rewrite_heading(body: str, *, row: int | None = None, column: int | None = None) -> str:
    """Rewrite the row and/or column component of every heading in ``body``.

    Components passed as None are left as they are. Bodies without a heading
    are returned unchanged.
    """

    def _replace(match: re.Match[str]) -> str:
        new_row = row if row is not None else int(match.group("row"))
        new_col = column if column is not None else int(match.group("col"))
        return f"{match.group('prefix')}R{new_row}C{new_col}"

    return HEADING_RE.sub(_replace, body)
