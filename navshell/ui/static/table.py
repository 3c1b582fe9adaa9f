#!/usr/bin/env python3
# navshell/ui/static/table.py
from __future__ import annotations

"""Plain-text column layout for help listings (ANSI-safe widths)."""

from typing import List, Sequence

from navshell.ui.utils import strip_ansi


def _calculate_column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    """Compute visual widths ignoring ANSI sequences."""
    column_widths: List[int] = []
    for row in rows:
        for col_idx, cell in enumerate(row):
            cell_length = len(strip_ansi(cell))
            if col_idx >= len(column_widths):
                column_widths.append(cell_length)
            else:
                column_widths[col_idx] = max(column_widths[col_idx], cell_length)
    return column_widths


def format_columns(
    rows: Sequence[Sequence[object]],
    *,
    gap: int = 2,
    indent: int = 0,
) -> List[str]:
    """
    Align rows into columns and return one string per row.

    The last column is never padded, so lines carry no trailing spaces.
    """
    str_rows = [[str(cell) for cell in row] for row in rows]
    if not str_rows:
        return []
    widths = _calculate_column_widths(str_rows)
    lines: List[str] = []
    for row in str_rows:
        parts = []
        for i, cell in enumerate(row):
            if i == len(row) - 1:
                parts.append(cell)
            else:
                parts.append(cell + " " * (widths[i] - len(strip_ansi(cell)) + gap))
        lines.append(" " * indent + "".join(parts))
    return lines
