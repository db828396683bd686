"""Text formatting helpers shared by the display and CLI code."""

from __future__ import annotations

import math


def format_float(value: float, precision: int = 3) -> str:
    """Format a statistic, showing ``N/A`` for NaN."""
    if math.isnan(value):
        return "N/A"
    return f"{value:.{precision}f}"


def format_table(
    headers: list[str],
    rows: list[list[str]],
    *,
    alignments: list[str] | None = None,
    indent: int = 0,
) -> str:
    """Format a list of rows as an aligned text table.

    Column widths come from the widest cell; columns are separated by
    two spaces.  Columns marked ``'r'`` in *alignments* are
    right-aligned, all others left-aligned.

    Args:
        headers: Column header strings.
        rows: List of rows, each a list of cell strings.  Short rows are
            padded with empty cells, long rows truncated.
        alignments: Per-column alignment: ``'l'`` or ``'r'``.
        indent: Number of leading spaces per line.

    Returns:
        The formatted table as a string.
    """
    if not headers:
        return ""

    ncols = len(headers)
    aligns = list(alignments or [])
    aligns += ["l"] * (ncols - len(aligns))

    proc_rows: list[list[str]] = []
    for row in rows:
        padded = list(row) + [""] * (ncols - len(row))
        proc_rows.append(padded[:ncols])

    widths = [len(h) for h in headers]
    for row in proc_rows:
        for ci, cell in enumerate(row):
            widths[ci] = max(widths[ci], len(cell))

    prefix = " " * indent

    def _format_line(cells: list[str]) -> str:
        parts = [
            cell.rjust(widths[i]) if aligns[i] == "r" else cell.ljust(widths[i])
            for i, cell in enumerate(cells)
        ]
        return (prefix + "  ".join(parts)).rstrip()

    lines = [_format_line(list(headers))]
    lines.extend(_format_line(row) for row in proc_rows)
    return "\n".join(lines)
