#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/renderers/_tables.py
"""Table layout and source diagnostics for the canonical renderer."""

from __future__ import annotations

from typing import Optional, Sequence

from canonmark.ast.nodes import Alignment
from canonmark.constants import MIN_TABLE_COLUMN_WIDTH
from canonmark.utils.escape import count_unescaped_pipes

_SEPARATOR_CHARS = frozenset("|-: \t")


def calculate_column_widths(rendered_rows: Sequence[Sequence[str]], num_cols: int) -> list[int]:
    """Calculate the width of each column.

    Parameters
    ----------
    rendered_rows : sequence of sequence of str
        Rendered (and pipe-escaped) cell text, header row first
    num_cols : int
        Number of columns

    Returns
    -------
    list of int
        Widest cell per column, never below the minimum column width

    """
    col_widths = [MIN_TABLE_COLUMN_WIDTH] * num_cols
    for row in rendered_rows:
        for i, cell in enumerate(row[:num_cols]):
            col_widths[i] = max(col_widths[i], len(cell))
    return col_widths


def format_row(cells: Sequence[str], col_widths: Sequence[int]) -> str:
    """Format one row with every cell left-justified to its column width.

    Missing trailing cells are rendered empty; cells beyond the column count
    are dropped.
    """
    padded = []
    for i, width in enumerate(col_widths):
        cell = cells[i] if i < len(cells) else ""
        padded.append(cell.ljust(width))
    return "| " + " | ".join(padded) + " |"


def format_separator(alignments: Sequence[Optional[Alignment]], col_widths: Sequence[int]) -> str:
    """Generate the alignment row.

    Examples
    --------
        >>> format_separator(["left", None, "center", "right"], [3, 3, 5, 3])
        '|:----|-----|:-----:|----:|'

    """
    parts = []
    for i, width in enumerate(col_widths):
        align = alignments[i] if i < len(alignments) else None
        # Each column spans its content width plus the two padding spaces
        span = width + 2
        if align == "left":
            parts.append(":" + "-" * (span - 1))
        elif align == "right":
            parts.append("-" * (span - 1) + ":")
        elif align == "center":
            parts.append(":" + "-" * (span - 2) + ":")
        else:
            parts.append("-" * span)
    return "|" + "|".join(parts) + "|"


def is_separator_line(line: str) -> bool:
    """Whether a raw table line is the delimiter row."""
    stripped = line.strip()
    return bool(stripped) and "-" in stripped and set(stripped) <= _SEPARATOR_CHARS


def check_source_columns(
    source_lines: Sequence[str], start_line: int, end_line: int, expected_cols: int
) -> list[tuple[int, str]]:
    """Cross-check the pipe count of every raw table row against the column count.

    A row with more separating pipes than ``expected_cols + 1`` most likely
    contains an unescaped ``|`` in a cell that the parser silently split on;
    one with fewer than ``expected_cols`` is missing cells.

    Parameters
    ----------
    source_lines : sequence of str
        All lines of the original document
    start_line : int
        First line of the table (1-based)
    end_line : int
        Last line of the table (1-based, inclusive)
    expected_cols : int
        Column count the parser settled on

    Returns
    -------
    list of (int, str)
        Line number and message for every suspicious row

    """
    problems: list[tuple[int, str]] = []
    last = min(end_line, len(source_lines))
    for line_number in range(max(start_line, 1), last + 1):
        line = source_lines[line_number - 1]
        if not line.strip() or is_separator_line(line):
            continue
        pipes = count_unescaped_pipes(line)
        if pipes > expected_cols + 1:
            problems.append(
                (
                    line_number,
                    f"table row has {pipes} pipe characters, expected {expected_cols + 1} for "
                    f"{expected_cols} columns; unescaped `|` in cell content? (table starts at line {start_line})",
                )
            )
        elif pipes < expected_cols:
            problems.append(
                (
                    line_number,
                    f"table row has {pipes} pipe characters, expected at least {expected_cols} for "
                    f"{expected_cols} columns (table starts at line {start_line})",
                )
            )
    return problems
