"""
CLI utilities module.

This module provides the plain-text rendering of query results.
"""

from typing import Iterable, Optional, Sequence, TextIO

NULL_MARKER = "\\N"


def format_cell(cell: Optional[str]) -> str:
    """Render one cell; SQL NULL becomes \\N as in COPY text format."""
    if cell is None:
        return NULL_MARKER
    return cell.replace("\\", "\\\\").replace("\t", "\\t").replace("\n", "\\n")


def write_rows(
    columns: Sequence[str],
    rows: Iterable[Sequence[Optional[str]]],
    stream: TextIO,
) -> int:
    """
    Write a header line and one tab-separated line per row.

    Returns:
        Number of rows written
    """
    count = 0
    if columns:
        stream.write("\t".join(columns) + "\n")
    for row in rows:
        stream.write("\t".join(format_cell(cell) for cell in row) + "\n")
        count += 1
    return count
