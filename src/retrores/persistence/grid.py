"""Lossless compression for rectangular grids of fixed-width rows.

Authored pixel and tile art tends to end rows with a run of one value and
to end the grid with a run of identical rows. Both runs are dropped on
compression and restored on expansion:

    >>> compress_rows([[1, 2, 2, 2], [3, 3, 3, 3], [3, 3, 3, 3]])
    [[1, 2], [3]]
    >>> expand_rows([[1, 2], [3]], 3, 4)
    [[1, 2, 2, 2], [3, 3, 3, 3], [3, 3, 3, 3]]
"""
from __future__ import annotations

from typing import List, Sequence, TypeVar

from ..errors import GridDecodeError

T = TypeVar("T")


def compress_rows(rows: Sequence[Sequence[T]]) -> List[List[T]]:
    if not rows or not rows[0]:
        return []
    out: List[List[T]] = []
    for row in rows:
        row = list(row)
        while len(row) > 1 and row[-1] == row[-2]:
            row.pop()
        out.append(row)
    while len(out) > 1 and out[-1] == out[-2]:
        out.pop()
    return out


def expand_rows(rows: Sequence[Sequence[T]], height: int, width: int) -> List[List[T]]:
    """Inverse of :func:`compress_rows`.

    Raises GridDecodeError if ``rows`` cannot have come from a
    ``height`` x ``width`` grid.
    """
    if height < 0 or width < 0:
        raise GridDecodeError(f"Invalid grid size {width}x{height}")
    if height == 0 or width == 0:
        if rows:
            raise GridDecodeError(f"Expected no rows for a {width}x{height} grid, got {len(rows)}")
        return [[] for _ in range(height)]
    if not rows:
        raise GridDecodeError(f"Missing rows for a {width}x{height} grid")
    if len(rows) > height:
        raise GridDecodeError(f"Grid has {len(rows)} rows, expected at most {height}")

    out: List[List[T]] = []
    for y, row in enumerate(rows):
        if not row:
            raise GridDecodeError(f"Row {y} is empty")
        if len(row) > width:
            raise GridDecodeError(f"Row {y} has {len(row)} values, expected at most {width}")
        row = list(row)
        row.extend([row[-1]] * (width - len(row)))
        out.append(row)
    last = out[-1]
    out.extend(list(last) for _ in range(height - len(out)))
    return out


__all__ = ["compress_rows", "expand_rows"]
