"""Validation of completed Sudoku boards."""

from __future__ import annotations
from typing import List, Tuple

from .board import SIZE, GridLike, as_grid, extract_boxes


def is_solved(grid: GridLike) -> bool:
    """
    Check whether a grid is a complete, legal solution.

    A solved grid has no empty cells and every row, column and box holds
    nine distinct values.

    Args:
        grid: 9x9 grid (array or nested lists).

    Returns:
        True if the grid is solved.

    Raises:
        ValueError: If the grid is not 9x9.
    """
    arr = as_grid(grid)
    if (arr == 0).any():
        return False

    for i in range(SIZE):
        if len(set(arr[i, :].tolist())) != SIZE:
            return False
        if len(set(arr[:, i].tolist())) != SIZE:
            return False

    return all(len(set(box)) == SIZE for box in extract_boxes(arr))


def find_conflicts(grid: GridLike) -> List[Tuple[str, int]]:
    """
    List the units of a grid that contain a repeated digit.

    Empty cells are ignored, so a partially filled grid only reports real
    clashes.

    Returns:
        List of (kind, index) pairs where kind is "row", "column" or "box".
    """
    arr = as_grid(grid)
    conflicts = []

    def has_duplicates(values) -> bool:
        filled = [v for v in values if v != 0]
        return len(filled) != len(set(filled))

    for i in range(SIZE):
        if has_duplicates(arr[i, :].tolist()):
            conflicts.append(("row", i))
    for j in range(SIZE):
        if has_duplicates(arr[:, j].tolist()):
            conflicts.append(("column", j))
    for b, box in enumerate(extract_boxes(arr)):
        if has_duplicates(box):
            conflicts.append(("box", b))

    return conflicts
