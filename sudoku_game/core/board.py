"""Grid helpers and the box <-> board coordinate mapping."""

from __future__ import annotations
import numpy as np
from typing import List, Sequence, Union

from ..errors import OutOfRangeMutation

SIZE = 9
BOX_SIZE = 3
CELLS = SIZE * SIZE

GridLike = Union[np.ndarray, Sequence[Sequence[int]]]


def as_grid(data: GridLike) -> np.ndarray:
    """
    Convert a nested list (or array) into a 9x9 int32 grid.

    Always returns a new array, so callers are free to mutate the result.

    Raises:
        ValueError: If the data is not 9x9.
    """
    grid = np.array(data, dtype=np.int32)
    if grid.shape != (SIZE, SIZE):
        raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
    return grid


def _check_index(name: str, value: int) -> None:
    if not 0 <= value < SIZE:
        raise OutOfRangeMutation(f"{name} must be 0-{SIZE - 1}, got {value}")


def box_row(box_index: int, cell_index: int) -> int:
    """
    Board row of a cell given by its box and its position inside the box.

    Args:
        box_index: Box number 0-8, row-major over the 3x3 blocks.
        cell_index: Cell number 0-8, row-major inside the box.

    Returns:
        The global row 0-8.
    """
    _check_index("box_index", box_index)
    _check_index("cell_index", cell_index)
    return (box_index // BOX_SIZE) * BOX_SIZE + cell_index // BOX_SIZE


def box_column(box_index: int, cell_index: int) -> int:
    """
    Board column of a cell given by its box and its position inside the box.

    Args:
        box_index: Box number 0-8, row-major over the 3x3 blocks.
        cell_index: Cell number 0-8, row-major inside the box.

    Returns:
        The global column 0-8.
    """
    _check_index("box_index", box_index)
    _check_index("cell_index", cell_index)
    return (box_index % BOX_SIZE) * BOX_SIZE + cell_index % BOX_SIZE


def box_index_of(row: int, col: int) -> int:
    """Get the box number (0-8) containing board cell (row, col)."""
    _check_index("row", row)
    _check_index("col", col)
    return (row // BOX_SIZE) * BOX_SIZE + col // BOX_SIZE


def extract_boxes(grid: GridLike) -> List[List[int]]:
    """
    Split a grid into its nine boxes.

    Boxes are read left-to-right, top-to-bottom; the values inside each box
    are read row-major.

    Returns:
        List of 9 boxes, each a list of 9 ints.
    """
    arr = np.asarray(grid)
    boxes = []
    for start_row in range(0, SIZE, BOX_SIZE):
        for start_col in range(0, SIZE, BOX_SIZE):
            window = arr[start_row:start_row + BOX_SIZE,
                         start_col:start_col + BOX_SIZE]
            boxes.append([int(v) for v in window.flatten()])
    return boxes


def grid_to_string(grid: GridLike) -> str:
    """Convert a grid to its 81-character form, '0' for empty cells."""
    return ''.join(str(int(v)) for v in np.asarray(grid).flatten())


def grid_from_string(s: str) -> np.ndarray:
    """
    Create a grid from an 81-character string.

    '0' or '.' mark empty cells, '1'-'9' placed digits.
    """
    if len(s) != CELLS:
        raise ValueError(f"String length must be {CELLS}, got {len(s)}")

    values = []
    for c in s:
        if c in '0.':
            values.append(0)
        elif c.isdigit():
            values.append(int(c))
        else:
            raise ValueError(f"Invalid cell character {c!r}")
    return np.array(values, dtype=np.int32).reshape(SIZE, SIZE)


def format_grid(grid: GridLike) -> str:
    """Pretty-print a grid with box separators."""
    arr = np.asarray(grid)
    lines = []
    horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

    for i in range(SIZE):
        if i % BOX_SIZE == 0:
            lines.append(horizontal_sep)

        row_str = '|'
        for j in range(SIZE):
            val = arr[i, j]
            row_str += ' .' if val == 0 else f' {val}'
            if (j + 1) % BOX_SIZE == 0:
                row_str += ' |'

        lines.append(row_str)

    lines.append(horizontal_sep)
    return '\n'.join(lines)
