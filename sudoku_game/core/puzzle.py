"""The Puzzle aggregate: a solution grid plus the player's visible grid."""

from __future__ import annotations
import numpy as np
from typing import Any, Dict, List

from ..errors import OutOfRangeMutation
from .board import (
    SIZE, GridLike, as_grid, extract_boxes, format_grid,
    grid_from_string, grid_to_string,
)
from .validator import is_solved


class Puzzle:
    """
    One game's worth of Sudoku state.

    ``solution`` is the fully filled grid and is read-only after
    construction. ``visible`` is what the player sees; it starts as the
    solution with some cells blanked and is mutated move by move. Moves are
    not checked against the solution, only the finished board is validated.
    """

    def __init__(self, solution: GridLike, visible: GridLike, difficulty: int = 0):
        """
        Initialize a puzzle.

        Args:
            solution: The filled grid.
            visible: The player-facing grid.
            difficulty: Number of cells that were blanked out.
        """
        self._solution = as_grid(solution)
        self._solution.flags.writeable = False
        self.visible = as_grid(visible)
        self.difficulty = difficulty

    @property
    def solution(self) -> np.ndarray:
        return self._solution

    def get_cell(self, row: int, col: int) -> int:
        """Get the visible value at (row, col). 0 means empty."""
        self._check_cell(row, col)
        return int(self.visible[row, col])

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Set the visible value at (row, col). Use 0 to clear."""
        self._check_cell(row, col)
        if not _is_int(value) or value < 0 or value > SIZE:
            raise OutOfRangeMutation(f"Value must be 0-{SIZE}, got {value}")
        self.visible[row, col] = value

    def get_boxes(self, use_solution: bool = False) -> List[List[int]]:
        """Get the nine boxes of the solution or of the visible grid."""
        return extract_boxes(self._solution if use_solution else self.visible)

    def is_complete(self) -> bool:
        """Check if the visible grid is a correct, complete solution."""
        return is_solved(self.visible)

    def count_empty(self) -> int:
        """Count the empty cells of the visible grid."""
        return int(np.sum(self.visible == 0))

    def copy(self) -> Puzzle:
        """Create an independent copy; the solution is shared read-only."""
        return Puzzle(self._solution, self.visible, self.difficulty)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON-friendly wire form."""
        return {
            "difficulty": self.difficulty,
            "solution": grid_to_string(self._solution),
            "visible": grid_to_string(self.visible),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Puzzle:
        """
        Rebuild a puzzle from its wire form.

        Raises:
            ValueError: If a field is missing or malformed.
        """
        try:
            solution = grid_from_string(data["solution"])
            visible = grid_from_string(data["visible"])
            difficulty = int(data.get("difficulty", 0))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed puzzle payload: {e}") from e

        if not is_solved(solution):
            raise ValueError("Puzzle payload carries an invalid solution")
        return cls(solution, visible, difficulty)

    @staticmethod
    def _check_cell(row: int, col: int) -> None:
        if not _is_int(row) or not _is_int(col):
            raise OutOfRangeMutation(f"Cell ({row!r}, {col!r}) must use integer indices")
        if not 0 <= row < SIZE or not 0 <= col < SIZE:
            raise OutOfRangeMutation(f"Cell ({row}, {col}) is off the board")

    def __str__(self) -> str:
        return format_grid(self.visible)

    def __repr__(self) -> str:
        return f"Puzzle(difficulty={self.difficulty}, empty={self.count_empty()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Puzzle):
            return False
        return (np.array_equal(self._solution, other._solution)
                and np.array_equal(self.visible, other.visible))


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)
