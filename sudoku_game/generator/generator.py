"""Sudoku puzzle generator with configurable difficulty levels."""

from __future__ import annotations
import os
import random
from enum import Enum
from typing import List, Optional, Union
import numpy as np

from ..core.board import BOX_SIZE, CELLS, SIZE, GridLike, as_grid
from ..core.puzzle import Puzzle
from ..core.validator import is_solved
from ..errors import GenerationFailure, InvalidDifficulty

# Shared by every mask() call that is not handed its own source.
_default_rng = random.Random()


class Difficulty(Enum):
    """Named difficulty tiers offered to players."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def cells_removed(self) -> int:
        """Number of cells blanked out for this tier."""
        counts = {
            Difficulty.EASY: 15,
            Difficulty.MEDIUM: 35,
            Difficulty.HARD: 55,
        }
        return counts[self]


def resolve_difficulty(difficulty: Union[int, Difficulty]) -> int:
    """
    Turn a tier or a raw count into a validated cell count.

    Raises:
        InvalidDifficulty: If the count is not an int in [0, 81].
    """
    if isinstance(difficulty, Difficulty):
        return difficulty.cells_removed
    if isinstance(difficulty, bool) or not isinstance(difficulty, (int, np.integer)):
        raise InvalidDifficulty(f"Difficulty must be an integer, got {difficulty!r}")
    if difficulty < 0 or difficulty > CELLS:
        raise InvalidDifficulty(f"Difficulty must be 0-{CELLS}, got {difficulty}")
    return int(difficulty)


def generate_solution() -> np.ndarray:
    """
    Build the canonical filled grid by shifting sequences.

    Row 0 counts 1..9. Row 1 starts at 4. Every later row starts three past
    the number that would have followed the previous row's last value, so
    each row begins with the first digit of the next box. Values wrap from 9
    back to 1 within a row.

    Raises:
        GenerationFailure: If the result does not validate.
    """
    grid = np.zeros((SIZE, SIZE), dtype=np.int32)
    start = 1

    for row in range(SIZE):
        current = start
        for col in range(SIZE):
            if current > SIZE:
                current = 1
            grid[row, col] = current
            current += 1

        if row == 0:
            start = BOX_SIZE + 1
            continue

        start = current + BOX_SIZE
        if start > SIZE:  # only when the row ended on 7 or 8
            start = (start % SIZE) + 1

    if not is_solved(grid):
        raise GenerationFailure("Shifted base grid is not a valid solution")
    return grid


def mask(
    grid: GridLike,
    difficulty: int,
    rng: Optional[random.Random] = None,
    distinct: bool = True,
) -> np.ndarray:
    """
    Blank out cells of a grid to produce the player's view.

    Rows are visited in order, wrapping around, and one cell per visit is
    set to 0 at a random column until ``difficulty`` cells were blanked.

    Args:
        grid: Source grid. It is not modified.
        difficulty: Number of cells to blank, 0-81.
        rng: Random source. Defaults to a process-wide unseeded one.
        distinct: If True, only still-filled cells are picked, so exactly
            ``difficulty`` cells end up empty. If False, any column may be
            picked again and the result can have fewer empty cells.

    Returns:
        A new grid with the selected cells set to 0.

    Raises:
        InvalidDifficulty: If difficulty is out of range, or (distinct mode)
            larger than the number of filled cells in ``grid``.
    """
    remaining = resolve_difficulty(difficulty)
    rng = rng or _default_rng
    puzzle = as_grid(grid)

    if distinct and remaining > int(np.count_nonzero(puzzle)):
        raise InvalidDifficulty(
            f"Cannot blank {remaining} distinct cells, only "
            f"{int(np.count_nonzero(puzzle))} are filled"
        )

    row = 0
    while remaining > 0:
        if distinct:
            filled = np.flatnonzero(puzzle[row]).tolist()
            if filled:
                puzzle[row, rng.choice(filled)] = 0
                remaining -= 1
        else:
            puzzle[row, rng.randrange(SIZE)] = 0
            remaining -= 1
        row = (row + 1) % SIZE

    return puzzle


class PuzzleGenerator:
    """
    Generator for Sudoku puzzles.

    Algorithm:
    1. Build the canonical solution grid by shifting sequences
    2. Blank out ``difficulty`` cells at random
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        distinct: bool = True,
    ):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility. Ignored if rng is given.
            rng: Random source to draw blanked cells from.
            distinct: Masking mode, see :func:`mask`.
        """
        if rng is None:
            rng = random.Random(seed) if seed is not None else _default_rng
        self.rng = rng
        self.distinct = distinct

    def generate(self, difficulty: Union[int, Difficulty] = Difficulty.MEDIUM) -> Puzzle:
        """
        Generate a fresh puzzle.

        Args:
            difficulty: Tier or number of cells to blank (0-81).

        Returns:
            A new Puzzle holding the solution and the masked grid.
        """
        count = resolve_difficulty(difficulty)
        solution = generate_solution()
        visible = mask(solution, count, rng=self.rng, distinct=self.distinct)
        return Puzzle(solution, visible, count)

    def generate_batch(self, count: int, difficulty: Union[int, Difficulty] = Difficulty.MEDIUM) -> List[Puzzle]:
        """Generate several independent puzzles of the same difficulty."""
        return [self.generate(difficulty) for _ in range(count)]

    @staticmethod
    def save_to_folder(puzzles: List[Puzzle], folder_path: str, prefix: str = "puzzle") -> List[str]:
        """
        Save puzzles to a folder as individual text files.

        Args:
            puzzles: Puzzles to write.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").

        Returns:
            Paths of the written files.
        """
        os.makedirs(folder_path, exist_ok=True)

        paths = []
        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            data = puzzle.to_dict()
            with open(file_path, "w") as f:
                f.write(data["visible"])
                f.write("\n")
                f.write(data["solution"])
                f.write("\n\nPretty format:\n")
                f.write(str(puzzle))
                f.write("\n")
            paths.append(file_path)
        return paths
