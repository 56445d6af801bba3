"""Generator module for building and masking Sudoku puzzles."""

from .generator import PuzzleGenerator, Difficulty, generate_solution, mask, resolve_difficulty

__all__ = ["PuzzleGenerator", "Difficulty", "generate_solution", "mask", "resolve_difficulty"]
