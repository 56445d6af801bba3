"""Core module for Sudoku grids, coordinate mapping and validation."""

from .board import box_row, box_column, box_index_of, extract_boxes
from .validator import is_solved, find_conflicts
from .puzzle import Puzzle

__all__ = [
    "box_row",
    "box_column",
    "box_index_of",
    "extract_boxes",
    "is_solved",
    "find_conflicts",
    "Puzzle",
]
