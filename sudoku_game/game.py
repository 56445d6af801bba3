"""A single player's game: one puzzle, moves by box, outcome to the log."""

from __future__ import annotations
import logging
import time
from typing import List, Optional

import numpy as np

from .core.board import box_column, box_row
from .core.puzzle import Puzzle
from .core.validator import find_conflicts
from .errors import CellLocked, GameOver
from .generator import Difficulty
from .remote.client import PuzzleService
from .results.log import Outcome, ResultLog, ResultRecord

log = logging.getLogger(__name__)

DEFAULT_USER = "default"


class GameSession:
    """
    Owns the puzzle of one game.

    Cells are addressed the way the board is drawn: by box (0-8) and by cell
    inside the box (0-8). Cells that were filled when the puzzle arrived are
    locked. After every move the board is checked; a solved board wins the
    game. Giving up, or closing an unfinished game, counts as a fail.
    """

    def __init__(
        self,
        service: PuzzleService,
        username: str = DEFAULT_USER,
        difficulty: Difficulty = Difficulty.EASY,
        result_log: Optional[ResultLog] = None,
    ):
        self.service = service
        self.username = username or DEFAULT_USER
        self.difficulty = difficulty
        self.result_log = result_log

        self.puzzle: Optional[Puzzle] = None
        self.result: Optional[Outcome] = None
        self._givens: Optional[np.ndarray] = None
        self._started_at: Optional[float] = None

    @property
    def finished(self) -> bool:
        return self.result is not None

    @property
    def elapsed_seconds(self) -> float:
        if self._started_at is None:
            return 0.0
        return time.monotonic() - self._started_at

    def start(self) -> Puzzle:
        """
        Request a puzzle and start the clock.

        Starting again abandons the current game, which counts as a fail.
        On failure the session is left without a puzzle.

        Raises:
            TransportFailure: If the puzzle could not be fetched.
            InvalidDifficulty: If the server rejected the difficulty.
        """
        self.close()
        self.puzzle = None
        self.result = None
        self._givens = None
        self._started_at = None

        puzzle = self.service.request_puzzle(self.difficulty).unwrap()

        self.puzzle = puzzle
        self._givens = puzzle.visible != 0
        self._started_at = time.monotonic()
        log.info("%s started a %s game", self.username, self.difficulty.value)
        return puzzle

    def is_locked(self, box: int, cell: int) -> bool:
        """Check whether a cell was given by the puzzle."""
        self._require_running()
        return bool(self._givens[box_row(box, cell), box_column(box, cell)])

    def place(self, box: int, cell: int, value: int) -> bool:
        """
        Write a digit into a cell.

        Args:
            box: Box number 0-8.
            cell: Cell number 0-8 inside the box.
            value: Digit 1-9, or 0 to clear.

        Returns:
            True if the move solved the board (the game is then won).
        """
        self._require_running()
        row, col = box_row(box, cell), box_column(box, cell)
        if self._givens[row, col]:
            raise CellLocked(f"Cell {cell} of box {box} is part of the puzzle")

        self.puzzle.set_cell(row, col, value)
        if self.puzzle.is_complete():
            self._finish(Outcome.WIN)
            return True
        return False

    def conflicts(self):
        """Units of the visible board holding a repeated digit."""
        self._require_running()
        return find_conflicts(self.puzzle.visible)

    def give_up(self) -> List[List[int]]:
        """End the game as a fail and return the solution's boxes."""
        self._require_running()
        self._finish(Outcome.FAIL)
        return self.puzzle.get_boxes(use_solution=True)

    def close(self) -> None:
        """Record a fail if a started game is abandoned unfinished."""
        if self.puzzle is not None and not self.finished:
            self._finish(Outcome.FAIL)

    def _require_running(self) -> None:
        if self.puzzle is None:
            raise GameOver("No game has been started")
        if self.finished:
            raise GameOver(f"Game already ended with {self.result.value}")

    def _finish(self, outcome: Outcome) -> None:
        self.result = outcome
        log.info("%s finished a %s game: %s after %.0fs",
                 self.username, self.difficulty.value, outcome.value, self.elapsed_seconds)
        if self.result_log is not None:
            self.result_log.append(ResultRecord(self.username, self.difficulty, outcome))
