"""Puzzle services: where a game gets its puzzle from."""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

import requests

from ..core.puzzle import Puzzle
from ..errors import InvalidDifficulty, SudokuError, TransportFailure
from ..generator import Difficulty, PuzzleGenerator, resolve_difficulty
from .server import PUZZLE_ROUTE

log = logging.getLogger(__name__)


@dataclass
class PuzzleResponse:
    """Outcome of a puzzle request: either a puzzle or an error, never both."""
    puzzle: Optional[Puzzle] = None
    error: Optional[SudokuError] = None

    def __post_init__(self):
        if (self.puzzle is None) == (self.error is None):
            raise ValueError("PuzzleResponse needs exactly one of puzzle or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Puzzle:
        """Return the puzzle, or raise the error carried instead."""
        if self.error is not None:
            raise self.error
        return self.puzzle


class PuzzleService(ABC):
    """Source of puzzles for the game client."""

    @abstractmethod
    def request_puzzle(self, difficulty: Union[int, Difficulty]) -> PuzzleResponse:
        """Request one fresh puzzle with ``difficulty`` blank cells."""

    def close(self) -> None:
        """Release any resources held by the service."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class LocalPuzzleService(PuzzleService):
    """Generates puzzles in-process."""

    def __init__(self, generator: Optional[PuzzleGenerator] = None):
        self.generator = generator or PuzzleGenerator()

    def request_puzzle(self, difficulty: Union[int, Difficulty]) -> PuzzleResponse:
        try:
            return PuzzleResponse(puzzle=self.generator.generate(difficulty))
        except InvalidDifficulty as e:
            return PuzzleResponse(error=e)


class RemotePuzzleService(PuzzleService):
    """
    Requests puzzles from a puzzle server over HTTP.

    One synchronous POST per request, no retries. Anything that keeps the
    request from producing a puzzle is reported as ``TransportFailure``,
    except a server-side rejection of the difficulty, which is reported as
    ``InvalidDifficulty``.
    """

    def __init__(self, base_url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        """
        Initialize the service.

        Args:
            base_url: Server root, e.g. ``http://127.0.0.1:5099``.
            timeout: Seconds to wait for the server.
            session: HTTP session to send requests through. A session
                passed in stays owned by the caller and is not closed here.
        """
        self.url = base_url.rstrip("/") + PUZZLE_ROUTE
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        """Close the HTTP session if this service created it."""
        if self._owns_session:
            self.session.close()

    def request_puzzle(self, difficulty: Union[int, Difficulty]) -> PuzzleResponse:
        if isinstance(difficulty, Difficulty):
            difficulty = resolve_difficulty(difficulty)

        try:
            response = self.session.post(self.url, json={"difficulty": difficulty}, timeout=self.timeout)
        except requests.RequestException as e:
            log.warning("Puzzle request to %s failed: %s", self.url, e)
            return PuzzleResponse(error=TransportFailure(f"Could not reach puzzle server: {e}"))

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code == 400 and isinstance(body, dict) and body.get("error") == "invalid_difficulty":
            return PuzzleResponse(error=InvalidDifficulty(body.get("message", "Invalid difficulty")))

        if response.status_code != 200 or not isinstance(body, dict):
            log.warning("Puzzle server answered %s", response.status_code)
            return PuzzleResponse(error=TransportFailure(f"Unexpected response from puzzle server ({response.status_code})"))

        try:
            puzzle = Puzzle.from_dict(body)
        except ValueError as e:
            log.warning("Puzzle server sent a malformed puzzle: %s", e)
            return PuzzleResponse(error=TransportFailure(f"Malformed puzzle from server: {e}"))

        return PuzzleResponse(puzzle=puzzle)
