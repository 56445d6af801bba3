"""Remote puzzle generation: Flask server and puzzle services."""

from .server import create_app, run_server
from .client import PuzzleResponse, PuzzleService, LocalPuzzleService, RemotePuzzleService

__all__ = [
    "create_app",
    "run_server",
    "PuzzleResponse",
    "PuzzleService",
    "LocalPuzzleService",
    "RemotePuzzleService",
]
