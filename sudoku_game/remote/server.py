"""HTTP server exposing puzzle generation."""

from __future__ import annotations
import logging
from typing import Callable, Optional

from flask import Flask, jsonify, request

from ..errors import InvalidDifficulty
from ..generator import PuzzleGenerator

log = logging.getLogger(__name__)

APP_NAME = "sudoku_game"
PUZZLE_ROUTE = "/puzzle"


def create_app(generator_factory: Optional[Callable[[], PuzzleGenerator]] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        generator_factory: Returns the generator used for one request.
            Every request gets its own puzzle; nothing is shared between games.
    """
    app = Flask(APP_NAME)
    factory = generator_factory or PuzzleGenerator

    @app.errorhandler(InvalidDifficulty)
    def invalid_difficulty(e):
        log.info("Rejected puzzle request: %s", e)
        return jsonify({"error": "invalid_difficulty", "message": str(e)}), 400

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route(PUZZLE_ROUTE, methods=["POST"])
    def puzzle():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or "difficulty" not in payload:
            raise InvalidDifficulty("Request body must be a JSON object with 'difficulty'")

        generated = factory().generate(payload["difficulty"])
        log.debug("Generated puzzle with %d empty cells", generated.count_empty())
        return jsonify(generated.to_dict())

    return app


def run_server(host: str = "127.0.0.1", port: int = 5099, debug: bool = False) -> None:
    """Serve puzzles until interrupted."""
    log.info("Starting puzzle server on %s:%d", host, port)
    create_app().run(host=host, port=port, debug=debug)
