"""Runtime configuration for the server and the game client."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "sudoku_game.json"


@dataclass
class GameConfig:
    """Settings shared by the ``serve``, ``play`` and ``stats`` commands."""
    host: str = "127.0.0.1"
    port: int = 5099
    server_url: str = "http://127.0.0.1:5099"
    timeout_seconds: float = 10.0
    results_file: str = "players_stats.csv"
    distinct_masking: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def override(self, **values: Any) -> GameConfig:
        """Return a copy with every non-None value replaced."""
        data = self.to_dict()
        data.update({k: v for k, v in values.items() if v is not None})
        return GameConfig(**data)


def load_config(path: Optional[str] = None) -> GameConfig:
    """
    Load settings from a JSON file.

    Unknown keys are ignored. A missing or unreadable file falls back to the
    defaults.

    Args:
        path: JSON file to read (default: ``sudoku_game.json`` if present).
    """
    path = path or DEFAULT_CONFIG_FILE
    if not os.path.exists(path):
        log.debug("No config file at %s, using defaults", path)
        return GameConfig()

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("Could not load config from %s: %s", path, e)
        return GameConfig()

    if not isinstance(data, dict):
        log.warning("Config in %s must be a JSON object, using defaults", path)
        return GameConfig()

    defaults = GameConfig()
    known = {f.name for f in fields(GameConfig)}
    ignored = set(data) - known
    if ignored:
        log.warning("Ignoring unknown config keys: %s", ", ".join(sorted(ignored)))

    values = {}
    for key in known & set(data):
        if _matches_type(data[key], getattr(defaults, key)):
            values[key] = data[key]
        else:
            log.warning("Ignoring config key %s: %r is not a valid value", key, data[key])

    log.info("Loaded config from %s", path)
    return GameConfig(**values)


def _matches_type(value: Any, default: Any) -> bool:
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(default, bool)
    if isinstance(default, float):
        return isinstance(value, (int, float))
    return isinstance(value, type(default))
