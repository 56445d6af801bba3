"""Append-only CSV log of finished games."""

from __future__ import annotations
import csv
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from ..generator import Difficulty

log = logging.getLogger(__name__)

HEADER = ["Username", "Difficulty", "Result"]
LINE_END = ";\n"


class Outcome(Enum):
    """How a game ended."""
    WIN = "WIN"
    FAIL = "FAIL"


@dataclass
class ResultRecord:
    """One finished game."""
    username: str
    difficulty: Difficulty
    result: Outcome

    def to_row(self) -> List[str]:
        return [self.username, self.difficulty.name, self.result.value]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "username": self.username,
            "difficulty": self.difficulty.name,
            "result": self.result.value,
        }


class ResultLog:
    """
    Player outcomes stored one per line in a CSV file.

    The file gets a header line when it is first created; afterwards lines
    are only ever appended. Every line ends with ``;``.
    """

    def __init__(self, path: str = "players_stats.csv"):
        self.path = path

    def append(self, record: ResultRecord) -> None:
        """Append one record, creating the file and its header if needed."""
        new_file = not os.path.exists(self.path)
        with open(self.path, "a", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator=LINE_END)
            if new_file:
                writer.writerow(HEADER)
            writer.writerow(record.to_row())
        log.debug("Recorded %s for %s (%s)", record.result.value, record.username, record.difficulty.name)

    def read(self) -> List[ResultRecord]:
        """
        Read every record back.

        Returns an empty list if the log does not exist yet.

        Raises:
            ValueError: If a line holds an unknown difficulty or result.
        """
        if not os.path.exists(self.path):
            return []

        records = []
        with open(self.path, "r", newline="", encoding="utf-8") as f:
            for i, row in enumerate(csv.reader(f)):
                if not row:
                    continue
                row[-1] = row[-1].rstrip(";")
                if i == 0 and row == HEADER:
                    continue
                if len(row) != len(HEADER):
                    raise ValueError(f"{self.path}: line {i + 1} has {len(row)} fields")
                username, difficulty, result = row
                try:
                    records.append(ResultRecord(username, Difficulty[difficulty], Outcome(result)))
                except (KeyError, ValueError) as e:
                    raise ValueError(f"{self.path}: line {i + 1} is not a valid record") from e
        return records
