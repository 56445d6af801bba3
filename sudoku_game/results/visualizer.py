"""Summaries and charts of logged game outcomes."""

from __future__ import annotations
import os
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from ..generator import Difficulty
from .log import Outcome, ResultRecord


def summarize(records: List[ResultRecord], username: Optional[str] = None) -> Dict[str, Dict[str, float]]:
    """
    Count wins and fails per difficulty.

    Args:
        records: Logged games.
        username: Only count this player's games if given.

    Returns:
        Mapping of difficulty name to {"wins", "fails", "games", "win_rate"},
        with win_rate in percent. Every tier is present, even if unplayed.
    """
    summary = {}
    for difficulty in Difficulty:
        games = [
            r for r in records
            if r.difficulty == difficulty and (username is None or r.username == username)
        ]
        wins = sum(1 for r in games if r.result == Outcome.WIN)
        summary[difficulty.name] = {
            "wins": wins,
            "fails": len(games) - wins,
            "games": len(games),
            "win_rate": (wins / len(games) * 100) if games else 0.0,
        }
    return summary


class StatsVisualizer:
    """Charts of player outcomes read from the result log."""

    COLORS = {
        Outcome.WIN: "#2ecc71",   # Green
        Outcome.FAIL: "#e74c3c",  # Red
    }

    def __init__(self, records: List[ResultRecord], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            records: Logged games.
            output_dir: Directory to save generated charts.
        """
        self.records = records
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def plot_outcomes_by_difficulty(self) -> str:
        """Create grouped bar chart of wins and fails per difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        summary = summarize(self.records)
        difficulties = [d.name for d in Difficulty]
        x = np.arange(len(difficulties))
        width = 0.35

        for i, outcome in enumerate(Outcome):
            key = "wins" if outcome == Outcome.WIN else "fails"
            counts = [summary[d][key] for d in difficulties]
            offset = (i - 0.5) * width
            bars = ax.bar(x + offset, counts, width,
                          label=outcome.value.capitalize(),
                          color=self.COLORS[outcome],
                          edgecolor='black', linewidth=0.5)

            for bar, count in zip(bars, counts):
                ax.annotate(f'{count}',
                            xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                            xytext=(0, 3),
                            textcoords="offset points",
                            ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Games', fontsize=12)
        ax.set_title('Outcomes by Difficulty', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        ax.legend(title='Result')
        ax.set_ylim(bottom=0)

        plt.tight_layout()
        path = os.path.join(self.output_dir, "outcomes_by_difficulty.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return path
