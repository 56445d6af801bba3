"""Result log of finished games and its statistics."""

from .log import Outcome, ResultRecord, ResultLog
from .visualizer import StatsVisualizer, summarize

__all__ = ["Outcome", "ResultRecord", "ResultLog", "StatsVisualizer", "summarize"]
