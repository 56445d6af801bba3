"""Tests for the result log and its statistics."""

import os

import pytest
from sudoku_game.generator import Difficulty
from sudoku_game.results import Outcome, ResultRecord, ResultLog, StatsVisualizer, summarize


@pytest.fixture
def log_path(tmp_path):
    return str(tmp_path / "players_stats.csv")


class TestResultLog:
    """Tests for the append-only CSV log."""

    def test_header_written_once(self, log_path):
        log = ResultLog(log_path)
        log.append(ResultRecord("alice", Difficulty.EASY, Outcome.WIN))
        log.append(ResultRecord("bob", Difficulty.HARD, Outcome.FAIL))

        with open(log_path) as f:
            content = f.read()
        assert content == (
            "Username,Difficulty,Result;\n"
            "alice,EASY,WIN;\n"
            "bob,HARD,FAIL;\n"
        )

    def test_appends_to_existing_file(self, log_path):
        ResultLog(log_path).append(ResultRecord("alice", Difficulty.EASY, Outcome.WIN))
        ResultLog(log_path).append(ResultRecord("alice", Difficulty.MEDIUM, Outcome.FAIL))
        assert len(ResultLog(log_path).read()) == 2

    def test_read_back(self, log_path):
        log = ResultLog(log_path)
        records = [
            ResultRecord("alice", Difficulty.EASY, Outcome.WIN),
            ResultRecord("smith, jr", Difficulty.MEDIUM, Outcome.FAIL),
        ]
        for record in records:
            log.append(record)
        assert log.read() == records

    def test_missing_file_reads_empty(self, log_path):
        assert ResultLog(log_path).read() == []
        assert not os.path.exists(log_path)

    def test_corrupt_line(self, log_path):
        with open(log_path, "w") as f:
            f.write("Username,Difficulty,Result;\nalice,IMPOSSIBLE,WIN;\n")
        with pytest.raises(ValueError):
            ResultLog(log_path).read()

    def test_record_to_dict(self):
        record = ResultRecord("alice", Difficulty.HARD, Outcome.WIN)
        assert record.to_dict() == {"username": "alice", "difficulty": "HARD", "result": "WIN"}


class TestSummary:
    """Tests for outcome statistics."""

    RECORDS = [
        ResultRecord("alice", Difficulty.EASY, Outcome.WIN),
        ResultRecord("alice", Difficulty.EASY, Outcome.FAIL),
        ResultRecord("bob", Difficulty.EASY, Outcome.WIN),
        ResultRecord("bob", Difficulty.HARD, Outcome.FAIL),
    ]

    def test_summarize(self):
        summary = summarize(self.RECORDS)
        assert summary["EASY"]["wins"] == 2
        assert summary["EASY"]["fails"] == 1
        assert summary["EASY"]["win_rate"] == pytest.approx(200 / 3)
        assert summary["MEDIUM"]["games"] == 0
        assert summary["MEDIUM"]["win_rate"] == 0.0
        assert summary["HARD"]["fails"] == 1

    def test_summarize_one_player(self):
        summary = summarize(self.RECORDS, username="alice")
        assert summary["EASY"]["games"] == 2
        assert summary["HARD"]["games"] == 0

    def test_chart(self, tmp_path):
        path = StatsVisualizer(self.RECORDS, str(tmp_path)).plot_outcomes_by_difficulty()
        assert path.endswith("outcomes_by_difficulty.png")
        assert os.path.getsize(path) > 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
