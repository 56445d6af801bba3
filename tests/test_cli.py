"""Tests for configuration loading and the command-line interface."""

import json

import pytest
from sudoku_game.cli import main, play_loop
from sudoku_game.config import GameConfig, load_config
from sudoku_game.core.board import box_row, box_column
from sudoku_game.game import GameSession
from sudoku_game.generator import Difficulty, PuzzleGenerator
from sudoku_game.remote import LocalPuzzleService
from sudoku_game.results import Outcome, ResultLog


class TestConfig:
    """Tests for GameConfig and load_config."""

    def test_defaults_without_file(self, tmp_path):
        config = load_config(str(tmp_path / "missing.json"))
        assert config == GameConfig()

    def test_load_and_ignore_unknown(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"port": 6000, "distinct_masking": False, "colour": "blue"}))

        config = load_config(str(path))
        assert config.port == 6000
        assert config.distinct_masking is False
        assert config.host == "127.0.0.1"

    def test_unreadable_file_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert load_config(str(path)) == GameConfig()

    @pytest.mark.parametrize("content", ['["port"]', '42', '"port"', 'null'])
    def test_non_object_falls_back(self, tmp_path, content):
        path = tmp_path / "config.json"
        path.write_text(content)
        assert load_config(str(path)) == GameConfig()

    def test_wrongly_typed_values_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "port": "abc",
            "distinct_masking": "no",
            "timeout_seconds": 3,
            "host": "0.0.0.0",
        }))

        config = load_config(str(path))
        assert config.port == 5099
        assert config.distinct_masking is True
        assert config.timeout_seconds == 3
        assert config.host == "0.0.0.0"

    def test_override_skips_none(self):
        config = GameConfig().override(port=7000, host=None)
        assert config.port == 7000
        assert config.host == "127.0.0.1"


class TestGenerateCommand:
    """Tests for `generate`."""

    def test_json_output(self, tmp_path, capsys):
        out = tmp_path / "puzzles.json"
        main(["--config", str(tmp_path / "none.json"),
              "generate", "-n", "2", "-d", "hard", "-s", "1", "-o", str(out)])

        data = json.loads(out.read_text())
        assert len(data) == 2
        assert all(p["label"] == "hard" for p in data)
        assert all(p["visible"].count("0") == 55 for p in data)
        assert "Total puzzles generated: 2" in capsys.readouterr().out

    def test_raw_cell_count(self, tmp_path):
        out = tmp_path / "puzzles.json"
        main(["--config", str(tmp_path / "none.json"),
              "generate", "-n", "1", "--cells", "81", "-o", str(out)])
        assert json.loads(out.read_text())[0]["visible"] == "0" * 81

    def test_invalid_cell_count(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["--config", str(tmp_path / "none.json"),
                  "generate", "-n", "1", "--cells", "90", "-o", str(tmp_path / "p.json")])

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])


class TestStatsCommand:
    """Tests for `stats`."""

    def test_summary(self, tmp_path, capsys):
        results = tmp_path / "stats.csv"
        results.write_text("Username,Difficulty,Result;\nalice,EASY,WIN;\nalice,EASY,FAIL;\n")

        main(["--config", str(tmp_path / "none.json"), "stats", "--results", str(results)])
        out = capsys.readouterr().out
        assert "Easy" in out
        assert "50.0%" in out


class TestPlayLoop:
    """Tests for the text-mode game loop."""

    def make_session(self, tmp_path):
        session = GameSession(
            LocalPuzzleService(PuzzleGenerator(seed=5)),
            username="carol",
            difficulty=Difficulty.EASY,
            result_log=ResultLog(str(tmp_path / "stats.csv")),
        )
        session.start()
        return session

    def test_solving_through_moves(self, tmp_path, capsys):
        session = self.make_session(tmp_path)
        boxes = session.puzzle.get_boxes(use_solution=True)
        moves = [
            f"{b} {i} {boxes[b][i]}"
            for b in range(9) for i in range(9)
            if session.puzzle.visible[box_row(b, i), box_column(b, i)] == 0
        ]
        lines = iter(["check", "nonsense"] + moves)

        play_loop(session, read=lambda prompt: next(lines))
        assert session.result == Outcome.WIN
        assert "Congratulations!" in capsys.readouterr().out

    def test_solve_gives_up(self, tmp_path, capsys):
        session = self.make_session(tmp_path)
        play_loop(session, read=lambda prompt: "solve")
        assert session.result == Outcome.FAIL
        assert "Solution:" in capsys.readouterr().out

    def test_quit_leaves_game_open(self, tmp_path):
        session = self.make_session(tmp_path)
        play_loop(session, read=lambda prompt: "quit")
        assert not session.finished

    def test_invalid_move_is_reported(self, tmp_path, capsys):
        session = self.make_session(tmp_path)
        lines = iter(["9 0 1", "quit"])
        play_loop(session, read=lambda prompt: next(lines))
        assert "Invalid move" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
