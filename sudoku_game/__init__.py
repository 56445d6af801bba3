"""Two-process Sudoku game: puzzle server, game client and result log."""

__version__ = "1.0.0"
