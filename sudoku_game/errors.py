"""Exception hierarchy shared by the server, the client and the core."""


class SudokuError(Exception):
    """Base class for all errors raised by this package."""


class InvalidDifficulty(SudokuError, ValueError):
    """Difficulty is not a cell count in [0, 81]."""


class OutOfRangeMutation(SudokuError, IndexError):
    """A row, column, box or cell index fell outside [0, 8], or a value outside [0, 9]."""


class GenerationFailure(SudokuError):
    """The generated solution grid failed its own validity check."""


class TransportFailure(SudokuError):
    """The remote puzzle request did not complete."""


class CellLocked(SudokuError):
    """The player tried to overwrite one of the puzzle's given cells."""


class GameOver(SudokuError):
    """A move was attempted after the game had finished."""
