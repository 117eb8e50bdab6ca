"""Exceptions raised while loading and solving puzzles."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .grid import Grid


class SudokuError(Exception):
    """Base class for every puzzle failure."""


class PuzzleParseError(SudokuError, ValueError):
    """Puzzle input could not be turned into clues."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column


class PuzzleUnsolvable(SudokuError):
    """A solver round made no progress while cells were still open."""

    def __init__(self, rounds: int, grid: "Grid"):
        super().__init__(f"Puzzle unsolvable after {rounds} rounds")
        self.rounds = rounds
        self.grid = grid


class PuzzleInconsistent(SudokuError):
    """A cell ran out of candidates, so the clues contradict each other."""

    def __init__(self, row: int, col: int, rounds: int, grid: "Grid"):
        super().__init__(
            f"Puzzle state inconsistent: row: {row + 1}, col: {col + 1} has no candidates "
            f"(after {rounds} rounds)"
        )
        self.row = row
        self.col = col
        self.rounds = rounds
        self.grid = grid
