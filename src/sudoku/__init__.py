"""Sudoku cells, grid and constraint-propagation solver."""

from .cell import Cell, GROUP_SIZE
from .errors import PuzzleInconsistent, PuzzleParseError, PuzzleUnsolvable, SudokuError
from .grid import Grid, GridState
from .loader import load_clues, load_table_clues, parse_compact, parse_lines

__all__ = [
    "Cell",
    "GROUP_SIZE",
    "Grid",
    "GridState",
    "SudokuError",
    "PuzzleParseError",
    "PuzzleUnsolvable",
    "PuzzleInconsistent",
    "parse_lines",
    "parse_compact",
    "load_clues",
    "load_table_clues",
]
