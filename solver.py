"""Top-level Sudoku solve interface.

Expose `solve_puzzle(puzzle)` that accepts either a pre-built Grid, a path to a
puzzle file, or the puzzle's text lines.
"""

from pathlib import Path
from typing import Any, Optional

from src.sudoku.grid import Grid
from src.sudoku.loader import load_clues, load_table_clues, parse_lines
from src.utils.trace import Tracer

TABLE_SUFFIXES = (".csv", ".parquet")


def build_grid(puzzle: Any, tracer: Optional[Tracer] = None, table_index: int = 0) -> Grid:
    """
    Build a Grid from:
      - Grid instances (returned as-is)
      - str / Path pointing at a text puzzle, or at a .csv/.parquet dataset
      - a list of text lines
    """
    if isinstance(puzzle, Grid):
        return puzzle
    if isinstance(puzzle, (str, Path)):
        path = str(puzzle)
        if Path(path).suffix.lower() in TABLE_SUFFIXES:
            clues = load_table_clues(path, index=table_index)
        else:
            clues = load_clues(path)
        return Grid.from_clues(clues, tracer=tracer)
    if isinstance(puzzle, (list, tuple)):
        return Grid.from_clues(parse_lines(puzzle), tracer=tracer)
    raise TypeError("solve_puzzle expects a Grid, a puzzle path, or a list of puzzle lines")


def solve_puzzle(puzzle: Any, tracer: Optional[Tracer] = None) -> Grid:
    """
    Solve a puzzle and return the solved Grid. Raises PuzzleUnsolvable or
    PuzzleInconsistent (both SudokuError) when the solver gets stuck.
    """
    grid = build_grid(puzzle, tracer=tracer)
    grid.solve()
    return grid


__all__ = ["build_grid", "solve_puzzle"]
