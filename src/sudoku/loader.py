import os
from pathlib import Path
from typing import Any, Iterable, List, Optional

import pandas as pd

from .cell import GROUP_SIZE
from .errors import PuzzleParseError
from .grid import Clue

PLACEHOLDERS = {"X", "x"}
COMPACT_PLACEHOLDERS = {"0", "."}
DIGITS = "123456789"
TABLE_COLUMNS = ("quizzes", "puzzle", "quiz", "question")


def parse_lines(lines: Iterable[str]) -> List[Clue]:
    """
    Turn a text grid into clues. Each non-blank line holds GROUP_SIZE
    whitespace-separated fields, either a placeholder (X/x) or a value in
    [1, GROUP_SIZE]. Blank lines are skipped and do not count as rows.
    """
    clues: List[Clue] = []
    row = 0

    for index, line in enumerate(lines):
        fields = line.split()
        if not fields:
            continue

        if len(fields) != GROUP_SIZE:
            raise PuzzleParseError(
                f"Unexpected number of columns ({len(fields)}) in puzzle line:{index + 1}",
                line=index + 1,
            )
        if row >= GROUP_SIZE:
            raise PuzzleParseError(f"Too many rows in puzzle, extra row at line:{index + 1}", line=index + 1)

        for col, field in enumerate(fields):
            if field in PLACEHOLDERS:
                continue
            if not (field.isascii() and field.isdigit()):
                raise PuzzleParseError(
                    f"Unable to parse element: {field} as a number in puzzle line:col: {index + 1}:{col + 1}",
                    line=index + 1,
                    column=col + 1,
                )
            value = int(field)
            if value < 1 or value > GROUP_SIZE:
                raise PuzzleParseError(
                    f"Element value {value} is out of range [1-{GROUP_SIZE}] "
                    f"in puzzle line:col: {index + 1}:{col + 1}",
                    line=index + 1,
                    column=col + 1,
                )
            clues.append((row, col, value))
        row += 1

    if row != GROUP_SIZE:
        raise PuzzleParseError(f"Not enough rows in puzzle: {row}")

    return clues


def load_clues(file_path: str) -> List[Clue]:
    """Read a text puzzle file and return its clues."""
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        lines = f.read().splitlines()

    try:
        return parse_lines(lines)
    except PuzzleParseError as e:
        raise PuzzleParseError(f"Failed to parse puzzle file: {file_path}: {e}", e.line, e.column) from e


def parse_compact(text: str) -> List[Clue]:
    """Parse an 81-character puzzle string, '0' or '.' marking an open cell."""
    compact = "".join(str(text).split())
    if len(compact) != GROUP_SIZE * GROUP_SIZE:
        raise PuzzleParseError(
            f"Expected {GROUP_SIZE * GROUP_SIZE} characters in puzzle string, got {len(compact)}"
        )

    clues: List[Clue] = []
    for offset, char in enumerate(compact):
        if char in COMPACT_PLACEHOLDERS:
            continue
        row, col = divmod(offset, GROUP_SIZE)
        if char not in DIGITS:
            raise PuzzleParseError(
                f"Unable to parse element: {char} as a number at row:col: {row + 1}:{col + 1}",
                line=row + 1,
                column=col + 1,
            )
        clues.append((row, col, int(char)))
    return clues


def load_table_clues(file_path: str, index: int = 0, column: Optional[str] = None) -> List[Clue]:
    """
    Read one puzzle out of a .csv or .parquet dataset of 81-character puzzle
    strings (the layout of the common Kaggle Sudoku dumps).
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        if Path(file_path).suffix.lower() == ".parquet":
            df = pd.read_parquet(file_path)
        else:
            df = pd.read_csv(file_path, dtype=str)
    except (ValueError, OSError, ImportError, pd.errors.ParserError) as e:
        raise PuzzleParseError(f"Failed to read puzzle table: {file_path}: {e}") from e

    def _pick_column() -> str:
        if column is not None:
            if column not in df.columns:
                raise PuzzleParseError(f"Column {column!r} not found in {file_path}")
            return column
        for candidate in TABLE_COLUMNS:
            if candidate in df.columns:
                return candidate
        raise PuzzleParseError(
            f"No puzzle column in {file_path}; expected one of {', '.join(TABLE_COLUMNS)}"
        )

    name = _pick_column()
    if not 0 <= index < len(df):
        raise PuzzleParseError(f"Row {index} out of range, {file_path} has {len(df)} puzzles")

    raw: Any = df[name].iloc[index]
    if pd.isna(raw):
        raise PuzzleParseError(f"Row {index} of {file_path} has no puzzle in column {name!r}")
    return parse_compact(str(raw))
