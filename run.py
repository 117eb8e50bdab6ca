"""CLI entrypoint: load a puzzle, run the solver, and report the result."""

import argparse
import logging
import os
import sys
from pathlib import Path

from solver import build_grid
from src.sudoku.errors import PuzzleParseError, SudokuError
from src.utils.trace import Tracer

LOG_LEVEL_ENV = "SUDOKU_LOG_LEVEL"

log = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Sudoku puzzle solver")
    parser.add_argument("puzzle_file", type=Path, help="Path to a text puzzle, or a .csv/.parquet dataset")
    parser.add_argument("--debug", action="store_true", help="Debug output, including candidate sets")
    parser.add_argument("--trace", type=Path, default=None, help="Optional path to write the solver trace CSV")
    parser.add_argument(
        "--table-index",
        type=int,
        default=0,
        help="Row of the dataset to solve when the input is .csv/.parquet.",
    )
    return parser.parse_args()


def setup_logging(debug: bool) -> None:
    level = getattr(logging, os.environ.get(LOG_LEVEL_ENV, "INFO").upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main() -> int:
    args = parse_args()
    setup_logging(args.debug)

    tracer = Tracer(enabled=True)
    try:
        grid = build_grid(str(args.puzzle_file), tracer=tracer, table_index=args.table_index)
    except (PuzzleParseError, FileNotFoundError) as e:
        log.error("Failed to load puzzle: %s", e)
        return 2

    log.info("Using puzzle:\n%s", grid)
    log.debug("Using puzzle debug:\n%s", grid.render(debug=True))

    status = 0
    try:
        rounds = grid.solve()
        log.info("Solved puzzle iterations: %d\n%s", rounds, grid)
    except SudokuError as e:
        log.error("Failed to solve puzzle: %s\n%s", e, grid)
        log.error("Error puzzle state:\n%s", grid.render(debug=True))
        log.error("Total iterations: %d", grid.rounds)
        status = 1

    if args.trace:
        tracer.to_csv(args.trace)
    return status


if __name__ == "__main__":
    sys.exit(main())
