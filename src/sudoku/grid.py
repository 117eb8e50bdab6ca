"""Sudoku grid with row/column/block bookkeeping and a fixed-point elimination solver."""

import enum
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .cell import Cell, GROUP_SIZE
from .errors import PuzzleInconsistent, PuzzleUnsolvable, SudokuError
from src.utils.trace import Tracer

BLOCK_SIZE = 3
NUM_CELLS = GROUP_SIZE * GROUP_SIZE

Position = Tuple[int, int]
Clue = Tuple[int, int, int]  # (row, col, value), 0-based coordinates, 1-based value


class GridState(enum.Enum):
    UNSOLVED = "Unsolved"
    SOLVED = "Solved"
    UNSOLVABLE = "Unsolvable"


def block_index(row: int, col: int) -> int:
    return (row // BLOCK_SIZE) * BLOCK_SIZE + col // BLOCK_SIZE


def index_in_block(row: int, col: int) -> int:
    return (row % BLOCK_SIZE) * BLOCK_SIZE + col % BLOCK_SIZE


def row_cells(row: int) -> List[Position]:
    return [(row, c) for c in range(GROUP_SIZE)]


def column_cells(col: int) -> List[Position]:
    return [(r, col) for r in range(GROUP_SIZE)]


def block_cells(block: int) -> List[Position]:
    """Positions of a block, ordered by their index within the block."""
    top = (block // BLOCK_SIZE) * BLOCK_SIZE
    left = (block % BLOCK_SIZE) * BLOCK_SIZE
    return [(top + i // BLOCK_SIZE, left + i % BLOCK_SIZE) for i in range(GROUP_SIZE)]


def peers(row: int, col: int) -> Set[Position]:
    """Every other cell sharing a row, column or block with (row, col)."""
    group = set(row_cells(row)) | set(column_cells(col)) | set(block_cells(block_index(row, col)))
    group.discard((row, col))
    return group


def _only_value(own: Set[int], others: Sequence[Set[int]]) -> Optional[int]:
    """Return the single candidate in `own` that no other cell of the group can take."""
    union: Set[int] = set()
    for candidates in others:
        union |= candidates
    diff = own - union
    if len(diff) == 1:
        return next(iter(diff))
    return None


class Grid:
    """
    A 9x9 puzzle stored as a flat row-major list of cells.

    Cells only ever become final through `finalize_and_propagate`, which
    removes the value from every peer, so finalized values stay unique per
    row, column and block. `solve` repeats rounds of naked singles followed
    by row, column and block scans until the grid is solved or a round makes
    no progress.
    """

    def __init__(self, tracer: Optional[Tracer] = None):
        self.cells: List[Cell] = [Cell() for _ in range(NUM_CELLS)]
        self.state = GridState.UNSOLVED
        self.rounds = 0
        self.tracer = tracer or Tracer(enabled=False)
        self.conflicts: List[Position] = []
        self._failure: Optional[SudokuError] = None

    @classmethod
    def from_clues(cls, clues: Iterable[Clue], tracer: Optional[Tracer] = None) -> "Grid":
        grid = cls(tracer=tracer)
        for row, col, value in clues:
            _check_position(row, col)
            if not 1 <= value <= GROUP_SIZE:
                raise ValueError(f"Clue value {value} is out of range [1-{GROUP_SIZE}]")
            grid.tracer.log_clue(row + 1, col + 1, value)
            grid.finalize_and_propagate(row, col, value - 1)

        if grid.is_complete() and grid.find_inconsistency() is None:
            grid.state = GridState.SOLVED
        return grid

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row * GROUP_SIZE + col]

    def positions(self) -> Iterator[Position]:
        for row in range(GROUP_SIZE):
            for col in range(GROUP_SIZE):
                yield row, col

    def finalize_and_propagate(self, row: int, col: int, value: int) -> None:
        """Finalize (row, col) to the 0-based `value` and remove it from all peers."""
        cell = self.cell(row, col)
        if value not in cell.possible():
            # The clue contradicts a finalized peer: leave the cell with no candidates.
            self.tracer.log_conflict(row + 1, col + 1, value + 1)
            self.conflicts.append((row, col))
            for candidate in cell.possible():
                cell.remove(candidate)
            return

        cell.finalize(value)
        for r, c in peers(row, col):
            self.cell(r, c).remove(value)

    def is_complete(self) -> bool:
        return all(cell.is_finalized() for cell in self.cells)

    def find_inconsistency(self) -> Optional[Position]:
        """First position whose cell is out of candidates or received a conflicting clue."""
        if self.conflicts:
            return self.conflicts[0]
        for row, col in self.positions():
            if self.cell(row, col).is_empty():
                return row, col
        return None

    def reduce_basic(self) -> int:
        """Finalize naked singles until a full scan finds none."""
        updates = 0
        while True:
            last_updates = updates
            for row, col in self.positions():
                value = self.cell(row, col).ready()
                if value is not None:
                    self.tracer.log_finalize(row + 1, col + 1, value + 1, "naked_single")
                    self.finalize_and_propagate(row, col, value)
                    updates += 1
            if updates == last_updates:
                break
        return updates

    def _scan_groups(self, strategy: str, groups: Iterable[List[Position]]) -> int:
        updates = 0
        for group in groups:
            for row, col in group:
                cell = self.cell(row, col)
                if cell.is_finalized():
                    continue
                # Copies, so nothing read here aliases a cell written below.
                others = [self.cell(r, c).possible() for r, c in group if (r, c) != (row, col)]
                value = _only_value(cell.possible(), others)
                if value is not None:
                    self.tracer.log_finalize(row + 1, col + 1, value + 1, strategy)
                    self.finalize_and_propagate(row, col, value)
                    updates += 1
        return updates

    def row_scan(self) -> int:
        return self._scan_groups("row_scan", (row_cells(r) for r in range(GROUP_SIZE)))

    def column_scan(self) -> int:
        return self._scan_groups("column_scan", (column_cells(c) for c in range(GROUP_SIZE)))

    def block_scan(self) -> int:
        return self._scan_groups("block_scan", (block_cells(b) for b in range(GROUP_SIZE)))

    def run_round(self) -> int:
        """One round of every strategy; returns how many cells were finalized."""
        updates = self.reduce_basic()
        updates += self.row_scan()
        updates += self.column_scan()
        updates += self.block_scan()
        return updates

    def solve(self) -> int:
        """
        Run rounds until the grid is solved and return the number of rounds
        that made progress. Raises PuzzleInconsistent when a cell runs out of
        candidates and PuzzleUnsolvable when a round finalizes nothing; the
        grid keeps whatever progress was made.
        """
        while self.state is GridState.UNSOLVED:
            self._check_consistency()
            updates = self.run_round()
            if updates:
                self.rounds += 1
            self._check_consistency()

            if updates == 0:
                self.state = GridState.UNSOLVABLE
                self._failure = PuzzleUnsolvable(self.rounds, self)
                self.tracer.log_round(self.rounds, updates, self.state.value)
                self.tracer.log_unsolvable(self.rounds)
            elif self.is_complete():
                self.state = GridState.SOLVED
                self.tracer.log_round(self.rounds, updates, self.state.value)
                self.tracer.log_solved(self.rounds)
            else:
                self.tracer.log_round(self.rounds, updates, self.state.value)

        if self._failure is not None:
            raise self._failure
        return self.rounds

    def _check_consistency(self) -> None:
        position = self.find_inconsistency()
        if position is None:
            return
        row, col = position
        self.state = GridState.UNSOLVABLE
        self._failure = PuzzleInconsistent(row, col, self.rounds, self)
        self.tracer.log_inconsistent(row + 1, col + 1, self.rounds)
        raise self._failure

    def values(self) -> List[List[Optional[int]]]:
        """1-based finalized values, None for open cells."""
        grid_values: List[List[Optional[int]]] = []
        for row in range(GROUP_SIZE):
            resolved = [self.cell(row, col).resolved for col in range(GROUP_SIZE)]
            grid_values.append([None if v is None else v + 1 for v in resolved])
        return grid_values

    def clues(self) -> List[Clue]:
        return [
            (row, col, self.cell(row, col).resolved + 1)
            for row, col in self.positions()
            if self.cell(row, col).is_finalized()
        ]

    def render(self, debug: bool = False) -> str:
        lines: List[str] = []
        if debug:
            lines.append(f"Puzzle state: {self.state.value}")
        for row in range(GROUP_SIZE):
            fields: List[str] = []
            for col in range(GROUP_SIZE):
                cell = self.cell(row, col)
                fields.append(cell.describe() if debug else str(cell))
                if (col + 1) % BLOCK_SIZE == 0 and col != GROUP_SIZE - 1:
                    fields.append("")
            lines.append(" ".join(fields))
            if (row + 1) % BLOCK_SIZE == 0 and row != GROUP_SIZE - 1:
                lines.append("")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Grid(state={self.state.value}, rounds={self.rounds}, clues={len(self.clues())})"


def _check_position(row: int, col: int) -> None:
    if not (0 <= row < GROUP_SIZE and 0 <= col < GROUP_SIZE):
        raise ValueError(f"Clue position ({row}, {col}) is outside the {GROUP_SIZE}x{GROUP_SIZE} grid")
