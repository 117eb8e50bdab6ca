"""Integration-style tests for the elimination solver."""

from pathlib import Path

import pytest

from solver import build_grid, solve_puzzle
from src.sudoku.cell import GROUP_SIZE
from src.sudoku.errors import PuzzleInconsistent, PuzzleUnsolvable, SudokuError
from src.sudoku.grid import Grid, GridState, block_cells, column_cells, row_cells
from src.sudoku.loader import parse_lines
from src.utils.trace import Tracer

PUZZLE_DIR = Path(__file__).resolve().parent.parent / "puzzles"

SOLVABLE_PUZZLES = [
    [
        "8 X X X 4 6 2 9 X",
        "7 X X X X 9 X X 5",
        "X X 2 X X 5 X X X",
        "",
        "X 6 X 2 1 X 8 4 X",
        "X 2 7 X 8 X 5 3 X",
        "X 3 8 X 6 7 X 2 X",
        "",
        "X X X 4 X X 6 X X",
        "9 X X 3 X X X X X",
        "X 4 1 6 5 X X X 3",
    ],
    [
        "5 4 X 6 X X X 2 X",
        "1 X 8 X 3 X X X 4",
        "X X 2 5 X X X 7 X",
        "",
        "X X X X X 7 2 5 X",
        "X X 5 8 X 9 4 X X",
        "X 2 6 3 X X X X X",
        "",
        "X 6 X X X 3 7 X X",
        "4 X X X 9 X 6 X 2",
        "X 8 X X X 6 X 4 5",
    ],
    [
        "8 1 X X X X X X X",
        "X X 9 X X 4 2 8 X",
        "X X X X X 1 6 X 9",
        "5 7 X X X 9 X X 8",
        "X X X X 7 X X X X",
        "9 X X 1 X X X 5 4",
        "3 X 1 2 X X X X X",
        "X 4 6 3 X X 8 X X",
        "X X X X X X X 3 6",
    ],
    [
        "X X X X 4 X X X 3",
        "X X 2 X X X X 9 7",
        "X 6 X X X 3 1 2 X",
        "6 X X 8 X 9 X X 1",
        "X X 9 X X X 2 X X",
        "2 X X 3 X 6 X X 5",
        "X 1 4 6 X X X 5 X",
        "5 9 X X X X 7 X X",
        "7 X X X 1 X X X X",
    ],
]

EMPTY_PUZZLE = ["X X X X X X X X X"] * GROUP_SIZE


def _solution_value(row: int, col: int) -> int:
    # Shifted-row pattern, a valid completed grid.
    return (row * 3 + row // 3 + col) % GROUP_SIZE + 1


def _solution_clues(skip=()):
    return [
        (r, c, _solution_value(r, c))
        for r in range(GROUP_SIZE)
        for c in range(GROUP_SIZE)
        if (r, c) not in skip
    ]


def _assert_unique_finalized_values(grid: Grid):
    groups = [row_cells(i) for i in range(GROUP_SIZE)]
    groups += [column_cells(i) for i in range(GROUP_SIZE)]
    groups += [block_cells(i) for i in range(GROUP_SIZE)]
    for group in groups:
        values = [grid.cell(r, c).resolved for r, c in group if grid.cell(r, c).is_finalized()]
        assert len(values) == len(set(values)), f"duplicate value in group {group}"


@pytest.mark.parametrize("lines", SOLVABLE_PUZZLES)
def test_solve_good_puzzles(lines):
    grid = Grid.from_clues(parse_lines(lines))
    rounds = grid.solve()

    assert grid.state is GridState.SOLVED
    assert grid.is_complete()
    assert 1 <= rounds <= GROUP_SIZE * GROUP_SIZE
    _assert_unique_finalized_values(grid)


def test_solution_keeps_the_clues():
    clues = parse_lines(SOLVABLE_PUZZLES[0])
    grid = Grid.from_clues(clues)
    grid.solve()
    values = grid.values()
    for row, col, value in clues:
        assert values[row][col] == value


def test_empty_grid_is_unsolvable_immediately():
    grid = Grid.from_clues(parse_lines(EMPTY_PUZZLE))

    with pytest.raises(PuzzleUnsolvable) as excinfo:
        grid.solve()

    assert excinfo.value.rounds == 0
    assert excinfo.value.grid is grid
    assert grid.state is GridState.UNSOLVABLE
    assert not any(cell.is_finalized() for cell in grid.cells)


def test_single_empty_cell_is_solved_by_naked_single():
    tracer = Tracer()
    grid = Grid.from_clues(_solution_clues(skip={(4, 4)}), tracer=tracer)
    assert grid.state is GridState.UNSOLVED

    assert grid.solve() == 1
    assert grid.state is GridState.SOLVED
    assert grid.values()[4][4] == _solution_value(4, 4)
    assert tracer.summary()["strategy_counts"] == {"naked_single": 1}


def test_duplicate_clue_in_row_is_inconsistent():
    lines = ["5 5 X X X X X X X"] + ["X X X X X X X X X"] * (GROUP_SIZE - 1)
    grid = Grid.from_clues(parse_lines(lines))

    assert grid.cell(0, 0).resolved == 4
    assert grid.cell(0, 1).is_empty()
    assert grid.cell(0, 1).possible() == set()

    with pytest.raises(PuzzleInconsistent) as excinfo:
        grid.solve()
    assert (excinfo.value.row, excinfo.value.col) == (0, 1)
    assert grid.state is GridState.UNSOLVABLE


def test_rendered_solution_parses_back_solved():
    grid = Grid.from_clues(parse_lines(SOLVABLE_PUZZLES[0]))
    grid.solve()

    reparsed = Grid.from_clues(parse_lines(grid.render().splitlines()))
    assert reparsed.state is GridState.SOLVED
    assert reparsed.solve() == 0
    assert reparsed.values() == grid.values()


def test_candidates_only_shrink_between_rounds():
    grid = Grid.from_clues(parse_lines(SOLVABLE_PUZZLES[2]))
    while True:
        before = [(cell.resolved, cell.possible()) for cell in grid.cells]
        updates = grid.run_round()
        for (resolved, possible), cell in zip(before, grid.cells):
            assert cell.possible() <= possible
            if resolved is not None:
                assert cell.resolved == resolved
        _assert_unique_finalized_values(grid)
        if updates == 0 or grid.is_complete():
            break
    assert grid.is_complete()


def test_scans_are_idempotent_at_fixed_point():
    # Three clues in one row leave no cell or value pinned down.
    lines = ["1 2 3 X X X X X X"] + ["X X X X X X X X X"] * (GROUP_SIZE - 1)
    grid = Grid.from_clues(parse_lines(lines))
    with pytest.raises(PuzzleUnsolvable):
        grid.solve()

    snapshot = [cell.possible() for cell in grid.cells]
    assert grid.row_scan() == 0
    assert grid.column_scan() == 0
    assert grid.block_scan() == 0
    assert grid.reduce_basic() == 0
    assert [cell.possible() for cell in grid.cells] == snapshot


def test_terminal_states_are_absorbing():
    grid = Grid.from_clues(parse_lines(SOLVABLE_PUZZLES[1]))
    rounds = grid.solve()
    assert grid.solve() == rounds

    stuck = Grid.from_clues(parse_lines(EMPTY_PUZZLE))
    with pytest.raises(PuzzleUnsolvable):
        stuck.solve()
    with pytest.raises(PuzzleUnsolvable):
        stuck.solve()
    assert stuck.state is GridState.UNSOLVABLE


def test_solve_puzzle_accepts_lines_paths_and_grids():
    solved = solve_puzzle(SOLVABLE_PUZZLES[0])
    assert solved.state is GridState.SOLVED

    from_file = solve_puzzle(PUZZLE_DIR / "easy.txt")
    assert from_file.values() == solved.values()

    grid = build_grid(str(PUZZLE_DIR / "medium.txt"))
    assert solve_puzzle(grid) is grid
    assert grid.state is GridState.SOLVED


def test_solve_puzzle_raises_sudoku_error_when_stuck():
    with pytest.raises(SudokuError):
        solve_puzzle(EMPTY_PUZZLE)


def test_solve_puzzle_rejects_unknown_input():
    with pytest.raises(TypeError):
        solve_puzzle(42)


def test_contradiction_found_during_solving():
    # (0, 7) and (0, 8) both need a 9; finalizing one empties the other.
    clues = [(0, c, c + 1) for c in range(7)] + [(5, 7, 8), (6, 8, 8)]
    grid = Grid.from_clues(clues)
    assert grid.find_inconsistency() is None

    with pytest.raises(PuzzleInconsistent) as excinfo:
        grid.solve()

    error = excinfo.value
    assert (error.row, error.col, error.rounds) == (0, 8, 1)
    assert error.grid is grid
    assert grid.state is GridState.UNSOLVABLE
    assert grid.values()[0][7] == 9
    assert grid.cell(0, 8).is_empty()
