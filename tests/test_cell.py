"""Unit tests for the Cell candidate bookkeeping."""

from src.sudoku.cell import Cell, GROUP_SIZE


def test_new_cell_has_every_candidate():
    cell = Cell()
    assert cell.resolved is None
    assert not cell.is_finalized()
    assert cell.possible() == set(range(GROUP_SIZE))
    assert cell.ready() is None


def test_finalize_collapses_candidates():
    cell = Cell()
    cell.finalize(4)
    assert cell.is_finalized()
    assert cell.resolved == 4
    assert cell.possible() == {4}
    # Finalized cells are never "ready" again.
    assert cell.ready() is None


def test_remove_skips_own_finalized_value():
    cell = Cell()
    cell.finalize(2)
    cell.remove(2)
    assert cell.possible() == {2}
    cell.remove(7)
    assert cell.possible() == {2}


def test_remove_absent_value_is_noop():
    cell = Cell()
    cell.remove(3)
    cell.remove(3)
    assert cell.possible() == set(range(GROUP_SIZE)) - {3}


def test_ready_when_one_candidate_left():
    cell = Cell()
    for value in range(GROUP_SIZE):
        if value != 6:
            cell.remove(value)
    assert cell.ready() == 6
    assert not cell.is_finalized()


def test_possible_is_a_snapshot():
    cell = Cell()
    snapshot = cell.possible()
    snapshot.clear()
    assert cell.possible() == set(range(GROUP_SIZE))

    snapshot = cell.possible()
    cell.remove(0)
    assert 0 in snapshot


def test_empty_cell_detection():
    cell = Cell()
    for value in range(GROUP_SIZE):
        cell.remove(value)
    assert cell.is_empty()
    assert cell.ready() is None


def test_display():
    cell = Cell()
    assert str(cell) == "X"
    cell.remove(0)
    assert cell.describe() == "X:{2,3,4,5,6,7,8,9}"
    cell.finalize(8)
    assert str(cell) == "9"
    assert cell.describe() == "9:{9}"
