import pytest

from autosweeper.board import UNKNOWN, Board, Cell, parse_hint


def test_parse_hint():
    assert parse_hint("3") == 3
    assert parse_hint("0") == 0
    assert parse_hint("□") is UNKNOWN
    assert parse_hint("?") is UNKNOWN
    assert parse_hint("²") is UNKNOWN


def test_from_rows_parses_hints():
    board = Board.from_rows(["1?2", "0□?"])

    assert (board.width, board.height) == (3, 2)
    assert board.grid == [[1, None, 2], [0, None, None]]


def test_ragged_grid_raises():
    with pytest.raises(ValueError):
        Board([[1, None], [1]])


def test_cell_out_of_bounds_raises():
    board = Board.from_rows(["??"])

    with pytest.raises(IndexError):
        board.cell(2, 0)


def test_cells_compare_by_coordinates():
    assert Cell(1, 2, 3) == Cell(1, 2)
    assert hash(Cell(1, 2, 3)) == hash(Cell(1, 2, None))
    assert Cell(1, 2) != Cell(2, 1)


def test_neighbors_are_row_major():
    board = Board.from_rows(["???", "???", "???"])

    coords = [n.coords for n in board.neighbors(board.cell(1, 1))]

    assert coords == [(0, 0), (1, 0), (2, 0), (0, 1), (2, 1), (0, 2), (1, 2), (2, 2)]


def test_neighbors_are_clipped_at_corner():
    board = Board.from_rows(["???", "???", "???"])

    coords = [n.coords for n in board.neighbors(board.cell(0, 0))]

    assert coords == [(1, 0), (0, 1), (1, 1)]


def test_numbered_cells_skip_zero_and_closed():
    board = Board.from_rows(["10?", "?2?"])

    assert [c.coords for c in board.numbered_cells()] == [(0, 0), (1, 1)]


def test_neighbor_counts_with_flags():
    board = Board.from_rows(["??1", "???"], flags=[(1, 0)])
    cell = board.cell(2, 0)

    assert board.flagged_neighbor_count(cell) == 1
    assert board.closed_neighbor_count(cell) == 3
    assert board.closed_unflagged_coords(cell) == {(1, 1), (2, 1)}
    assert board.is_open_numbered(cell)


def test_flags_on_open_or_missing_cells_are_dropped():
    board = Board.from_rows(["1?"], flags=[(0, 0), (1, 0), (5, 5)])

    assert board.flags == {(1, 0)}


def test_mark_flag():
    board = Board.from_rows(["1?"])

    board.mark_flag(board.cell(1, 0))
    assert board.is_flagged(board.cell(1, 0))
    # flagged cells stay closed
    assert board.is_closed(board.cell(1, 0))

    with pytest.raises(ValueError):
        board.mark_flag(board.cell(0, 0))
