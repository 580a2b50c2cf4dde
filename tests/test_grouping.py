import random

from autosweeper.board import Board
from autosweeper.engine import Minesweeper
from autosweeper.grouping import find_groups, has_common_closed_neighbors, is_unsatisfied


def coords(groups):
    return [[c.coords for c in group] for group in groups]


def test_single_cell_group():
    board = Board.from_rows(["?1?"])

    assert coords(find_groups(board)) == [[(1, 0)]]


def test_adjacent_cells_sharing_unknowns_are_grouped():
    board = Board.from_rows(["11", "??"])

    assert coords(find_groups(board)) == [[(0, 0), (1, 0)]]


def test_adjacent_cells_with_disjoint_unknowns_stay_apart():
    board = Board.from_rows(["?11?"])

    assert not has_common_closed_neighbors(board, board.cell(1, 0), board.cell(2, 0))
    assert coords(find_groups(board)) == [[(1, 0)], [(2, 0)]]


def test_satisfied_cells_are_excluded():
    board = Board.from_rows(["?1?"], flags=[(0, 0)])

    assert not is_unsatisfied(board, board.cell(1, 0))
    assert find_groups(board) == []


def test_groups_partition_unsatisfied_cells():
    game = Minesweeper(16, 16, 40, rng=random.Random(11))
    game.reveal(8, 8)
    board = Board(game.visible_grid())

    groups = find_groups(board)
    seen = [c.coords for group in groups for c in group]
    expected = {c.coords for c in board.numbered_cells() if is_unsatisfied(board, c)}

    assert len(seen) == len(set(seen))
    assert set(seen) == expected
    assert coords(find_groups(board)) == coords(groups)
