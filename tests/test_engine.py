import random

import pytest

from autosweeper.engine import Minesweeper


def test_invalid_parameters():
    with pytest.raises(ValueError):
        Minesweeper(0, 5, 1)
    with pytest.raises(ValueError):
        Minesweeper(3, 3, 1)
    with pytest.raises(ValueError):
        Minesweeper(5, 5, 1, mines_generation_algorithm="anywhere")


def test_first_click_neighborhood_is_safe():
    game = Minesweeper(9, 9, 10, rng=random.Random(3))

    status, _ = game.reveal(4, 4)

    assert status in (0, 1)
    assert len(game.mines) == 10
    assert (4, 4) not in game.mines
    assert not set(game.neighbors(4, 4)) & game.mines


def test_hints_count_adjacent_mines():
    game = Minesweeper(9, 9, 10, rng=random.Random(5))
    game.reveal(0, 0)

    for y in range(9):
        for x in range(9):
            expected = sum(1 for n in game.neighbors(x, y) if n in game.mines)
            assert game.hints[y][x] == expected


def test_visible_grid_hides_closed_cells():
    game = Minesweeper(4, 4, 2, rng=random.Random(0))

    assert game.visible_grid() == [[None] * 4 for _ in range(4)]


def test_hitting_a_mine_ends_the_game():
    game = Minesweeper(9, 9, 40, rng=random.Random(7))
    game.reveal(0, 0)
    mx, my = next(iter(game.mines))

    status, payload = game.reveal(mx, my)

    assert status == -1
    assert payload["all_mines"] == frozenset(game.mines)
    assert game.game_over
    assert game.reveal(8, 8) == (0, {})


def test_revealing_every_safe_cell_wins():
    game = Minesweeper(3, 3, 0)

    status, payload = game.reveal(1, 1)

    assert status == 1
    assert len(payload["revealed_cells"]) == 9


def test_out_of_bounds_reveal_raises():
    with pytest.raises(ValueError):
        Minesweeper(3, 3, 0).reveal(3, 0)
