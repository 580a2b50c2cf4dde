import pytest

from autosweeper.utils import get_neighborhoods


def test_neighborhoods_are_cached_per_size():
    assert get_neighborhoods(4, 3) is get_neighborhoods(4, 3)


def test_neighbor_counts():
    table = get_neighborhoods(3, 3)

    assert len(table) == 9
    assert len(table[(1, 1)]) == 8
    assert len(table[(0, 1)]) == 5
    assert len(table[(2, 2)]) == 3


def test_single_cell_has_no_neighbors():
    assert get_neighborhoods(1, 1) == {(0, 0): ()}


def test_invalid_size_raises():
    with pytest.raises(ValueError):
        get_neighborhoods(0, 3)
