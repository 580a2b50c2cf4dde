import pytest

from autosweeper.errors import MalformedMapError
from autosweeper.protocol import (
    format_map_message,
    is_loss_message,
    is_win_message,
    new_game_command,
    open_command,
    parse_map_message,
    render_rows,
    validate_rows,
)


def test_commands():
    assert new_game_command(3) == "new 3"
    assert open_command(4, 7) == "open 4 7"


def test_parse_map_message():
    assert parse_map_message("map:\n□1\n00\n") == ["□1", "00"]


def test_parse_non_map_messages():
    assert parse_map_message("new: OK") is None
    assert parse_map_message("open: You lose") is None


def test_validate_rows():
    validate_rows(["□1", "00"])
    validate_rows(["□1", "00"], expected_size=(2, 2))

    with pytest.raises(MalformedMapError):
        validate_rows([])
    with pytest.raises(MalformedMapError):
        validate_rows(["□1", "0"])
    with pytest.raises(MalformedMapError):
        validate_rows(["□1", "00"], expected_size=(3, 2))


def test_result_messages():
    assert is_loss_message("open: You lose")
    assert is_win_message("open: You win. All 10 mines avoided.")
    assert not is_loss_message("open: OK")
    assert not is_win_message("open: OK")


def test_format_map_message():
    grid = [[None, 1], [0, 2]]

    assert render_rows(grid, closed_char="?") == ["?1", "02"]
    assert format_map_message(grid) == "map:\n□1\n02\n"
    assert parse_map_message(format_map_message(grid)) == ["□1", "02"]


def test_non_ascii_digits_are_rejected():
    with pytest.raises(MalformedMapError):
        validate_rows(["?²?"])
    with pytest.raises(MalformedMapError):
        validate_rows(["?١?"])


def test_parse_map_message_without_line_break():
    assert parse_map_message("map:?1?\n") == ["?1?"]
