import matplotlib.pyplot as plt
import pytest

from autosweeper.analysis import (
    METRIC_KEYS,
    format_board,
    run_difficulty_analysis,
    run_session_many_tests,
    run_session_single_test,
)
from autosweeper.board import Board


def test_format_board():
    board = Board.from_rows(["?1", "0?"], flags=[(0, 0)])

    assert format_board(board, show_coords=False) == " F  1\n 0  ."
    assert format_board(board).splitlines()[2] == " 0 | F  1"


def test_single_game_reports_status():
    result = run_session_single_test(1, seed=4)

    assert result["status"] in (-1, 0, 1)
    assert set(METRIC_KEYS) <= set(result)


def test_many_games_rates_add_up():
    result = run_session_many_tests(1, 3, seed=10)

    assert result["win_rate"] + result["loss_rate"] + result["stuck_rate"] == pytest.approx(1.0)
    assert "avg_guesses_count" in result


def test_invalid_arguments():
    with pytest.raises(ValueError):
        run_session_many_tests(1, 0)
    with pytest.raises(ValueError):
        run_session_single_test(99)


def test_difficulty_analysis_without_showing():
    results = run_difficulty_analysis(1, levels=[1], seed=0, show=False)
    plt.close("all")

    assert list(results) == [1]
