"""Analysis and benchmarking tools for the solver session."""

import random
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import numpy as np

from .board import Board
from .config import DIFFICULTY_CONFIG
from .session import SolverSession
from .transport import LocalTransport

METRIC_KEYS = (
    "steps_count",
    "deduced_reveals_count",
    "deduced_flags_count",
    "group_reveals_count",
    "group_flags_count",
    "guesses_count",
    "skipped_groups_count",
    "flags_count",
)


def format_board(board: Board, *, show_coords: bool = True) -> str:
    """
    Format a solver board as a human-readable string.

    Args:
        board: Board to display.
        show_coords: If True, include coordinate labels and a header.

    Returns:
        A text grid where closed cells are shown as '.', flags as 'F' and
        open cells as their hint.
    """
    def cell_char(x: int, y: int) -> str:
        if (x, y) in board.flags:
            return "F"
        hint = board.grid[y][x]
        if hint is None:
            return "."
        return str(hint)

    lines: List[str] = []
    if show_coords:
        header = " ".join(f"{x:2d}" for x in range(board.width))
        lines.append("   " + header)
        lines.append("   " + "-" * (3 * board.width - 1))

    for y in range(board.height):
        row = " ".join(f" {cell_char(x, y)}" for x in range(board.width))
        lines.append(f"{y:2d} |" + row if show_coords else row)

    return "\n".join(lines)


def run_session_single_test(
    level: int,
    *,
    seed: Optional[int] = None,
    max_group_variables: Optional[int] = None,
    show_board: bool = False,
) -> Dict[str, object]:
    """
    Play one auto-solved game against a LocalTransport.

    Args:
        level: Difficulty level from DIFFICULTY_CONFIG.
        seed: Seed for mine placement, for reproducible games.
        max_group_variables: Passed to the session.
        show_board: If True, print the solver's final board.

    Returns:
        The session metrics plus "status": 1 win, -1 loss, 0 solver stopped.
    """
    if level not in DIFFICULTY_CONFIG:
        raise ValueError(f"Unknown difficulty level: {level}")

    transport = LocalTransport(rng=random.Random(seed))
    session = SolverSession(transport, max_group_variables=max_group_variables)

    outcome = {"status": 0}

    def lost() -> None:
        outcome["status"] = -1

    def won(_message: str) -> None:
        outcome["status"] = 1

    session.on_game_lost = lost
    session.on_game_win = won

    session.start_game(level)
    transport.deliver_pending()
    if session.set_autosolve():
        transport.deliver_pending()

    if show_board and session.board is not None:
        print(format_board(session.board))
        print(f"Finished with status {outcome['status']}.")

    out: Dict[str, object] = dict(session.metrics())
    out["status"] = outcome["status"]
    return out


def run_session_many_tests(
    level: int,
    runs: int,
    *,
    seed: Optional[int] = None,
    max_group_variables: Optional[int] = None,
) -> Dict[str, float]:
    """
    Run many independent games and return averaged metrics plus win rate.

    Args:
        level: Difficulty level from DIFFICULTY_CONFIG.
        runs: Number of games, must be positive.
        seed: Base seed; game i uses seed + i.
        max_group_variables: Passed to each session.

    Returns:
        "avg_<metric>" for every session metric, plus win_rate, loss_rate
        and stuck_rate.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    statuses = np.zeros(runs, dtype=np.int8)
    metrics = np.zeros((runs, len(METRIC_KEYS)), dtype=np.float64)

    for i in range(runs):
        game_seed = None if seed is None else seed + i
        result = run_session_single_test(
            level, seed=game_seed, max_group_variables=max_group_variables
        )
        statuses[i] = result["status"]
        metrics[i] = [float(result[k]) for k in METRIC_KEYS]

    out: Dict[str, float] = {
        f"avg_{k}": float(v) for k, v in zip(METRIC_KEYS, metrics.mean(axis=0))
    }
    out["win_rate"] = float(np.mean(statuses == 1))
    out["loss_rate"] = float(np.mean(statuses == -1))
    out["stuck_rate"] = float(np.mean(statuses == 0))
    return out


def run_difficulty_analysis(
    runs: int,
    *,
    levels: Optional[List[int]] = None,
    seed: Optional[int] = None,
    show: bool = True,
) -> Dict[int, Dict[str, float]]:
    """
    Run aggregated games per difficulty level and plot summaries.

    Returns:
        Mapping from level to the statistics returned by run_session_many_tests().
    """
    if levels is None:
        levels = sorted(DIFFICULTY_CONFIG)

    results: Dict[int, Dict[str, float]] = {
        level: run_session_many_tests(level, runs, seed=seed) for level in levels
    }

    names = [DIFFICULTY_CONFIG[level]["name"] for level in levels]
    x = np.arange(len(levels))
    bar_w = 0.25

    # 1) Actions by source
    deduced = [
        results[lv]["avg_deduced_reveals_count"] + results[lv]["avg_deduced_flags_count"]
        for lv in levels
    ]
    grouped = [
        results[lv]["avg_group_reveals_count"] + results[lv]["avg_group_flags_count"]
        for lv in levels
    ]
    guesses = [results[lv]["avg_guesses_count"] for lv in levels]

    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w, deduced, width=bar_w, label="deduction")  # type: ignore[misc]
    plt.bar(x, grouped, width=bar_w, label="groups")  # type: ignore[misc]
    plt.bar(x + bar_w, guesses, width=bar_w, label="guesses")  # type: ignore[misc]
    plt.xticks(x, names)  # type: ignore[misc]
    plt.ylabel("Average actions per game")  # type: ignore[misc]
    plt.title("Actions by source")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()

    # 2) Outcome by level
    plt.figure()  # type: ignore[misc]
    plt.bar(x, [results[lv]["win_rate"] for lv in levels])  # type: ignore[misc]
    plt.xticks(x, names)  # type: ignore[misc]
    plt.ylabel("Win rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Win rate by difficulty level")  # type: ignore[misc]
    plt.tight_layout()

    if show:
        plt.show()  # type: ignore[misc]

    return results
