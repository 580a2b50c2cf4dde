"""
Quickstart example for the Minesweeper auto-solver.

This script demonstrates basic usage of the solver session.
"""

import random

from autosweeper import (
    Board,
    ConstraintSolver,
    LocalTransport,
    SolverSession,
    find_groups,
    format_board,
    run_session_many_tests,
)
from autosweeper.utils import setup_logging


def main():
    setup_logging("WARNING")

    print("=" * 60)
    print("Minesweeper Auto-Solver - Quickstart Example")
    print("=" * 60)

    # Example 1: Probabilities for a hand-made board
    print("\n1. Mine probabilities for the row '?1?'...")
    print("-" * 60)

    board = Board.from_rows(["?1?"])
    result = ConstraintSolver(board).solve(find_groups(board))
    for solution in result.solutions:
        for p in solution.probabilities:
            print(f"({p.cell.x}, {p.cell.y}): {p.probability:.2f}")
    print(f"Guess: {result.guess.cell.coords}")

    # Example 2: Auto-solve one game against the local server
    print("\n2. Auto-solving a beginner game...")
    print("-" * 60)

    transport = LocalTransport(rng=random.Random(42))
    session = SolverSession(transport)
    session.on_game_lost = lambda: print("Result: LOST")
    session.on_game_win = lambda message: print(f"Result: {message}")

    session.start_game(1)
    transport.deliver_pending()
    session.set_autosolve()
    transport.deliver_pending()

    print(format_board(session.board))
    for name, value in session.metrics().items():
        print(f"{name}: {value}")

    # Example 3: Win rates by difficulty level
    print("\n3. Win rates by difficulty level (20 games each)...")
    print("-" * 60)

    for level, name in [(1, "Beginner"), (2, "Intermediate"), (3, "Expert")]:
        results = run_session_many_tests(level, runs=20, seed=1000)
        print(f"{name:15s}: {results['win_rate']*100:5.1f}% win rate, "
              f"{results['avg_guesses_count']:.1f} guesses per game")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
