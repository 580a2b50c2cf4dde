"""Terminal front end for the solver session."""

import argparse
import random
from typing import List, Optional

from .analysis import format_board
from .config import DIFFICULTY_CONFIG
from .session import SolverSession
from .transport import LocalTransport
from .utils import setup_logging

HELP = """Commands:
  new N     start a new game at difficulty N ({levels})
  open x y  reveal a cell (0-based)
  step      let the solver make one step
  auto      let the solver play until the game ends
  q         quit"""


def play_cli(session: SolverSession, transport: LocalTransport) -> None:
    """
    Run a simple terminal UI over a session bound to a LocalTransport.

    Args:
        session: Session whose callbacks will print to the terminal.
        transport: The session's transport; replies are delivered after
            each command.
    """
    def show_map(_raw_map: str) -> None:
        if session.board is not None:
            print(format_board(session.board))

    def lost() -> None:
        print("\nThe solver hit a mine. Game lost.")

    def won(message: str) -> None:
        print(f"\n{message}")

    session.on_map_updated = show_map
    session.on_game_lost = lost
    session.on_game_win = won

    levels = ", ".join(f"{k}={v['name']}" for k, v in sorted(DIFFICULTY_CONFIG.items()))
    print(HELP.format(levels=levels))

    while True:
        s = input("\n> ").strip()
        parts = s.replace(",", " ").split()
        if not parts:
            continue

        command = parts[0].lower()
        if command in {"q", "quit", "exit"}:
            print("Quit.")
            return

        if command == "new" and len(parts) == 2:
            try:
                level = int(parts[1])
            except ValueError:
                print("Difficulty must be an integer.")
                continue
            session.start_game(level)
        elif command == "open" and len(parts) == 3:
            try:
                x, y = int(parts[1]), int(parts[2])
            except ValueError:
                print("Invalid input. Coordinates must be integers.")
                continue
            session.open_coords(x, y)
        elif command == "step":
            step = session.make_step()
            print(f"Step: {step.source}, {len(step.reveals)} opened, {len(step.flags)} flagged.")
        elif command == "auto":
            if not session.set_autosolve():
                print("Start a game first.")
                continue
        else:
            print("Invalid input. Example: open 3 5")
            continue

        transport.deliver_pending()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Play and auto-solve Minesweeper in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="seed for mine placement")
    parser.add_argument("--log-level", default=None, help="logging level, e.g. DEBUG")
    parser.add_argument(
        "--max-group-variables", type=int, default=None,
        help="skip constraint groups with more unknowns than this",
    )
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    transport = LocalTransport(rng=random.Random(args.seed))
    session = SolverSession(transport, max_group_variables=args.max_group_variables)
    play_cli(session, transport)


if __name__ == "__main__":
    main()
