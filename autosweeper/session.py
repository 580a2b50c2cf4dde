"""Solver session: one puzzle instance driven over a transport."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .board import Board, Cell
from .config import SOLVER_CONFIG
from .constraints import CellProbability, ConstraintSolver
from .deduction import DeductionPass, build_worklist
from .errors import MalformedMapError
from .grouping import find_groups
from .protocol import (
    MAP_COMMAND,
    is_loss_message,
    is_win_message,
    new_game_command,
    open_command,
    parse_map_message,
    validate_rows,
)
from .transport import Transport
from .worklist import CircularWorklist

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """
    What one solve step did.

    source is one of:
        "idle"        - nothing to do; only a refresh was requested
        "deduction"   - the worklist pass produced reveals and/or flags
        "constraints" - group enumeration found certain cells
        "guess"       - no certainty anywhere; the safest cell was opened
    """

    source: str
    reveals: List[Tuple[int, int]] = field(default_factory=list)
    flags: List[Tuple[int, int]] = field(default_factory=list)
    guess: Optional[CellProbability] = None

    @property
    def acted(self) -> bool:
        return self.source != "idle"


class SolverSession:
    """
    Solve one game at a time against a game server reached through a Transport.

    Upward interface for a front end:
        on_map_updated(raw_map) - a new grid arrived while not auto-solving
        on_game_lost()          - the server reported a loss
        on_game_win(message)    - the server reported a win
        start_game(), open_coords(), make_step(), set_autosolve()

    Each solve step runs the deduction pass and, if it stalls, the group
    constraint solver. Reveals are sent as "open x y" commands; flags stay
    local to the session. Every step ends by asking for a fresh map. In
    auto-solve mode that map triggers the next step, so steps and refreshes
    alternate and never overlap.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        max_group_variables: Optional[int] = SOLVER_CONFIG["max_group_variables"],
        first_click: Tuple[int, int] = SOLVER_CONFIG["first_click"],
    ) -> None:
        """
        Bind a session to a transport.

        Args:
            transport: Channel to the game server. Its on_message is taken over.
            max_group_variables: Skip constraint groups with more unknowns than this.
                None means no limit.
            first_click: Cell opened right after starting a new game.

        Raises:
            ValueError: If max_group_variables is not positive.
        """
        if max_group_variables is not None and max_group_variables <= 0:
            raise ValueError("max_group_variables must be positive or None.")

        self.transport = transport
        self.max_group_variables = max_group_variables
        self.first_click = first_click

        self.on_map_updated: Optional[Callable[[str], None]] = None
        self.on_game_lost: Optional[Callable[[], None]] = None
        self.on_game_win: Optional[Callable[[str], None]] = None

        self.autosolve: bool = False
        self.game_started: bool = False
        self._reset_game_state()

        transport.on_message = self.handle_message

    def _reset_game_state(self) -> None:
        self.raw_map: str = ""
        self.board: Optional[Board] = None
        self.map_size: Optional[Tuple[int, int]] = None
        self.worklist: CircularWorklist[Cell] = CircularWorklist()
        self.last_step: Optional[StepResult] = None

        # Metrics / counters (for analysis)
        self.steps_count: int = 0
        self.deduced_reveals_count: int = 0
        self.deduced_flags_count: int = 0
        self.group_reveals_count: int = 0
        self.group_flags_count: int = 0
        self.guesses_count: int = 0
        self.skipped_groups_count: int = 0

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def start_game(self, difficulty: int) -> None:
        """Drop all state of the previous game and start a new one."""
        logger.info("Starting new game at difficulty %d.", difficulty)
        self._reset_game_state()
        self.autosolve = False
        self.game_started = False
        self.transport.send(new_game_command(difficulty))
        self.open_coords(*self.first_click)

    def open_coords(self, x: int, y: int) -> None:
        """
        Reveal a cell by hand and ask for the resulting map.

        While auto-solving, a map is already on its way, so none is requested.
        """
        self.transport.send(open_command(x, y))
        if not self.autosolve:
            self.request_map()

    def request_map(self) -> None:
        self.transport.send(MAP_COMMAND)

    def set_autosolve(self) -> bool:
        """
        Switch to continuous solving and take the first step.

        Has no effect until the first map of a game has arrived, and
        takes no extra step when auto-solve is already on.

        Returns:
            True if auto-solve is on.
        """
        if not self.game_started:
            logger.info("Auto-solve ignored: no game in progress.")
            return False
        if self.autosolve:
            return True
        logger.info("Auto-solve on.")
        self.autosolve = True
        self.make_step()
        return True

    def stop_autosolve(self) -> None:
        if self.autosolve:
            logger.info("Auto-solve off.")
        self.autosolve = False

    def make_step(self) -> StepResult:
        """
        Run one full decision cycle on the current board.

        The deduction pass runs first. Only if it takes no action are the
        constraint groups solved: certain mines are flagged, certain safe
        cells opened, and failing any certainty the lowest-probability cell
        is opened as a guess. A map refresh is requested in every case.

        A step that finds nothing to do ends auto-solve, since the map it
        asks for cannot change anything.
        """
        self.steps_count += 1
        step = self._decide()

        for x, y in step.reveals:
            self.transport.send(open_command(x, y))

        if not step.acted and self.autosolve:
            logger.info("Nothing left to deduce or guess.")
            self.stop_autosolve()

        self.last_step = step
        self.request_map()
        return step

    def _decide(self) -> StepResult:
        board = self.board
        if board is None:
            return StepResult("idle")

        self.worklist = build_worklist(board)
        deduction = DeductionPass(board, self.worklist).run()
        if deduction.acted:
            self.deduced_reveals_count += len(deduction.reveals)
            self.deduced_flags_count += len(deduction.flags)
            return StepResult("deduction", deduction.reveals, deduction.flags)

        groups = find_groups(board)
        solved = ConstraintSolver(board, self.max_group_variables).solve(groups)
        self.skipped_groups_count += solved.skipped_groups_count

        if solved.reveals or solved.flags:
            self.group_reveals_count += len(solved.reveals)
            self.group_flags_count += len(solved.flags)
            return StepResult("constraints", solved.reveals, solved.flags)

        if solved.guess is not None:
            self.guesses_count += 1
            logger.info(
                "Guessing (%d, %d), mine probability %.3f.",
                solved.guess.cell.x, solved.guess.cell.y, solved.guess.probability,
            )
            return StepResult("guess", [solved.guess.cell.coords], guess=solved.guess)

        return StepResult("idle")

    # -------------------------------------------------------------------------
    # Inbound messages
    # -------------------------------------------------------------------------

    def handle_message(self, message: str) -> None:
        """Process one message from the server."""
        rows = parse_map_message(message)
        if rows is not None and self._apply_map(rows):
            if self.autosolve:
                self.make_step()
            elif self.on_map_updated is not None:
                self.on_map_updated(self.raw_map)

        if is_loss_message(message):
            logger.info("Game lost.")
            self.game_started = False
            self.stop_autosolve()
            if self.on_game_lost is not None:
                self.on_game_lost()

        if is_win_message(message):
            logger.info("Game won.")
            self.game_started = False
            self.stop_autosolve()
            if self.on_game_win is not None:
                self.on_game_win(message)

    def _apply_map(self, rows: Sequence[str]) -> bool:
        """Rebuild the board from map rows; keep the old one if they are malformed."""
        try:
            validate_rows(rows, self.map_size)
        except MalformedMapError as exc:
            logger.warning("Ignoring malformed map: %s", exc)
            return False

        flags = self.board.flags if self.board is not None else ()
        self.board = Board.from_rows(rows, flags=flags)
        self.raw_map = "".join(row + "\n" for row in rows)

        if self.map_size is None:
            self.map_size = (self.board.width, self.board.height)
            self.game_started = True
            logger.info("Game started: %dx%d board.", *self.map_size)
        return True

    def metrics(self) -> Dict[str, int]:
        """Counters for the current game."""
        return {
            "steps_count": self.steps_count,
            "deduced_reveals_count": self.deduced_reveals_count,
            "deduced_flags_count": self.deduced_flags_count,
            "group_reveals_count": self.group_reveals_count,
            "group_flags_count": self.group_flags_count,
            "guesses_count": self.guesses_count,
            "skipped_groups_count": self.skipped_groups_count,
            "flags_count": len(self.board.flags) if self.board is not None else 0,
        }
