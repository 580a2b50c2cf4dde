"""Transport contract between the solver session and a game server."""

import logging
import random
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional

from .config import DIFFICULTY_CONFIG, PROTOCOL_CONFIG, SOLVER_CONFIG
from .engine import LOST, WON, Minesweeper
from .protocol import MAP_COMMAND, format_map_message

logger = logging.getLogger(__name__)


class Transport(ABC):
    """
    A command channel to a game server.

    The session assigns on_message and sends commands with send(). Replies
    may arrive later; the session never expects them to be delivered from
    inside send().
    """

    def __init__(self) -> None:
        self.on_message: Optional[Callable[[str], None]] = None

    @abstractmethod
    def send(self, command: str) -> None:
        """Send one command string to the server."""
        raise NotImplementedError


class LocalTransport(Transport):
    """
    In-process game server speaking the text protocol.

    Commands are executed against a Minesweeper engine as soon as they are
    sent. Replies are queued and only handed to on_message by
    deliver_pending(), so a solve cycle always finishes before the map it
    asked for is processed.

    Typical usage:
        transport = LocalTransport(rng=random.Random(7))
        session = SolverSession(transport)
        session.start_game(1)
        session.set_autosolve()
        transport.deliver_pending()
    """

    def __init__(
        self,
        difficulty_config: Optional[Dict[int, Dict[str, Any]]] = None,
        mines_generation_algorithm: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__()
        self.difficulty_config = difficulty_config or DIFFICULTY_CONFIG
        self.mines_generation_algorithm = (
            mines_generation_algorithm or SOLVER_CONFIG["mines_generation_algorithm"]
        )
        self.rng = rng or random.Random()

        self.game: Optional[Minesweeper] = None
        self.pending: Deque[str] = deque()
        self.commands: List[str] = []

    def send(self, command: str) -> None:
        self.commands.append(command)
        self.pending.append(self._handle(command))

    def deliver_pending(self, max_messages: Optional[int] = None) -> int:
        """
        Hand queued replies to on_message, including replies to commands
        sent while handling them.

        Args:
            max_messages: Stop after this many messages. None drains the queue.

        Returns:
            Number of messages delivered.
        """
        delivered = 0
        while self.pending and (max_messages is None or delivered < max_messages):
            message = self.pending.popleft()
            delivered += 1
            if self.on_message is not None:
                self.on_message(message)
        return delivered

    # -------------------------------------------------------------------------
    # Server side
    # -------------------------------------------------------------------------

    def _handle(self, command: str) -> str:
        tokens = command.split()
        if not tokens:
            return "error: Empty command"

        name, args = tokens[0], tokens[1:]
        if name == "new":
            return self._handle_new(args)
        if name == "open":
            return self._handle_open(args)
        if name == MAP_COMMAND:
            if self.game is None:
                return "error: Game not started"
            return format_map_message(self.game.visible_grid())
        return "error: Unknown command"

    def _handle_new(self, args: List[str]) -> str:
        try:
            level = int(args[0])
            settings = self.difficulty_config[level]
        except (IndexError, ValueError, KeyError):
            return "new: Unknown level"

        self.game = Minesweeper(
            settings["width"],
            settings["height"],
            settings["mines"],
            mines_generation_algorithm=self.mines_generation_algorithm,
            rng=self.rng,
        )
        logger.info(
            "Local game %s: %dx%d, %d mines.",
            settings["name"], settings["width"], settings["height"], settings["mines"],
        )
        return "new: OK"

    def _handle_open(self, args: List[str]) -> str:
        if self.game is None:
            return "error: Game not started"
        try:
            x, y = int(args[0]), int(args[1])
        except (IndexError, ValueError):
            return "open: Bad coordinates"
        if self.game.game_over:
            return "open: Game over"

        try:
            status, _ = self.game.reveal(x, y)
        except ValueError:
            return "open: Out of bounds"

        if status == LOST:
            return f"open: {PROTOCOL_CONFIG['loss_token']}"
        if status == WON:
            return f"open: {PROTOCOL_CONFIG['win_token']}. All {self.game.mines_count} mines avoided."
        return "open: OK"
