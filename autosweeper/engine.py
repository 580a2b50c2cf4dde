"""Game engine behind LocalTransport: mine layout, hints and cell reveals."""

import random
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from .board import UNKNOWN
from .utils import get_neighborhoods

# reveal() status codes
LOST = -1
IN_PROGRESS = 0
WON = 1

# Mine layout rule -> whether the first click's neighbors are kept mine-free too.
MINES_GENERATION_ALGORITHMS: Dict[str, bool] = {
    "safe_first_action_rule": False,
    "safe_neighborhood_rule": True,
}


class Minesweeper:
    """
    One game on a width x height grid.

    Mines are laid out lazily on the first reveal so that the first clicked
    cell (and, under safe_neighborhood_rule, its neighbors) is never a mine.
    """

    def __init__(
        self,
        width: int,
        height: int,
        mines_count: int,
        mines_generation_algorithm: str = "safe_neighborhood_rule",
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Args:
            width: Number of columns, must be > 0.
            height: Number of rows, must be > 0.
            mines_count: Mines to lay out, must be >= 0.
            mines_generation_algorithm: Key of MINES_GENERATION_ALGORITHMS.
            rng: Random source for the layout. Defaults to a fresh Random.

        Raises:
            ValueError: On bad dimensions, an unknown algorithm, or more mines
                than the first-click safe zone leaves room for.
        """
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive.")
        if mines_count < 0:
            raise ValueError("mines_count must be non-negative.")
        if mines_generation_algorithm not in MINES_GENERATION_ALGORITHMS:
            raise ValueError(
                "mines_generation_algorithm must be one of "
                f"{sorted(MINES_GENERATION_ALGORITHMS)}."
            )

        # Worst case safe zone: the first click plus 8 neighbors.
        reserved = 9 if MINES_GENERATION_ALGORITHMS[mines_generation_algorithm] else 1
        if mines_count > width * height - reserved:
            raise ValueError(
                f"{mines_count} mines do not fit a {width}x{height} grid "
                f"under {mines_generation_algorithm}."
            )

        self.width = width
        self.height = height
        self.mines_count = mines_count
        self.mines_generation_algorithm = mines_generation_algorithm
        self.rng = rng or random.Random()

        self.mines: Set[Tuple[int, int]] = set()
        self.hints: List[List[int]] = [[0] * width for _ in range(height)]
        self.opened: Set[Tuple[int, int]] = set()
        self.game_over = False

        self._neighborhoods = get_neighborhoods(width, height)

    @property
    def mines_placed(self) -> bool:
        return bool(self.mines) or bool(self.opened)

    @property
    def safe_cells_left(self) -> int:
        return self.width * self.height - self.mines_count - len(self.opened)

    def neighbors(self, x: int, y: int) -> Tuple[Tuple[int, int], ...]:
        return self._neighborhoods[(x, y)]

    def place_mines(self, first_x: int, first_y: int) -> None:
        """
        Lay out mines uniformly over every cell outside the first click's safe zone.

        Raises:
            ValueError: If mines were already laid out.
        """
        if self.mines_placed:
            raise ValueError("Mines are already placed.")

        safe_zone = {(first_x, first_y)}
        if MINES_GENERATION_ALGORITHMS[self.mines_generation_algorithm]:
            safe_zone.update(self.neighbors(first_x, first_y))

        candidates = [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if (x, y) not in safe_zone
        ]
        self.mines = set(self.rng.sample(candidates, self.mines_count))

        for mx, my in self.mines:
            for nx, ny in self.neighbors(mx, my):
                self.hints[ny][nx] += 1

    def flood_fill(self, x: int, y: int) -> List[Tuple[int, int, int]]:
        """
        Open (x, y) and, through every zero hint reached, the cells around it.

        Returns:
            Newly opened cells as (x, y, hint), in the order they were opened.
        """
        opened_now: List[Tuple[int, int, int]] = []
        stack = [(x, y)]

        while stack:
            cx, cy = stack.pop()
            if (cx, cy) in self.opened:
                continue
            self.opened.add((cx, cy))
            hint = self.hints[cy][cx]
            opened_now.append((cx, cy, hint))

            if hint == 0:
                stack.extend(n for n in self.neighbors(cx, cy) if n not in self.opened)

        return opened_now

    def reveal(self, x: int, y: int) -> Tuple[int, Dict[str, object]]:
        """
        Open one cell.

        Returns:
            (status, payload). status is LOST, IN_PROGRESS or WON.
            On LOST the payload holds "all_mines"; otherwise "revealed_cells"
            as returned by flood_fill(). Reveals after the game is over, or of
            an already open cell, are no-ops: (IN_PROGRESS, {}).

        Raises:
            ValueError: If (x, y) is outside the grid.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"Cell ({x}, {y}) is outside the board.")
        if self.game_over or (x, y) in self.opened:
            return IN_PROGRESS, {}

        if not self.mines_placed:
            self.place_mines(x, y)

        if (x, y) in self.mines:
            self.game_over = True
            all_mines: FrozenSet[Tuple[int, int]] = frozenset(self.mines)
            return LOST, {"all_mines": all_mines}

        revealed_cells = self.flood_fill(x, y)
        if self.safe_cells_left == 0:
            self.game_over = True
            return WON, {"revealed_cells": revealed_cells}
        return IN_PROGRESS, {"revealed_cells": revealed_cells}

    def visible_grid(self) -> List[List[Optional[int]]]:
        """grid[y][x] as a player sees it: the hint of an opened cell, else UNKNOWN."""
        return [
            [
                self.hints[y][x] if (x, y) in self.opened else UNKNOWN
                for x in range(self.width)
            ]
            for y in range(self.height)
        ]
