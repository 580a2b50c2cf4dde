"""Board state seen by the solver: parsed hints plus the solver's own flags."""

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .utils import get_neighborhoods

logger = logging.getLogger(__name__)

# Hint value of a closed (unrevealed) cell.
UNKNOWN: Optional[int] = None


@dataclass(frozen=True)
class Cell:
    """
    One grid position and the hint shown there.

    Cells are re-derived from the board on demand and compared by coordinate
    only, so two Cell objects for the same square are equal whatever hint
    they were built with.
    """

    x: int
    y: int
    hint: Optional[int] = field(default=UNKNOWN, compare=False)

    @property
    def coords(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def is_closed(self) -> bool:
        return self.hint is UNKNOWN

    @property
    def is_numbered(self) -> bool:
        """True for an open cell with a non-zero hint."""
        return self.hint is not UNKNOWN and self.hint > 0


def parse_hint(ch: str) -> Optional[int]:
    """Map one grid character to a hint; anything but an ASCII digit is a closed cell."""
    if "0" <= ch <= "9":
        return int(ch)
    return UNKNOWN


class Board:
    """
    A rectangular grid of hints plus the set of flagged coordinates.

    The board is rebuilt from scratch on every grid refresh. Flags carried
    over from the previous board are kept only where the cell is still
    closed, so every flag always sits on a closed cell.
    """

    def __init__(
        self,
        grid: Sequence[Sequence[Optional[int]]],
        flags: Optional[Iterable[Tuple[int, int]]] = None,
    ) -> None:
        """
        Build a board from a row-major grid of hints.

        Args:
            grid: grid[y][x] is the hint at (x, y), or UNKNOWN for a closed cell.
                All rows must have the same length.
            flags: Coordinates previously marked as mines.

        Raises:
            ValueError: If the grid is ragged.
        """
        self.height: int = len(grid)
        self.width: int = len(grid[0]) if grid else 0

        if any(len(row) != self.width for row in grid):
            raise ValueError("All grid rows must have the same length.")

        self.grid: List[List[Optional[int]]] = [list(row) for row in grid]
        self.flags: Set[Tuple[int, int]] = set()

        for fx, fy in flags or ():
            if self.in_bounds(fx, fy) and self.grid[fy][fx] is UNKNOWN:
                self.flags.add((fx, fy))
            else:
                logger.warning("Dropping flag on (%d, %d): cell is not closed.", fx, fy)

        self._neighborhoods = (
            get_neighborhoods(self.width, self.height) if self.width and self.height else {}
        )

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        flags: Optional[Iterable[Tuple[int, int]]] = None,
    ) -> "Board":
        """Build a board from text rows, one character per cell."""
        return cls([[parse_hint(ch) for ch in row] for row in rows], flags=flags)

    # -------------------------------------------------------------------------
    # Cell access
    # -------------------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) is out of bounds.")
        return Cell(x, y, self.grid[y][x])

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Cell(x, y, self.grid[y][x])

    def numbered_cells(self) -> Iterator[Cell]:
        """Iterate over open cells with a non-zero hint, row-major."""
        return (cell for cell in self.cells() if cell.is_numbered)

    def neighbors(self, cell: Cell) -> List[Cell]:
        """Return the up-to-8 adjacent cells, row-major within the 3x3 window."""
        return [
            Cell(nx, ny, self.grid[ny][nx])
            for nx, ny in self._neighborhoods[cell.coords]
        ]

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def is_flagged(self, cell: Cell) -> bool:
        return cell.coords in self.flags

    def is_closed(self, cell: Cell) -> bool:
        return self.grid[cell.y][cell.x] is UNKNOWN

    def is_open_numbered(self, cell: Cell) -> bool:
        return self.cell(cell.x, cell.y).is_numbered

    def flagged_neighbor_count(self, cell: Cell) -> int:
        return sum(1 for n in self.neighbors(cell) if self.is_flagged(n))

    def closed_neighbor_count(self, cell: Cell) -> int:
        """Count closed neighbors, flagged ones included."""
        return sum(1 for n in self.neighbors(cell) if self.is_closed(n))

    def closed_unflagged_neighbors(self, cell: Cell) -> List[Cell]:
        return [
            n for n in self.neighbors(cell)
            if self.is_closed(n) and not self.is_flagged(n)
        ]

    def closed_unflagged_coords(self, cell: Cell) -> AbstractSet[Tuple[int, int]]:
        return frozenset(n.coords for n in self.closed_unflagged_neighbors(cell))

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def mark_flag(self, cell: Cell) -> None:
        """
        Mark a closed cell as a mine.

        The grid hint is left unchanged: flagged cells stay closed for the
        rest of the game.

        Raises:
            ValueError: If the cell is open.
        """
        if not self.is_closed(cell):
            raise ValueError(f"Cannot flag open cell ({cell.x}, {cell.y}).")
        self.flags.add(cell.coords)

    def __repr__(self) -> str:
        return f"Board(width={self.width}, height={self.height}, flags={len(self.flags)})"
