"""Deterministic deduction over the circular worklist of numbered cells."""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from .board import Board, Cell
from .worklist import CircularWorklist

logger = logging.getLogger(__name__)


@dataclass
class DeductionResult:
    """Actions produced by one deduction pass."""

    reveals: List[Tuple[int, int]] = field(default_factory=list)
    flags: List[Tuple[int, int]] = field(default_factory=list)
    resolved_count: int = 0

    @property
    def acted(self) -> bool:
        return bool(self.reveals or self.flags)


def build_worklist(board: Board) -> CircularWorklist[Cell]:
    """Queue every open cell with a non-zero hint, row-major."""
    worklist: CircularWorklist[Cell] = CircularWorklist()
    for cell in board.numbered_cells():
        worklist.append(cell)
    return worklist


class DeductionPass:
    """
    Drain a worklist with the two single-cell rules until a fixed point.

    For each visited numbered cell, in this order:

    1. Satisfied: flagged neighbors == hint. Every closed, unflagged
       neighbor is safe and is revealed. The cell is resolved.
    2. Saturated: closed neighbors == hint. Every closed neighbor is a
       mine and is flagged. The cell is resolved.

    Resolved cells leave the worklist. Cells where neither rule fires stay
    for a later lap, since flags placed meanwhile may change their counts.

    The pass stops when the worklist is empty or when a whole lap goes by
    without an action or removal. A lap is detected with a sentinel: the
    first idle node seen after the last change. Reaching it again means a
    full revolution changed nothing.
    """

    def __init__(self, board: Board, worklist: CircularWorklist[Cell]) -> None:
        self.board = board
        self.worklist = worklist

    def run(self) -> DeductionResult:
        """
        Run the pass to its fixed point, flagging cells on the board as it goes.

        Reveals are only reported, since the grid does not change until the
        next refresh.

        Returns:
            The reveal and flag actions taken. If any were taken, the caller
            must refresh the grid before deducing further.
        """
        result = DeductionResult()
        pending_reveals = set()
        sentinel = None
        idle_visits = 0

        for handle in self.worklist.traverse():
            if handle == sentinel:
                break
            # Bound on top of the sentinel: one idle lap is at most len() visits.
            if idle_visits > len(self.worklist):
                logger.warning("Deduction pass exceeded one idle lap; stopping.")
                break

            cell = self.worklist.value(handle)
            neighbors = self.board.neighbors(cell)

            if self._flagged_count(neighbors) == cell.hint:
                for n in neighbors:
                    if (
                        self.board.is_closed(n)
                        and not self.board.is_flagged(n)
                        and n.coords not in pending_reveals
                    ):
                        pending_reveals.add(n.coords)
                        result.reveals.append(n.coords)
                logger.debug("(%d, %d) satisfied; resolved.", cell.x, cell.y)
                self.worklist.remove(handle)
                result.resolved_count += 1
                sentinel = None
                idle_visits = 0
                continue

            if self._closed_count(neighbors) == cell.hint:
                for n in neighbors:
                    if self.board.is_closed(n) and not self.board.is_flagged(n):
                        self.board.mark_flag(n)
                        result.flags.append(n.coords)
                logger.debug("(%d, %d) saturated; resolved.", cell.x, cell.y)
                self.worklist.remove(handle)
                result.resolved_count += 1
                sentinel = None
                idle_visits = 0
                continue

            idle_visits += 1
            if sentinel is None:
                sentinel = handle

        logger.debug(
            "Deduction pass: %d reveals, %d flags, %d cells left.",
            len(result.reveals), len(result.flags), len(self.worklist),
        )
        return result

    def _flagged_count(self, neighbors: List[Cell]) -> int:
        return sum(1 for n in neighbors if self.board.is_flagged(n))

    def _closed_count(self, neighbors: List[Cell]) -> int:
        return sum(1 for n in neighbors if self.board.is_closed(n))
