"""Partition the numbered frontier into independent constraint groups."""

import logging
from typing import List, Optional, Set, Tuple

from .board import Board, Cell

logger = logging.getLogger(__name__)


def has_common_closed_neighbors(board: Board, cell1: Cell, cell2: Cell) -> bool:
    """True if the two cells share at least one closed, unflagged neighbor."""
    return bool(
        board.closed_unflagged_coords(cell1) & board.closed_unflagged_coords(cell2)
    )


def is_unsatisfied(board: Board, cell: Cell) -> bool:
    """True for a numbered cell still missing flagged mines around it."""
    return (
        board.is_open_numbered(cell)
        and board.flagged_neighbor_count(cell) < cell.hint
    )


def find_groups(board: Board) -> List[List[Cell]]:
    """
    Flood-fill the unsatisfied numbered cells into connected groups.

    Two numbered cells are connected when they are grid neighbors and share
    a closed, unflagged neighbor. Cells that merely touch but constrain
    disjoint unknowns stay in separate groups, which keeps each group's
    enumeration small.

    Seeds are taken row-major. Each cell ends up in at most one group, and
    every unsatisfied numbered cell ends up in exactly one.

    Returns:
        Groups as lists of cells in the order they were reached.
    """
    groups: List[List[Cell]] = []
    grouped: Set[Tuple[int, int]] = set()

    for seed in board.numbered_cells():
        if seed.coords in grouped:
            continue

        group: List[Cell] = []
        stack: List[Tuple[Cell, Optional[Cell]]] = [(seed, None)]

        while stack:
            cell, previous = stack.pop()

            if cell.coords in grouped or not is_unsatisfied(board, cell):
                continue
            if previous is not None and not has_common_closed_neighbors(
                board, cell, previous
            ):
                continue

            group.append(cell)
            grouped.add(cell.coords)

            for n in reversed(board.neighbors(cell)):
                if n.is_numbered and n.coords not in grouped:
                    stack.append((n, cell))

        if group:
            groups.append(group)

    logger.debug(
        "Found %d groups (sizes %s).", len(groups), [len(g) for g in groups]
    )
    return groups
