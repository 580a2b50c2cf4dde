"""Helpers shared by the board, the game engine and the front ends."""

import logging
from typing import Dict, Optional, Tuple, Union

from .config import LOGGING_CONFIG

Coords = Tuple[int, int]
Neighborhoods = Dict[Coords, Tuple[Coords, ...]]

# 3x3 window around a cell, row-major, center excluded.
NEIGHBOR_OFFSETS: Tuple[Coords, ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)

_NEIGHBORHOODS_CACHE: Dict[Coords, Neighborhoods] = {}


def get_neighborhoods(width: int, height: int) -> Neighborhoods:
    """
    Map every cell of a width x height grid to its in-bounds neighbors.

    Neighbors follow NEIGHBOR_OFFSETS order. Tables are built once per grid
    size and shared; callers must not mutate them.

    Raises:
        ValueError: If width or height is non-positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive.")

    table = _NEIGHBORHOODS_CACHE.get((width, height))
    if table is None:
        table = {
            (x, y): tuple(
                (x + dx, y + dy)
                for dx, dy in NEIGHBOR_OFFSETS
                if 0 <= x + dx < width and 0 <= y + dy < height
            )
            for y in range(height)
            for x in range(width)
        }
        _NEIGHBORHOODS_CACHE[(width, height)] = table
    return table


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Configure root logging for scripts and front ends.

    The library never calls this on import; applications call it once.

    Args:
        level: Logging level name or number. Defaults to LOGGING_CONFIG["level"].
    """
    logging.basicConfig(
        level=level if level is not None else LOGGING_CONFIG["level"],
        format=LOGGING_CONFIG["format"],
    )
