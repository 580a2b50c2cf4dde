"""Text commands and messages exchanged with the game server."""

from typing import List, Optional, Sequence, Tuple

from .board import UNKNOWN
from .config import PROTOCOL_CONFIG
from .errors import MalformedMapError

MAP_COMMAND = "map"


def new_game_command(level: int) -> str:
    return f"new {level}"


def open_command(x: int, y: int) -> str:
    return f"open {x} {y}"


def parse_map_message(message: str) -> Optional[List[str]]:
    """
    Extract grid rows from a map message.

    A map message is "map:" followed by a line break and one text row per
    grid row, each row ending with a line break. The empty string after the
    last line break is dropped.

    Returns:
        The rows, or None if the message is not a map message.
    """
    prefix = PROTOCOL_CONFIG["map_prefix"]
    if not message.startswith(prefix):
        return None

    body = message[len(prefix):]
    if body.startswith("\n"):
        body = body[1:]

    rows = body.split("\n")
    if rows and rows[-1] == "":
        rows.pop()
    return rows


def validate_rows(
    rows: Sequence[str], expected_size: Optional[Tuple[int, int]] = None
) -> None:
    """
    Check that rows form a rectangle, of the expected (width, height) if given.

    Raises:
        MalformedMapError: If the rows are empty, ragged, the wrong size, or
            hold digits other than ASCII 0-9.
    """
    if not rows or not rows[0]:
        raise MalformedMapError("Map has no cells.")

    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise MalformedMapError(
                f"Row {y} has {len(row)} cells, expected {width}."
            )
        if any(ch.isdigit() and not "0" <= ch <= "9" for ch in row):
            raise MalformedMapError(f"Row {y} holds a non-ASCII digit.")

    if expected_size is not None and (width, len(rows)) != expected_size:
        raise MalformedMapError(
            f"Map is {width}x{len(rows)}, expected "
            f"{expected_size[0]}x{expected_size[1]}."
        )


def is_loss_message(message: str) -> bool:
    return PROTOCOL_CONFIG["loss_token"] in message


def is_win_message(message: str) -> bool:
    return PROTOCOL_CONFIG["win_token"] in message


def render_rows(
    grid: Sequence[Sequence[Optional[int]]], closed_char: Optional[str] = None
) -> List[str]:
    """Format a grid of hints as text rows, one character per cell."""
    if closed_char is None:
        closed_char = PROTOCOL_CONFIG["closed_char"]
    return [
        "".join(closed_char if hint is UNKNOWN else str(hint) for hint in row)
        for row in grid
    ]


def format_map_message(grid: Sequence[Sequence[Optional[int]]]) -> str:
    """Build the "map:" message a server sends for a grid."""
    rows = render_rows(grid)
    return PROTOCOL_CONFIG["map_prefix"] + "\n" + "".join(row + "\n" for row in rows)
