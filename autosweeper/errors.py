"""Exceptions raised by the autosweeper solver."""

from typing import Sequence


class SolverError(Exception):
    """Base class for solver errors."""


class MalformedMapError(SolverError):
    """A map message whose rows are empty, ragged or of the wrong size."""


class UnsatisfiableGroupError(SolverError):
    """
    No mine assignment satisfies every cell of a constraint group.

    This means the board state and earlier deductions disagree. The
    constraint solver logs it and skips the group.
    """

    def __init__(self, group: Sequence[object]) -> None:
        self.group = list(group)
        super().__init__(
            f"No satisfying assignments found for a group of {len(self.group)} cells."
        )
