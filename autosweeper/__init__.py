"""
Minesweeper auto-solver

Plays a Minesweeper game served over a text protocol:
- Deduction: single-cell rules drained from a circular worklist
- Grouping: the numbered frontier split into independent constraint groups
- Enumeration: exact mine probabilities per group
- Guessing: the lowest-probability cell when nothing is certain
"""

from .analysis import (
    format_board,
    run_difficulty_analysis,
    run_session_many_tests,
    run_session_single_test,
)
from .board import UNKNOWN, Board, Cell
from .constraints import CellProbability, ConstraintSolver, mine_combinations, solve_group
from .deduction import DeductionPass, DeductionResult, build_worklist
from .engine import Minesweeper
from .errors import MalformedMapError, SolverError, UnsatisfiableGroupError
from .grouping import find_groups
from .session import SolverSession, StepResult
from .transport import LocalTransport, Transport
from .worklist import CircularWorklist

__version__ = "1.0.0"

__all__ = [
    # Board model
    "UNKNOWN",
    "Board",
    "Cell",
    # Solver passes
    "CircularWorklist",
    "DeductionPass",
    "DeductionResult",
    "build_worklist",
    "find_groups",
    "CellProbability",
    "ConstraintSolver",
    "mine_combinations",
    "solve_group",
    # Session and transport
    "SolverSession",
    "StepResult",
    "Transport",
    "LocalTransport",
    "Minesweeper",
    # Analysis functions
    "format_board",
    "run_session_single_test",
    "run_session_many_tests",
    "run_difficulty_analysis",
    # Errors
    "SolverError",
    "MalformedMapError",
    "UnsatisfiableGroupError",
]
