"""Exact mine probabilities per constraint group by assignment enumeration."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .board import Board, Cell
from .errors import UnsatisfiableGroupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellProbability:
    """Mine probability of one closed cell within its group."""

    cell: Cell
    mine_count: int
    assignments_count: int

    @property
    def probability(self) -> float:
        return self.mine_count / self.assignments_count

    @property
    def is_mine(self) -> bool:
        return self.mine_count == self.assignments_count

    @property
    def is_safe(self) -> bool:
        return self.mine_count == 0


@dataclass
class GroupSolution:
    """Enumeration outcome for one group."""

    group: List[Cell]
    probabilities: List[CellProbability]
    assignments_count: int


@dataclass
class ConstraintResult:
    """Actions from one constraint-solving round across all groups."""

    reveals: List[Tuple[int, int]] = field(default_factory=list)
    flags: List[Tuple[int, int]] = field(default_factory=list)
    guess: Optional[CellProbability] = None
    solutions: List[GroupSolution] = field(default_factory=list)
    skipped_groups_count: int = 0

    @property
    def acted(self) -> bool:
        return bool(self.reveals or self.flags or self.guess)


def mine_combinations(cells_count: int, mines_count: int) -> List[Tuple[bool, ...]]:
    """
    List every way to place exactly mines_count mines among cells_count cells.

    Combinations are generated depth first with the safe branch before the
    mine branch, so the all-safe prefix comes first. A negative mine count
    or one larger than cells_count yields no combinations.

    Example:
        mine_combinations(2, 1) == [(False, True), (True, False)]
    """
    combinations: List[Tuple[bool, ...]] = []
    if mines_count < 0 or mines_count > cells_count:
        return combinations

    def recurse(prefix: Tuple[bool, ...], mines_placed: int) -> None:
        if len(prefix) == cells_count:
            if mines_placed == mines_count:
                combinations.append(prefix)
            return
        # Prune when the remaining cells cannot hold the missing mines.
        if mines_count - mines_placed > cells_count - len(prefix):
            return
        recurse(prefix + (False,), mines_placed)
        if mines_placed < mines_count:
            recurse(prefix + (True,), mines_placed + 1)

    recurse((), 0)
    return combinations


def group_variables(board: Board, group: Sequence[Cell]) -> List[Cell]:
    """Closed, unflagged neighbors of a group, deduplicated in first-seen order."""
    seen: Set[Tuple[int, int]] = set()
    variables: List[Cell] = []
    for cell in group:
        for n in board.closed_unflagged_neighbors(cell):
            if n.coords not in seen:
                seen.add(n.coords)
                variables.append(n)
    return variables


def solve_group(board: Board, group: Sequence[Cell]) -> GroupSolution:
    """
    Count mine assignments over a group's unknowns that satisfy every hint.

    Each closed, unflagged neighbor becomes one shared variable. Each
    member cell contributes the disjunction of its own local combinations
    (exactly hint - flagged mines among its unknowns). The group's feasible
    assignments are those where one combination of every member holds at
    once; they are enumerated by a DFS over members that extends a partial
    assignment with each compatible local combination.

    Returns:
        Per-variable mine counts over all feasible assignments. A group with
        no variables gives an empty solution.

    Raises:
        UnsatisfiableGroupError: If no assignment satisfies the group.
    """
    variables = group_variables(board, group)
    if not variables:
        return GroupSolution(list(group), [], 0)

    index: Dict[Tuple[int, int], int] = {v.coords: i for i, v in enumerate(variables)}

    # One (variable indices, allowed combinations) pair per member cell.
    local_constraints: List[Tuple[List[int], List[Tuple[bool, ...]]]] = []
    for cell in group:
        local_vars: List[int] = []
        flagged_count = 0
        for n in board.neighbors(cell):
            if board.is_flagged(n):
                flagged_count += 1
            elif board.is_closed(n):
                local_vars.append(index[n.coords])
        combinations = mine_combinations(len(local_vars), cell.hint - flagged_count)
        local_constraints.append((local_vars, combinations))

    # Most constrained members first prunes the search earliest.
    local_constraints.sort(key=lambda c: len(c[1]))

    assignment: List[Optional[bool]] = [None] * len(variables)
    mine_counts: List[int] = [0] * len(variables)
    assignments_count = 0

    def dfs(i: int) -> None:
        nonlocal assignments_count

        if i == len(local_constraints):
            assignments_count += 1
            for k, is_mine in enumerate(assignment):
                if is_mine:
                    mine_counts[k] += 1
            return

        local_vars, combinations = local_constraints[i]
        for combination in combinations:
            newly_assigned: List[int] = []
            compatible = True
            for var, is_mine in zip(local_vars, combination):
                current = assignment[var]
                if current is None:
                    assignment[var] = is_mine
                    newly_assigned.append(var)
                elif current != is_mine:
                    compatible = False
                    break

            if compatible:
                dfs(i + 1)

            for var in newly_assigned:
                assignment[var] = None

    dfs(0)

    if assignments_count == 0:
        raise UnsatisfiableGroupError(group)

    probabilities = [
        CellProbability(v, mine_counts[k], assignments_count)
        for k, v in enumerate(variables)
    ]
    logger.debug(
        "Group of %d cells, %d variables: %d feasible assignments.",
        len(group), len(variables), assignments_count,
    )
    return GroupSolution(list(group), probabilities, assignments_count)


class ConstraintSolver:
    """
    Solve every group, act on certainties, otherwise pick the safest guess.

    Cells with probability 1 are flagged and cells with probability 0 are
    revealed. Only when no group yields a certainty is a single guess made:
    the undetermined cell with the lowest probability across all groups,
    the first one seen winning ties.
    """

    def __init__(
        self, board: Board, max_group_variables: Optional[int] = None
    ) -> None:
        if max_group_variables is not None and max_group_variables <= 0:
            raise ValueError("max_group_variables must be positive or None.")
        self.board = board
        self.max_group_variables = max_group_variables

    def solve(self, groups: Sequence[Sequence[Cell]]) -> ConstraintResult:
        """
        Evaluate each group independently.

        Unsatisfiable groups are logged and skipped; the rest still count.
        """
        result = ConstraintResult()
        decided: Set[Tuple[int, int]] = set()
        best: Optional[CellProbability] = None

        for group in groups:
            if self.max_group_variables is not None:
                variables_count = len(group_variables(self.board, group))
                if variables_count > self.max_group_variables:
                    logger.warning(
                        "Skipping group with %d variables (limit %d).",
                        variables_count, self.max_group_variables,
                    )
                    result.skipped_groups_count += 1
                    continue

            try:
                solution = solve_group(self.board, group)
            except UnsatisfiableGroupError as exc:
                logger.error("Internal consistency failure: %s Skipping group.", exc)
                result.skipped_groups_count += 1
                continue

            result.solutions.append(solution)

            for p in solution.probabilities:
                coords = p.cell.coords
                if coords in decided:
                    continue
                if p.is_mine:
                    self.board.mark_flag(p.cell)
                    result.flags.append(coords)
                    decided.add(coords)
                elif p.is_safe:
                    result.reveals.append(coords)
                    decided.add(coords)
                elif best is None or p.probability < best.probability:
                    best = p

        if not result.reveals and not result.flags and best is not None:
            result.guess = best
            logger.debug(
                "No certain move; guessing (%d, %d) at p=%.3f.",
                best.cell.x, best.cell.y, best.probability,
            )

        return result
