"""Naked-singles constraint propagation over rows, columns and blocks."""

from typing import List, Optional, Set

from .model import Group, Puzzle
from src.utils.trace import Tracer, get_tracer

DEFAULT_ROUNDS = 100


class UnsatisfiableError(Exception):
    """Raised when propagation would leave a cell with no candidates."""

    def __init__(self, round_number: int, group: str, group_index: int):
        self.round_number = round_number
        self.group = group
        self.group_index = group_index
        super().__init__(
            f"Puzzle is unsatisfiable at round {round_number}: "
            f"{group} {group_index} leaves a cell with no candidates"
        )


def solve(puzzle: Puzzle, rounds: int = DEFAULT_ROUNDS, tracer: Optional[Tracer] = None) -> None:
    """
    Run `rounds` propagation rounds against `puzzle` in place.
    Each round reduces every row, then every column, then every block. There is
    no early exit: a converged puzzle just goes through passes that change nothing.

    Without `tracer`, steps are appended to the module-global tracer, which only
    grows until `reset_tracer()` is called.
    """
    if rounds < 0:
        raise ValueError("rounds must be non-negative")
    tracer = tracer or get_tracer()

    for round_number in range(1, rounds + 1):
        eliminations = 0
        for group, index, cells in puzzle.groups():
            eliminations += _reduce_group(cells, group, index, round_number, tracer)
        tracer.log_round(round_number=round_number, eliminations=eliminations)

    tracer.log_solve_finished(rounds=rounds, unresolved=puzzle.unresolved_count())


def _reduce_group(
    cells: Group,
    group: str,
    index: int,
    round_number: int,
    tracer: Optional[Tracer] = None,
) -> int:
    """Strip values held by resolved cells from the unresolved cells of one group."""
    tracer = tracer or get_tracer()
    taken = _taken_values(cells)
    if not taken:
        return 0

    unresolved = [cell for cell in cells if not cell.is_resolved]
    eliminations = 0
    resolved = 0
    for cell in unresolved:
        doomed = {value for value in taken if cell.contains(value)}
        if not doomed:
            continue
        if doomed == cell.candidates:
            tracer.log_contradiction(
                group=group,
                group_index=index,
                round_number=round_number,
                reason=f"All candidates {sorted(doomed)} already taken",
            )
            raise UnsatisfiableError(round_number, group, index)
        # At least one candidate survives, so the cell stays unresolved until the last removal.
        for value in sorted(doomed):
            cell.remove_candidate(value)
        eliminations += len(doomed)
        if cell.is_resolved:
            resolved += 1

    if eliminations:
        tracer.log_group_reduction(
            group=group, group_index=index, eliminations=eliminations, resolved=resolved
        )
    return eliminations


def _taken_values(cells: List) -> Set[int]:
    return {cell.value for cell in cells if cell.is_resolved}
