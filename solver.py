"""Top-level solve interface.

Expose `solve_puzzle(puzzle)` that accepts either a pre-built Puzzle or raw
input compatible with `src.sudoku.parser.parse_puzzle` (digit matrix, puzzle
string, or loader record).
"""

from typing import Any, Optional

from src.sudoku import solver_core
from src.sudoku.model import Puzzle
from src.sudoku.parser import parse_puzzle
from src.utils.trace import Tracer


def solve_puzzle(
    puzzle: Any,
    rounds: int = solver_core.DEFAULT_ROUNDS,
    tracer: Optional[Tracer] = None,
) -> Puzzle:
    """
    Propagate constraints on a puzzle and return it.
    Puzzle instances are reduced in place; any other input is parsed first.
    Steps go to the global tracer unless `tracer` is given; long-running callers
    should call `reset_tracer()` between puzzles or pass `Tracer(enabled=False)`.
    """
    if not isinstance(puzzle, (Puzzle, dict, str, list, tuple)):
        raise TypeError("solve_puzzle expects a Puzzle, digit matrix, puzzle string or puzzle dictionary")

    grid = parse_puzzle(puzzle)
    solver_core.solve(grid, rounds=rounds, tracer=tracer)
    return grid


__all__ = ["solve_puzzle"]
