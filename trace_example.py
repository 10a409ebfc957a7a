"""Example: How to use the Tracer with the propagation engine.

Solves the bundled sample puzzle and writes every logged step to a CSV file.
"""

from pathlib import Path
from typing import Optional

from src.sudoku.model import Puzzle
from src.sudoku.samples import PUZZLE_1
from src.utils.trace import get_tracer, reset_tracer
from solver import solve_puzzle


def solve_and_trace(matrix, output_trace_csv: Optional[Path] = None) -> Puzzle:
    """
    Solve a puzzle and log all steps to a trace file.

    Args:
        matrix: Digit matrix (0 = blank)
        output_trace_csv: Path to write trace CSV (optional)

    Returns:
        The reduced puzzle
    """
    reset_tracer()
    tracer = get_tracer()

    puzzle = solve_puzzle(matrix)

    summary = tracer.summary()
    print(f"\n{'='*50}")
    print(f"Solver Summary:")
    print(f"  Total steps: {summary['total_steps']}")
    print(f"  Rounds: {summary['num_rounds']}")
    print(f"  Eliminations: {summary['num_eliminations']}")
    print(f"  Time: {summary['elapsed_time_seconds']:.3f}s")
    print(f"  Actions: {summary['action_counts']}")
    print(f"{'='*50}\n")

    if output_trace_csv:
        tracer.to_csv(output_trace_csv)

    return puzzle


if __name__ == "__main__":
    trace_output = Path("traces/example_trace.csv")
    puzzle = solve_and_trace(PUZZLE_1, trace_output)
    print(puzzle)
