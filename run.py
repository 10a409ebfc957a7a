"""CLI entrypoint: load puzzle(s), run propagation, and report results."""

import argparse
import csv
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from solver import solve_puzzle
from src.sudoku.loader import load_puzzles
from src.sudoku.model import PuzzleError
from src.sudoku.parser import parse_puzzle
from src.sudoku.render import render, to_line
from src.sudoku.samples import SAMPLES
from src.sudoku.solver_core import DEFAULT_ROUNDS, UnsatisfiableError
from src.utils.io import save_json
from src.utils.trace import get_tracer, reset_tracer

PUZZLE_SUFFIXES = [".json", ".jsonl", ".parquet", ".csv"]


def _default_rounds() -> int:
    raw = os.environ.get("SUDOKU_ROUNDS")
    return int(raw) if raw else DEFAULT_ROUNDS


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Run constraint propagation on digit grid puzzles")
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=os.environ.get("SUDOKU_DATA_PATH"),
        help="Path to a puzzle file or directory of puzzle files (default: $SUDOKU_DATA_PATH)",
    )
    parser.add_argument("--sample", action="store_true", help="Solve the bundled sample puzzle(s)")
    parser.add_argument(
        "--rounds",
        type=int,
        default=_default_rounds(),
        help=f"Propagation rounds per puzzle (default: $SUDOKU_ROUNDS or {DEFAULT_ROUNDS})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional path to write results (.json for JSON, otherwise CSV)",
    )
    parser.add_argument("--trace", type=Path, default=None, help="Optional path to write the trace CSV")
    parser.add_argument("--quiet", action="store_true", help="Do not print grids")
    args = parser.parse_args(argv)
    if args.input is None and not args.sample:
        parser.error("an input path (or $SUDOKU_DATA_PATH) is required unless --sample is given")
    if args.rounds < 0:
        parser.error("--rounds must be non-negative")
    return args


def collect_puzzles(args) -> List[Dict[str, Any]]:
    puzzles: List[Dict[str, Any]] = []
    if args.sample:
        puzzles.extend({"id": name, "puzzle": grid} for name, grid in SAMPLES.items())

    if args.input is None:
        return puzzles
    input_path = Path(args.input)
    if input_path.is_file():
        puzzles.extend(load_puzzles(str(input_path)))
    elif input_path.is_dir():
        for file_path in sorted(input_path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
    else:
        raise ValueError(f"Input path {input_path} is neither file nor directory")
    return puzzles


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "solution", "unresolved", "steps"])

        for r in results:
            writer.writerow([r["id"], r["solution"], r["unresolved"], r["steps"]])


def trace_path(base: Path, puzzle_id: str, puzzle_count: int) -> Path:
    """One trace file per puzzle: suffix the id when several puzzles share a run."""
    base = Path(base)
    if puzzle_count <= 1:
        return base
    return base.with_name(f"{base.stem}-{puzzle_id}{base.suffix}")


def solve_record(record: Dict[str, Any], rounds: int, quiet: bool = False) -> Dict[str, Any]:
    puzzle_id = record.get("id", "unknown")
    reset_tracer()
    tracer = get_tracer()

    try:
        puzzle = parse_puzzle(record)
        if not quiet:
            print(f"Puzzle {puzzle_id}:")
            print(render(puzzle))
        solve_puzzle(puzzle, rounds=rounds)
    except (PuzzleError, UnsatisfiableError, TypeError) as e:
        print(f"ERROR: Failed to solve puzzle {puzzle_id}: {e}")
        return {"id": puzzle_id, "solution": "", "unresolved": -1, "steps": -1}

    if not quiet:
        print(render(puzzle))
    summary = tracer.summary()
    return {
        "id": puzzle_id,
        "solution": to_line(puzzle),
        "unresolved": puzzle.unresolved_count(),
        # Eliminations measure propagation effort; round markers are bookkeeping.
        "steps": summary["num_eliminations"],
    }


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    puzzles = collect_puzzles(args)
    results = []

    for record in puzzles:
        results.append(solve_record(record, args.rounds, quiet=args.quiet))
        if args.trace:
            get_tracer().to_csv(trace_path(args.trace, results[-1]["id"], len(puzzles)))

    if args.output and args.output.suffix == ".json":
        save_json(args.output, results)
    elif args.output:
        write_results_csv(results, args.output)
    else:
        for r in results:
            print(f"{r['id']}: unresolved={r['unresolved']} steps={r['steps']}")
    return results


if __name__ == "__main__":
    main()
