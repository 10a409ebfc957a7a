"""Unit tests for the propagation engine."""

import pytest

from src.sudoku import solver_core
from src.sudoku.model import Cell, Puzzle
from src.sudoku.samples import PUZZLE_1, get_puzzle_1
from src.sudoku.solver_core import UnsatisfiableError
from src.utils.trace import Tracer, get_tracer, reset_tracer

SOLUTION_1 = [
    [6, 8, 5, 4, 7, 9, 3, 1, 2],
    [7, 3, 4, 1, 6, 2, 9, 5, 8],
    [2, 1, 9, 5, 3, 8, 6, 7, 4],
    [3, 4, 2, 6, 8, 7, 1, 9, 5],
    [1, 9, 7, 2, 5, 4, 8, 6, 3],
    [5, 6, 8, 9, 1, 3, 2, 4, 7],
    [9, 2, 6, 3, 4, 5, 7, 8, 1],
    [4, 7, 3, 8, 9, 1, 5, 2, 6],
    [8, 5, 1, 7, 2, 6, 4, 3, 9],
]

CONTRADICTION_4X4 = [
    [0, 2, 3, 0],
    [0, 0, 0, 0],
    [1, 0, 0, 0],
    [4, 0, 0, 0],
]


def _group(*candidate_sets):
    cells = []
    for candidates in candidate_sets:
        cell = Cell(9)
        for value in range(1, 10):
            if value not in candidates:
                cell.remove_candidate(value)
        cells.append(cell)
    return cells


def test_reduce_group_strips_taken_values():
    cells = _group({4}, {1, 4, 7}, {4, 7}, {2, 3})
    eliminated = solver_core._reduce_group(cells, "row", 0, 1, Tracer(enabled=False))

    assert eliminated == 2
    assert cells[0].value == 4
    assert cells[1].candidates == {1, 7}
    assert cells[2].value == 7
    assert cells[3].candidates == {2, 3}


def test_values_resolved_mid_pass_wait_for_next_pass():
    cells = _group({4}, {4, 7}, {7, 8})
    solver_core._reduce_group(cells, "row", 0, 1, Tracer(enabled=False))
    assert cells[1].value == 7
    assert cells[2].candidates == {7, 8}

    solver_core._reduce_group(cells, "row", 0, 2, Tracer(enabled=False))
    assert cells[2].value == 8


def test_reduce_group_without_resolved_cells_changes_nothing():
    cells = _group({1, 2}, {2, 3}, {1, 3})
    assert solver_core._reduce_group(cells, "block", 4, 1, Tracer(enabled=False)) == 0
    assert [c.candidates for c in cells] == [{1, 2}, {2, 3}, {1, 3}]


def test_reduce_group_never_touches_resolved_cells():
    cells = _group({5}, {5}, {5, 6})
    solver_core._reduce_group(cells, "column", 2, 1, Tracer(enabled=False))
    assert cells[0].value == 5
    assert cells[1].value == 5
    assert cells[2].value == 6


def test_reduce_group_raises_instead_of_emptying_a_cell():
    cells = _group({1}, {2}, {1, 2}, {3, 4})
    with pytest.raises(UnsatisfiableError) as excinfo:
        solver_core._reduce_group(cells, "row", 3, 5, Tracer(enabled=False))

    assert excinfo.value.round_number == 5
    assert excinfo.value.group == "row"
    assert excinfo.value.group_index == 3
    assert cells[2].candidates == {1, 2}


def test_solve_keeps_givens_and_never_drops_the_true_value():
    puzzle = get_puzzle_1()
    solver_core.solve(puzzle, tracer=Tracer(enabled=False))

    for i, row in enumerate(PUZZLE_1):
        for j, given in enumerate(row):
            cell = puzzle.cell(i, j)
            if given:
                assert cell.value == given
            assert SOLUTION_1[i][j] in cell.candidates


def test_solve_makes_progress_on_sample():
    puzzle = get_puzzle_1()
    before = puzzle.unresolved_count()
    solver_core.solve(puzzle, tracer=Tracer(enabled=False))
    assert puzzle.unresolved_count() < before


def test_solve_result_does_not_depend_on_extra_rounds():
    short = get_puzzle_1()
    long = get_puzzle_1()
    solver_core.solve(short, rounds=100, tracer=Tracer(enabled=False))
    solver_core.solve(long, rounds=200, tracer=Tracer(enabled=False))
    assert short.candidate_grid() == long.candidate_grid()


def test_solve_is_idempotent_at_fixpoint():
    puzzle = get_puzzle_1()
    solver_core.solve(puzzle, tracer=Tracer(enabled=False))
    converged = puzzle.candidate_grid()

    tracer = Tracer()
    solver_core.solve(puzzle, tracer=tracer)
    assert puzzle.candidate_grid() == converged
    assert tracer.summary()["num_eliminations"] == 0


def test_zero_rounds_is_noop_and_negative_rounds_rejected():
    puzzle = get_puzzle_1()
    solver_core.solve(puzzle, rounds=0, tracer=Tracer(enabled=False))
    assert puzzle.to_digits() == PUZZLE_1

    with pytest.raises(ValueError):
        solver_core.solve(puzzle, rounds=-1)


def test_contradiction_surfaces_as_unsatisfiable():
    puzzle = Puzzle.from_digits(CONTRADICTION_4X4, block_height=2, block_width=2)
    tracer = Tracer()
    with pytest.raises(UnsatisfiableError) as excinfo:
        solver_core.solve(puzzle, tracer=tracer)

    assert excinfo.value.round_number == 1
    assert excinfo.value.group == "column"
    assert excinfo.value.group_index == 0
    assert tracer.steps[-1].action_type == "contradiction"


def test_solve_uses_global_tracer_by_default():
    reset_tracer()
    puzzle = get_puzzle_1()
    solver_core.solve(puzzle, rounds=3)

    summary = get_tracer().summary()
    assert summary["num_rounds"] == 3
    assert summary["num_eliminations"] > 0
    assert get_tracer().steps[-1].action_type == "solve_finished"
    assert get_tracer().steps[-1].unresolved == puzzle.unresolved_count()
    reset_tracer()


def test_small_grid_resolves_completely():
    puzzle = Puzzle.from_digits(
        [
            [1, 0, 3, 0],
            [0, 4, 0, 2],
            [2, 0, 4, 0],
            [0, 3, 0, 1],
        ],
        block_height=2,
        block_width=2,
    )
    solver_core.solve(puzzle, rounds=5, tracer=Tracer(enabled=False))
    assert puzzle.is_solved()
    assert puzzle.to_digits() == [
        [1, 2, 3, 4],
        [3, 4, 1, 2],
        [2, 1, 4, 3],
        [4, 3, 2, 1],
    ]
