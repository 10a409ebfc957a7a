"""Tests for the text projections of a puzzle."""

from src.sudoku.model import Puzzle
from src.sudoku.render import render, to_line
from src.sudoku.samples import PUZZLE_1, get_puzzle_1


def test_render_draws_block_borders():
    lines = render(get_puzzle_1()).split("\n")

    assert len(lines) == 13
    assert [i for i, line in enumerate(lines) if line == " ----------- "] == [0, 4, 8, 12]
    assert all(len(line) == 13 for line in lines)


def test_render_rows_show_digits_and_blanks():
    lines = render(get_puzzle_1()).split("\n")
    assert lines[1] == "|6 5|4  |3 2|"
    assert lines[2] == "|734| 6 | 58|"
    assert lines[11] == "|   | 2 |   |"


def test_render_small_grid():
    puzzle = Puzzle.from_digits(
        [[1, 0, 0, 0], [0, 0, 0, 2], [0, 0, 4, 0], [0, 3, 0, 0]],
        block_height=2,
        block_width=2,
    )
    assert render(puzzle) == "\n".join([
        " ----- ",
        "|1 |  |",
        "|  | 2|",
        " ----- ",
        "|  |4 |",
        "| 3|  |",
        " ----- ",
    ])


def test_render_is_read_only():
    puzzle = get_puzzle_1()
    before = puzzle.candidate_grid()
    render(puzzle)
    str(puzzle)
    assert puzzle.candidate_grid() == before


def test_str_matches_render():
    puzzle = get_puzzle_1()
    assert str(puzzle) == render(puzzle)


def test_render_empty_puzzle():
    assert render(Puzzle([])) == ""


def test_to_line_uses_zero_for_unresolved():
    assert to_line(get_puzzle_1()) == "".join(str(d) for row in PUZZLE_1 for d in row)
