"""Grid model, parsing, and constraint-propagation core for block digit puzzles."""

from .model import (
    Block,
    Cell,
    EmptyCandidatesError,
    InvalidValueError,
    Puzzle,
    PuzzleError,
    ResolvedCellError,
    ShapeError,
)
from .solver_core import DEFAULT_ROUNDS, UnsatisfiableError, solve
from .parser import parse_grid, parse_puzzle
from .render import render

__all__ = [
    "Block",
    "Cell",
    "Puzzle",
    "PuzzleError",
    "ShapeError",
    "InvalidValueError",
    "ResolvedCellError",
    "EmptyCandidatesError",
    "UnsatisfiableError",
    "DEFAULT_ROUNDS",
    "solve",
    "parse_grid",
    "parse_puzzle",
    "render",
]
