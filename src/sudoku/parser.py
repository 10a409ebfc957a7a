"""Puzzle parser: convert raw puzzle input into a Puzzle.

Supports:
- compact strings ("6.54..3.2..." or with 0 for blanks), optionally with
  '|', '-' and '+' decorations and line breaks
- comma/whitespace separated matrices (required for grids above 9x9)
- nested lists of digits, or a flat list of size*size digits
- record dictionaries as produced by `src.sudoku.loader.load_puzzles`
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Sequence

from .model import InvalidValueError, Puzzle, ShapeError

BLANKS = {"0", ".", "_", "*"}
DECORATIONS = {"|", "-", "+"}


def parse_grid(text: str, size: int = 9) -> List[List[int]]:
    """Parse puzzle text into a size x size digit matrix (0 = blank)."""
    tokens: List[str]
    if "," in text or size > 9:
        tokens = [t for t in re.split(r"[,\s|]+", text) if t and not set(t) <= DECORATIONS]
    else:
        tokens = [ch for ch in text if not ch.isspace() and ch not in DECORATIONS]

    if len(tokens) != size * size:
        raise ShapeError(f"Expected {size * size} cells, found {len(tokens)}")

    digits: List[int] = []
    for position, token in enumerate(tokens):
        if token in BLANKS:
            digits.append(0)
            continue
        if not (token.isascii() and token.isdigit()):
            raise InvalidValueError(f"Unexpected character {token!r} at cell {position}")
        value = int(token)
        if value > size:
            raise InvalidValueError(f"Digit {value} at cell {position} is outside 0..{size}")
        digits.append(value)

    return [digits[i * size:(i + 1) * size] for i in range(size)]


def _block_shape(record: Dict[str, Any], size: int) -> tuple:
    height = record.get("block_height")
    width = record.get("block_width")
    if height and width:
        return int(height), int(width)
    root = math.isqrt(size)
    if root * root != size:
        raise ShapeError(f"Cannot infer block shape for a {size}x{size} grid")
    return root, root


def _coerce_digit(raw: Any) -> int:
    if isinstance(raw, bool):
        raise InvalidValueError(f"Unexpected cell {raw!r}")
    if isinstance(raw, str):
        raw = raw.strip()
        if raw in BLANKS:
            return 0
        if not (raw.isascii() and raw.isdigit()):
            raise InvalidValueError(f"Unexpected cell {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise InvalidValueError(f"Unexpected cell {raw!r}") from e


def _coerce_matrix(raw: Sequence[Any]) -> List[List[int]]:
    items = list(raw)
    if items and not isinstance(items[0], (list, tuple)) and not hasattr(items[0], "tolist"):
        size = math.isqrt(len(items))
        if size * size != len(items):
            raise ShapeError(f"Flat grid of {len(items)} digits is not square")
        items = [items[i * size:(i + 1) * size] for i in range(size)]
    matrix: List[List[int]] = []
    for row in items:
        if hasattr(row, "tolist"):
            row = row.tolist()
        matrix.append([_coerce_digit(d) for d in row])
    return matrix


def parse_puzzle(puzzle: Any) -> Puzzle:
    """
    Build a Puzzle from any supported input.
    Raises TypeError for unsupported input types.
    """
    if isinstance(puzzle, Puzzle):
        return puzzle

    record: Dict[str, Any] = {}
    raw: Any = puzzle
    if isinstance(puzzle, dict):
        record = puzzle
        raw = puzzle.get("puzzle")
        if raw is None:
            raise ShapeError(f"Record {puzzle.get('id', 'unknown')!r} has no puzzle grid")

    if hasattr(raw, "tolist"):
        raw = raw.tolist()

    if isinstance(raw, str):
        size = int(record.get("size") or 0) or _infer_size(raw)
        block_height, block_width = _block_shape(record, size)
        matrix = parse_grid(raw, size=size)
    elif isinstance(raw, (list, tuple)):
        matrix = _coerce_matrix(raw)
        block_height, block_width = _block_shape(record, len(matrix))
    else:
        raise TypeError("parse_puzzle expects a Puzzle, digit matrix, string or puzzle dictionary")

    return Puzzle.from_digits(matrix, block_height=block_height, block_width=block_width)


def _infer_size(text: str) -> int:
    if "," in text:
        cells = [t for t in re.split(r"[,\s|]+", text) if t and not set(t) <= DECORATIONS]
    else:
        cells = [ch for ch in text if not ch.isspace() and ch not in DECORATIONS]
    size = math.isqrt(len(cells))
    if size * size != len(cells):
        raise ShapeError(f"Puzzle text holds {len(cells)} cells, which is not a square grid")
    return size
