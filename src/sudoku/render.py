"""Text projections of a puzzle: bordered grid and compact digit line."""

from typing import List

from .model import Puzzle


def render(puzzle: Puzzle) -> str:
    """
    Draw the grid with '|' between blocks and a '-' border at each block-row
    boundary. Unresolved cells are drawn as a space.
    """
    if puzzle.height == 0:
        return ""

    border = " " + "-" * (puzzle.width + puzzle.horizontal_block_count - 1) + " "
    lines: List[str] = []
    for i in range(puzzle.height):
        if i % puzzle.block_height == 0:
            lines.append(border)
        parts: List[str] = []
        for j, cell in enumerate(puzzle.get_row(i)):
            if j % puzzle.block_width == 0:
                parts.append("|")
            parts.append(str(cell.value) if cell.is_resolved else " ")
        parts.append("|")
        lines.append("".join(parts))
    lines.append(border)
    return "\n".join(lines)


def to_line(puzzle: Puzzle) -> str:
    """Row-major digits with 0 for unresolved cells (one char per cell up to 9x9)."""
    digits = [d for row in puzzle.to_digits() for d in row]
    if puzzle.max_value > 9:
        return ",".join(str(d) for d in digits)
    return "".join(str(d) for d in digits)
