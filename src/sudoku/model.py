"""Grid data structures: cells, blocks, and the puzzle arena."""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Set, Tuple

Group = List["Cell"]


class PuzzleError(ValueError):
    """Base class for malformed puzzles and invalid cell operations."""


class ShapeError(PuzzleError):
    pass


class InvalidValueError(PuzzleError):
    pass


class ResolvedCellError(PuzzleError):
    pass


class EmptyCandidatesError(PuzzleError):
    pass


class Cell:
    """A single grid position holding the set of values it may still take."""

    def __init__(self, max_value: int, value: Optional[int] = None) -> None:
        if max_value < 1:
            raise EmptyCandidatesError("Cannot initialize cell with no possible values")
        self._candidates: Set[int] = set(range(1, max_value + 1))
        if value is not None:
            self.set_value(value)

    def __repr__(self) -> str:
        return f"Cell({sorted(self._candidates)})"

    @property
    def candidates(self) -> frozenset:
        return frozenset(self._candidates)

    @property
    def value(self) -> Optional[int]:
        if len(self._candidates) != 1:
            return None
        return next(iter(self._candidates))

    @property
    def is_resolved(self) -> bool:
        return len(self._candidates) == 1

    def contains(self, value: int) -> bool:
        return value in self._candidates

    def set_value(self, value: int) -> None:
        if value not in self._candidates:
            raise InvalidValueError(
                f"Cannot set value {value}: it is no longer a candidate ({sorted(self._candidates)})"
            )
        self._candidates = {value}

    def remove_candidate(self, value: int) -> None:
        """
        Drop `value` from the candidates.
        Raises ResolvedCellError if the cell already holds a single value;
        removing a value that is already gone is a no-op.
        """
        if self.is_resolved:
            raise ResolvedCellError(
                f"Cannot remove {value} from a cell already resolved to {self.value}"
            )
        self._candidates.discard(value)


@dataclass
class Block:
    height: int
    width: int
    cell_rows: List[List[Cell]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.height < 1 or self.width < 1:
            raise EmptyCandidatesError(
                f"Block of shape {self.height}x{self.width} has no candidates"
            )
        max_value = self.height * self.width
        self.cell_rows = [
            [Cell(max_value) for _ in range(self.width)] for _ in range(self.height)
        ]

    def cell(self, row_index: int, column_index: int) -> Cell:
        _check_index(row_index, self.height, "block row")
        _check_index(column_index, self.width, "block column")
        return self.cell_rows[row_index][column_index]

    def row(self, row_index: int) -> Group:
        _check_index(row_index, self.height, "block row")
        return list(self.cell_rows[row_index])

    def column(self, column_index: int) -> Group:
        _check_index(column_index, self.width, "block column")
        return [row[column_index] for row in self.cell_rows]

    def cells(self) -> Group:
        return [cell for row in self.cell_rows for cell in row]

    def set_value(self, row_index: int, column_index: int, value: int) -> None:
        self.cell(row_index, column_index).set_value(value)

    def set_value_if_nonzero(self, row_index: int, column_index: int, value: int) -> None:
        if value != 0:
            self.set_value(row_index, column_index, value)


class Puzzle:
    """
    A square grid of cells arranged as a grid of equally shaped blocks.

    Blocks own their cells. On construction the puzzle also indexes every cell
    into one flat row-major list, so that row, column and block views are plain
    index projections over the same Cell objects.
    """

    def __init__(self, block_rows: Sequence[Sequence[Block]]) -> None:
        self.block_rows: List[List[Block]] = [list(row) for row in block_rows]
        _check_square_cell_shape(self.block_rows)

        size = self.height
        self._cells: List[Cell] = [None] * (size * self.width)  # type: ignore[list-item]
        for block_row_index, block_row in enumerate(self.block_rows):
            for block_column_index, block in enumerate(block_row):
                top = block_row_index * self.block_height
                left = block_column_index * self.block_width
                for r in range(self.block_height):
                    for c in range(self.block_width):
                        self._cells[(top + r) * size + left + c] = block.cell(r, c)

        self._row_indices: List[List[int]] = [
            [r * size + c for c in range(self.width)] for r in range(self.height)
        ]
        self._column_indices: List[List[int]] = [
            [r * size + c for r in range(self.height)] for c in range(self.width)
        ]
        self._block_indices: List[List[int]] = []
        for block_row_index in range(self.vertical_block_count):
            for block_column_index in range(self.horizontal_block_count):
                top = block_row_index * self.block_height
                left = block_column_index * self.block_width
                self._block_indices.append(
                    [
                        (top + r) * size + left + c
                        for r in range(self.block_height)
                        for c in range(self.block_width)
                    ]
                )

    @classmethod
    def from_digits(
        cls,
        matrix: Sequence[Sequence[int]],
        block_height: int = 3,
        block_width: int = 3,
    ) -> "Puzzle":
        """
        Build a puzzle from a square digit matrix (0 = blank).
        Defaults to the classic 9x9 grid of 3x3 blocks.
        """
        if block_height < 1 or block_width < 1:
            raise EmptyCandidatesError(
                f"Block of shape {block_height}x{block_width} has no candidates"
            )
        size = block_height * block_width
        rows = [list(row) for row in matrix]
        if len(rows) != size or any(len(row) != size for row in rows):
            raise ShapeError(f"Expected a {size}x{size} digit matrix")

        block_rows: List[List[Block]] = []
        for i in range(size // block_height):
            row: List[Block] = []
            for j in range(size // block_width):
                block = Block(block_height, block_width)
                for r in range(block_height):
                    for c in range(block_width):
                        digit = rows[i * block_height + r][j * block_width + c]
                        if (
                            isinstance(digit, bool)
                            or not isinstance(digit, int)
                            or not 0 <= digit <= size
                        ):
                            raise InvalidValueError(
                                f"Digit {digit!r} at ({i * block_height + r}, "
                                f"{j * block_width + c}) is outside 0..{size}"
                            )
                        block.set_value_if_nonzero(r, c, digit)
                row.append(block)
            block_rows.append(row)

        return cls(block_rows)

    def __str__(self) -> str:
        from .render import render

        return render(self)

    def _first_block(self) -> Optional[Block]:
        if not self.block_rows or not self.block_rows[0]:
            return None
        return self.block_rows[0][0]

    @property
    def block_height(self) -> int:
        first = self._first_block()
        return first.height if first else 0

    @property
    def block_width(self) -> int:
        first = self._first_block()
        return first.width if first else 0

    @property
    def vertical_block_count(self) -> int:
        return len(self.block_rows) if self._first_block() else 0

    @property
    def horizontal_block_count(self) -> int:
        return len(self.block_rows[0]) if self.block_rows else 0

    @property
    def height(self) -> int:
        return self.block_height * self.vertical_block_count

    @property
    def width(self) -> int:
        return self.block_width * self.horizontal_block_count

    @property
    def max_value(self) -> int:
        return self.block_height * self.block_width

    @property
    def block_count(self) -> int:
        return len(self._block_indices)

    def cell(self, row_index: int, column_index: int) -> Cell:
        _check_index(row_index, self.height, "row")
        _check_index(column_index, self.width, "column")
        return self._cells[row_index * self.width + column_index]

    def get_row(self, row_index: int) -> Group:
        _check_index(row_index, self.height, "row")
        return [self._cells[i] for i in self._row_indices[row_index]]

    def get_column(self, column_index: int) -> Group:
        _check_index(column_index, self.width, "column")
        return [self._cells[i] for i in self._column_indices[column_index]]

    def get_block(self, block_index: int) -> Group:
        """Cells of the block at `block_index`, counting blocks row-major."""
        _check_index(block_index, self.block_count, "block")
        return [self._cells[i] for i in self._block_indices[block_index]]

    def get_all_blocks(self) -> List[Group]:
        return [self.get_block(k) for k in range(self.block_count)]

    def groups(self) -> Iterator[Tuple[str, int, Group]]:
        """Yield every row, then every column, then every block."""
        for i in range(self.height):
            yield "row", i, self.get_row(i)
        for j in range(self.width):
            yield "column", j, self.get_column(j)
        for k in range(self.block_count):
            yield "block", k, self.get_block(k)

    def to_digits(self) -> List[List[int]]:
        return [[cell.value or 0 for cell in self.get_row(i)] for i in range(self.height)]

    def candidate_grid(self) -> List[List[Tuple[int, ...]]]:
        return [
            [tuple(sorted(cell.candidates)) for cell in self.get_row(i)]
            for i in range(self.height)
        ]

    def unresolved_count(self) -> int:
        return sum(1 for cell in self._cells if not cell.is_resolved)

    def is_solved(self) -> bool:
        return self.unresolved_count() == 0


def _check_index(index: int, size: int, label: str) -> None:
    if not 0 <= index < size:
        raise IndexError(f"{label} index {index} out of range 0..{size - 1}")


def _check_square_cell_shape(block_rows: List[List[Block]]) -> None:
    """Raise ShapeError unless blocks match in shape and tile an N x N cell grid."""
    blocks = [block for row in block_rows for block in row]
    if not blocks:
        return

    first = blocks[0]
    for block in blocks:
        if block.height != first.height:
            raise ShapeError("Non-matching block height")
        if block.width != first.width:
            raise ShapeError("Non-matching block width")

    total_cell_height = first.height * len(block_rows)
    for row in block_rows:
        if len(row) * first.width != total_cell_height:
            raise ShapeError("Blocks do not form a square shape")
