"""Grid model and line detection for 5x5 cards.

Positions are row-major: position ``p`` sits at ``(p // 5, p % 5)``. A card
has 12 candidate lines: 5 rows, 5 columns and 2 diagonals. Diagonal 0 runs
top-left to bottom-right, diagonal 1 runs top-right to bottom-left.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

GRID_SIZE = 5
CELL_COUNT = GRID_SIZE * GRID_SIZE
CENTER_POSITION = CELL_COUNT // 2

Grid = tuple[tuple[bool, ...], ...]


class LineType(str, Enum):
    ROW = "row"
    COLUMN = "column"
    DIAGONAL = "diagonal"

    @property
    def line_count(self) -> int:
        """Number of lines of this type on a card."""

        return 2 if self is LineType.DIAGONAL else GRID_SIZE


@dataclass(frozen=True, order=True)
class Line:
    """A row, column or diagonal, identified by ``(type, index)``."""

    type: LineType
    index: int

    def __post_init__(self) -> None:
        if not isinstance(self.type, LineType):
            object.__setattr__(self, "type", LineType(self.type))
        object.__setattr__(self, "index", int(self.index))
        if not 0 <= self.index < self.type.line_count:
            raise ValueError(f"{self.type.value} index must be in 0..{self.type.line_count - 1}, got {self.index}")

    @property
    def cells(self) -> tuple[tuple[int, int], ...]:
        """``(row, col)`` coordinates covered by this line."""

        i = self.index
        if self.type is LineType.ROW:
            return tuple((i, c) for c in range(GRID_SIZE))
        if self.type is LineType.COLUMN:
            return tuple((r, i) for r in range(GRID_SIZE))
        if i == 0:
            return tuple((k, k) for k in range(GRID_SIZE))
        return tuple((k, GRID_SIZE - 1 - k) for k in range(GRID_SIZE))

    @property
    def positions(self) -> tuple[int, ...]:
        return tuple(r * GRID_SIZE + c for r, c in self.cells)

    def __str__(self) -> str:
        return f"{self.type.value}:{self.index}"


ALL_LINES: tuple[Line, ...] = (
    *(Line(LineType.ROW, i) for i in range(GRID_SIZE)),
    *(Line(LineType.COLUMN, i) for i in range(GRID_SIZE)),
    Line(LineType.DIAGONAL, 0),
    Line(LineType.DIAGONAL, 1),
)


class PositionedGoal(Protocol):
    position: int
    is_completed: bool


def build_grid(goals: Iterable[PositionedGoal]) -> Grid:
    """Map 25 positional goals onto a 5x5 completion matrix.

    Raises:
        ValueError: if positions do not cover exactly 0..24 once each.
    """

    cells: dict[int, bool] = {}
    for goal in goals:
        position = int(goal.position)
        if not 0 <= position < CELL_COUNT:
            raise ValueError(f"Goal position out of range: {position}")
        if position in cells:
            raise ValueError(f"Duplicate goal position: {position}")
        cells[position] = bool(goal.is_completed)

    if len(cells) != CELL_COUNT:
        missing = sorted(set(range(CELL_COUNT)) - set(cells))
        raise ValueError(f"Card is missing goal positions: {missing}")

    return tuple(
        tuple(cells[row * GRID_SIZE + col] for col in range(GRID_SIZE))
        for row in range(GRID_SIZE)
    )


def is_line_complete(grid: Grid, line: Line) -> bool:
    return all(grid[r][c] for r, c in line.cells)


def detect_complete_lines(grid: Grid) -> frozenset[Line]:
    """Return every complete line of ``grid``.

    Always evaluates all 12 lines from scratch; never errors on a 5x5 grid.
    """

    return frozenset(line for line in ALL_LINES if is_line_complete(grid, line))
