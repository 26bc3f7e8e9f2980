"""Board model: cells, ownership and 4-neighbour adjacency."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum

Coord = tuple[int, int]

# Up, down, left, right
DIRECTIONS = [
    (-1, 0),
    (1, 0),
    (0, -1),
    (0, 1),
]


class CellState(str, Enum):
    EMPTY = "empty"
    ACTIVE = "active"
    INFECTED = "infected"


@dataclass(frozen=True)
class Cell:
    state: CellState = CellState.EMPTY
    owner: int | None = None

    def __post_init__(self):
        if (self.owner is None) != (self.state is CellState.EMPTY):
            raise ValueError(f"Invalid cell: state={self.state.value} owner={self.owner}")

    @property
    def is_empty(self) -> bool:
        return self.state is CellState.EMPTY


EMPTY_CELL = Cell()


def active(owner: int) -> Cell:
    return Cell(CellState.ACTIVE, owner)


def infected(owner: int) -> Cell:
    return Cell(CellState.INFECTED, owner)


@dataclass(frozen=True)
class Board:
    """Immutable N×N grid. Every update returns a new Board."""

    size: int
    cells: tuple[tuple[Cell, ...], ...]

    @classmethod
    def empty(cls, size: int) -> Board:
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        row = (EMPTY_CELL,) * size
        return cls(size=size, cells=(row,) * size)

    @classmethod
    def from_rows(cls, rows: list[list[Cell]]) -> Board:
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError("Board rows must form a square matrix")
        return cls(size=size, cells=tuple(tuple(row) for row in rows))

    def to_rows(self) -> list[list[Cell]]:
        return [list(row) for row in self.cells]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def coords(self) -> Iterator[Coord]:
        """Yield every coordinate in row-major order."""
        for row in range(self.size):
            for col in range(self.size):
                yield row, col

    def neighbors(self, row: int, col: int) -> list[Coord]:
        """Orthogonal neighbours, clipped at the edges (no wraparound)."""
        result = []
        for dr, dc in DIRECTIONS:
            r, c = row + dr, col + dc
            if self.in_bounds(r, c):
                result.append((r, c))
        return result

    def owned_by(self, row: int, col: int, player_id: int) -> bool:
        # Infected cells count as owned just like active ones
        return self.cells[row][col].owner == player_id

    def is_adjacent_to_player(self, row: int, col: int, player_id: int) -> bool:
        return any(self.owned_by(r, c, player_id) for r, c in self.neighbors(row, col))

    def with_cells(self, updates: Mapping[Coord, Cell]) -> Board:
        """Return a copy of the board with ``updates`` applied."""
        if not updates:
            return self
        rows = [list(row) for row in self.cells]
        for (row, col), cell in updates.items():
            if not self.in_bounds(row, col):
                raise ValueError(f"Coordinates out of bounds: ({row}, {col})")
            rows[row][col] = cell
        return Board(size=self.size, cells=tuple(tuple(row) for row in rows))
