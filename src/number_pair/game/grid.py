from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np


Coordinate = Tuple[int, int]

EMPTY = 0
MAX_VALUE = 9

# Fixed scan order for neighbors: up, down, left, right
NEIGHBOR_OFFSETS: Tuple[Coordinate, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class OutOfBoundsError(IndexError):
    """Raised when a coordinate falls outside the board."""


class Board:
    """Square grid of tile values.

    The grid uses 0 for empty cells and 1..9 for tiles. Cells are addressed
    as (row, col) with row 0 at the top.
    """

    def __init__(self, size: int = 9) -> None:
        if size <= 0:
            raise ValueError(f"Board size must be positive, got {size}")
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)

    @property
    def total_cells(self) -> int:
        return self.size * self.size

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _check(self, row: int, col: int) -> None:
        if not self.is_inside(row, col):
            raise OutOfBoundsError(f"({row}, {col}) is outside a {self.size}x{self.size} board")

    def get(self, row: int, col: int) -> int:
        self._check(row, col)
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        self._check(row, col)
        if not EMPTY <= value <= MAX_VALUE:
            raise ValueError(f"Tile value must be in 0..{MAX_VALUE}, got {value}")
        self.grid[row, col] = value

    def neighbors(self, row: int, col: int) -> List[Coordinate]:
        """In-bounds orthogonal neighbors in up, down, left, right order."""
        self._check(row, col)
        out: List[Coordinate] = []
        for dr, dc in NEIGHBOR_OFFSETS:
            r, c = row + dr, col + dc
            if self.is_inside(r, c):
                out.append((r, c))
        return out

    def is_adjacent(self, a: Coordinate, b: Coordinate) -> bool:
        return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1

    def coords(self) -> Iterator[Coordinate]:
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def flatten(self) -> Iterator[int]:
        """Lazily yield every cell value in row-major order."""
        for r, c in self.coords():
            yield int(self.grid[r, c])

    def fill(self, values: Sequence[int]) -> None:
        """Write `values` into the board in row-major order."""
        if len(values) != self.total_cells:
            raise ValueError(f"Expected {self.total_cells} values, got {len(values)}")
        arr = np.asarray(values, dtype=np.int8)
        if arr.size and (arr.min() < EMPTY or arr.max() > MAX_VALUE):
            raise ValueError(f"Tile values must be in 0..{MAX_VALUE}")
        self.grid = arr.reshape((self.size, self.size)).copy()

    def remaining(self) -> int:
        return int(np.count_nonzero(self.grid))

    def is_cleared(self) -> bool:
        return self.remaining() == 0

    def occupied(self) -> List[Coordinate]:
        """Non-empty coordinates in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.grid != EMPTY)]

    def to_list(self) -> List[List[int]]:
        return self.grid.astype(int).tolist()

    @classmethod
    def from_list(cls, rows: Iterable[Iterable[int]]) -> "Board":
        arr = np.array([list(r) for r in rows], dtype=np.int64)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError("Board rows must form a square grid")
        board = cls(arr.shape[0])
        board.fill(arr.reshape(-1).tolist())
        return board

    def copy(self) -> "Board":
        new_board = Board(self.size)
        new_board.grid = self.grid.copy()
        return new_board

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def __repr__(self) -> str:
        return f"Board(size={self.size}, remaining={self.remaining()})"
