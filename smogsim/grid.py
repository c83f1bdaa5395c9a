"""A fixed-size spatial grid with bounded cells."""

from __future__ import annotations

from typing import Generic, List, Tuple, TypeVar

T = TypeVar("T")

CELL_MAX = 4


class Grid(Generic[T]):
    """A width by height grid; each cell keeps at most ``CELL_MAX`` values."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("grid dimensions must not be negative")
        self.width = width
        self.height = height
        self._cells: List[List[T]] = [[] for _ in range(width * height)]

    def _index(self, col: int, row: int) -> int:
        if not (0 <= col < self.width and 0 <= row < self.height):
            raise IndexError(f"cell ({col}, {row}) is outside the grid")
        return col * self.height + row

    def clear(self) -> None:
        for bucket in self._cells:
            bucket.clear()

    def push(self, cell: Tuple[int, int], value: T) -> None:
        """Add ``value`` to a cell; values beyond the cell capacity are dropped."""
        col, row = cell
        bucket = self._cells[self._index(col, row)]
        if len(bucket) < CELL_MAX:
            bucket.append(value)

    def cell(self, col: int, row: int) -> Tuple[T, ...]:
        return tuple(self._cells[self._index(col, row)])

    def __getitem__(self, key: Tuple[int, int]) -> Tuple[T, ...]:
        col, row = key
        return self.cell(col, row)