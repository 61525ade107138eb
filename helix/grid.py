from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

from colors import BLACK, CRGB


class Grid:
    """Dense width x height grid of colours, addressed as grid[x, y]."""

    def __init__(self, width: int, height: int, fill: CRGB = BLACK) -> None:
        self.width = int(width)
        self.height = int(height)
        if self.width < 0 or self.height < 0:
            raise ValueError("width and height must be >= 0")
        self._cells: List[CRGB] = [fill] * (self.width * self.height)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[CRGB]]) -> "Grid":
        """Build a grid from rows of colours; rows[y][x]."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError("all rows must have the same length")
            for x, color in enumerate(row):
                grid.set(x, y, color)
        return grid

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[CRGB]:
        return iter(self._cells)

    def __getitem__(self, xy: Tuple[int, int]) -> CRGB:
        return self.get(*xy)

    def __setitem__(self, xy: Tuple[int, int], color: CRGB) -> None:
        self.set(xy[0], xy[1], color)

    def has(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _offset(self, x: int, y: int) -> int:
        if not self.has(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def get(self, x: int, y: int) -> CRGB:
        return self._cells[self._offset(x, y)]

    def set(self, x: int, y: int, color: CRGB) -> None:
        self._cells[self._offset(x, y)] = color

    def fill(self, color: CRGB) -> None:
        self._cells[:] = [color] * len(self._cells)

    def clear(self) -> None:
        self.fill(BLACK)
