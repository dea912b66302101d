"""Flat tile buffer backing a dungeon layout."""
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .tiles import WALL, Tile, TileKind

Coord2D = Tuple[int, int]


class Board:
    """``col_count x row_count`` tiles stored column-major at ``x * row_count + y``."""

    __slots__ = ("col_count", "row_count", "_cells")

    def __init__(self, col_count: int, row_count: int):
        self.col_count = col_count
        self.row_count = row_count
        self._cells: List[Tile] = [WALL] * (col_count * row_count)

    def reset(self) -> None:
        self._cells = [WALL] * (self.col_count * self.row_count)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.col_count and 0 <= y < self.row_count

    def get(self, x: int, y: int) -> Optional[Tile]:
        if not self.in_bounds(x, y):
            return None
        return self._cells[x * self.row_count + y]

    def set(self, x: int, y: int, tile: Tile) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x},{y}) outside {self.col_count}x{self.row_count} board")
        self._cells[x * self.row_count + y] = tile

    def iter_cells(self) -> Iterator[Tuple[int, int, Tile]]:
        rows = self.row_count
        for i, tile in enumerate(self._cells):
            yield i // rows, i % rows, tile

    def coords_of(self, kind: TileKind) -> List[Coord2D]:
        return [(x, y) for x, y, tile in self.iter_cells() if tile.kind is kind]

    def count(self, kind: TileKind) -> int:
        return sum(1 for tile in self._cells if tile.kind is kind)

    def count_non_wall(self) -> int:
        return sum(1 for tile in self._cells if not tile.is_wall)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.col_count == other.col_count
            and self.row_count == other.row_count
            and self._cells == other._cells
        )

    def __repr__(self) -> str:
        return f"Board({self.col_count}x{self.row_count}, floor={self.count_non_wall()})"
