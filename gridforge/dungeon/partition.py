"""Board partitioning into equally sized grids, one per prospective room."""
from __future__ import annotations

from typing import List, NamedTuple


class Grid(NamedTuple):
    x: int
    y: int
    width: int
    height: int
    index: int

    def on_border(self, x: int, y: int) -> bool:
        return x in (self.x, self.x + self.width - 1) or y in (self.y, self.y + self.height - 1)


def adjust_room_count(room_count: int) -> int:
    """Bump ``room_count`` until it splits into 2 bands or 3 bands evenly."""
    while room_count % 2 != 0 and room_count % 3 != 0:
        room_count += 1
    return room_count


def partition_grids(room_count: int, col_count: int, row_count: int) -> List[Grid]:
    """Split the board into ``room_count`` grids.

    Even counts use two row bands cut into ``room_count / 2`` columns; counts
    divisible by three use three column bands cut into ``room_count / 3`` rows.
    Integer division remainders are left uncovered at the right/bottom edge.
    """
    grids: List[Grid] = []
    if room_count % 2 == 0:
        other = room_count // 2
        band_h = row_count // 2
        slice_w = col_count // other
        for i in range(other):
            for j in range(2):
                grids.append(Grid(i * slice_w, j * band_h, slice_w, band_h, len(grids)))
    elif room_count % 3 == 0:
        other = room_count // 3
        band_w = col_count // 3
        slice_h = row_count // other
        for i in range(other):
            for j in range(3):
                grids.append(Grid(j * band_w, i * slice_h, band_w, slice_h, len(grids)))
    else:
        raise ValueError(f"room count {room_count} is not divisible by 2 or 3")
    return grids


def find_adjacent_grids(grids: List[Grid], grid: Grid) -> List[Grid]:
    """Grids directly below or directly right of ``grid``.

    Partitioning always grows right/down so the reverse direction is never
    needed; each adjacent pair is reported exactly once.
    """
    adjacent = []
    for other in grids:
        same_x = other.x == grid.x
        same_y = other.y == grid.y
        next_x = other.x == grid.x + grid.width
        next_y = other.y == grid.y + grid.height
        if (same_x and next_y) or (same_y and next_x):
            adjacent.append(other)
    return adjacent


__all__ = ["Grid", "adjust_room_count", "partition_grids", "find_adjacent_grids"]
