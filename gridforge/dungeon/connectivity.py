"""Connectivity validation for a candidate layout.

A layout is accepted when a flood fill from a random anchor point reaches
every non-wall tile and at least half of the grids ended up with a room.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from .board import Board
from .partition import Grid
from .random_source import RandomSource
from .rooms import Room
from .tunnels import Point

Coord2D = Tuple[int, int]

NEIGHBOURS_8 = [(-1, -1), (0, -1), (1, -1), (1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0)]


@dataclass
class ValidationResult:
    valid: bool
    reason: Optional[str]
    reachable: int
    floor_tiles: int
    room_count: int
    grid_count: int

    def to_dict(self):
        return {
            "valid": self.valid,
            "reason": self.reason,
            "reachable": self.reachable,
            "floor_tiles": self.floor_tiles,
            "room_count": self.room_count,
            "grid_count": self.grid_count,
        }


def flood_reachable(board: Board, start: Coord2D) -> Set[Coord2D]:
    """Non-wall tiles reachable from ``start`` through 8-connected steps."""
    start_tile = board.get(*start)
    if start_tile is None or start_tile.is_wall:
        return set()
    visited = {start}
    frontier = deque([start])
    while frontier:
        cx, cy = frontier.popleft()
        for dx, dy in NEIGHBOURS_8:
            nxt = (cx + dx, cy + dy)
            if nxt in visited:
                continue
            tile = board.get(*nxt)
            if tile is not None and not tile.is_wall:
                visited.add(nxt)
                frontier.append(nxt)
    return visited


def validate_layout(
    board: Board,
    points: List[Point],
    grids: List[Grid],
    rooms: List[Room],
    rng: RandomSource,
) -> ValidationResult:
    floor_tiles = board.count_non_wall()
    if points:
        start = points[rng.randint(0, len(points) - 1)]
        reachable = len(flood_reachable(board, (start.x, start.y)))
    else:
        reachable = 0
    reason = None
    if not points or reachable != floor_tiles:
        reason = "disconnected"
    elif len(rooms) < len(grids) / 2:
        reason = "too_few_rooms"
    return ValidationResult(
        valid=reason is None,
        reason=reason,
        reachable=reachable,
        floor_tiles=floor_tiles,
        room_count=len(rooms),
        grid_count=len(grids),
    )


__all__ = ["ValidationResult", "flood_reachable", "validate_layout", "NEIGHBOURS_8"]
