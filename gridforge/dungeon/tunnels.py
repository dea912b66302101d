"""Connection points, corridor synthesis and extra-path augmentation.

Generation works backwards: one anchor point is chosen per grid, anchors of
adjacent grids are linked by dog-leg corridors, and only afterwards are rooms
grown around the anchors (see ``rooms.py``).
"""
from __future__ import annotations

from typing import List, NamedTuple, Tuple

from ..logging_utils import get_logger
from .board import Board
from .partition import Grid, find_adjacent_grids
from .random_source import RandomSource
from .tiles import CORRIDOR, TileKind, room_tile

Coord2D = Tuple[int, int]

log = get_logger("gridforge.dungeon.tunnels")


class Point(NamedTuple):
    x: int
    y: int
    grid_index: int


class Connection(NamedTuple):
    a: Point
    b: Point

    def touches(self, grid_index: int) -> bool:
        return self.a.grid_index == grid_index or self.b.grid_index == grid_index


def get_path(start: Coord2D, end: Coord2D) -> List[Coord2D]:
    """Axis-aligned corridor from ``start`` to ``end`` (both inclusive).

    The dominant axis is x when ``dx > dy`` (signed, not by magnitude) and y
    otherwise. The walk covers the first half of the dominant axis, then the
    whole secondary axis, then the rest of the dominant axis, so every step
    moves exactly one tile along one axis.
    """
    sx, sy = start
    ex, ey = end
    dx = ex - sx
    dy = ey - sy
    path = [(sx, sy)]
    x, y = sx, sy
    if dx > dy:
        step = 1 if dx > 0 else -1
        jog = max((abs(dx) + 1) // 2 - 1, 0)
        for _ in range(jog):
            x += step
            path.append((x, y))
        ystep = 1 if dy > 0 else -1
        for _ in range(abs(dy)):
            y += ystep
            path.append((x, y))
        while x != ex:
            x += step
            path.append((x, y))
    else:
        step = 1 if dy > 0 else -1
        jog = max((abs(dy) + 1) // 2 - 1, 0)
        for _ in range(jog):
            y += step
            path.append((x, y))
        xstep = 1 if dx > 0 else -1
        for _ in range(abs(dx)):
            x += xstep
            path.append((x, y))
        while y != ey:
            y += step
            path.append((x, y))
    return path


def pick_points(grids: List[Grid], board: Board, rng: RandomSource, margin_x: int, margin_y: int) -> List[Point]:
    """Choose one anchor per grid, inset by the minimum room size."""
    points = []
    for grid in grids:
        x = rng.randint(grid.x + margin_x, grid.x + grid.width - margin_x)
        y = rng.randint(grid.y + margin_y, grid.y + grid.height - margin_y)
        points.append(Point(x, y, grid.index))
    for point in points:
        if board.in_bounds(point.x, point.y):
            board.set(point.x, point.y, room_tile(point.grid_index + 1))
    return points


def connect_points(grids: List[Grid], points: List[Point], rng: RandomSource, loss_chance: int) -> List[Connection]:
    """Pair anchors of adjacent grids, dropping each pair with ``loss_chance`` percent."""
    connections = []
    for grid in grids:
        for adjacent in find_adjacent_grids(grids, grid):
            connection = Connection(points[grid.index], points[adjacent.index])
            if rng.randint(1, 100) > loss_chance:
                connections.append(connection)
    return connections


def carve_path(board: Board, path: List[Coord2D], only_walls: bool = False) -> int:
    """Stamp CORRIDOR along ``path``; returns the number of cells changed."""
    carved = 0
    for x, y in path:
        tile = board.get(x, y)
        if tile is None:
            continue
        if only_walls and not tile.is_wall:
            continue
        if tile is not CORRIDOR:
            board.set(x, y, CORRIDOR)
            carved += 1
    return carved


def create_paths(
    grids: List[Grid],
    board: Board,
    rng: RandomSource,
    *,
    margin_x: int,
    margin_y: int,
    loss_chance: int,
) -> Tuple[List[Point], List[Connection]]:
    points = pick_points(grids, board, rng, margin_x, margin_y)
    connections = connect_points(grids, points, rng, loss_chance)
    for connection in connections:
        carve_path(board, get_path((connection.a.x, connection.a.y), (connection.b.x, connection.b.y)))
    return points, connections


def add_random_paths(board: Board, rng: RandomSource, path_max: int) -> int:
    """Link random pairs of existing corridor tiles with extra corridors.

    Pairs sharing a row or column are skipped. Only WALL cells are carved, so
    rooms and entry/exit tiles are never overwritten. Returns the number of
    paths added.
    """
    path_count = rng.randint(0, path_max)
    corridor_tiles = board.coords_of(TileKind.CORRIDOR)
    if not corridor_tiles:
        return 0
    added = 0
    for _ in range(path_count):
        start = corridor_tiles[rng.randint(0, len(corridor_tiles) - 1)]
        end = corridor_tiles[rng.randint(0, len(corridor_tiles) - 1)]
        if start[0] == end[0] or start[1] == end[1]:
            continue
        carve_path(board, get_path(start, end), only_walls=True)
        added += 1
        log.debug(event="extra_path", start=f"{start[0]},{start[1]}", end=f"{end[0]},{end[1]}")
    return added


__all__ = [
    "Point",
    "Connection",
    "get_path",
    "pick_points",
    "connect_points",
    "carve_path",
    "create_paths",
    "add_random_paths",
]
