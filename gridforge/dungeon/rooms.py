from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from ..logging_utils import get_logger
from .board import Board
from .partition import Grid
from .random_source import RandomSource
from .tiles import ENTRY, EXIT, room_tile
from .tunnels import Connection, Point

log = get_logger("gridforge.dungeon.rooms")


class RoomType(str, Enum):
    NORMAL = "NORMAL"
    ENTRY = "ENTRY"
    EXIT = "EXIT"
    # Reserved for hand-authored rooms; the generator never assigns it.
    SPECIAL = "SPECIAL"


@dataclass
class Room:
    x: int
    y: int
    width: int
    height: int
    grid_index: int
    on_point: bool
    type: RoomType = RoomType.NORMAL

    def cells(self):
        for ix in range(self.x, self.x + self.width):
            for iy in range(self.y, self.y + self.height):
                yield ix, iy

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def strictly_contains(self, x: int, y: int) -> bool:
        return self.x < x < self.x + self.width - 1 and self.y < y < self.y + self.height - 1

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "grid": self.grid_index,
            "onPoint": self.on_point,
            "type": self.type.value,
        }


class SpecialPoints(NamedTuple):
    entry: Optional[Tuple[int, int]] = None
    exit: Optional[Tuple[int, int]] = None


class _Candidate(NamedTuple):
    x: int
    y: int
    width: int
    height: int


def _sample_candidate(grid: Grid, rng: RandomSource, size_x: Tuple[int, int], size_y: Tuple[int, int]) -> _Candidate:
    width = rng.randint(*size_x)
    height = rng.randint(*size_y)
    x = rng.randint(grid.x, grid.x + grid.width - width)
    y = rng.randint(grid.y, grid.y + grid.height - height)
    return _Candidate(x, y, width, height)


def _check_candidate(board: Board, grid: Grid, point: Point, cand: _Candidate) -> Tuple[bool, bool]:
    """Return (valid, on_point) for a candidate rectangle.

    Valid means in bounds, clear of other rooms, and off the grid border.
    Corridors may be overwritten: the anchor point always lies on one.
    """
    on_point = False
    for x in range(cand.x, cand.x + cand.width):
        for y in range(cand.y, cand.y + cand.height):
            tile = board.get(x, y)
            if tile is None or tile.is_room_owned or grid.on_border(x, y):
                return False, False
            if x == point.x and y == point.y:
                on_point = True
    return True, on_point


def place_room(
    board: Board,
    grid: Grid,
    point: Point,
    rng: RandomSource,
    *,
    size_x: Tuple[int, int],
    size_y: Tuple[int, int],
    max_attempts: int,
) -> Tuple[_Candidate, bool, bool]:
    """Search for a rectangle inside ``grid`` that covers ``point``.

    Returns (candidate, valid, on_point). When no covering rectangle turns up
    within ``max_attempts`` the last candidate is returned as-is; callers may
    still stamp it if it is valid.
    """
    cand = _sample_candidate(grid, rng, size_x, size_y)
    valid = on_point = False
    for _ in range(max_attempts):
        valid, on_point = _check_candidate(board, grid, point, cand)
        if valid and on_point:
            break
        cand = _sample_candidate(grid, rng, size_x, size_y)
    else:
        # Loop exhausted: judge the final resample on its own merits.
        valid, on_point = _check_candidate(board, grid, point, cand)
    return cand, valid, on_point


def place_rooms(
    board: Board,
    grids: List[Grid],
    points: List[Point],
    connections: List[Connection],
    rng: RandomSource,
    *,
    size_x: Tuple[int, int],
    size_y: Tuple[int, int],
    loss_chance: int,
    max_attempts: int = 1000,
) -> List[Room]:
    """Grow one room around each connected grid's anchor point.

    Grids without a surviving connection are skipped. Each placed candidate
    then survives a ``loss_chance`` percent roll before being stamped.
    """
    rooms: List[Room] = []
    for grid in grids:
        point = points[grid.index]
        if not any(c.touches(grid.index) for c in connections):
            continue
        cand, valid, on_point = place_room(
            board, grid, point, rng, size_x=size_x, size_y=size_y, max_attempts=max_attempts
        )
        roll = rng.randint(1, 100)
        if roll < loss_chance or not valid:
            continue
        tile = room_tile(grid.index + 1)
        for x in range(cand.x, cand.x + cand.width):
            for y in range(cand.y, cand.y + cand.height):
                board.set(x, y, tile)
        room = Room(cand.x, cand.y, cand.width, cand.height, grid.index, on_point)
        rooms.append(room)
        log.debug(
            event="room_placed",
            room=grid.index + 1,
            x=room.x,
            y=room.y,
            width=room.width,
            height=room.height,
            on_point=on_point,
        )
    return rooms


def assign_special_rooms(board: Board, rooms: List[Room], rng: RandomSource) -> SpecialPoints:
    """Promote two distinct rooms to ENTRY/EXIT and mark one interior tile in each."""
    if len(rooms) < 2:
        return SpecialPoints()
    available = list(rooms)
    entry_room = available.pop(rng.randint(0, len(available) - 1))
    exit_room = available[rng.randint(0, len(available) - 1)]
    entry_room.type = RoomType.ENTRY
    exit_room.type = RoomType.EXIT
    entry = _interior_point(entry_room, rng)
    exit_ = _interior_point(exit_room, rng)
    board.set(*entry, ENTRY)
    board.set(*exit_, EXIT)
    return SpecialPoints(entry, exit_)


def _interior_point(room: Room, rng: RandomSource) -> Tuple[int, int]:
    return (
        rng.randint(room.x + 1, room.x + room.width - 2),
        rng.randint(room.y + 1, room.y + room.height - 2),
    )


__all__ = ["Room", "RoomType", "SpecialPoints", "place_room", "place_rooms", "assign_special_rooms"]
