"""Tile variants for the dungeon board.

A tile is one of WALL, FLOOR (owned by a room, carries the 1-based room
index), CORRIDOR, ENTRY or EXIT. Tiles are immutable values; the shared
singletons below are safe to store in many cells at once.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TileKind(str, Enum):
    WALL = "WALL"
    FLOOR = "FLOOR"
    CORRIDOR = "CORRIDOR"
    ENTRY = "ENTRY"
    EXIT = "EXIT"


@dataclass(frozen=True)
class Tile:
    kind: TileKind
    room: Optional[int] = None

    @property
    def is_wall(self) -> bool:
        return self.kind is TileKind.WALL

    @property
    def is_room_owned(self) -> bool:
        return self.kind in (TileKind.FLOOR, TileKind.ENTRY, TileKind.EXIT)


WALL = Tile(TileKind.WALL)
CORRIDOR = Tile(TileKind.CORRIDOR)
ENTRY = Tile(TileKind.ENTRY)
EXIT = Tile(TileKind.EXIT)

_ROOM_TILES = {}


def room_tile(index: int) -> Tile:
    """Return the FLOOR tile owned by room/grid ``index`` (1-based)."""
    tile = _ROOM_TILES.get(index)
    if tile is None:
        tile = _ROOM_TILES[index] = Tile(TileKind.FLOOR, index)
    return tile


__all__ = ["TileKind", "Tile", "WALL", "CORRIDOR", "ENTRY", "EXIT", "room_tile"]
