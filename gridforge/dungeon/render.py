"""Plain-data views of a generated dungeon for the API and CLI.

Isolated from the controller so the HTTP layer and the ASCII printer share
one tile naming scheme.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .tiles import Tile, TileKind

TILE_CHARS = {
    TileKind.WALL: "#",
    TileKind.FLOOR: ".",
    TileKind.CORRIDOR: ",",
    TileKind.ENTRY: "<",
    TileKind.EXIT: ">",
}


def kind_to_type(kind: Optional[TileKind]) -> str:
    """Lowercase type name used in JSON payloads (``None`` means off the board)."""
    if kind is None:
        return "void"
    return kind.value.lower()


def tile_to_char(tile: Tile) -> str:
    return TILE_CHARS[tile.kind]


def ascii_rows(dungeon) -> List[str]:
    """Row-major text lines (``y`` outer) so the output reads like the map."""
    board = dungeon.board
    return [
        "".join(tile_to_char(board.get(x, y)) for x in range(board.col_count))
        for y in range(board.row_count)
    ]


def type_grid(dungeon) -> List[List[str]]:
    # Row-major (y first) so clients can index grid[y][x].
    board = dungeon.board
    return [
        [kind_to_type(board.get(x, y).kind) for x in range(board.col_count)]
        for y in range(board.row_count)
    ]


def _coord(pair) -> Optional[Dict[str, int]]:
    if pair is None:
        return None
    return {"x": pair[0], "y": pair[1]}


def dungeon_to_dict(dungeon, include_grid: bool = True) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "seed": dungeon.seed,
        "width": dungeon.col_count,
        "height": dungeon.row_count,
        "room_count": dungeon.room_count,
        "rooms": [r.to_dict() for r in dungeon.rooms],
        "points": [{"x": p.x, "y": p.y, "grid": p.grid_index} for p in dungeon.points],
        "grids": [g._asdict() for g in dungeon.grids],
        "entry": _coord(dungeon.special_points.entry),
        "exit": _coord(dungeon.special_points.exit),
        "metrics": dungeon.metrics,
        "config": dungeon.config.to_dict(),
    }
    if include_grid:
        payload["grid"] = type_grid(dungeon)
    return payload


def tile_info(dungeon, x: int, y: int) -> Dict[str, Any]:
    """Position, type and owning room size for a single tile."""
    kind = dungeon.get_tile_at(x, y)
    room = dungeon.room_at(x, y)
    return {
        "x": x,
        "y": y,
        "type": kind_to_type(kind),
        "walkable": dungeon.is_walkable(x, y),
        "room": room.to_dict() if room is not None else None,
    }


__all__ = [
    "TILE_CHARS",
    "kind_to_type",
    "tile_to_char",
    "ascii_rows",
    "type_grid",
    "dungeon_to_dict",
    "tile_info",
]
