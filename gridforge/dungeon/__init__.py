"""Public dungeon package interface."""

from .config import DungeonConfig  # noqa: F401
from .dungeon import Dungeon, DungeonGenerationError  # noqa: F401
from .pipeline import Layout, attempt, generate_layout  # noqa: F401
from .random_source import LcgRandom, SystemRandomSource, make_random_source  # noqa: F401
from .rooms import Room, RoomType, SpecialPoints  # noqa: F401
from .tiles import CORRIDOR, ENTRY, EXIT, WALL, Tile, TileKind, room_tile  # noqa: F401
from .tunnels import get_path  # noqa: F401

__all__ = [
    "Dungeon",
    "DungeonConfig",
    "DungeonGenerationError",
    "Layout",
    "attempt",
    "generate_layout",
    "LcgRandom",
    "SystemRandomSource",
    "make_random_source",
    "Room",
    "RoomType",
    "SpecialPoints",
    "Tile",
    "TileKind",
    "room_tile",
    "WALL",
    "CORRIDOR",
    "ENTRY",
    "EXIT",
    "get_path",
]
