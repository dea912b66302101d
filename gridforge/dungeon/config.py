from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

MIN_BOARD_SIZE = 20
MIN_ROOM_SIZE = 3

# Option names as exposed to clients (camelCase) mapped to dataclass fields.
OPTION_ALIASES = {
    "rowCount": "row_count",
    "colCount": "col_count",
    "roomCountMin": "room_count_min",
    "roomCountMax": "room_count_max",
    "minRoomSizeX": "min_room_size_x",
    "minRoomSizeY": "min_room_size_y",
    "maxRoomSizeX": "max_room_size_x",
    "maxRoomSizeY": "max_room_size_y",
    "pointLossChance": "point_loss_chance",
    "roomLossChance": "room_loss_chance",
    "randomPathMax": "random_path_max",
    "placementAttempts": "placement_attempts",
    "lossyAttempts": "lossy_attempts",
    "forcedAttempts": "forced_attempts",
    "seed": "seed",
}


@dataclass
class DungeonConfig:
    row_count: int = 32
    col_count: int = 40
    room_count_min: int = 8
    room_count_max: int = 14
    min_room_size_x: int = 3
    min_room_size_y: int = 3
    max_room_size_x: int = 7
    max_room_size_y: int = 7
    point_loss_chance: int = 10
    room_loss_chance: int = 20
    random_path_max: int = 2
    seed: Optional[int] = None
    placement_attempts: int = 1000
    lossy_attempts: int = 10
    forced_attempts: int = 200

    def normalized(self) -> "DungeonConfig":
        """Return a copy clamped to sane minimums (values are never rejected)."""
        min_x = max(MIN_ROOM_SIZE, self.min_room_size_x)
        min_y = max(MIN_ROOM_SIZE, self.min_room_size_y)
        room_min = max(1, self.room_count_min)
        return replace(
            self,
            row_count=max(MIN_BOARD_SIZE, self.row_count),
            col_count=max(MIN_BOARD_SIZE, self.col_count),
            room_count_min=room_min,
            room_count_max=max(room_min, self.room_count_max),
            min_room_size_x=min_x,
            min_room_size_y=min_y,
            max_room_size_x=max(min_x, self.max_room_size_x),
            max_room_size_y=max(min_y, self.max_room_size_y),
            point_loss_chance=min(100, max(0, self.point_loss_chance)),
            room_loss_chance=min(100, max(0, self.room_loss_chance)),
            random_path_max=max(0, self.random_path_max),
            placement_attempts=max(1, self.placement_attempts),
            lossy_attempts=max(0, self.lossy_attempts),
            forced_attempts=max(1, self.forced_attempts),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional["DungeonConfig"] = None) -> "DungeonConfig":
        """Build a config from camelCase or snake_case options.

        Unknown keys are ignored. Values are coerced with ``int()``; an empty
        seed means "no seed". Raises ValueError for non-numeric values.
        """
        known = {f.name for f in fields(cls)}
        updates: Dict[str, Any] = {}
        for key, raw in data.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                continue
            if name == "seed":
                if raw is None or (isinstance(raw, str) and not raw.strip()):
                    updates["seed"] = None
                    continue
            try:
                updates[name] = int(raw)
            except (TypeError, ValueError):
                raise ValueError(f"option {key!r} must be an integer, got {raw!r}") from None
        return replace(base or cls(), **updates)

    def to_dict(self) -> Dict[str, Any]:
        snake = asdict(self)
        return {alias: snake[name] for alias, name in OPTION_ALIASES.items()}

    def cache_key(self) -> tuple:
        return tuple(asdict(self).values())


__all__ = ["DungeonConfig", "OPTION_ALIASES", "MIN_BOARD_SIZE", "MIN_ROOM_SIZE"]
