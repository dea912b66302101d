"""Single generation attempt.

``generate_layout`` runs every phase once on a fresh board and returns the
candidate together with its validation result. It touches no state besides
the random source it is given, so the retry policy in ``dungeon.py`` only
varies the ``forced`` flag between calls.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .board import Board
from .config import DungeonConfig
from .connectivity import ValidationResult, validate_layout
from .partition import Grid, adjust_room_count, partition_grids
from .random_source import RandomSource
from .rooms import Room, SpecialPoints, assign_special_rooms, place_rooms
from .tunnels import Connection, Point, add_random_paths, create_paths


@dataclass
class Layout:
    board: Board
    room_count: int
    grids: List[Grid]
    points: List[Point]
    connections: List[Connection]
    rooms: List[Room]
    special_points: SpecialPoints
    extra_paths: int
    forced: bool
    validation: Optional[ValidationResult] = None
    phase_ms: Dict[str, float] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return self.validation is not None and self.validation.valid


def generate_layout(config: DungeonConfig, rng: RandomSource, forced: bool = False) -> Layout:
    """Run partition, corridors, rooms, extra paths and validation once.

    ``config`` is expected to be normalized. In forced mode both loss chances
    are treated as zero.
    """
    point_loss = 0 if forced else config.point_loss_chance
    room_loss = 0 if forced else config.room_loss_chance
    phase_ms: Dict[str, float] = {}

    def _phase(label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        phase_ms[label] = round((time.perf_counter() - ps) * 1000, 3)
        return r

    board = Board(config.col_count, config.row_count)
    room_count = adjust_room_count(rng.randint(config.room_count_min, config.room_count_max))
    grids = _phase('partition', partition_grids, room_count, config.col_count, config.row_count)
    points, connections = _phase(
        'paths',
        create_paths,
        grids,
        board,
        rng,
        margin_x=config.min_room_size_x,
        margin_y=config.min_room_size_y,
        loss_chance=point_loss,
    )
    rooms = _phase(
        'rooms',
        place_rooms,
        board,
        grids,
        points,
        connections,
        rng,
        size_x=(config.min_room_size_x, config.max_room_size_x),
        size_y=(config.min_room_size_y, config.max_room_size_y),
        loss_chance=room_loss,
        max_attempts=config.placement_attempts,
    )
    special = _phase('special_rooms', assign_special_rooms, board, rooms, rng)
    extra = _phase('extra_paths', add_random_paths, board, rng, config.random_path_max)
    layout = Layout(
        board=board,
        room_count=room_count,
        grids=grids,
        points=points,
        connections=connections,
        rooms=rooms,
        special_points=special,
        extra_paths=extra,
        forced=forced,
        phase_ms=phase_ms,
    )
    layout.validation = _phase('validate', validate_layout, board, points, grids, rooms, rng)
    return layout


def attempt(config: DungeonConfig, rng: RandomSource, forced: bool = False) -> Optional[Layout]:
    """Return the generated layout if it validates, else None."""
    layout = generate_layout(config, rng, forced=forced)
    return layout if layout.valid else None


__all__ = ["Layout", "generate_layout", "attempt"]
