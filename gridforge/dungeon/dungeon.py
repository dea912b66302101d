"""Dungeon controller: generate, validate, retry.

High-level generation phases (one attempt, see ``pipeline.py``):
    * Pick a room count divisible by 2 or 3 and partition the board into that many grids.
    * Choose one anchor point per grid and join anchors of adjacent grids with dog-leg corridors,
      randomly dropping some connections (``point_loss_chance``).
    * Grow a room over each connected grid's anchor, randomly dropping some rooms
      (``room_loss_chance``), then promote two rooms to ENTRY and EXIT.
    * Add a few extra corridors between existing corridor tiles.
    * Flood fill from a random anchor; accept when every non-wall tile is reachable and at least
      half of the grids hold a room.

Retry policy:
    * Up to ``lossy_attempts`` attempts with the configured loss chances.
    * Then "forced" attempts with both loss chances at zero until one validates. Forced attempts are
      capped by ``forced_attempts``; hitting the cap raises ``DungeonGenerationError``.

Public contract consumed elsewhere:
    Dungeon(DungeonConfig(...)) OR Dungeon(seed=42, rowCount=30, ...)
    Attributes: config, board, grids, points, connections, rooms, special_points, seed, metrics,
        attempts, forced_attempts, current_seed
    Accessors: get_tile_at(x, y), is_walkable(x, y), room_at(x, y), regenerate()
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .board import Board
from .config import DungeonConfig
from .metrics import init_metrics
from .partition import Grid
from .pipeline import Layout, generate_layout
from .random_source import RandomSource, make_random_source
from .rooms import Room, SpecialPoints
from .tiles import TileKind
from .tunnels import Connection, Point

log = get_logger("gridforge.dungeon")


class DungeonGenerationError(RuntimeError):
    """Raised when even forced attempts cannot produce a valid layout."""

    def __init__(self, message: str, attempts: int, last_reason: Optional[str] = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_reason = last_reason


class Dungeon:
    def __init__(
        self,
        config: DungeonConfig | None = None,
        *,
        seed: int | None = None,
        rng: RandomSource | None = None,
        **options: Any,
    ):
        # Accept either a config object or loose option keywords (camelCase or snake_case)
        if config is None:
            config = DungeonConfig.from_mapping(options)
        elif options:
            config = DungeonConfig.from_mapping(options, base=config)
        if seed is not None:
            config = DungeonConfig.from_mapping({"seed": seed}, base=config)
        self.config = config.normalized()
        self.seed = self.config.seed
        self._rng = rng if rng is not None else make_random_source(self.seed)
        self._layout: Optional[Layout] = None
        self.metrics: Dict[str, Any] = init_metrics()
        self.regenerate()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def regenerate(self) -> None:
        """Re-run generation in place until a valid layout is produced."""
        start = time.perf_counter()
        cfg = self.config
        attempts = 0
        forced_attempts = 0
        layout = None
        while attempts < cfg.lossy_attempts:
            attempts += 1
            layout = generate_layout(cfg, self._rng)
            if layout.valid:
                break
            self._log_invalid(layout, attempts)
        if layout is None or not layout.valid:
            log.warn(event="forced_mode", seed=self.seed, after_attempts=attempts)
            while True:
                if forced_attempts >= cfg.forced_attempts:
                    reason = layout.validation.reason if layout is not None and layout.validation else None
                    log.error(event="dungeon_failed", seed=self.seed, attempts=attempts, reason=reason)
                    raise DungeonGenerationError(
                        f"no valid dungeon after {attempts} attempts (seed={self.seed})",
                        attempts=attempts,
                        last_reason=reason,
                    )
                attempts += 1
                forced_attempts += 1
                layout = generate_layout(cfg, self._rng, forced=True)
                if layout.valid:
                    break
                self._log_invalid(layout, attempts)
        self._layout = layout
        self._update_metrics(attempts, forced_attempts, start)
        log.info(
            event="dungeon_ready",
            seed=self.seed,
            attempts=attempts,
            forced=forced_attempts,
            rooms=len(layout.rooms),
            grids=len(layout.grids),
            runtime_ms=self.metrics["runtime_ms"],
        )

    def _log_invalid(self, layout: Layout, attempt_no: int) -> None:
        v = layout.validation
        log.debug(
            event="dungeon_invalid",
            attempt=attempt_no,
            forced=layout.forced,
            reason=v.reason,
            reachable=v.reachable,
            floor_tiles=v.floor_tiles,
            rooms=v.room_count,
            grids=v.grid_count,
        )

    def _update_metrics(self, attempts: int, forced_attempts: int, start: float) -> None:
        layout = self._layout
        board = layout.board
        m = init_metrics()
        m['attempts'] = attempts
        m['forced_attempts'] = forced_attempts
        m['grids'] = len(layout.grids)
        m['rooms'] = len(layout.rooms)
        m['rooms_off_point'] = sum(1 for r in layout.rooms if not r.on_point)
        m['connections'] = len(layout.connections)
        m['extra_paths'] = layout.extra_paths
        m['tiles_floor'] = board.count_non_wall()
        m['tiles_corridor'] = board.count(TileKind.CORRIDOR)
        m['tiles_wall'] = board.count(TileKind.WALL)
        m['phase_ms'] = dict(layout.phase_ms)
        m['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        self.metrics = m

    # ------------------------------------------------------------------
    # Read-only surface
    # ------------------------------------------------------------------
    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def board(self) -> Board:
        return self._layout.board

    @property
    def grids(self) -> List[Grid]:
        return list(self._layout.grids)

    @property
    def points(self) -> List[Point]:
        return list(self._layout.points)

    @property
    def connections(self) -> List[Connection]:
        return list(self._layout.connections)

    @property
    def rooms(self) -> List[Room]:
        return list(self._layout.rooms)

    @property
    def special_points(self) -> SpecialPoints:
        return self._layout.special_points

    @property
    def room_count(self) -> int:
        return self._layout.room_count

    @property
    def valid(self) -> bool:
        return self._layout is not None and self._layout.valid

    @property
    def attempts(self) -> int:
        return self.metrics["attempts"]

    @property
    def forced_attempts(self) -> int:
        return self.metrics["forced_attempts"]

    @property
    def current_seed(self) -> Optional[int]:
        return self._rng.state

    @property
    def row_count(self) -> int:
        return self.config.row_count

    @property
    def col_count(self) -> int:
        return self.config.col_count

    def get_tile_at(self, x: int, y: int) -> Optional[TileKind]:
        tile = self.board.get(x, y)
        return tile.kind if tile is not None else None

    def is_walkable(self, x: int, y: int) -> bool:
        kind = self.get_tile_at(x, y)
        return kind is not None and kind is not TileKind.WALL

    def room_at(self, x: int, y: int) -> Optional[Room]:
        for room in self._layout.rooms:
            if room.contains(x, y):
                return room
        return None

    def __repr__(self) -> str:
        return (
            f"Dungeon(seed={self.seed}, size={self.col_count}x{self.row_count}, "
            f"rooms={len(self._layout.rooms)}/{len(self._layout.grids)})"
        )


__all__ = ["Dungeon", "DungeonGenerationError"]
