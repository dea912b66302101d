"""
project: Gridforge
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

Every endpoint takes the generator options as query parameters (camelCase as
in the option form, or snake_case). Missing options fall back to the app's
``DUNGEON_DEFAULT_OPTIONS``. Generated dungeons are cached per normalized
config, so repeated tile lookups for one seed reuse a single instance.
"""

import hashlib
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from gridforge.dungeon import Dungeon, DungeonConfig, DungeonGenerationError
from gridforge.dungeon.render import dungeon_to_dict, tile_info
from gridforge.logging_utils import get_logger

bp_dungeon = Blueprint("dungeon", __name__)
log = get_logger("gridforge.api")

SEED_MAX = 2**53 - 1

# Simple in-process cache config_key -> Dungeon. Guarded by a lock because the
# dev server may run threaded.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()


def coerce_seed(payload_seed):
    """Convert a provided seed (int or str) into a bounded non-negative int."""
    if payload_seed is None or isinstance(payload_seed, bool):
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.lower().encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX
    return random.randint(1, 1_000_000)


def get_cached_dungeon(config: DungeonConfig) -> Dungeon:
    if current_app.config.get("DUNGEON_DISABLE_CACHE"):
        return Dungeon(config)
    key = config.normalized().cache_key()
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    dungeon = Dungeon(config)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        if len(_dungeon_cache) > current_app.config.get("DUNGEON_CACHE_MAX", 8):
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return dungeon


def _config_from_request() -> DungeonConfig:
    """Merge query options over app defaults. Raises ValueError on bad numbers."""
    base = DungeonConfig.from_mapping(current_app.config.get("DUNGEON_DEFAULT_OPTIONS", {}))
    args = request.args.to_dict()
    if "seed" in args:
        args["seed"] = coerce_seed(args["seed"])
    elif base.seed is None:
        # Unseeded requests still get a reproducible seed the client can echo back.
        args["seed"] = coerce_seed(None)
    args.pop("x", None)
    args.pop("y", None)
    return DungeonConfig.from_mapping(args, base=base)


def _generate():
    """Return (dungeon, None) or (None, error_response)."""
    try:
        config = _config_from_request()
    except ValueError as exc:
        return None, (jsonify({"error": str(exc)}), 400)
    try:
        return get_cached_dungeon(config), None
    except DungeonGenerationError as exc:
        log.warn(event="generation_failed", seed=config.seed, attempts=exc.attempts, reason=exc.last_reason)
        return None, (jsonify({"error": str(exc), "attempts": exc.attempts}), 422)


@bp_dungeon.route("/api/dungeon/map")
def dungeon_map():
    """
    Generate (or fetch from cache) a dungeon for the given options.
    Response: { 'seed', 'width', 'height', 'grid': <row-major type names>, 'rooms', 'points',
                'entry', 'exit', 'room_count', 'metrics', 'config' }
    """
    dungeon, error = _generate()
    if error:
        return error
    return jsonify(dungeon_to_dict(dungeon))


@bp_dungeon.route("/api/dungeon/tile")
def dungeon_tile():
    """
    Describe one tile: position, type, walkability and owning room size.
    Query: x, y plus the generator options. 404 when (x, y) is off the board.
    """
    try:
        x = int(request.args.get("x", ""))
        y = int(request.args.get("y", ""))
    except ValueError:
        return jsonify({"error": "x and y must be integers"}), 400
    dungeon, error = _generate()
    if error:
        return error
    if dungeon.get_tile_at(x, y) is None:
        return jsonify({"error": "out of bounds", "x": x, "y": y}), 404
    return jsonify(tile_info(dungeon, x, y))


@bp_dungeon.route("/api/dungeon/defaults")
def dungeon_defaults():
    """Return the default generator options (camelCase)."""
    return jsonify(current_app.config.get("DUNGEON_DEFAULT_OPTIONS", DungeonConfig().to_dict()))


@bp_dungeon.route("/api/dungeon/seed", methods=["POST"])
def set_seed():
    """Turn a user supplied seed into the integer the generator uses.

    Body JSON (all optional):
      { "seed": <int|str|null>, "regenerate": <bool> }
    - seed omitted/null/empty or regenerate without seed => random seed.
    - numeric strings are parsed; other strings are hashed deterministically.

    Response: { "seed": <int> }
    """
    data = request.get_json(silent=True) or {}
    provided = data.get("seed", None)
    if data.get("regenerate") and provided is None:
        seed = coerce_seed(None)
    else:
        seed = coerce_seed(provided)
    return jsonify({"seed": seed})
