"""
project: Gridforge
module: __init__.py
License: MIT

Flask application factory for the dungeon generator HTTP API.

Configuration is sourced from environment variables (optionally loaded from a
``.env`` file) with defaults matching ``DungeonConfig``. A local ``instance/``
directory holds runtime files such as the rotating log.
"""

import os
import uuid
from dataclasses import fields

from dotenv import load_dotenv
from flask import Flask, jsonify

from gridforge.dungeon.config import DungeonConfig
from gridforge.logging_utils import get_logger

# Load .env if present so GRIDFORGE_* settings can be supplied without
# exporting shell variables during development.
load_dotenv()

log = get_logger("gridforge.app")


def _env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def default_dungeon_options() -> dict:
    """DungeonConfig defaults overridden by ``GRIDFORGE_DEFAULT_<FIELD>`` variables."""
    overrides = {}
    for f in fields(DungeonConfig):
        raw = os.getenv(f"GRIDFORGE_DEFAULT_{f.name.upper()}")
        if raw is not None and raw.strip():
            overrides[f.name] = raw
    return DungeonConfig.from_mapping(overrides).to_dict()


def create_app(config_overrides: dict | None = None) -> Flask:
    """Build the Flask app with the dungeon blueprint registered."""
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only checkouts still serve the API; only file logging needs it.
        pass

    app.config.update(
        DUNGEON_DEFAULT_OPTIONS=default_dungeon_options(),
        DUNGEON_DISABLE_CACHE=_env_bool("GRIDFORGE_DISABLE_CACHE"),
        DUNGEON_CACHE_MAX=int(os.getenv("GRIDFORGE_CACHE_MAX", "8")),
    )
    if config_overrides:
        app.config.update(config_overrides)

    from gridforge.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        log.error(event="unhandled_exception", error_id=error_id, error=repr(e))
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app


__all__ = ["create_app", "default_dungeon_options"]
