"""Minimal structured logging helper.

Provides a lightweight wrapper around print() to emit key=value pairs with a
timestamp and level. The generator calls it from hot loops, so it stays a
thin formatter rather than a stdlib logging hierarchy.

Usage:
    from gridforge.logging_utils import get_logger
    log = get_logger("gridforge.dungeon")
    log.info(event="dungeon_ready", attempts=3, seed=42)

All non-str key/value values are repr()'d. Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("GRIDFORGE_LOG_LEVEL", "info"), 20)
JSON_MODE = os.getenv("GRIDFORGE_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")

# Optional stdlib logger that also receives every emitted line (set by the
# server so generator events land in the rotating log file).
_FORWARD = None


def _format(level: str, **fields):
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        try:
            return json.dumps(rec, separators=(",", ":"), default=repr)
        except (TypeError, ValueError):
            return json.dumps({"level": level, "ts": int(time.time()), "error": "json_encode_failed"})
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "gridforge"

    def enabled_for(self, lvl: str) -> bool:
        return LEVELS[lvl] >= CURRENT_LEVEL

    def _log(self, lvl: str, **fields):
        if not self.enabled_for(lvl):
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        # stdout carries command output (maps, JSON), so log lines go to stderr
        line = _format(lvl, **fields)
        print(line, file=sys.stderr)
        if _FORWARD is not None:
            _FORWARD.log(LEVELS[lvl], line)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def forward_to(logger) -> None:
    """Mirror emitted lines into a stdlib ``logging.Logger`` (None disables)."""
    global _FORWARD
    _FORWARD = logger


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("gridforge")
