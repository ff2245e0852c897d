"""Structured key=value logging for generator runs.

A print() based logger: every record is one line carrying ``level``, ``ts``,
the logger name and whatever fields the caller passes, so runs can be grepped
or parsed without configuring the stdlib logging tree.

Usage:
    from app.logging_utils import get_logger
    log = get_logger("mapgen").bind(seed="42", size=32)
    log.info(event="mapgen_complete", ms=12)

String values have spaces replaced by underscores; None values are dropped.
Reserved keys: level, ts.

Environment (read on every call so tests can flip them):
    MAPGEN_LOG_LEVEL   debug|info|warn|error (default info)
    MAPGEN_LOG_JSON    1 to emit one JSON object per line
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")


def current_level() -> int:
    return LEVELS.get(os.getenv("MAPGEN_LOG_LEVEL", "info").lower(), 20)


def json_mode() -> bool:
    return os.getenv("MAPGEN_LOG_JSON", "0") in _TRUTHY


def _kv(key: str, value) -> str:
    if isinstance(value, float):
        return f"{key}={value:.4g}"
    if isinstance(value, int):
        return f"{key}={value}"
    return f"{key}={str(value).replace(' ', '_')}"


def _format(level: str, fields: dict) -> str:
    ts = int(time.time())
    present = {k: v for k, v in fields.items() if v is not None}
    if json_mode():
        try:
            return json.dumps({**present, "level": level, "ts": ts}, separators=(",", ":"))
        except (TypeError, ValueError):
            return json.dumps({"level": level, "ts": ts, "error": "json_encode_failed"})
    return " ".join([f"level={level}", f"ts={ts}"] + [_kv(k, v) for k, v in present.items()])


class _Logger:
    def __init__(self, name: str, context: dict | None = None):
        self.name = name
        self.context = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Return a logger that adds ``fields`` to every record."""
        return _Logger(self.name, {**self.context, **fields})

    def _log(self, lvl: str, fields: dict):
        if LEVELS[lvl] < current_level():
            return
        record = {"logger": self.name, **self.context, **fields}
        print(_format(lvl, record), file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", fields)

    def info(self, **fields):
        self._log("info", fields)

    def warn(self, **fields):
        self._log("warn", fields)

    def error(self, **fields):
        self._log("error", fields)


_LOGGER_CACHE: dict = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("cavegen")
