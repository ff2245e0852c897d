"""
project: Cavegen
module: __init__.py

Flask application factory.

The generator itself lives in :mod:`app.mapgen` and has no web dependency at
call time; this module wires a small HTTP surface around it. Configuration is
sourced from environment variables (optionally loaded from ``.env``) with
reasonable defaults for development.
"""

from __future__ import annotations

import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so MAPGEN_* settings can be supplied without exporting
# shell variables during development.
load_dotenv()


def create_app(config: dict | None = None) -> Flask:
    """Return a configured Flask app with the level API registered."""
    app = Flask(__name__)
    app.config.update(
        MAPGEN_DEFAULT_SIZE=int(os.getenv("MAPGEN_DEFAULT_SIZE", "32")),
        MAPGEN_MAX_SIZE=int(os.getenv("MAPGEN_MAX_SIZE", "128")),
        MAPGEN_MAX_RETRIES=int(os.getenv("MAPGEN_MAX_RETRIES", "10")),
    )
    if config:
        app.config.update(config)

    from app.routes.level_api import bp_level

    app.register_blueprint(bp_level)

    @app.errorhandler(500)
    def internal_error(e):
        from app.logging_utils import log

        error_id = uuid.uuid4().hex[:8]
        log.error(event="unhandled_exception", error_id=error_id, error=repr(getattr(e, "original_exception", e)))
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app
