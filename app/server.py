"""
project: Cavegen
module: server.py

Server bootstrap for the level API.

Builds the Flask app through the factory and runs the development server.
Request logs from werkzeug go to the console and to a rotating file under the
app's instance folder; generator events keep using the key=value logger in
:mod:`app.logging_utils`.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from app import create_app


def start_server(host="127.0.0.1", port=5000, debug: bool = False):  # pragma: no cover (integration / runtime only)
    """Create the app and serve it until interrupted."""
    app = create_app()
    _configure_logging(app.instance_path)
    try:
        print(f"[INFO] Starting level API on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(log_dir: str):
    """Send stdlib logging to the console and to ``<log_dir>/server.log``.

    Safe to call more than once; existing root handlers are replaced.
    """
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "server.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(fmt)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(fmt)

    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
