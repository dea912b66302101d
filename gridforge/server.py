"""HTTP server entry point and logging setup."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from gridforge import create_app
from gridforge.logging_utils import forward_to


def start_server(host: str, port: int, debug: bool = False):
    app = create_app()
    _configure_logging(app)
    try:
        print(f"[INFO] Starting dungeon API on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(app):
    """Configure logging to both console and a rotating file in instance/.

    The file path will be instance/app.log. Retains a few backups to avoid growth.
    The file receives Werkzeug/Flask records and every gridforge event line.
    """
    log_dir = app.instance_path
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "app.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)

    # gridforge event lines: file only, they already go to stderr
    events = logging.getLogger("gridforge.events")
    events.setLevel(logging.DEBUG)
    events.propagate = False
    for h in list(events.handlers):
        events.removeHandler(h)
    events.addHandler(file_handler)
    forward_to(events)
    return log_path
