import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from gridforge import create_app  # noqa: E402
from gridforge.dungeon import DungeonConfig  # noqa: E402
from gridforge.routes import dungeon_api  # noqa: E402


@pytest.fixture()
def test_app(tmp_path):
    app = create_app({"TESTING": True})
    app.instance_path = str(tmp_path)
    with dungeon_api._dungeon_cache_lock:
        dungeon_api._dungeon_cache.clear()
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def small_config():
    """20x20 board with exactly four grids."""
    return DungeonConfig(row_count=20, col_count=20, room_count_min=4, room_count_max=4, seed=42)
