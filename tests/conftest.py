import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Generator runs log mapgen_complete at info; keep test output readable
os.environ.setdefault("MAPGEN_LOG_LEVEL", "error")

from app import create_app  # noqa: E402
from app.mapgen.cells import EMPTY, new_grid  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


class SequenceRng:
    """Stand-in for random.Random that replays fixed draws, then repeats ``default``."""

    def __init__(self, values=(), default=0.5):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def random(self):
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture()
def seq_rng():
    return SequenceRng


def make_grid(size, tile_type, **fields):
    """Grid with every tile set to ``tile_type`` and the given field values."""
    grid = new_grid(size)
    for row in grid:
        for t in row:
            t.type = tile_type
            for name, value in fields.items():
                setattr(t, name, value)
    return grid


def open_interior(grid, field):
    """Set ``field`` EMPTY on every non-edge cell (edges keep their default)."""
    size = len(grid)
    for i in range(1, size - 1):
        for j in range(1, size - 1):
            setattr(grid[i][j], field, EMPTY)
    return grid


@pytest.fixture()
def grid_factory():
    return make_grid


@pytest.fixture()
def open_field():
    return open_interior
