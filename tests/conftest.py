"""
Shared fixtures for the tile map test suite.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from tilecam.core.camera import Camera
from tilecam.core.config import CameraConfig, GameConfig, MapConfig, TilesetConfig
from tilecam.core.input_system import KeyConfigLoader
from tilecam.core.renderer import RendererConfig
from tilecam.game.game_state import GameState
from tilecam.game.log_manager import LogManager
from tilecam.game.map import TileMap
from tilecam.renderers.simple_renderer import SimpleRenderer


def _write_csv(path, rows: list[list[int]]) -> str:
    """Write integer rows as a CSV file and return its path as a string."""
    path.write_text("\n".join(",".join(str(cell) for cell in row) for row in rows) + "\n")
    return str(path)


@pytest.fixture
def write_csv():
    """Helper that writes integer rows to a CSV file."""
    return _write_csv


@pytest.fixture
def small_tile_map():
    """Create a 5x5 map with 16px tiles."""
    return TileMap(width=5, height=5, tile_size=16)


@pytest.fixture
def csv_pair(tmp_path):
    """A 3x2 tile layer with its collision layer."""
    tile_csv = _write_csv(tmp_path / "tilemap.csv", [[0, 1, 2], [3, 1, 0]])
    collision_csv = _write_csv(tmp_path / "collisionmap.csv", [[0, 0, 1], [1, 0, 0]])
    return tile_csv, collision_csv


@pytest.fixture
def fallback_key_config(tmp_path):
    """Key bindings from the built-in fallback (arrows, =/-, escape)."""
    loader = KeyConfigLoader(str(tmp_path / "missing_key_mappings.yaml"))
    loader.load_config()
    return loader


@pytest.fixture
def log_manager():
    return LogManager()


@pytest.fixture
def window():
    return RendererConfig(width=160, height=160, title="Test", target_fps=30)


@pytest.fixture
def game_state(window, small_tile_map):
    return GameState(window=window, tilemap=small_tile_map, camera=Camera())


@pytest.fixture
def headless_renderer(window):
    """Scripted SimpleRenderer that does not print."""
    return SimpleRenderer(window, demo_mode=True, auto_quit_at=10, echo=False)


@pytest.fixture
def game_config(tmp_path, window):
    """Game config pointing at a 12x10 map in tmp_path and a tileset that does not exist."""
    tiles = [[(x + y) % 4 for x in range(12)] for y in range(10)]
    solids = [[1 if x in (0, 11) or y in (0, 9) else 0 for x in range(12)] for y in range(10)]
    tile_csv = _write_csv(tmp_path / "tilemap.csv", tiles)
    collision_csv = _write_csv(tmp_path / "collisionmap.csv", solids)
    return GameConfig(
        window=window,
        map=MapConfig(tile_csv=tile_csv, collision_csv=collision_csv, tile_size=16),
        tileset=TilesetConfig(image=str(tmp_path / "tileset.png"), columns=2),
        camera=CameraConfig(),
    )
