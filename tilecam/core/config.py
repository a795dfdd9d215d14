"""Game configuration loader.

Settings (window, asset paths, tile size, camera speeds) are read from
``assets/config/game.yaml``. Any missing key falls back to the built-in
default, and a missing or unreadable file falls back entirely, so the demo
always starts with a usable configuration.
"""

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from .renderer import RendererConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "assets/config/game.yaml"


def find_project_root() -> Path:
    """Walk up from this file to the directory holding ``assets/``."""
    current_dir = Path(__file__).parent
    for _ in range(5):  # Limit search depth
        if (current_dir / "assets").is_dir():
            return current_dir
        current_dir = current_dir.parent

    # Fallback: assume the working directory is the project root
    return Path.cwd()


def resolve_path(path: str, root: Optional[Path] = None) -> str:
    """Resolve a relative asset path against the project root."""
    if os.path.isabs(path):
        return path
    return str((root or find_project_root()) / path)


@dataclass(frozen=True)
class MapConfig:
    tile_csv: str = "tilemaps/tilemap.csv"
    collision_csv: str = "tilemaps/collisionmap.csv"
    tile_size: int = 16


@dataclass(frozen=True)
class TilesetConfig:
    image: str = "assets/tileset.png"
    columns: int = 2


@dataclass(frozen=True)
class CameraConfig:
    pan_speed: float = 0.5
    zoom_step: float = 0.1
    min_zoom: float = 0.1


@dataclass(frozen=True)
class GameConfig:
    window: RendererConfig = field(default_factory=RendererConfig)
    map: MapConfig = field(default_factory=MapConfig)
    tileset: TilesetConfig = field(default_factory=TilesetConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    help_text: str = "Arrow keys: Move | +/-: Zoom"

    @classmethod
    def from_dict(cls, config_data: Optional[dict[str, Any]]) -> "GameConfig":
        """Build a config from parsed YAML, keeping defaults for absent keys."""
        if not isinstance(config_data, dict):
            if config_data is not None:
                logger.warning("Game config root must be a mapping, using defaults")
            config_data = {}
        defaults = cls()
        return cls(
            window=_merge_section(defaults.window, config_data.get("window")),
            map=_merge_section(defaults.map, config_data.get("map")),
            tileset=_merge_section(defaults.tileset, config_data.get("tileset")),
            camera=_merge_section(defaults.camera, config_data.get("camera")),
            help_text=_checked_value("help_text", config_data.get("help_text", defaults.help_text), defaults.help_text),
        )

    def with_root(self, root: Path) -> "GameConfig":
        """Return a copy whose asset paths are absolute under ``root``."""
        return replace(
            self,
            map=replace(
                self.map,
                tile_csv=resolve_path(self.map.tile_csv, root),
                collision_csv=resolve_path(self.map.collision_csv, root),
            ),
            tileset=replace(self.tileset, image=resolve_path(self.tileset.image, root)),
        )


def _checked_value(key: str, value: Any, default_value: Any) -> Any:
    """Return ``value`` if it has the default's type, otherwise warn and keep the default.

    Integers are accepted where a float is expected. Booleans never stand in
    for numbers.
    """
    expected = type(default_value)
    if expected is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if type(value) is not expected:
        logger.warning(
            "Config key '%s' expects %s, got %r; keeping %r",
            key, expected.__name__, value, default_value,
        )
        return default_value
    return value


def _merge_section(default, overrides: Optional[dict[str, Any]]):
    """Overlay known, correctly typed keys from ``overrides`` onto a frozen dataclass."""
    if not overrides:
        return default
    if not isinstance(overrides, dict):
        logger.warning("Ignoring malformed config section for %s", type(default).__name__)
        return default

    known = {f.name for f in fields(default)}
    values = {}
    for key, value in overrides.items():
        if key not in known:
            logger.warning("Unknown config key '%s' in %s", key, type(default).__name__)
            continue
        values[key] = _checked_value(key, value, getattr(default, key))
    return replace(default, **values)


def load_game_config(config_path: Optional[str] = None) -> GameConfig:
    """Load the game configuration, falling back to defaults on any problem.

    Relative asset paths in the result are resolved against the project root.
    """
    root = find_project_root()
    path = Path(resolve_path(config_path or DEFAULT_CONFIG_PATH, root))

    if not path.exists():
        logger.warning("Game config not found at %s, using defaults", path)
        return GameConfig().with_root(root)

    try:
        with open(path, "r", encoding="utf-8") as file:
            config_data = yaml.safe_load(file)
        config = GameConfig.from_dict(config_data)
    except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
        logger.warning("Error loading game config %s: %s; using defaults", path, e)
        config = GameConfig()

    return config.with_root(root)
