import csv
import math
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import numpy as np
from numpy.typing import NDArray

from ..core.data_structures import Rect, Vector2
from ..core.errors import MapLoadError
from .tile import DEFAULT_TILE, Tile


TILE_DTYPE = np.dtype([("id", np.int32), ("solid", np.bool_)])


def _read_csv_grid(path: str) -> list[list[int]]:
    """Read a CSV of integers into rows, skipping blank lines."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"CSV map layer not found: {path}")

    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        rows = []
        for line_number, row in enumerate(reader, start=1):
            if not row or all(not cell.strip() for cell in row):
                continue
            try:
                rows.append([int(cell.strip()) for cell in row])
            except ValueError as e:
                raise ValueError(f"{path}:{line_number}: {e}") from e
    return rows


@dataclass(eq=False)
class TileMap:
    """Fixed-size grid of tiles plus the tileset used to draw them.

    Tiles are stored in a numpy structured array indexed ``[y, x]`` with an
    ``id`` and a ``solid`` field. Grid coordinates passed to the public
    methods are always ``(x, y)``.
    """
    width: int
    height: int
    tile_size: int
    tiles: np.ndarray = field(init=False)
    tileset_texture: Optional[Any] = field(default=None, init=False)
    tileset_columns: int = field(default=1, init=False)

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid map dimensions: {self.width}x{self.height}")
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")

        self.tiles = np.zeros((self.height, self.width), dtype=TILE_DTYPE)

    @classmethod
    def from_csv(cls, tile_path: str, collision_path: str, tile_size: int) -> "TileMap":
        """Create a map sized to the tile CSV and fill it from both layers."""
        tile_rows = _read_csv_grid(tile_path)
        if not tile_rows:
            raise MapLoadError(f"No data found in {tile_path}")

        tile_map = cls(len(tile_rows[0]), len(tile_rows), tile_size)
        tile_map.load_from_csv(tile_path, collision_path)
        return tile_map

    # Tileset

    def load_tileset(self, path: str, columns: int, loader: Callable[[str], Any]) -> None:
        """Load the tileset image through ``loader`` and record its column count.

        The loader (normally ``Renderer.load_texture``) raises
        ``ResourceLoadError`` for missing or unreadable images; it propagates
        and leaves the map without a texture.
        """
        if columns < 1:
            raise ValueError(f"Tileset must have at least one column, got {columns}")

        self.tileset_texture = loader(path)
        self.tileset_columns = columns

    def release_tileset(self, unloader: Optional[Callable[[Any], None]] = None) -> None:
        """Release the tileset texture; a second call does nothing."""
        texture = self.tileset_texture
        if texture is None:
            return
        self.tileset_texture = None
        if unloader is not None:
            unloader(texture)

    @property
    def has_tileset(self) -> bool:
        return self.tileset_texture is not None

    # Tile access

    def is_valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_tile(self, x: int, y: int, tile_id: int, solid: bool = False) -> None:
        """Write a tile; coordinates outside the grid are ignored."""
        if self.is_valid_position(x, y):
            self.tiles[y, x] = (tile_id, solid)

    def get_tile(self, x: int, y: int) -> Tile:
        """Read a tile; coordinates outside the grid return the empty tile."""
        if not self.is_valid_position(x, y):
            return DEFAULT_TILE
        tile_data = self.tiles[y, x]
        return Tile(int(tile_data["id"]), bool(tile_data["solid"]))

    def is_solid(self, x: int, y: int) -> bool:
        return self.get_tile(x, y).solid

    def get_solid_mask(self) -> NDArray[np.bool_]:
        """Boolean mask of solid tiles, shape ``(height, width)``."""
        return self.tiles["solid"].copy()

    # Coordinate conversion

    def tile_to_screen(self, tile_x: int, tile_y: int) -> Vector2:
        """Top-left world pixel of a tile."""
        return Vector2(float(tile_x * self.tile_size), float(tile_y * self.tile_size))

    def screen_to_tile(self, screen_x: float, screen_y: float) -> tuple[int, int]:
        """Grid cell containing a world pixel."""
        return (
            math.floor(screen_x / self.tile_size),
            math.floor(screen_y / self.tile_size),
        )

    def get_tile_source_rect(self, tile_id: int) -> Rect:
        """Rectangle of a tile id inside the tileset image, laid out row-major."""
        column = tile_id % self.tileset_columns
        row = tile_id // self.tileset_columns
        return Rect(
            float(column * self.tile_size),
            float(row * self.tile_size),
            float(self.tile_size),
            float(self.tile_size),
        )

    # Loading

    def load_from_csv(self, tile_path: str, collision_path: str) -> None:
        """Fill the grid from a tile-id CSV and a matching 0/1 collision CSV.

        Every tile row must have the same length, and the collision file must
        match the tile file row for row. Cells beyond the map's dimensions are ignored.
        """
        tile_rows = _read_csv_grid(tile_path)
        collision_rows = _read_csv_grid(collision_path)

        if tile_rows:
            row_width = len(tile_rows[0])
            for y, tile_row in enumerate(tile_rows):
                if len(tile_row) != row_width:
                    raise MapLoadError(
                        f"Ragged rows in {tile_path}: row {y} has {len(tile_row)} cells, "
                        f"row 0 has {row_width}"
                    )

        if len(tile_rows) != len(collision_rows):
            raise MapLoadError(
                f"Row count mismatch: {tile_path} has {len(tile_rows)} rows, "
                f"{collision_path} has {len(collision_rows)}"
            )

        for y, (tile_row, collision_row) in enumerate(zip(tile_rows, collision_rows)):
            if len(tile_row) != len(collision_row):
                raise MapLoadError(
                    f"Column count mismatch on row {y}: {len(tile_row)} tiles, "
                    f"{len(collision_row)} collision flags"
                )
            for x, (tile_id, collision) in enumerate(zip(tile_row, collision_row)):
                self.set_tile(x, y, tile_id, collision == 1)
