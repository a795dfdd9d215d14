"""Viewport culling: which tiles intersect the visible screen area."""

import math
from dataclasses import dataclass
from typing import Iterator

from ..core.data_structures import Vector2

# Extra tiles drawn past the computed edge so partially visible tiles never pop in
EDGE_MARGIN = 2


@dataclass(frozen=True)
class TileRange:
    """Inclusive range of grid cells. Empty only when the map itself is empty."""
    start_x: int
    start_y: int
    end_x: int
    end_y: int

    @property
    def is_empty(self) -> bool:
        return self.end_x < self.start_x or self.end_y < self.start_y

    @property
    def tile_count(self) -> int:
        if self.is_empty:
            return 0
        return (self.end_x - self.start_x + 1) * (self.end_y - self.start_y + 1)

    def positions(self) -> Iterator[tuple[int, int]]:
        """Yield ``(x, y)`` row by row."""
        for y in range(self.start_y, self.end_y + 1):
            for x in range(self.start_x, self.end_x + 1):
                yield (x, y)


EMPTY_RANGE = TileRange(0, 0, -1, -1)


def _axis_range(target: float, zoom: float, tile_size: int, screen_extent: int, map_extent: int) -> tuple[int, int]:
    last_index = map_extent - 1
    start = min(last_index, max(0, math.floor(target / tile_size)))
    visible = math.floor(screen_extent / zoom / tile_size) + EDGE_MARGIN
    end = min(last_index, start + visible)
    return start, end


def compute_visible_range(
    target: Vector2,
    zoom: float,
    tile_size: int,
    screen_width: int,
    screen_height: int,
    map_width: int,
    map_height: int,
) -> TileRange:
    """Compute the tiles visible through a camera whose target is the view's top-left.

    Both ends are clamped to ``[0, last_index]`` on each axis, so iterating the
    result never indexes outside the map.
    """
    if zoom <= 0:
        raise ValueError(f"zoom must be positive, got {zoom}")
    if map_width <= 0 or map_height <= 0:
        return EMPTY_RANGE

    start_x, end_x = _axis_range(target.x, zoom, tile_size, screen_width, map_width)
    start_y, end_y = _axis_range(target.y, zoom, tile_size, screen_height, map_height)
    return TileRange(start_x, start_y, end_x, end_y)
