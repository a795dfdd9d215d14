from dataclasses import dataclass, field
from typing import Any, Optional

from .camera import Camera
from .data_structures import Rect


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_name(cls, name: str) -> "Color":
        colors = {
            "white": cls(255, 255, 255),
            "black": cls(0, 0, 0),
            "raywhite": cls(245, 245, 245),
            "lightgray": cls(200, 200, 200),
            "gray": cls(130, 130, 130),
            "darkgray": cls(80, 80, 80),
            "lime": cls(0, 158, 47),
            "red": cls(230, 41, 55),
        }
        return colors.get(name.lower(), cls(255, 255, 255))

    def to_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


@dataclass
class TileRenderData:
    """One visible tile, in world-space pixels.

    ``source`` is set when the tile should be cut from the tileset texture;
    otherwise the tile is drawn as a flat ``color`` rectangle.
    """
    grid_x: int
    grid_y: int
    tile_id: int
    solid: bool
    dest: Rect
    source: Optional[Rect] = None
    color: Optional[Color] = None

    @property
    def is_textured(self) -> bool:
        return self.source is not None


@dataclass
class TextRenderData:
    """Screen-space text, unaffected by the camera."""
    x: int
    y: int
    text: str
    size: int = 20
    color: Optional[Color] = None


@dataclass
class RenderContext:
    camera: Camera = field(default_factory=Camera)

    screen_width: int = 0
    screen_height: int = 0

    world_width: int = 0
    world_height: int = 0
    tile_size: int = 0

    background: Color = field(default_factory=lambda: Color.from_name("raywhite"))

    # Backend texture handle for textured tiles; None means flat colors only
    tileset: Optional[Any] = None

    tiles: list[TileRenderData] = field(default_factory=list)
    texts: list[TextRenderData] = field(default_factory=list)

    show_fps: bool = True
    fps_x: int = 10
    fps_y: int = 10
