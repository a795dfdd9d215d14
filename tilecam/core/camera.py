"""2D camera used to transform world pixels into screen pixels.

The transform is ``screen = (world - target) * zoom + offset``. ``target`` is
the world point drawn at ``offset`` on screen; with the default zero offset it
is the top-left corner of the view.
"""

from dataclasses import dataclass, field

from .data_structures import Vector2

MIN_ZOOM = 0.1


@dataclass
class Camera:
    offset: Vector2 = field(default_factory=Vector2)
    target: Vector2 = field(default_factory=Vector2)
    rotation: float = 0.0
    zoom: float = 1.0
    min_zoom: float = MIN_ZOOM

    def __post_init__(self):
        if self.min_zoom <= 0:
            raise ValueError(f"min_zoom must be positive, got {self.min_zoom}")
        self.zoom = max(self.min_zoom, self.zoom)

    def pan(self, dx: float, dy: float) -> None:
        """Move the target; each axis is applied independently."""
        self.target = Vector2(self.target.x + dx, self.target.y + dy)

    def zoom_in(self, step: float) -> None:
        self.zoom += step

    def zoom_out(self, step: float) -> None:
        self.zoom -= step
        if self.zoom < self.min_zoom:
            self.zoom = self.min_zoom

    def snapped(self) -> "Camera":
        """Return a copy with the target floored for pixel-perfect drawing.

        This camera keeps its fractional target so sub-pixel panning
        keeps accumulating between frames.
        """
        return Camera(
            offset=self.offset.copy(),
            target=self.target.floored(),
            rotation=self.rotation,
            zoom=self.zoom,
            min_zoom=self.min_zoom,
        )

    def world_to_screen(self, world: Vector2) -> Vector2:
        return (world - self.target) * self.zoom + self.offset

    def screen_to_world(self, screen: Vector2) -> Vector2:
        return (screen - self.offset) * (1.0 / self.zoom) + self.target
