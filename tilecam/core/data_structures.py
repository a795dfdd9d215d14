"""Small value types for positions and rectangles.

Vector2 is used for pixel/world-space positions (camera target, tile origins),
so it stores floats in (x, y) order. Grid coordinates are passed around as
plain ``(x, y)`` int tuples.
"""

from dataclasses import dataclass
import math


@dataclass
class Vector2:
    """2D vector in world or screen space."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2") -> "Vector2":
        """Vector addition."""
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        """Vector subtraction."""
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        """Scalar multiplication."""
        return Vector2(self.x * scalar, self.y * scalar)

    def floored(self) -> "Vector2":
        """Return a copy with both components rounded down."""
        return Vector2(float(math.floor(self.x)), float(math.floor(self.y)))

    def copy(self) -> "Vector2":
        return Vector2(self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, origin at the top-left corner."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)
