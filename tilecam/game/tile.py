from dataclasses import dataclass


@dataclass(frozen=True)
class Tile:
    """A single grid cell: tileset id plus collision flag.

    Tiles are plain values; the grid position is implied by where they are
    stored. ``Tile()`` is the empty tile returned for out-of-range reads.
    """
    id: int = 0
    solid: bool = False


DEFAULT_TILE = Tile()
