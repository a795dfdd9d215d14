"""Explicit state threaded through the input, update and render stages.

The loop has two states: running (``running is True``) and stopped. Each
stage receives only the parts of ``GameState`` it needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..core.camera import Camera
from ..core.renderer import RendererConfig
from .map import TileMap


@dataclass
class GameState:
    window: RendererConfig
    tilemap: TileMap
    camera: Camera = field(default_factory=Camera)
    running: bool = True
    frame_count: int = 0

    def stop(self) -> bool:
        """Switch to the stopped state. Returns False if already stopped."""
        if not self.running:
            return False
        self.running = False
        return True
