from abc import ABC, abstractmethod
from typing import Any, Optional
from dataclasses import dataclass

from .renderable import Color, RenderContext
from .input import InputEvent, Key


@dataclass(frozen=True)
class RendererConfig:
    width: int = 800
    height: int = 600
    title: str = "Tile Map Demo"
    target_fps: int = 60


class Renderer(ABC):

    def __init__(self, config: Optional[RendererConfig] = None):
        self.config = config or RendererConfig()
        self._running = False

    @abstractmethod
    def initialize(self) -> None:
        pass

    @abstractmethod
    def cleanup(self) -> None:
        pass

    @abstractmethod
    def render_frame(self, context: RenderContext) -> None:
        pass

    @abstractmethod
    def get_input_events(self) -> list[InputEvent]:
        """Return discrete events (key presses, quit) since the last poll."""
        pass

    @abstractmethod
    def get_held_keys(self) -> set[Key]:
        """Return the keys currently held down."""
        pass

    @abstractmethod
    def load_texture(self, path: str) -> Any:
        """Load an image and return a backend texture handle.

        Raises:
            ResourceLoadError: if the file is missing or cannot be decoded
        """
        pass

    def unload_texture(self, texture: Any) -> None:
        """Release a texture returned by load_texture."""
        pass

    @abstractmethod
    def clear(self, background: Color) -> None:
        """Fill the whole frame with the background color."""
        pass

    @abstractmethod
    def present(self) -> None:
        pass

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True
        self.initialize()

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self.cleanup()

    def get_screen_size(self) -> tuple[int, int]:
        return (self.config.width, self.config.height)
