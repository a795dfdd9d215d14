import os
from dataclasses import dataclass
from typing import Optional

from ..core.errors import ResourceLoadError
from ..core.input import InputEvent, Key
from ..core.renderable import Color, RenderContext, TileRenderData
from ..core.renderer import Renderer, RendererConfig


@dataclass(frozen=True)
class HeadlessTexture:
    """Stand-in texture handle: the headless backend only checks the file exists."""
    path: str


class SimpleRenderer(Renderer):
    """Headless ASCII renderer with optional scripted input.

    Each visible tile becomes one character: ``#`` solid, ``.`` open, or the
    last digit of the tile id when it would be drawn from the tileset. With
    ``demo_mode`` on, the renderer pans right, zooms in and out, then sends a
    quit event at ``auto_quit_at`` frames.
    """

    def __init__(
        self,
        config: Optional[RendererConfig] = None,
        demo_mode: bool = True,
        auto_quit_at: int = 10,
        echo: bool = True,
        max_columns: int = 40,
        max_rows: int = 20,
    ):
        super().__init__(config)
        self._frame_count = 0
        self._auto_quit_at = auto_quit_at
        self._demo_mode = demo_mode
        self._echo = echo
        self.max_columns = max_columns
        self.max_rows = max_rows
        self.last_frame: list[str] = []
        self.loaded_textures: list[HeadlessTexture] = []
        self.unloaded_textures: list[HeadlessTexture] = []

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def initialize(self) -> None:
        self._print(f"Initializing SimpleRenderer ({self.config.width}x{self.config.height})")

    def cleanup(self) -> None:
        self._print("SimpleRenderer cleanup complete")

    def clear(self, background: Color) -> None:
        self.last_frame = []

    def present(self) -> None:
        pass

    def load_texture(self, path: str) -> HeadlessTexture:
        if not os.path.isfile(path):
            raise ResourceLoadError(path, "file not found")
        texture = HeadlessTexture(path)
        self.loaded_textures.append(texture)
        return texture

    def unload_texture(self, texture: HeadlessTexture) -> None:
        self.unloaded_textures.append(texture)

    def render_frame(self, context: RenderContext) -> None:
        self._frame_count += 1

        lines = [f"--- Frame {self._frame_count} zoom={context.camera.zoom:.1f} "
                 f"target=({context.camera.target.x:.0f},{context.camera.target.y:.0f}) ---"]

        if context.tiles:
            min_x = min(tile.grid_x for tile in context.tiles)
            min_y = min(tile.grid_y for tile in context.tiles)
            grid = [[' ' for _ in range(self.max_columns)] for _ in range(self.max_rows)]
            for tile in context.tiles:
                col = tile.grid_x - min_x
                row = tile.grid_y - min_y
                if 0 <= col < self.max_columns and 0 <= row < self.max_rows:
                    grid[row][col] = self._symbol(tile)
            lines.extend(''.join(row).rstrip() for row in grid)

        for text in context.texts:
            lines.append(text.text[:self.config.width])

        self.last_frame = lines
        for line in lines:
            self._print(line)

    @staticmethod
    def _symbol(tile: TileRenderData) -> str:
        if tile.is_textured:
            return str(tile.tile_id % 10)
        return '#' if tile.solid else '.'

    def get_input_events(self) -> list[InputEvent]:
        events = []

        # Only generate demo input if in demo mode
        if not self._demo_mode:
            return events

        if self._frame_count >= self._auto_quit_at:
            events.append(InputEvent.quit_event())
        elif self._frame_count == 4:
            events.append(InputEvent.key_press(Key.EQUALS))
        elif self._frame_count == 6:
            events.append(InputEvent.key_press(Key.MINUS))

        return events

    def get_held_keys(self) -> set[Key]:
        if self._demo_mode and self._frame_count < 4:
            return {Key.RIGHT, Key.DOWN}
        return set()

    def _print(self, text: str) -> None:
        if self._echo:
            print(text)
