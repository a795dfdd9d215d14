"""
Main game orchestration class.

Owns the renderer lifecycle and the frame loop: handle input, update, render,
repeated until the close signal is seen. The tileset texture is acquired in
``initialize`` and released in ``cleanup``, which always runs.
"""

from typing import Optional, TypeVar

from ..core.camera import Camera
from ..core.config import GameConfig
from ..core.errors import ResourceLoadError
from ..core.input_system import KeyConfigLoader
from ..core.renderer import Renderer
from .game_state import GameState
from .input_handler import InputHandler
from .log_manager import LogManager
from .map import TileMap
from .render_builder import RenderBuilder


TComponent = TypeVar("TComponent")


class Game:
    """Coordinates the tile map, camera, input and renderer."""

    def __init__(
        self,
        renderer: Renderer,
        config: Optional[GameConfig] = None,
        key_config: Optional[KeyConfigLoader] = None,
        log_manager: Optional[LogManager] = None,
    ):
        self.renderer = renderer
        self.config = config or GameConfig()
        self.log_manager = log_manager or LogManager()

        if key_config is None:
            key_config = KeyConfigLoader()
            key_config.load_config()
        self.key_config = key_config

        self._state: Optional[GameState] = None
        self._input_handler: Optional[InputHandler] = None
        self._render_builder: Optional[RenderBuilder] = None
        self._close_requested = False

    def _require(self, component: Optional[TComponent], name: str) -> TComponent:
        """Return the component if initialized, otherwise raise a helpful error."""
        if component is None:
            raise RuntimeError(f"{name} not initialized. Call initialize() first.")
        return component

    @property
    def state(self) -> GameState:
        return self._require(self._state, "GameState")

    @property
    def input_handler(self) -> InputHandler:
        return self._require(self._input_handler, "InputHandler")

    @property
    def render_builder(self) -> RenderBuilder:
        return self._require(self._render_builder, "RenderBuilder")

    @property
    def running(self) -> bool:
        return self._state is not None and self._state.running

    def initialize(self) -> None:
        """Open the window and load map data and the tileset."""
        self.renderer.start()
        self.log_manager.system(
            f"Window {self.renderer.config.width}x{self.renderer.config.height} '{self.renderer.config.title}'"
        )

        map_config = self.config.map
        tilemap = TileMap.from_csv(map_config.tile_csv, map_config.collision_csv, map_config.tile_size)
        self.log_manager.asset(
            f"Loaded {tilemap.width}x{tilemap.height} tile map from {map_config.tile_csv}"
        )

        self._state = GameState(
            window=self.renderer.config,
            tilemap=tilemap,
            camera=Camera(min_zoom=self.config.camera.min_zoom),
        )

        self._load_tileset(tilemap)

        self._input_handler = InputHandler(
            key_config=self.key_config,
            camera_config=self.config.camera,
            log_manager=self.log_manager,
        )
        self._render_builder = RenderBuilder(help_text=self.config.help_text)
        self._close_requested = False

    def _load_tileset(self, tilemap: TileMap) -> None:
        """Load the tileset texture; a missing image falls back to flat colors."""
        tileset_config = self.config.tileset
        try:
            tilemap.load_tileset(tileset_config.image, tileset_config.columns, self.renderer.load_texture)
        except ResourceLoadError as e:
            tilemap.tileset_columns = tileset_config.columns
            self.log_manager.warning(f"{e}; drawing flat-colored tiles instead")
            return
        self.log_manager.asset(
            f"Loaded tileset {tileset_config.image} ({tileset_config.columns} columns)"
        )

    def run(self) -> None:
        """Main game loop."""
        try:
            self.initialize()
            while self.state.running:
                self.handle_input()
                self.update()
                self.render()
        finally:
            self.cleanup()

    def handle_input(self) -> None:
        """Poll the renderer and apply input to the camera."""
        events = self.renderer.get_input_events()
        held_keys = self.renderer.get_held_keys()
        if self.input_handler.handle_input(self.state.camera, events, held_keys):
            self._close_requested = True

    def update(self) -> None:
        """Stop the loop once a close was requested."""
        if self._close_requested and self.state.stop():
            self.log_manager.system(f"Close requested after {self.state.frame_count} frames")

    def render(self) -> None:
        """Render the current frame."""
        context = self.render_builder.build_render_context(self.state)
        self.renderer.clear(context.background)
        self.renderer.render_frame(context)
        self.renderer.present()
        self.state.frame_count += 1

    def cleanup(self) -> None:
        """Release the tileset and shut the renderer down."""
        if self._state is not None:
            self._state.running = False
            self._state.tilemap.release_tileset(self.renderer.unload_texture)
        self.renderer.stop()
        self.log_manager.system("Shutdown complete")
