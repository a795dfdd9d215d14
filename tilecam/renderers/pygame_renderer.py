import math
import os
from typing import Optional

import pygame

from ..core.camera import Camera
from ..core.data_structures import Vector2
from ..core.errors import ResourceLoadError
from ..core.input import InputEvent, InputType, Key
from ..core.renderable import Color, RenderContext, TextRenderData, TileRenderData
from ..core.renderer import Renderer, RendererConfig


KEY_MAP = {
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_EQUALS: Key.EQUALS,
    pygame.K_PLUS: Key.EQUALS,
    pygame.K_KP_PLUS: Key.EQUALS,
    pygame.K_MINUS: Key.MINUS,
    pygame.K_KP_MINUS: Key.MINUS,
    pygame.K_ESCAPE: Key.ESCAPE,
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
}

# Scaled tile surfaces kept between frames; cleared when it grows past this
TILE_CACHE_LIMIT = 1024


class PygameRenderer(Renderer):
    """Window renderer backed by pygame.

    Tiles arrive in world pixels and are transformed through the frame's
    camera. Textured tiles are cut from the tileset and scaled to the zoomed
    size; a source rectangle outside the image falls back to a flat color.
    """

    def __init__(self, config: Optional[RendererConfig] = None):
        super().__init__(config)
        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self._fonts: dict[int, pygame.font.Font] = {}
        self._tile_cache: dict[tuple[int, int, int], pygame.Surface] = {}
        self.fallback_colors = {
            True: Color.from_name("gray"),
            False: Color.from_name("lightgray"),
        }
        self.fps_color = Color.from_name("lime")

    def initialize(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((self.config.width, self.config.height))
        pygame.display.set_caption(self.config.title)
        self.clock = pygame.time.Clock()

    def cleanup(self) -> None:
        self._tile_cache.clear()
        self._fonts.clear()
        self.screen = None
        self.clock = None
        pygame.quit()

    def load_texture(self, path: str) -> pygame.Surface:
        if not os.path.isfile(path):
            raise ResourceLoadError(path, "file not found")
        try:
            image = pygame.image.load(path)
        except pygame.error as e:
            raise ResourceLoadError(path, str(e)) from e

        if pygame.display.get_surface() is not None:
            image = image.convert_alpha()
        return image

    def unload_texture(self, texture: pygame.Surface) -> None:
        # Surfaces are freed with their last reference; drop the scaled copies too
        self._tile_cache.clear()

    def clear(self, background: Color) -> None:
        if self.screen is None:
            raise RuntimeError("PygameRenderer not initialized. Call start() first.")
        self.screen.fill(background.to_tuple())

    def present(self) -> None:
        pygame.display.flip()
        if self.clock is not None:
            self.clock.tick(self.config.target_fps)

    def render_frame(self, context: RenderContext) -> None:
        if self.screen is None:
            raise RuntimeError("PygameRenderer not initialized. Call start() first.")

        for tile in context.tiles:
            self._draw_tile(tile, context)

        if context.show_fps and self.clock is not None:
            fps_text = TextRenderData(
                x=context.fps_x, y=context.fps_y,
                text=f"{int(self.clock.get_fps())} FPS", size=20, color=self.fps_color,
            )
            self._draw_text(fps_text)

        for text in context.texts:
            self._draw_text(text)

    def _screen_rect(self, tile: TileRenderData, camera: Camera) -> pygame.Rect:
        """Transform a world-space rect, snapping both edges so neighbours share a pixel boundary."""
        top_left = camera.world_to_screen(Vector2(tile.dest.x, tile.dest.y))
        bottom_right = camera.world_to_screen(Vector2(tile.dest.right, tile.dest.bottom))
        left, top = math.floor(top_left.x), math.floor(top_left.y)
        right, bottom = math.floor(bottom_right.x), math.floor(bottom_right.y)
        return pygame.Rect(left, top, max(0, right - left), max(0, bottom - top))

    def _draw_tile(self, tile: TileRenderData, context: RenderContext) -> None:
        rect = self._screen_rect(tile, context.camera)
        if rect.width == 0 or rect.height == 0 or not self.screen.get_rect().colliderect(rect):
            return

        if tile.is_textured and context.tileset is not None:
            surface = self._tile_surface(context.tileset, tile, rect.size)
            if surface is not None:
                self.screen.blit(surface, rect.topleft)
                return

        color = tile.color or self.fallback_colors[tile.solid]
        pygame.draw.rect(self.screen, color.to_tuple(), rect)

    def _tile_surface(self, tileset: pygame.Surface, tile: TileRenderData,
                      size: tuple[int, int]) -> Optional[pygame.Surface]:
        key = (tile.tile_id, size[0], size[1])
        cached = self._tile_cache.get(key)
        if cached is not None:
            return cached

        source = pygame.Rect(*(int(v) for v in tile.source.to_tuple()))
        if not tileset.get_rect().contains(source):
            return None

        surface = pygame.transform.scale(tileset.subsurface(source), size)
        if len(self._tile_cache) >= TILE_CACHE_LIMIT:
            self._tile_cache.clear()
        self._tile_cache[key] = surface
        return surface

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def _draw_text(self, text: TextRenderData) -> None:
        color = text.color or Color.from_name("darkgray")
        surf = self._font(text.size).render(text.text, True, color.to_tuple())
        self.screen.blit(surf, (text.x, text.y))

    def get_input_events(self) -> list[InputEvent]:
        events = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                events.append(InputEvent.quit_event())
            elif event.type == pygame.KEYDOWN:
                mods = event.mod
                events.append(InputEvent(
                    event_type=InputType.KEY_PRESS,
                    key=KEY_MAP.get(event.key, Key.UNKNOWN),
                    shift=bool(mods & pygame.KMOD_SHIFT),
                    ctrl=bool(mods & pygame.KMOD_CTRL),
                    alt=bool(mods & pygame.KMOD_ALT),
                    raw_data=event.key,
                ))
            elif event.type == pygame.KEYUP:
                events.append(InputEvent.key_release(KEY_MAP.get(event.key, Key.UNKNOWN)))
        return events

    def get_held_keys(self) -> set[Key]:
        pressed = pygame.key.get_pressed()
        return {key for pg_key, key in KEY_MAP.items() if pressed[pg_key]}
