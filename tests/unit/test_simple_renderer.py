"""
Unit tests for the headless SimpleRenderer.
"""
import pytest

from tilecam.core.camera import Camera
from tilecam.core.data_structures import Rect
from tilecam.core.errors import ResourceLoadError
from tilecam.core.input import InputType, Key
from tilecam.core.renderable import Color, RenderContext, TextRenderData, TileRenderData


def flat_tile(x, y, solid):
    return TileRenderData(grid_x=x, grid_y=y, tile_id=1, solid=solid, dest=Rect(x * 16, y * 16, 17, 17))


class TestLifecycle:

    def test_start_and_stop(self, headless_renderer):
        headless_renderer.start()
        assert headless_renderer.is_running

        headless_renderer.stop()
        headless_renderer.stop()
        assert not headless_renderer.is_running

    def test_screen_size(self, headless_renderer):
        assert headless_renderer.get_screen_size() == (160, 160)


class TestTextures:

    def test_missing_file_raises(self, headless_renderer, tmp_path):
        with pytest.raises(ResourceLoadError) as exc_info:
            headless_renderer.load_texture(str(tmp_path / "tileset.png"))

        assert exc_info.value.reason == "file not found"

    def test_existing_file_loads(self, headless_renderer, tmp_path):
        image = tmp_path / "tileset.png"
        image.write_bytes(b"\x89PNG")

        texture = headless_renderer.load_texture(str(image))
        headless_renderer.unload_texture(texture)

        assert texture.path == str(image)
        assert headless_renderer.loaded_textures == [texture]
        assert headless_renderer.unloaded_textures == [texture]


class TestRenderFrame:

    def test_ascii_grid(self, headless_renderer):
        textured = TileRenderData(
            grid_x=2, grid_y=0, tile_id=13, solid=False,
            dest=Rect(32, 0, 16, 16), source=Rect(16, 96, 16, 16),
        )
        context = RenderContext(
            camera=Camera(zoom=1.5),
            tiles=[flat_tile(0, 0, True), flat_tile(1, 0, False), textured, flat_tile(0, 1, False)],
            texts=[TextRenderData(10, 30, "Arrow keys: Move | +/-: Zoom")],
        )

        headless_renderer.render_frame(context)

        assert headless_renderer.frame_count == 1
        assert headless_renderer.last_frame == [
            "--- Frame 1 zoom=1.5 target=(0,0) ---",
            "#.3",
            ".",
        ] + [""] * (headless_renderer.max_rows - 2) + ["Arrow keys: Move | +/-: Zoom"]

    def test_echo(self, window, capsys):
        from tilecam.renderers.simple_renderer import SimpleRenderer

        renderer = SimpleRenderer(window, echo=True)
        renderer.render_frame(RenderContext())

        assert "--- Frame 1" in capsys.readouterr().out

    def test_clear(self, headless_renderer):
        headless_renderer.render_frame(RenderContext())
        headless_renderer.clear(Color.from_name("raywhite"))

        assert headless_renderer.last_frame == []


class TestScriptedInput:

    def test_demo_script(self, headless_renderer):
        held, events = [], []
        for _ in range(11):
            held.append(headless_renderer.get_held_keys())
            events.append(headless_renderer.get_input_events())
            headless_renderer.render_frame(RenderContext())

        assert held[:4] == [{Key.RIGHT, Key.DOWN}] * 4
        assert all(keys == set() for keys in held[4:])
        assert [e.key for e in events[4]] == [Key.EQUALS]
        assert [e.key for e in events[6]] == [Key.MINUS]
        assert [e.event_type for e in events[10]] == [InputType.QUIT]
        assert events[0] == [] and events[9] == []

    def test_no_input_outside_demo_mode(self, window):
        from tilecam.renderers.simple_renderer import SimpleRenderer

        renderer = SimpleRenderer(window, demo_mode=False, auto_quit_at=0, echo=False)

        assert renderer.get_input_events() == []
        assert renderer.get_held_keys() == set()
