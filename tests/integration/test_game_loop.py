"""
Integration tests for the full frame loop with the headless renderer.
"""
import logging
from unittest.mock import Mock

import pytest

from tilecam.core.errors import ResourceLoadError
from tilecam.core.input_system import KeyConfigLoader
from tilecam.game.game import Game
from tilecam.game.log_manager import LogCategory


@pytest.fixture
def game(headless_renderer, game_config, fallback_key_config, log_manager):
    return Game(headless_renderer, game_config, fallback_key_config, log_manager)


class TestDemoRun:
    """Scripted run: pan right/down, zoom in, zoom out, quit."""

    def test_runs_until_close(self, game, headless_renderer):
        game.run()

        # Quit is seen while polling before frame 11; that frame is still drawn
        assert headless_renderer.frame_count == 11
        assert game.state.frame_count == 11
        assert not game.running
        assert not headless_renderer.is_running

    def test_camera_follows_input(self, game):
        game.run()

        camera = game.state.camera
        assert (camera.target.x, camera.target.y) == pytest.approx((2.0, 2.0))
        assert camera.zoom == pytest.approx(1.0)

    def test_missing_tileset_falls_back_to_flat_tiles(self, game, headless_renderer, log_manager):
        game.run()

        warnings = log_manager.get_messages(categories={LogCategory.WARNING})
        assert len(warnings) == 1
        assert "tileset.png" in warnings[0].text
        assert headless_renderer.loaded_textures == []
        assert game.state.tilemap.tileset_columns == 2

        grid = headless_renderer.last_frame[1:]
        assert grid[0].startswith("#")
        assert "." in grid[1]
        assert headless_renderer.last_frame[-1] == "Arrow keys: Move | +/-: Zoom"

    def test_tileset_is_loaded_and_released(self, game_config, headless_renderer, fallback_key_config, log_manager):
        with open(game_config.tileset.image, "wb") as f:
            f.write(b"\x89PNG")
        game = Game(headless_renderer, game_config, fallback_key_config, log_manager)

        game.run()

        assert len(headless_renderer.loaded_textures) == 1
        assert headless_renderer.unloaded_textures == headless_renderer.loaded_textures
        assert game.state.tilemap.tileset_texture is None
        assert log_manager.get_messages(categories={LogCategory.WARNING}) == []
        # Tile ids follow (x + y) % 4, so textured digits appear in the grid
        assert any(ch in "123" for ch in "".join(headless_renderer.last_frame[1:-1]))

    def test_lifecycle_is_logged(self, game, caplog):
        with caplog.at_level(logging.INFO, logger="tilecam.game"):
            game.run()

        assert "Close requested after 10 frames" in caplog.text
        assert "Shutdown complete" in caplog.text


class TestFailures:

    def test_render_error_still_cleans_up(self, game, headless_renderer, game_config):
        with open(game_config.tileset.image, "wb") as f:
            f.write(b"\x89PNG")
        headless_renderer.render_frame = Mock(side_effect=RuntimeError("draw failed"))

        with pytest.raises(RuntimeError, match="draw failed"):
            game.run()

        assert not headless_renderer.is_running
        assert len(headless_renderer.unloaded_textures) == 1

    def test_missing_map_stops_renderer(self, headless_renderer, game_config, fallback_key_config, tmp_path):
        from dataclasses import replace

        config = replace(game_config, map=replace(game_config.map, tile_csv=str(tmp_path / "none.csv")))
        game = Game(headless_renderer, config, fallback_key_config)

        with pytest.raises(FileNotFoundError):
            game.run()

        assert not headless_renderer.is_running

    def test_state_requires_initialize(self, game):
        with pytest.raises(RuntimeError, match="initialize"):
            _ = game.state
        assert not game.running


class TestGameSetup:

    def test_default_key_config_is_loaded(self, headless_renderer, game_config):
        game = Game(headless_renderer, game_config)

        assert isinstance(game.key_config, KeyConfigLoader)
        assert game.key_config.get_keys_for_action("zoom_in")

    def test_initialize_builds_state(self, game, headless_renderer):
        game.initialize()
        try:
            assert headless_renderer.is_running
            assert (game.state.tilemap.width, game.state.tilemap.height) == (12, 10)
            assert game.state.window == headless_renderer.config
            assert game.state.camera.min_zoom == pytest.approx(0.1)
            assert game.render_builder.help_text == "Arrow keys: Move | +/-: Zoom"
        finally:
            game.cleanup()

    def test_render_clears_before_drawing(self, game, headless_renderer):
        calls = Mock()
        headless_renderer.clear = calls.clear
        headless_renderer.render_frame = calls.render_frame
        headless_renderer.present = calls.present

        game.initialize()
        try:
            game.render()
        finally:
            game.cleanup()

        assert [name for name, _, _ in calls.mock_calls] == ["clear", "render_frame", "present"]
        context = calls.render_frame.call_args.args[0]
        calls.clear.assert_called_once_with(context.background)

    def test_unreadable_tileset_is_not_fatal(self, game, headless_renderer):
        headless_renderer.load_texture = Mock(side_effect=ResourceLoadError("x.png", "corrupt"))

        game.initialize()
        game.cleanup()

        assert not game.state.tilemap.has_tileset
