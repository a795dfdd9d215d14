"""
Unit tests for viewport culling.
"""
import itertools

import pytest

from tilecam.core.data_structures import Vector2
from tilecam.game.viewport import EMPTY_RANGE, TileRange, compute_visible_range


def visible(target=(0.0, 0.0), zoom=1.0, tile_size=16, screen=(800, 600), size=(100, 100)):
    return compute_visible_range(Vector2(*target), zoom, tile_size, screen[0], screen[1], size[0], size[1])


class TestVisibleRange:

    def test_origin_large_map(self):
        assert visible() == TileRange(0, 0, 52, 39)

    def test_scrolled_target(self):
        result = visible(target=(160.0, 40.0))

        assert (result.start_x, result.start_y) == (10, 2)
        assert (result.end_x, result.end_y) == (62, 41)

    def test_small_map_is_clamped(self):
        assert visible(size=(10, 8)) == TileRange(0, 0, 9, 7)

    def test_negative_target_starts_at_zero(self):
        result = visible(target=(-500.0, -3.0))

        assert (result.start_x, result.start_y) == (0, 0)

    def test_target_beyond_map(self):
        result = visible(target=(10_000.0, 10_000.0), size=(20, 20))

        assert result == TileRange(19, 19, 19, 19)
        assert not result.is_empty

    def test_zoomed_out_shows_more(self):
        result = visible(zoom=0.5)

        assert (result.end_x, result.end_y) == (99, 77)

    def test_zoomed_in_shows_less(self):
        result = visible(zoom=2.0)

        assert (result.end_x, result.end_y) == (27, 20)

    def test_empty_map(self):
        result = visible(size=(0, 0))

        assert result is EMPTY_RANGE
        assert result.is_empty
        assert list(result.positions()) == []

    @pytest.mark.parametrize("zoom", [0.0, -1.0])
    def test_rejects_non_positive_zoom(self, zoom):
        with pytest.raises(ValueError):
            visible(zoom=zoom)

    def test_range_always_inside_map(self):
        targets = [-100.0, -0.5, 0.0, 7.5, 250.0, 1599.0, 5000.0]
        zooms = [0.1, 0.5, 1.0, 1.7, 4.0]
        sizes = [(1, 1), (3, 50), (100, 100)]
        for tx, ty, zoom, (w, h) in itertools.product(targets, targets, zooms, sizes):
            result = visible(target=(tx, ty), zoom=zoom, size=(w, h))
            assert 0 <= result.start_x <= result.end_x <= w - 1
            assert 0 <= result.start_y <= result.end_y <= h - 1


class TestTileRange:

    def test_positions_row_major(self):
        tile_range = TileRange(1, 2, 2, 3)

        assert list(tile_range.positions()) == [(1, 2), (2, 2), (1, 3), (2, 3)]
        assert tile_range.tile_count == 4

    def test_empty_count(self):
        assert EMPTY_RANGE.tile_count == 0
