"""Tests for isometric projection and rasterization."""

import numpy as np
import pytest

from iso_terrain.core.alea_prng import AleaPRNG
from iso_terrain.core.heightfield import HeightField, generate
from iso_terrain.core.rasterizer import (
    BORDER_ALPHA,
    TERRAIN_RGB,
    WATER_RGB,
    Rasterizer,
    draw_rect,
    new_pixel_buffer,
    pack_rgba,
    project,
    render,
    slope_alpha,
    slope_color,
    unpack_rgba,
    water_color,
)


def flat_field(size, height):
    field = HeightField(size)
    for z in range(size):
        for x in range(size):
            field.set_height(x, z, height)
    return field


class TestProjection:
    """Test the isometric transform."""

    def test_origin_reference_point(self):
        assert project(0, 0, 0, 513) == (256, 174)

    def test_pure(self):
        assert project(10, 20, 33.3, 129) == project(10, 20, 33.3, 129)

    def test_small_grid_points(self):
        assert project(2, 2, 2.0, 3) == (1, 1)
        assert project(3, 2, 0, 3) == (4, 3)

    def test_higher_points_move_up(self):
        _, low_y = project(40, 40, 0.0, 129)
        _, high_y = project(40, 40, 50.0, 129)
        assert high_y < low_y

    def test_array_matches_scalar(self):
        size = 17
        rng = np.random.default_rng(3)
        heights = rng.uniform(-5, 20, size=(size, size))
        zs, xs = np.mgrid[0:size, 0:size]
        arr_x, arr_y = project(xs, zs, heights, size)
        for z in range(size):
            for x in range(size):
                assert (arr_x[z, x], arr_y[z, x]) == project(x, z, float(heights[z, x]), size)

    def test_truncates_toward_zero(self):
        sx, sy = project(0, 0, 1000.0, 9)
        assert isinstance(sx, int) and isinstance(sy, int)
        assert sy < 0


class TestColors:
    """Test pixel packing and shading."""

    def test_pack_rgba(self):
        assert pack_rgba(0x12, 0x34, 0x56, 0x78) == 0x12345678
        assert pack_rgba(255, 255, 255, 255) == 0xFFFFFFFF

    def test_unpack_rgba(self):
        pixels = np.array([[pack_rgba(1, 2, 3, 4), 0]], dtype=np.uint32)
        image = unpack_rgba(pixels)
        assert image.shape == (1, 2, 4)
        assert image.dtype == np.uint8
        assert list(image[0, 0]) == [1, 2, 3, 4]
        assert list(image[0, 1]) == [0, 0, 0, 0]

    @pytest.mark.parametrize("slope,alpha", [
        (0.0, 128), (1.0, 178), (-2.0, 28), (-3.0, 22), (3.0, 255), (-10.0, 255),
    ])
    def test_slope_alpha(self, slope, alpha):
        assert slope_alpha(slope) == alpha

    def test_slope_color_border(self):
        assert slope_color(8, 3, 9, 5.0) == pack_rgba(*TERRAIN_RGB, BORDER_ALPHA)
        assert slope_color(3, 8, 9, 5.0) == pack_rgba(*TERRAIN_RGB, BORDER_ALPHA)
        assert slope_color(3, 3, 9, 0.0) == pack_rgba(*TERRAIN_RGB, 128)

    def test_water_color(self, prng):
        assert water_color(8, 0, 9, prng) == pack_rgba(*WATER_RGB, BORDER_ALPHA)
        assert prng.call_count == 0
        for _ in range(200):
            alpha = water_color(1, 1, 9, prng) & 0xFF
            assert 145 <= alpha <= 160


class TestDrawRect:
    """Test clipped rectangle fills."""

    def test_fill(self):
        pixels = new_pixel_buffer(10, 5)
        draw_rect(pixels, (1, 1), (4, 3), 7)
        assert np.count_nonzero(pixels) == 6
        assert np.all(pixels[1:3, 1:4] == 7)

    def test_offset(self):
        pixels = new_pixel_buffer(10, 5)
        draw_rect(pixels, (0, 0), (2, 1), 9, x_offset=5)
        assert np.all(pixels[0, 5:7] == 9)
        assert np.count_nonzero(pixels) == 2

    @pytest.mark.parametrize("top,bottom", [((3, 3), (3, 4)), ((3, 3), (4, 3)), ((5, 4), (2, 1))])
    def test_degenerate(self, top, bottom):
        pixels = new_pixel_buffer(10, 5)
        draw_rect(pixels, top, bottom, 1)
        assert not pixels.any()

    def test_clipped(self):
        pixels = new_pixel_buffer(10, 5)
        draw_rect(pixels, (-3, -2), (20, 20), 3)
        assert np.all(pixels == 3)

    def test_entirely_outside(self):
        pixels = new_pixel_buffer(10, 5)
        draw_rect(pixels, (12, 0), (15, 3), 3)
        draw_rect(pixels, (0, -6), (3, -1), 3)
        assert not pixels.any()


class TestRasterizer:
    """Test full rendering."""

    def test_buffer_shape(self, prng):
        field = generate(9, 0.3, prng)
        pixels = Rasterizer(1400, 800).render(field)
        assert pixels.shape == (800, 1400)
        assert pixels.dtype == np.uint32
        assert pixels.any()

    def test_render_twice_identical(self, prng):
        field = generate(17, 0.3, prng)
        rasterizer = Rasterizer(1400, 800, water_seed="shimmer")
        np.testing.assert_array_equal(rasterizer.render(field), rasterizer.render(field))

    def test_only_terrain_and_water_colors(self, prng):
        field = generate(33, 0.5, prng)
        pixels = render(field, 400, 300)
        rgb = set(np.unique(pixels[pixels != 0] >> 8).tolist())
        terrain = (TERRAIN_RGB[0] << 16) | (TERRAIN_RGB[1] << 8) | TERRAIN_RGB[2]
        water = (WATER_RGB[0] << 16) | (WATER_RGB[1] << 8) | WATER_RGB[2]
        assert rgb <= {terrain, water}

    def test_last_cell_drawn_on_top(self):
        # Cell (2, 2) of a flat N=3 field covers x in [1, 4), y in [1, 3)
        field = flat_field(3, 2.0)
        rasterizer = Rasterizer(1400, 800)
        pixels = rasterizer.render(field)
        adjust = rasterizer.screen_adjust(3)
        assert adjust == 698
        border = pack_rgba(*TERRAIN_RGB, BORDER_ALPHA)
        assert np.all(pixels[1:3, 1 + adjust:4 + adjust] == border)
        assert pixels[0, 0] == 0

    def test_screen_adjust(self):
        assert Rasterizer(1400, 800).screen_adjust(513) == 443

    def test_incomplete_field_rejected(self):
        with pytest.raises(ValueError):
            Rasterizer().render(HeightField(5))

    @pytest.mark.parametrize("width,height", [(0, 800), (1400, 0), (-1, -1)])
    def test_invalid_screen(self, width, height):
        with pytest.raises(ValueError):
            Rasterizer(width, height)

    def test_render_does_not_mutate_field(self, prng):
        field = generate(9, 0.3, prng)
        before = field.heights.copy()
        render(field)
        np.testing.assert_array_equal(field.heights, before)
