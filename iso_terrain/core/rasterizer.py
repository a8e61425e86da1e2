"""
Isometric rasterization of a height field into an RGBA pixel buffer.

Every grid cell is projected into screen space and drawn as an axis aligned
rectangle: first a water rectangle from the water plane down to the ground
baseline, then a terrain rectangle from the cell's height down to the same
baseline. Pixels are packed 32-bit RGBA (red in the high byte).
"""

from typing import Tuple, Union

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .heightfield import HeightField

logger = structlog.get_logger()

SCREEN_WIDTH = 1400
SCREEN_HEIGHT = 800

TERRAIN_RGB = (192, 154, 98)
WATER_RGB = (50, 150, 200)
BORDER_ALPHA = 20
WATER_ALPHA_RANGE = (145, 160)
WATER_LEVEL_FRACTION = 0.05

Coord = Tuple[int, int]
Number = Union[int, float, np.ndarray]


def pack_rgba(red: int, green: int, blue: int, alpha: int) -> int:
    """Pack four 8-bit channels into one 32-bit RGBA value."""
    return (red << 24) | (green << 16) | (blue << 8) | alpha


def unpack_rgba(pixels: np.ndarray) -> np.ndarray:
    """Split packed pixels of shape (H, W) into an (H, W, 4) uint8 array."""
    big_endian = pixels.astype(">u4")
    return big_endian.view(np.uint8).reshape(pixels.shape + (4,))


def new_pixel_buffer(width: int, height: int) -> np.ndarray:
    """Fully transparent buffer, indexed [screen_y, screen_x]."""
    return np.zeros((height, width), dtype=np.uint32)


def project(flat_x: Number, flat_z: Number, flat_height: Number, size: int):
    """
    Project grid coordinates and a height into isometric screen space.

    The grid is rotated 45 degrees, tilted so rows further back sit higher
    on screen, and divided by a pseudo depth so they also shrink. Accepts
    scalars or numpy arrays; results are truncated toward zero.

    Returns:
        (screen_x, screen_y) as ints, or as int64 arrays for array input
    """
    x_coord = 0.5 * (size + flat_x - flat_z)
    z_coord = 0.5 * (flat_x + flat_z)

    x_init = 0.5 * size
    z_init = 0.2 * size

    y_coord = size * 0.5 - flat_height + z_coord * 0.75
    x_coord = (x_coord - size * 0.5) * 6
    depth = (size - z_coord) * 0.005 + 1

    screen_x = x_init + x_coord / depth
    screen_y = z_init + y_coord / depth

    if isinstance(screen_x, np.ndarray) or isinstance(screen_y, np.ndarray):
        return (
            np.asarray(screen_x).astype(np.int64),
            np.asarray(screen_y).astype(np.int64),
        )
    return int(screen_x), int(screen_y)


def _is_border(x: int, z: int, size: int) -> bool:
    return x == size - 1 or z == size - 1


def slope_alpha(slope: float) -> int:
    """Brightness from local slope, clamped to a valid channel value."""
    return int(min(abs(slope * 50 + 128), 255))


def slope_color(x: int, z: int, size: int, slope: float) -> int:
    """Terrain color with alpha derived from the slope to the next cell."""
    if _is_border(x, z, size):
        return pack_rgba(*TERRAIN_RGB, BORDER_ALPHA)
    return pack_rgba(*TERRAIN_RGB, slope_alpha(slope))


def water_color(x: int, z: int, size: int, prng: AleaPRNG) -> int:
    """Water color with a randomly shimmering alpha."""
    if _is_border(x, z, size):
        return pack_rgba(*WATER_RGB, BORDER_ALPHA)
    return pack_rgba(*WATER_RGB, prng.randint(*WATER_ALPHA_RANGE))


def draw_rect(
    pixels: np.ndarray, top: Coord, bottom: Coord, color: int, x_offset: int = 0
) -> None:
    """
    Fill the rectangle from top (inclusive) to bottom (exclusive).

    The rectangle is shifted right by x_offset and clipped to the buffer.
    Empty or inverted rectangles draw nothing.
    """
    height, width = pixels.shape
    x0 = max(top[0] + x_offset, 0)
    x1 = min(bottom[0] + x_offset, width)
    y0 = max(top[1], 0)
    y1 = min(bottom[1], height)
    if x1 <= x0 or y1 <= y0:
        return
    pixels[y0:y1, x0:x1] = color


class Rasterizer:
    """Renders completed height fields for a fixed screen size."""

    def __init__(
        self,
        screen_width: int = SCREEN_WIDTH,
        screen_height: int = SCREEN_HEIGHT,
        water_seed: str = "water",
    ):
        """
        Args:
            screen_width: Buffer width in pixels
            screen_height: Buffer height in pixels
            water_seed: Seed for the water shimmer; reused on every render
        """
        if screen_width <= 0 or screen_height <= 0:
            raise ValueError(
                f"Screen dimensions must be positive, got {screen_width}x{screen_height}"
            )
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.water_seed = water_seed

    def screen_adjust(self, size: int) -> int:
        """Horizontal shift that centers an N wide map in the window."""
        return (self.screen_width - size) // 2

    def render(self, field: HeightField) -> np.ndarray:
        """
        Draw every cell of the field into a new pixel buffer.

        Cells are drawn z outer, x inner; later cells overwrite earlier ones
        where their rectangles overlap.

        Returns:
            uint32 array of shape (screen_height, screen_width)
        """
        if not field.is_complete():
            raise ValueError("Cannot render a height field with unset cells")

        size = field.size
        pixels = new_pixel_buffer(self.screen_width, self.screen_height)
        prng = AleaPRNG(self.water_seed)
        adjust = self.screen_adjust(size)
        heights = field.heights

        zs, xs = np.mgrid[0:size, 0:size]
        top_x, top_y = project(xs, zs, heights, size)
        bottom_x, bottom_y = project(xs + 1, zs, 0.0, size)
        water_x, water_y = project(xs, zs, WATER_LEVEL_FRACTION * size, size)

        # Slope to the right-hand neighbour; the last column is a border cell
        slopes = np.zeros_like(heights)
        slopes[:, :-1] = heights[:, 1:] - heights[:, :-1]

        for z in range(size):
            for x in range(size):
                bottom = (int(bottom_x[z, x]), int(bottom_y[z, x]))
                draw_rect(
                    pixels,
                    (int(water_x[z, x]), int(water_y[z, x])),
                    bottom,
                    water_color(x, z, size, prng),
                    adjust,
                )
                draw_rect(
                    pixels,
                    (int(top_x[z, x]), int(top_y[z, x])),
                    bottom,
                    slope_color(x, z, size, float(slopes[z, x])),
                    adjust,
                )

        logger.info(
            "Rasterization complete",
            size=size,
            width=self.screen_width,
            height=self.screen_height,
            painted=int(np.count_nonzero(pixels)),
        )
        return pixels


def render(
    field: HeightField,
    screen_width: int = SCREEN_WIDTH,
    screen_height: int = SCREEN_HEIGHT,
    water_seed: str = "water",
) -> np.ndarray:
    """Render a height field into a packed RGBA buffer."""
    return Rasterizer(screen_width, screen_height, water_seed).render(field)
