"""
Height field storage and Diamond-Square generation.

The height field is a square grid of N x N heights where N = 2^k + 1.
Generation seeds the four corners and then repeatedly halves the step
size, setting square centers and diamond centers to the average of their
neighbours plus a random offset that shrinks with the step.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
import structlog

from .alea_prng import AleaPRNG

logger = structlog.get_logger()

# Marker for uninitialized cells and out-of-bounds reads. Finite seeds plus
# finite offsets never produce NaN, so it cannot collide with a real height.
INVALID_HEIGHT = float("nan")


def is_valid_height(value: Optional[float]) -> bool:
    """True when value is a real height rather than the invalid marker."""
    return value is not None and not math.isnan(value)


def is_valid_size(size: int) -> bool:
    """Check that size - 1 is a power of two of at least 2."""
    steps = size - 1
    return steps >= 2 and (steps & (steps - 1)) == 0


@dataclass
class TerrainConfig:
    """Parameters for one terrain: grid size N and roughness."""

    size: int = 513
    roughness: float = 0.3

    def __post_init__(self):
        if isinstance(self.size, bool) or not isinstance(self.size, (int, np.integer)):
            raise ValueError(f"Grid size must be an integer, got {self.size!r}")
        if not is_valid_size(self.size):
            raise ValueError(
                f"Grid size must be 2^k + 1 with k >= 1 (3, 5, 9, 17, ...), got {self.size}"
            )
        if not 0 < self.roughness <= 1:
            raise ValueError(f"Roughness must be in (0, 1], got {self.roughness}")


def average(heights: Iterable[float]) -> float:
    """
    Average the valid entries of a set of corner or neighbour heights.

    Invalid samples are excluded. When every sample is invalid the
    average is defined as 0.
    """
    total = 0.0
    valid = 0
    for height in heights:
        if is_valid_height(height):
            total += height
            valid += 1
    return total / valid if valid else 0.0


class HeightField:
    """Square grid of heights indexed by (x, z)."""

    def __init__(self, size: int):
        self.size = size
        # Row-major: heights[z, x]
        self.heights = np.full((size, size), INVALID_HEIGHT, dtype=np.float64)

    def within(self, x: int, z: int) -> bool:
        """Check whether (x, z) lies on the grid."""
        return 0 <= x < self.size and 0 <= z < self.size

    def height_at(self, x: int, z: int) -> float:
        """Height at (x, z), or INVALID_HEIGHT outside the grid."""
        if not self.within(x, z):
            return INVALID_HEIGHT
        return float(self.heights[z, x])

    def set_height(self, x: int, z: int, value: float) -> None:
        """Set height at (x, z). Writes outside the grid are ignored."""
        if self.within(x, z):
            self.heights[z, x] = value

    def is_complete(self) -> bool:
        """True once every cell holds a real height."""
        return not np.isnan(self.heights).any()

    def freeze(self) -> None:
        """Make the grid read-only; later writes raise ValueError."""
        self.heights.flags.writeable = False

    @property
    def frozen(self) -> bool:
        return not self.heights.flags.writeable

    def __repr__(self) -> str:
        return f"HeightField(size={self.size}, frozen={self.frozen})"


class DiamondSquare:
    """
    Diamond-Square height field generator.

    All randomness comes from the PRNG handed in, so the same seed always
    produces the same field.
    """

    def __init__(self, config: TerrainConfig, prng: AleaPRNG):
        """
        Initialize the generator.

        Args:
            config: Validated terrain configuration
            prng: Random source for corner seeds and offsets
        """
        self.config = config
        self.prng = prng
        self.field = HeightField(config.size)

    def _offset(self, scale: float) -> float:
        """Random offset in [-scale, scale)."""
        return self.prng.uniform(-scale, scale)

    def seed_corners(self) -> None:
        """Set the four corners to random heights in [0, N)."""
        last = self.config.size - 1
        for x, z in ((0, 0), (last, 0), (0, last), (last, last)):
            self.field.set_height(x, z, self.prng.random() * self.config.size)

    def square(self, x: int, z: int, half: int, offset: float) -> None:
        """Set a square center from its four diagonal corners."""
        get = self.field.height_at
        avg = average((
            get(x - half, z - half),
            get(x + half, z - half),
            get(x + half, z + half),
            get(x - half, z + half),
        ))
        self.field.set_height(x, z, avg + offset)

    def diamond(self, x: int, z: int, half: int, offset: float) -> None:
        """Set a diamond center from its four orthogonal neighbours."""
        get = self.field.height_at
        avg = average((
            get(x, z - half),
            get(x + half, z),
            get(x, z + half),
            get(x - half, z),
        ))
        self.field.set_height(x, z, avg + offset)

    def divide(self, step: int) -> None:
        """
        Run one square pass followed by one diamond pass at the given step.

        Args:
            step: Distance between the corners of the current squares
        """
        size = self.config.size
        half = step // 2
        scale = step * self.config.roughness

        for z in range(half, size, step):
            for x in range(half, size, step):
                self.square(x, z, half, self._offset(scale))

        # Diamond centers alternate between odd and even rows of half steps
        for z in range(0, size, half):
            for x in range((z + half) % step, size, step):
                self.diamond(x, z, half, self._offset(scale))

    def generate(self) -> HeightField:
        """Seed the corners and subdivide until the step reaches 1."""
        logger.info(
            "Starting diamond-square",
            size=self.config.size,
            roughness=self.config.roughness,
        )
        self.seed_corners()

        step = self.config.size - 1
        while step // 2 >= 1:
            self.divide(step)
            step //= 2

        logger.info(
            "Diamond-square complete",
            size=self.config.size,
            random_draws=self.prng.call_count,
            min_height=float(np.min(self.field.heights)),
            max_height=float(np.max(self.field.heights)),
        )
        return self.field


def generate(size: int, roughness: float, prng: AleaPRNG) -> HeightField:
    """
    Generate a complete, frozen height field.

    Raises:
        ValueError: If size - 1 is not a power of two or roughness is
            outside (0, 1]. Checked before any generation work.
    """
    config = TerrainConfig(size=size, roughness=roughness)
    field = DiamondSquare(config, prng).generate()
    field.freeze()
    return field
