"""
One terrain frame: generate a height field and rasterize it.
"""

import time
from dataclasses import dataclass
from typing import Optional

import numpy as np
import structlog

from ..utils import random as seeding
from .heightfield import HeightField, TerrainConfig, generate
from .rasterizer import SCREEN_HEIGHT, SCREEN_WIDTH, Rasterizer

logger = structlog.get_logger()


@dataclass
class TerrainFrame:
    """A generated height field together with its rendered pixels."""

    config: TerrainConfig
    seed: str
    field: HeightField
    pixels: np.ndarray


def generate_frame(
    config: TerrainConfig,
    screen_width: int = SCREEN_WIDTH,
    screen_height: int = SCREEN_HEIGHT,
    seed: Optional[str] = None,
) -> TerrainFrame:
    """
    Generate and render one terrain.

    Args:
        config: Grid size and roughness
        screen_width: Width of the presentation surface
        screen_height: Height of the presentation surface
        seed: Seed string; a new one is picked when omitted

    Returns:
        TerrainFrame holding the frozen field and its pixel buffer
    """
    seed = seed if seed is not None else seeding.new_seed()
    log = logger.bind(seed=seed, size=config.size)

    start = time.perf_counter()
    prng = seeding.make_prng(seeding.derive_seed(seed, "heights"))
    field = generate(config.size, config.roughness, prng)
    generated = time.perf_counter()

    rasterizer = Rasterizer(screen_width, screen_height, seeding.derive_seed(seed, "water"))
    pixels = rasterizer.render(field)
    rendered = time.perf_counter()

    log.info(
        "Terrain frame ready",
        generate_seconds=round(generated - start, 3),
        render_seconds=round(rendered - generated, 3),
    )
    return TerrainFrame(config=config, seed=seed, field=field, pixels=pixels)
