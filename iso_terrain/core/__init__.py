"""
Core terrain generation functionality.
"""

from .alea_prng import AleaPRNG
from .heightfield import (
    INVALID_HEIGHT,
    DiamondSquare,
    HeightField,
    TerrainConfig,
    average,
    generate,
    is_valid_height,
)
from .rasterizer import Rasterizer, pack_rgba, project, render, unpack_rgba
from .terrain import TerrainFrame, generate_frame

__all__ = ['AleaPRNG', 'INVALID_HEIGHT', 'DiamondSquare', 'HeightField',
           'TerrainConfig', 'average', 'generate', 'is_valid_height',
           'Rasterizer', 'pack_rgba', 'project', 'render', 'unpack_rgba',
           'TerrainFrame', 'generate_frame']
