"""
Matplotlib presentation of rendered terrain frames.
"""

from pathlib import Path
from typing import Union

import matplotlib.pyplot as plt
import numpy as np
import structlog

from .config import Settings
from .core.heightfield import TerrainConfig
from .core.rasterizer import unpack_rgba
from .core.terrain import generate_frame

logger = structlog.get_logger()


def to_image(pixels: np.ndarray) -> np.ndarray:
    """Convert a packed pixel buffer to an (H, W, 4) RGBA image."""
    return unpack_rgba(pixels)


def save_frame(pixels: np.ndarray, path: Union[str, Path]) -> Path:
    """Write a packed pixel buffer to a PNG file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, to_image(pixels))
    logger.info("Frame saved", path=str(path))
    return path


class TerrainViewer:
    """
    Window that keeps generating new terrains until it is closed.

    Each frame is a fresh terrain; nothing carries over between frames.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.config = TerrainConfig(size=settings.map_size, roughness=settings.roughness)
        self.frames_shown = 0

    def _next_pixels(self) -> np.ndarray:
        # A fixed seed only applies to the first frame, later frames vary
        seed = self.settings.seed if self.frames_shown == 0 else None
        frame = generate_frame(
            self.config,
            self.settings.screen_width,
            self.settings.screen_height,
            seed=seed,
        )
        return frame.pixels

    def run(self, max_frames: int = 0) -> int:
        """
        Show frames until the window closes.

        Args:
            max_frames: Stop after this many frames, 0 for no limit

        Returns:
            Number of frames shown
        """
        width = self.settings.screen_width
        height = self.settings.screen_height
        dpi = 100
        fig = plt.figure("Terrain Generation", figsize=(width / dpi, height / dpi), dpi=dpi)
        fig.patch.set_facecolor("black")
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_axis_off()
        image = ax.imshow(to_image(self._next_pixels()), interpolation="nearest")
        self.frames_shown = 1

        try:
            while plt.fignum_exists(fig.number):
                if max_frames and self.frames_shown >= max_frames:
                    break
                plt.pause(self.settings.frame_interval)
                if not plt.fignum_exists(fig.number):
                    break
                image.set_data(to_image(self._next_pixels()))
                fig.canvas.draw_idle()
                self.frames_shown += 1
        finally:
            plt.close(fig)

        logger.info("Viewer closed", frames=self.frames_shown)
        return self.frames_shown
