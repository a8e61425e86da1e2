"""Tests for the matplotlib presentation layer."""

import matplotlib.pyplot as plt
import numpy as np

from iso_terrain.config import Settings
from iso_terrain.core.rasterizer import pack_rgba
from iso_terrain.display import TerrainViewer, save_frame, to_image


class TestSaveFrame:
    """Test writing frames to disk."""

    def test_to_image(self):
        pixels = np.zeros((4, 6), dtype=np.uint32)
        pixels[1, 2] = pack_rgba(50, 150, 200, 255)
        image = to_image(pixels)
        assert image.shape == (4, 6, 4)
        assert list(image[1, 2]) == [50, 150, 200, 255]

    def test_save_png(self, tmp_path):
        pixels = np.zeros((8, 12), dtype=np.uint32)
        pixels[2:5, 3:9] = pack_rgba(192, 154, 98, 255)
        path = save_frame(pixels, tmp_path / "out" / "frame.png")
        assert path.exists()

        loaded = plt.imread(path)
        assert loaded.shape[:2] == (8, 12)
        np.testing.assert_allclose(loaded[3, 4, :3], np.array([192, 154, 98]) / 255, atol=1e-2)


class TestTerrainViewer:
    """Test the frame loop with a non-interactive backend."""

    def test_runs_requested_frames(self):
        settings = Settings(
            _env_file=None, map_size=9, screen_width=120, screen_height=80,
            frame_interval=0.01, seed="viewer",
        )
        viewer = TerrainViewer(settings)
        assert viewer.run(max_frames=3) == 3
        assert not plt.get_fignums()
