"""Tests for saving rendered images."""

import pytest
import numpy as np
import matplotlib.image as mpimg
from py_vcanvas.io.image_export import save_image


class TestSaveImage:
    """Test PNG output."""

    def test_round_trip_pixels(self, tmp_path):
        rng = np.random.default_rng(0)
        buffer = rng.integers(0, 256, size=(6, 8, 4), dtype=np.uint8)
        buffer[..., 3] = 255

        path = save_image(buffer, tmp_path / "out.png")
        loaded = mpimg.imread(path)

        assert loaded.shape == (6, 8, 4)
        np.testing.assert_array_equal(np.round(loaded * 255).astype(np.uint8), buffer)

    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "result" / "nested" / "CURRENT.png"
        save_image(np.zeros((2, 2, 4), dtype=np.uint8), str(target))
        assert target.exists()

    @pytest.mark.parametrize("buffer", [
        np.zeros((4, 4), dtype=np.uint8),
        np.zeros((4, 4, 2), dtype=np.uint8),
        np.zeros((4, 4, 4), dtype=np.float64),
    ])
    def test_rejects_bad_buffers(self, buffer, tmp_path):
        with pytest.raises(ValueError):
            save_image(buffer, tmp_path / "bad.png")
