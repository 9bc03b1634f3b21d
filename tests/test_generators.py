"""Tests for distinct site and color generation."""

import pytest
import numpy as np
from py_vcanvas.core.generators import (
    generate_distinct_points, generate_distinct_colors, uniform_colors
)
from py_vcanvas.utils.random import get_rng, set_random_seed


class TestDistinctPoints:
    """Test random site generation."""

    def test_shape_and_bounds(self):
        """Points lie on integer coordinates inside the image."""
        points = generate_distinct_points(80, 60, 500, np.random.default_rng(1))

        assert points.shape == (500, 2)
        assert points.dtype == np.float64
        assert np.all(points[:, 0] >= 0) and np.all(points[:, 0] < 80)
        assert np.all(points[:, 1] >= 0) and np.all(points[:, 1] < 60)
        np.testing.assert_array_equal(points, np.round(points))

    def test_points_are_distinct(self):
        """No two points share a coordinate."""
        points = generate_distinct_points(20, 20, 300, np.random.default_rng(2))
        assert len(np.unique(points, axis=0)) == 300

    def test_fills_whole_image(self):
        """Asking for every pixel yields every pixel exactly once."""
        points = generate_distinct_points(4, 3, 12, np.random.default_rng(3))
        as_set = {(int(x), int(y)) for x, y in points}
        assert as_set == {(x, y) for x in range(4) for y in range(3)}

    def test_same_seed_same_points(self):
        points1 = generate_distinct_points(50, 50, 40, np.random.default_rng(9))
        points2 = generate_distinct_points(50, 50, 40, np.random.default_rng(9))
        np.testing.assert_array_equal(points1, points2)

    def test_zero_points(self):
        assert generate_distinct_points(10, 10, 0).shape == (0, 2)

    @pytest.mark.parametrize("width,height,count", [
        (3, 3, 10),
        (0, 5, 1),
        (5, -1, 1),
        (5, 5, -1),
    ])
    def test_unsatisfiable_requests_fail_fast(self, width, height, count):
        with pytest.raises(ValueError):
            generate_distinct_points(width, height, count)


class TestDistinctColors:
    """Test random color generation."""

    def test_colors_are_opaque_and_in_range(self):
        colors = generate_distinct_colors(200, np.random.default_rng(4))

        assert len(colors) == 200
        for color in colors:
            assert len(color) == 4
            assert color[3] == 255
            assert all(0 <= c <= 255 for c in color)

    def test_colors_are_distinct(self):
        colors = generate_distinct_colors(1000, np.random.default_rng(5))
        assert len(set(colors)) == 1000

    def test_negative_count(self):
        with pytest.raises(ValueError):
            generate_distinct_colors(-3)

    def test_more_than_color_space(self):
        with pytest.raises(ValueError):
            generate_distinct_colors(256 ** 3 + 1)

    def test_uniform_colors(self):
        colors = uniform_colors(3, (20, 80, 240, 255))
        assert colors == [(20, 80, 240, 255)] * 3


class TestSharedGenerator:
    """Test the process-wide generator."""

    def test_seed_reproduces_sequence(self):
        set_random_seed(42)
        first = generate_distinct_points(30, 30, 10)
        set_random_seed(42)
        second = generate_distinct_points(30, 30, 10)

        np.testing.assert_array_equal(first, second)

    def test_get_rng_is_stable(self):
        set_random_seed(1)
        assert get_rng() is get_rng()
