"""Tests for the point-location adapter."""

import numpy as np
from py_vcanvas.core.point_location import locate, locate_many
from py_vcanvas.core.voronoi_diagram import BoundingBox, DiagramConfig, build_voronoi_diagram


def make_diagram():
    sites = np.array([[2.0, 2.0], [17.0, 3.0], [9.0, 11.0], [3.0, 16.0], [16.0, 17.0]])
    return build_voronoi_diagram(DiagramConfig(sites=sites,
                                               bounding_box=BoundingBox.from_size(20, 20)))


class TestLocate:
    """Test single point queries."""

    def test_site_locates_to_itself(self):
        diagram = make_diagram()
        for i, (x, y) in enumerate(diagram.sites):
            assert locate(diagram, x, y) == i

    def test_known_points(self):
        diagram = make_diagram()

        assert locate(diagram, 0.0, 0.0) == 0
        assert locate(diagram, 19.0, 0.0) == 1
        assert locate(diagram, 10.0, 10.0) == 2
        assert locate(diagram, 0.0, 19.0) == 3
        assert locate(diagram, 19.5, 19.5) == 4

    def test_deterministic(self):
        diagram = make_diagram()
        assert locate(diagram, 12.25, 7.75) == locate(diagram, 12.25, 7.75)

    def test_sub_pixel_coordinates(self):
        diagram = make_diagram()
        assert locate(diagram, 2.4, 2.6) == 0


class TestLocateMany:
    """Test batched queries."""

    def test_matches_single_queries(self):
        diagram = make_diagram()
        ys, xs = np.mgrid[0:20, 0:20]
        cells = locate_many(diagram, xs, ys)

        assert cells.shape == (20, 20)
        for y in range(20):
            for x in range(20):
                assert cells[y, x] == locate(diagram, x, y)

    def test_total_over_image(self):
        diagram = make_diagram()
        ys, xs = np.mgrid[0:20, 0:20]
        cells = locate_many(diagram, xs, ys)

        assert cells.min() >= 0
        assert cells.max() < diagram.cell_count()

    def test_empty_query(self):
        diagram = make_diagram()
        assert locate_many(diagram, np.zeros(0), np.zeros(0)).shape == (0,)
