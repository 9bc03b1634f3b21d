"""Tests for the matplotlib viewer wiring."""

import matplotlib
matplotlib.use("Agg")

import pytest
import numpy as np
import matplotlib.pyplot as plt
from types import SimpleNamespace
from matplotlib.backend_bases import MouseButton
from py_vcanvas.app.interaction import ClickDebouncer, InteractionController
from py_vcanvas.app.viewer import MatplotlibViewer
from py_vcanvas.core.voronoi_diagram import BoundingBox, DiagramConfig
from py_vcanvas.core.voronoi_image import VoronoiImage

BASE = (20, 80, 240, 255)
HIGHLIGHT = (20, 240, 80, 255)


@pytest.fixture
def viewer(tmp_path):
    sites = np.array([[3.0, 3.0], [15.0, 4.0], [9.0, 14.0]])
    image = VoronoiImage.build(
        DiagramConfig(sites=sites, bounding_box=BoundingBox.from_size(20, 18)),
        [BASE] * 3,
    )
    controller = InteractionController(image, BASE, HIGHLIGHT, tmp_path / "CURRENT.png",
                                       debouncer=ClickDebouncer(0))
    v = MatplotlibViewer(controller, title="test window")
    yield v
    plt.close(v.fig)


class TestViewer:
    """Test that matplotlib events reach the controller."""

    def test_initial_image(self, viewer):
        assert viewer.controller.image.is_cached
        np.testing.assert_array_equal(viewer.artist.get_array(), viewer.controller.buffer)

    def test_move_then_click_recolors(self, viewer):
        viewer.on_move(SimpleNamespace(inaxes=viewer.ax, xdata=15.2, ydata=4.1))
        viewer.on_release(SimpleNamespace(button=MouseButton.LEFT))

        assert viewer.controller.image.get_color(1) == HIGHLIGHT
        np.testing.assert_array_equal(viewer.artist.get_array()[4, 15], HIGHLIGHT)

    def test_move_outside_axes_clears_pointer(self, viewer):
        viewer.on_move(SimpleNamespace(inaxes=viewer.ax, xdata=3.0, ydata=3.0))
        viewer.on_move(SimpleNamespace(inaxes=None, xdata=None, ydata=None))

        assert viewer.controller.pointer is None

    def test_unknown_button_ignored(self, viewer):
        viewer.on_move(SimpleNamespace(inaxes=viewer.ax, xdata=3.0, ydata=3.0))
        viewer.on_release(SimpleNamespace(button=None))

        assert viewer.controller.image.get_color(0) == BASE

    def test_enter_saves(self, viewer):
        viewer.on_key(SimpleNamespace(key="enter"))
        assert viewer.controller.output_path.exists()

    def test_escape_closes_window(self, viewer):
        number = viewer.fig.number
        viewer.on_key(SimpleNamespace(key="escape"))
        assert not plt.fignum_exists(number)
