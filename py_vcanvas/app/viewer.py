"""Matplotlib window showing the rendered diagram."""

import matplotlib.pyplot as plt
import structlog
from matplotlib.backend_bases import MouseButton

from .interaction import InteractionController, PointerButton

logger = structlog.get_logger()

_BUTTONS = {
    MouseButton.LEFT: PointerButton.LEFT,
    MouseButton.MIDDLE: PointerButton.MIDDLE,
    MouseButton.RIGHT: PointerButton.RIGHT,
}


class MatplotlibViewer:
    """Displays the controller's buffer and forwards input events to it."""

    def __init__(self, controller: InteractionController, title: str = "TEST"):
        self.controller = controller

        buffer = controller.buffer if controller.buffer is not None else controller.redraw()
        height, width = buffer.shape[:2]
        dpi = 100
        self.fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.ax.set_axis_off()
        self.artist = self.ax.imshow(buffer, interpolation="nearest")

        if self.fig.canvas.manager is not None:
            self.fig.canvas.manager.set_window_title(title)

        controller.on_redraw = self.update
        self.cid_move = self.fig.canvas.mpl_connect("motion_notify_event", self.on_move)
        self.cid_release = self.fig.canvas.mpl_connect("button_release_event", self.on_release)
        self.cid_key = self.fig.canvas.mpl_connect("key_release_event", self.on_key)

    def update(self, buffer) -> None:
        self.artist.set_data(buffer)
        self.fig.canvas.draw_idle()

    def on_move(self, event):
        if event.inaxes is not self.ax:
            self.controller.on_pointer_move(None, None)
            return
        self.controller.on_pointer_move(event.xdata, event.ydata)

    def on_release(self, event):
        button = _BUTTONS.get(event.button)
        if button is None:
            return
        self.controller.on_pointer_release(button)

    def on_key(self, event):
        if event.key == "escape":
            logger.info("Closing viewer")
            plt.close(self.fig)
            return
        self.controller.on_key_release(event.key)

    def show(self) -> None:
        """Block in the GUI event loop until the window is closed."""
        plt.show()
