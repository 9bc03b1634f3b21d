"""
Input handling for the interactive viewer.

The controller is GUI agnostic: a window layer forwards pointer and key
events to it and repaints whatever buffer it reports. Events are handled
one at a time, in the order they arrive, on the caller's thread.
"""

import time
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

import numpy as np
import structlog

from ..core.generators import Color
from ..core.voronoi_image import VoronoiImage
from ..io.image_export import save_image

logger = structlog.get_logger()


class PointerButton(Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


class ClickDebouncer:
    """Accepts a click only if the previous accepted one is old enough."""

    def __init__(self, interval_ms: float = 300, clock: Callable[[], float] = time.monotonic):
        self.interval_ms = interval_ms
        self._clock = clock
        self._last_accepted: Optional[float] = None

    def accept(self, now: Optional[float] = None) -> bool:
        """
        Decide whether a click at ``now`` (seconds, clock time) counts.

        The first click is always accepted; later ones must come more than
        ``interval_ms`` after the last accepted click.
        """
        if now is None:
            now = self._clock()
        if self._last_accepted is not None and (now - self._last_accepted) * 1000.0 <= self.interval_ms:
            return False
        self._last_accepted = now
        return True


class InteractionController:
    """Toggles cell colors on click and saves the image on Enter."""

    def __init__(self, image: VoronoiImage, base_color: Color, highlight_color: Color,
                 output_path: Union[str, Path], debouncer: Optional[ClickDebouncer] = None,
                 on_redraw: Optional[Callable[[np.ndarray], None]] = None):
        self.image = image
        self.base_color = tuple(base_color)
        self.highlight_color = tuple(highlight_color)
        self.output_path = Path(output_path)
        self.debouncer = debouncer if debouncer is not None else ClickDebouncer()
        self.on_redraw = on_redraw
        self.pointer: Optional[tuple] = None
        self.buffer: Optional[np.ndarray] = None

    def redraw(self) -> np.ndarray:
        """Render the image, log how long it took and notify the listener."""
        cached = self.image.is_cached
        started = time.perf_counter()
        self.buffer = self.image.render()
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info("Image drawn", cached=cached, duration_ms=round(elapsed_ms, 2))

        if self.on_redraw is not None:
            self.on_redraw(self.buffer)
        return self.buffer

    def toggle_cell(self, cell: int) -> Color:
        """Switch ``cell`` between the base and the highlight color."""
        if self.image.get_color(cell) == self.base_color:
            color = self.highlight_color
        else:
            color = self.base_color
        self.image.set_color(cell, color)
        return color

    def on_pointer_move(self, x: Optional[float], y: Optional[float]) -> None:
        """Track the pointer; None means it left the image."""
        if x is None or y is None:
            self.pointer = None
        else:
            self.pointer = (float(x), float(y))

    def on_pointer_release(self, button: PointerButton,
                           now: Optional[float] = None) -> Optional[int]:
        """
        Handle a released mouse button.

        Returns:
            The toggled cell index, or None if the event was ignored
        """
        if button is not PointerButton.LEFT or self.pointer is None:
            return None
        if not self.debouncer.accept(now):
            logger.debug("Click ignored by debounce", pointer=self.pointer)
            return None

        x, y = self.pointer
        cell = self.image.classify(x, y)
        color = self.toggle_cell(cell)
        logger.info("Cell toggled", x=x, y=y, cell=cell, color=color)

        self.redraw()
        return cell

    def on_key_release(self, key: Optional[str]) -> Optional[Path]:
        """Save the current image when Enter is released."""
        if key != "enter":
            return None
        return save_image(self.image.render(), self.output_path)
