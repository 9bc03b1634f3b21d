"""
Raster rendering of a Voronoi diagram with a pixel classification cache.

The first ``render()`` call locates the owning cell of every pixel and keeps
that mapping. Later renders only look colors up through the cached mapping,
so recoloring a cell never repeats the geometric classification.
"""

import math
import operator
from typing import Optional, Sequence

import numpy as np

from .errors import CardinalityMismatch, CellIndexError
from .generators import Color, generate_distinct_points, uniform_colors
from .point_location import locate, locate_many
from .voronoi_diagram import (
    BoundingBox, ClipBehavior, DiagramConfig, VoronoiDiagram, build_voronoi_diagram
)


def _as_color_table(colors: Sequence[Color]) -> np.ndarray:
    try:
        raw = np.array(colors)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Colors must be RGBA tuples: {exc}") from exc

    if raw.size == 0:
        return np.zeros((0, 4), dtype=np.uint8)
    if raw.dtype.kind not in "iuf":
        raise ValueError(f"Color channels must be integers, got {raw.dtype}")
    if raw.dtype.kind == "f" and not np.all(np.isfinite(raw) & (raw == np.round(raw))):
        raise ValueError("Color channels must be integers")

    table = raw.astype(np.int64)
    if table.ndim != 2 or table.shape[1] != 4:
        raise ValueError(f"Colors must be RGBA tuples, got array of shape {table.shape}")
    if table.min() < 0 or table.max() > 255:
        raise ValueError("Color channels must lie in [0, 255]")
    return table.astype(np.uint8)


def _round_half_up(size: float) -> int:
    # Image sizes are non-negative, so .5 always rounds up
    return int(math.floor(size + 0.5))


class VoronoiImage:
    """Renders a diagram to an RGBA buffer and owns its per-cell colors.

    Use ``VoronoiImage.build`` (or ``VoronoiImage.random``) rather than the
    constructor; they check that there is one color per cell.
    """

    def __init__(self, diagram: VoronoiDiagram, colors: np.ndarray):
        self._diagram = diagram
        self._colors = colors
        self._cache: Optional[np.ndarray] = None

    @classmethod
    def build(cls, config: DiagramConfig, colors: Sequence[Color]) -> "VoronoiImage":
        """
        Build the diagram described by ``config`` and pair it with ``colors``.

        Raises:
            GeometryBuildError: If the diagram cannot be built
            CardinalityMismatch: If the cell count differs from len(colors)
            ValueError: If a color is not an RGBA tuple of 0..255 ints
        """
        diagram = build_voronoi_diagram(config)
        if diagram.cell_count() != len(colors):
            raise CardinalityMismatch(diagram.cell_count(), len(colors))
        return cls(diagram, _as_color_table(colors))

    @classmethod
    def random(cls, number_of_points: int, relaxation_iterations: int,
               width: int, height: int, base_color: Color,
               rng: Optional[np.random.Generator] = None) -> "VoronoiImage":
        """Random distinct sites over a width x height image, all cells ``base_color``."""
        config = DiagramConfig(
            sites=generate_distinct_points(width, height, number_of_points, rng),
            bounding_box=BoundingBox.from_size(width, height),
            relaxation_iterations=relaxation_iterations,
            clip_behavior=ClipBehavior.NONE,
        )
        return cls.build(config, uniform_colors(number_of_points, base_color))

    @property
    def diagram(self) -> VoronoiDiagram:
        return self._diagram

    @property
    def site_count(self) -> int:
        return self._diagram.cell_count()

    @property
    def width(self) -> int:
        return _round_half_up(self._diagram.bounding_box_width())

    @property
    def height(self) -> int:
        return _round_half_up(self._diagram.bounding_box_height())

    @property
    def is_cached(self) -> bool:
        return self._cache is not None

    def render(self) -> np.ndarray:
        """
        Draw the image.

        Returns:
            uint8 array of shape (height, width, 4); pixel (x, y) is at [y, x]
        """
        if self._cache is None:
            ys, xs = np.mgrid[0:self.height, 0:self.width]
            self._cache = locate_many(self._diagram, xs, ys)
        return self._colors[self._cache]

    def classify(self, x: float, y: float) -> int:
        """Cell containing (x, y). Always queries the diagram, never the cache."""
        return locate(self._diagram, x, y)

    def cell_at_pixel(self, x: int, y: int) -> int:
        """Cached cell index of pixel (x, y); only valid after a render."""
        if self._cache is None:
            raise RuntimeError("No pixel classification yet; call render() first")
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside the {self.width}x{self.height} image")
        return int(self._cache[y, x])

    def get_color(self, cell: int) -> Color:
        cell = self._check_cell(cell)
        return tuple(int(c) for c in self._colors[cell])

    def set_color(self, cell: int, color: Color) -> None:
        """Recolor one cell. The pixel classification is left untouched."""
        cell = self._check_cell(cell)
        self._colors[cell] = _as_color_table([color])[0]

    def _check_cell(self, cell: int) -> int:
        cell = operator.index(cell)
        if not 0 <= cell < self.site_count:
            raise CellIndexError(cell, self.site_count)
        return cell
