"""
Point location on a VoronoiDiagram.

Both functions walk from cell 0 toward the query point and report the cell
the walk ends in, so for the same diagram and coordinates they agree.
"""

import numpy as np

from .voronoi_diagram import VoronoiDiagram

SEED_CELL = 0


def locate(diagram: VoronoiDiagram, x: float, y: float) -> int:
    """Return the index of the cell containing (x, y)."""
    cell = SEED_CELL
    for cell in diagram.iter_path(SEED_CELL, x, y):
        pass
    return cell


def locate_many(diagram: VoronoiDiagram, xs, ys) -> np.ndarray:
    """
    Vectorized ``locate``.

    Args:
        diagram: Diagram to query
        xs, ys: Equally shaped coordinate arrays

    Returns:
        Integer array of cell indices with the shape of ``xs``
    """
    return diagram.walk_many(SEED_CELL, xs, ys)
