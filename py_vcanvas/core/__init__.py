"""
Diagram construction, point location and raster rendering.
"""

from .errors import CardinalityMismatch, CellIndexError, GeometryBuildError
from .generators import generate_distinct_colors, generate_distinct_points, uniform_colors
from .voronoi_diagram import (
    BoundingBox, ClipBehavior, DiagramConfig, VoronoiDiagram, build_voronoi_diagram
)
from .point_location import locate, locate_many
from .voronoi_image import VoronoiImage

__all__ = ['CardinalityMismatch', 'CellIndexError', 'GeometryBuildError',
           'generate_distinct_colors', 'generate_distinct_points', 'uniform_colors',
           'BoundingBox', 'ClipBehavior', 'DiagramConfig', 'VoronoiDiagram',
           'build_voronoi_diagram', 'locate', 'locate_many', 'VoronoiImage']
