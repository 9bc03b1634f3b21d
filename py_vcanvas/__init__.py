"""Interactive Voronoi diagram rasterizer with a cached pixel classification."""

__version__ = "0.1.0"
