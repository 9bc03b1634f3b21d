"""Errors raised by diagram construction and the raster engine."""


class GeometryBuildError(ValueError):
    """The site set could not be turned into a Voronoi diagram."""


class CardinalityMismatch(ValueError):
    """The number of diagram cells differs from the number of colors."""

    def __init__(self, site_count: int, color_count: int):
        self.site_count = site_count
        self.color_count = color_count
        super().__init__(
            f"The number of colors ({color_count}) does not match "
            f"the number of sites ({site_count})."
        )


class CellIndexError(IndexError):
    """A cell index fell outside [0, site_count)."""

    def __init__(self, cell: int, site_count: int):
        self.cell = cell
        self.site_count = site_count
        super().__init__(f"Cell index {cell} out of range [0, {site_count})")
