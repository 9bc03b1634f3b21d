"""Random distinct sites and colors used to seed a diagram."""

from typing import List, Optional, Tuple

import numpy as np
import structlog

from ..utils.random import get_rng

logger = structlog.get_logger()

Color = Tuple[int, int, int, int]

COLOR_SPACE_SIZE = 256 ** 3


def generate_distinct_points(width: int, height: int, count: int,
                             rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Generate ``count`` distinct integer-valued points inside the image.

    Each coordinate is drawn uniformly from [0, width) x [0, height). A point
    that was already drawn is rejected and sampled again.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        count: Number of points wanted
        rng: Generator to draw from (shared generator by default)

    Returns:
        Float array of shape (count, 2) holding [x, y] coordinates

    Raises:
        ValueError: If the image cannot hold ``count`` distinct points
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive, got {width}x{height}")
    if count < 0:
        raise ValueError(f"Point count must not be negative, got {count}")
    if count > width * height:
        raise ValueError(
            f"Cannot place {count} distinct points in a {width}x{height} image"
        )

    rng = rng if rng is not None else get_rng()

    seen = set()
    points = []
    rejected = 0
    for _ in range(count):
        p = (int(rng.integers(0, width)), int(rng.integers(0, height)))
        while p in seen:
            rejected += 1
            p = (int(rng.integers(0, width)), int(rng.integers(0, height)))
        seen.add(p)
        points.append(p)

    logger.debug("Distinct points generated", count=count, rejected=rejected)
    return np.array(points, dtype=np.float64).reshape(count, 2)


def generate_distinct_colors(count: int,
                             rng: Optional[np.random.Generator] = None) -> List[Color]:
    """
    Generate ``count`` distinct opaque RGBA colors.

    Channels are uniform in [0, 255], alpha is always 255. Duplicates are
    rejected and sampled again, so cell index -> color is injective.

    Raises:
        ValueError: If more colors are requested than the RGB space holds
    """
    if count < 0:
        raise ValueError(f"Color count must not be negative, got {count}")
    if count > COLOR_SPACE_SIZE:
        raise ValueError(f"Cannot generate {count} distinct RGB colors")

    rng = rng if rng is not None else get_rng()

    def draw() -> Color:
        r, g, b = (int(c) for c in rng.integers(0, 256, size=3))
        return (r, g, b, 255)

    seen = set()
    colors = []
    for _ in range(count):
        c = draw()
        while c in seen:
            c = draw()
        seen.add(c)
        colors.append(c)

    return colors


def uniform_colors(count: int, color: Color) -> List[Color]:
    """Color table with every cell painted ``color``."""
    return [tuple(color)] * count
