"""Bounded Voronoi diagram built on scipy, with a path-walk point locator."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, NamedTuple

import numpy as np
import structlog
from scipy.spatial import QhullError, Voronoi

from .errors import GeometryBuildError

logger = structlog.get_logger()

# Gap between the mirror frame and the outermost site or box edge.
# Keeps the outermost sites distinct from their own mirror images.
MIRROR_MARGIN = 1.0

# Number of queries walked together by VoronoiDiagram.walk_many
WALK_CHUNK_SIZE = 1 << 16


class BoundingBox(NamedTuple):
    """Axis-aligned box given by its center and size."""
    center_x: float
    center_y: float
    width: float
    height: float

    @classmethod
    def from_size(cls, width: float, height: float) -> "BoundingBox":
        """Box covering [0, width] x [0, height]."""
        return cls(width / 2.0, height / 2.0, float(width), float(height))

    @property
    def left(self) -> float:
        return self.center_x - self.width / 2.0

    @property
    def right(self) -> float:
        return self.center_x + self.width / 2.0

    @property
    def top(self) -> float:
        return self.center_y - self.height / 2.0

    @property
    def bottom(self) -> float:
        return self.center_y + self.height / 2.0

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


class ClipBehavior(Enum):
    """What to do with sites lying outside the bounding box."""
    NONE = "none"
    REMOVE_SITES_OUTSIDE_BOUNDING_BOX_ONLY = "remove_sites_outside_bounding_box_only"
    CLIP = "clip"


class DiagramConfig(NamedTuple):
    """Inputs for diagram construction."""
    sites: np.ndarray
    bounding_box: BoundingBox
    relaxation_iterations: int = 0
    clip_behavior: ClipBehavior = ClipBehavior.NONE


@dataclass(frozen=True, eq=False)
class VoronoiDiagram:
    """Voronoi diagram of a site set, closed off by mirrored sites.

    Cell ``i`` is the region of ``sites[i]``. Internally the diagram also
    holds four mirror images of every site (reflected across a frame just
    outside the bounding box) so that every real cell is finite. Walk
    positions index this augmented point set; augmented point ``k`` is an
    image of site ``k % cell_count()``.
    """
    sites: np.ndarray
    bounding_box: BoundingBox
    augmented_points: np.ndarray
    neighbor_table: np.ndarray  # (n_augmented, max_degree), padded with -1

    def cell_count(self) -> int:
        return len(self.sites)

    def bounding_box_width(self) -> float:
        return self.bounding_box.width

    def bounding_box_height(self) -> float:
        return self.bounding_box.height

    def cell_neighbors(self, cell: int) -> List[int]:
        """Indices of the real cells sharing an edge with ``cell``."""
        row = self.neighbor_table[cell]
        return sorted(int(k) for k in row[row >= 0] if k < self.cell_count())

    def iter_path(self, start_cell: int, x: float, y: float) -> Iterator[int]:
        """
        Walk from ``start_cell`` toward the cell containing (x, y).

        At every step the walk moves to the adjacent point nearest to the
        query, provided it is strictly nearer than the current one. Yields
        every visited cell index; the last one owns the point.
        """
        n = self.cell_count()
        if not 0 <= start_cell < n:
            raise IndexError(f"Start cell {start_cell} out of range [0, {n})")

        query = np.array([x, y], dtype=np.float64)
        current = start_cell
        current_dist = _squared_distances(self.augmented_points[[current]], query)[0]
        yield current % n

        while True:
            neighbors = self.neighbor_table[current]
            dist = np.where(neighbors >= 0,
                            _squared_distances(self.augmented_points[neighbors], query),
                            np.inf)
            best = int(np.argmin(dist))
            if not dist[best] < current_dist:
                return
            current = int(neighbors[best])
            current_dist = dist[best]
            yield current % n

    def walk_many(self, start_cell: int, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """
        Run the ``iter_path`` walk for many query points at once.

        Every query starts at ``start_cell`` and takes the same hops it would
        take in ``iter_path``; only the terminal cells are returned.

        Returns:
            Integer array of cell indices, same shape as ``xs``
        """
        n = self.cell_count()
        if not 0 <= start_cell < n:
            raise IndexError(f"Start cell {start_cell} out of range [0, {n})")

        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        if xs.shape != ys.shape:
            raise ValueError(f"Coordinate shapes differ: {xs.shape} vs {ys.shape}")

        queries = np.column_stack([xs.ravel(), ys.ravel()])
        result = np.empty(len(queries), dtype=np.intp)

        for begin in range(0, len(queries), WALK_CHUNK_SIZE):
            chunk = queries[begin:begin + WALK_CHUNK_SIZE]
            result[begin:begin + len(chunk)] = self._walk_chunk(start_cell, chunk)

        return (result % n).reshape(xs.shape)

    def _walk_chunk(self, start_cell: int, queries: np.ndarray) -> np.ndarray:
        current = np.full(len(queries), start_cell, dtype=np.intp)
        current_dist = _squared_distances(self.augmented_points[current], queries)
        active = np.arange(len(queries))

        while len(active):
            neighbors = self.neighbor_table[current[active]]
            candidates = self.augmented_points[neighbors]
            dist = np.where(neighbors >= 0,
                            _squared_distances(candidates, queries[active][:, None, :]),
                            np.inf)
            best = np.argmin(dist, axis=1)
            rows = np.arange(len(active))
            best_dist = dist[rows, best]

            moved = best_dist < current_dist[active]
            moved_ids = active[moved]
            current[moved_ids] = neighbors[rows[moved], best[moved]]
            current_dist[moved_ids] = best_dist[moved]
            active = moved_ids

        return current


def _squared_distances(points: np.ndarray, query: np.ndarray) -> np.ndarray:
    """Squared Euclidean distance along the last axis."""
    dx = points[..., 0] - query[..., 0]
    dy = points[..., 1] - query[..., 1]
    return dx * dx + dy * dy


def get_mirrored_points(sites: np.ndarray, box: BoundingBox,
                        margin: float = MIRROR_MARGIN) -> np.ndarray:
    """
    Reflect every site across the four sides of a frame enclosing both
    ``box`` and every site, so no mirror image is nearer to a point of the
    box (or to a site) than the real site it reflects.

    Returns the mirror images in left, right, top, bottom order, so mirror
    ``k`` (counting from 0) is an image of site ``k % len(sites)``.
    """
    x = sites[:, 0]
    y = sites[:, 1]

    left = min(box.left, x.min()) - margin
    right = max(box.right, x.max()) + margin
    top = min(box.top, y.min()) - margin
    bottom = max(box.bottom, y.max()) + margin

    return np.vstack([
        np.column_stack([2 * left - x, y]),
        np.column_stack([2 * right - x, y]),
        np.column_stack([x, 2 * top - y]),
        np.column_stack([x, 2 * bottom - y]),
    ])


def build_neighbor_table(vor: Voronoi, n_points: int) -> np.ndarray:
    """
    Build a padded adjacency table from the Voronoi ridges.

    Two points are adjacent when their cells share a ridge. Neighbor lists
    are sorted so that walks are reproducible.

    Args:
        vor: scipy Voronoi diagram
        n_points: Number of input points of ``vor``

    Returns:
        Integer array (n_points, max_degree), unused slots set to -1
    """
    neighbors = [set() for _ in range(n_points)]
    for p1, p2 in vor.ridge_points:
        neighbors[p1].add(int(p2))
        neighbors[p2].add(int(p1))

    max_degree = max((len(s) for s in neighbors), default=0)
    table = np.full((n_points, max(max_degree, 1)), -1, dtype=np.intp)
    for i, s in enumerate(neighbors):
        ordered = sorted(s)
        table[i, :len(ordered)] = ordered

    return table


def compute_polygon_centroid(vertices: np.ndarray) -> np.ndarray:
    """Compute the centroid of a polygon.

    Args:
        vertices: Array of [x, y] vertex coordinates in boundary order

    Returns:
        [x, y] centroid coordinates
    """
    if len(vertices) < 3:
        return np.mean(vertices, axis=0)

    x = vertices[:, 0]
    y = vertices[:, 1]
    x_next = np.roll(x, -1)
    y_next = np.roll(y, -1)
    cross = x * y_next - x_next * y
    area = cross.sum() * 0.5

    if abs(area) < 1e-10:
        return np.mean(vertices, axis=0)

    cx = ((x + x_next) * cross).sum() / (6.0 * area)
    cy = ((y + y_next) * cross).sum() / (6.0 * area)
    return np.array([cx, cy])


def order_convex_polygon(vertices: np.ndarray) -> np.ndarray:
    """Sort the vertices of a convex polygon by angle around their mean."""
    center = vertices.mean(axis=0)
    angles = np.arctan2(vertices[:, 1] - center[1], vertices[:, 0] - center[0])
    return vertices[np.argsort(angles)]


def relax_points(sites: np.ndarray, box: BoundingBox, n_iterations: int) -> np.ndarray:
    """Apply Lloyd's relaxation inside the bounding box.

    Moves each site to the centroid of its (mirror-closed) cell and clamps
    it to the box.
    """
    logger.info("Starting Lloyd's relaxation", iterations=n_iterations)

    sites = sites.copy()
    n_sites = len(sites)

    for iteration in range(n_iterations):
        vor = _qhull_voronoi(np.vstack([sites, get_mirrored_points(sites, box)]))

        for i in range(n_sites):
            region_idx = vor.point_region[i]
            if region_idx == -1:
                continue

            region_vertices = vor.regions[region_idx]
            if -1 in region_vertices or len(region_vertices) < 3:
                continue

            polygon = order_convex_polygon(vor.vertices[region_vertices])
            centroid = compute_polygon_centroid(polygon)

            sites[i][0] = np.clip(centroid[0], box.left, box.right)
            sites[i][1] = np.clip(centroid[1], box.top, box.bottom)

        logger.debug("Relaxation iteration complete", iteration=iteration + 1)

    return sites


def _qhull_voronoi(points: np.ndarray) -> Voronoi:
    try:
        return Voronoi(points)
    except QhullError as exc:
        raise GeometryBuildError(f"Qhull could not build the diagram: {exc}") from exc


def _check_sites(sites: np.ndarray) -> None:
    if sites.ndim != 2 or sites.shape[1] != 2:
        raise GeometryBuildError(f"Sites must have shape (n, 2), got {sites.shape}")
    if len(sites) == 0:
        raise GeometryBuildError("At least one site is required")
    if not np.all(np.isfinite(sites)):
        raise GeometryBuildError("Sites must have finite coordinates")
    if len(np.unique(sites, axis=0)) != len(sites):
        raise GeometryBuildError("Sites must be distinct")


def build_voronoi_diagram(config: DiagramConfig) -> VoronoiDiagram:
    """
    Build a bounded Voronoi diagram.

    Args:
        config: Sites, bounding box, relaxation iterations and clip behavior

    Returns:
        Read-only VoronoiDiagram

    Raises:
        GeometryBuildError: If the sites are malformed or degenerate
    """
    box = config.bounding_box
    if not (box.width > 0 and box.height > 0):
        raise GeometryBuildError(f"Bounding box must have positive size, got {box}")
    if config.relaxation_iterations < 0:
        raise GeometryBuildError(
            f"Relaxation iterations must not be negative, got {config.relaxation_iterations}"
        )

    sites = np.array(config.sites, dtype=np.float64)
    if sites.ndim == 2 and sites.shape[1] == 2 and config.clip_behavior != ClipBehavior.NONE:
        inside = np.array([box.contains(x, y) for x, y in sites], dtype=bool)
        if not inside.all():
            logger.info("Removing sites outside bounding box",
                        removed=int((~inside).sum()), clip_behavior=config.clip_behavior.value)
        sites = sites[inside]

    _check_sites(sites)

    logger.info("Building Voronoi diagram",
                sites=len(sites), width=box.width, height=box.height,
                relaxation_iterations=config.relaxation_iterations)

    if config.relaxation_iterations:
        sites = relax_points(sites, box, config.relaxation_iterations)
        # Clamping to the box can collapse two sites onto one corner
        _check_sites(sites)

    augmented = np.vstack([sites, get_mirrored_points(sites, box)])

    vor = _qhull_voronoi(augmented)
    neighbor_table = build_neighbor_table(vor, len(augmented))

    logger.info("Voronoi diagram built",
                cells=len(sites), vertices=len(vor.vertices), ridges=len(vor.ridge_points))

    sites.setflags(write=False)
    augmented.setflags(write=False)
    neighbor_table.setflags(write=False)

    return VoronoiDiagram(
        sites=sites,
        bounding_box=box,
        augmented_points=augmented,
        neighbor_table=neighbor_table,
    )
