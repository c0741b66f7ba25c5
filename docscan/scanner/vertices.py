"""
Vertex resolution: raw contour -> four labeled document corners.

Steps:
1. Re-simplify the contour with the perimeter-relative epsilon.
2. Drop near-coincident vertices (reverse scan).
3. Split vertices into a lower-x and a higher-x side by x-rank.
4. Label the top and bottom of each side by y.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from docscan.common.types import Point
from docscan.scanner.contours import DEFAULT_EPSILON_RATIO, simplify_contour
from docscan.scanner.types import QuadCorners

logger = logging.getLogger(__name__)

DEFAULT_MIN_CORNER_DISTANCE = 100.0


def polygon_to_points(polygon: np.ndarray) -> List[Point]:
    """Convert an (N, 1, 2) or (N, 2) vertex array to Points, keeping order."""
    return [Point.from_numpy(v) for v in np.asarray(polygon).reshape(-1, 2)]


def deduplicate_vertices(
    points: Sequence[Point], min_distance: float = DEFAULT_MIN_CORNER_DISTANCE
) -> List[Point]:
    """
    Remove vertices that lie closer than ``min_distance`` to another vertex.

    Vertices are visited from the last index to the first. The current vertex
    is removed when any *other remaining* vertex is closer than
    ``min_distance``. Distances are measured against the set as it stands at
    that moment, so with several close pairs the survivors depend on this
    visiting order.

    Every pair of surviving vertices is at least ``min_distance`` apart: when
    the later vertex of a pair was visited, the earlier one was still present.

    Args:
        points: Polygon vertices in contour order.
        min_distance: Euclidean distance threshold in source pixels.

    Returns:
        Surviving vertices in their original relative order.
    """
    remaining = list(points)

    for i in range(len(remaining) - 1, -1, -1):
        current = remaining[i]
        others = remaining[:i] + remaining[i + 1 :]
        if any(current.distance_to(other) < min_distance for other in others):
            del remaining[i]

    return remaining


def assign_corners(
    points: Sequence[Point], legacy_side_labels: bool = False
) -> QuadCorners:
    """
    Label four corners from at least four well-separated vertices.

    Vertices are ranked by x (stable on ties). The first ``n // 2`` form the
    lower-x side, the rest the higher-x side. Each side is sorted by y; its
    first vertex is the top corner and its last vertex the bottom corner.

    Args:
        points: At least 4 vertices.
        legacy_side_labels: When True the lower-x side is named "right" and the
                            higher-x side "left", as in the capture app. When
                            False the lower-x side gets the left labels.

    Returns:
        QuadCorners with tl/bl from the "left" side and tr/br from the "right" side.

    Raises:
        ValueError: If fewer than 4 vertices are given.
    """
    if len(points) < 4:
        raise ValueError(f"Need at least 4 vertices to label corners, got {len(points)}")

    by_x = sorted(points, key=lambda p: p.x)
    half = len(by_x) // 2
    lower_x, higher_x = by_x[:half], by_x[half:]

    if legacy_side_labels:
        right_side, left_side = lower_x, higher_x
    else:
        left_side, right_side = lower_x, higher_x

    left_side = sorted(left_side, key=lambda p: p.y)
    right_side = sorted(right_side, key=lambda p: p.y)

    return QuadCorners(
        tl=left_side[0],
        bl=left_side[-1],
        tr=right_side[0],
        br=right_side[-1],
    )


def resolve_vertices(
    contour: np.ndarray,
    epsilon_ratio: float = DEFAULT_EPSILON_RATIO,
    min_corner_distance: float = DEFAULT_MIN_CORNER_DISTANCE,
    legacy_side_labels: bool = False,
) -> Optional[QuadCorners]:
    """
    Turn a raw contour into four labeled corners.

    The contour is simplified again here because callers only hand over the
    original contour, not the polygon produced during the search.

    Args:
        contour: Raw contour from cv2.findContours.
        epsilon_ratio: Simplification tolerance as a fraction of perimeter.
        min_corner_distance: Deduplication threshold in source pixels.
        legacy_side_labels: See ``assign_corners``.

    Returns:
        QuadCorners, or None if fewer than 4 vertices survive deduplication.
    """
    polygon = simplify_contour(contour, epsilon_ratio)
    vertices = polygon_to_points(polygon)
    unique = deduplicate_vertices(vertices, min_corner_distance)

    logger.debug(f"Vertices: {len(vertices)} simplified, {len(unique)} after dedup")

    if len(unique) < 4:
        return None

    return assign_corners(unique, legacy_side_labels)
