"""
Contour search over an edge map.

Traces every closed contour (flat list, nesting ignored), simplifies each
one with a perimeter-relative epsilon and keeps those whose simplified
polygon has an accepted vertex count. The candidate with the largest
simplified-polygon area is the document boundary candidate.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import cv2
import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_EPSILON_RATIO = 0.10
STRICT_VERTEX_COUNTS = (4,)


@dataclass
class ContourCandidate:
    """A traced contour whose simplified polygon passed the vertex filter."""

    index: int  # enumeration order from cv2.findContours
    area: float  # area of the simplified polygon
    vertex_count: int
    contour: np.ndarray


def simplify_contour(
    contour: np.ndarray, epsilon_ratio: float = DEFAULT_EPSILON_RATIO
) -> np.ndarray:
    """
    Simplify a closed contour with Douglas-Peucker.

    Args:
        contour: Closed contour, shape (N, 1, 2) as returned by cv2.findContours.
        epsilon_ratio: Tolerance as a fraction of the contour perimeter.

    Returns:
        Simplified polygon, shape (M, 1, 2).
    """
    perimeter = cv2.arcLength(contour, True)
    return cv2.approxPolyDP(contour, epsilon_ratio * perimeter, True)


def trace_contours(edge_map: np.ndarray) -> Sequence[np.ndarray]:
    """Trace all closed contours in a binary edge map, ignoring hierarchy."""
    contours, _ = cv2.findContours(edge_map, cv2.RETR_LIST, cv2.CHAIN_APPROX_SIMPLE)
    return contours


def collect_candidates(
    contours: Iterable[np.ndarray],
    allowed_vertex_counts: Iterable[int] = STRICT_VERTEX_COUNTS,
    epsilon_ratio: float = DEFAULT_EPSILON_RATIO,
) -> List[ContourCandidate]:
    """
    Filter contours by the vertex count of their simplified polygon.

    Args:
        contours: Contours in enumeration order.
        allowed_vertex_counts: Accepted vertex counts of the simplified polygon.
        epsilon_ratio: Simplification tolerance as a fraction of perimeter.

    Returns:
        Candidates in enumeration order.
    """
    allowed = set(allowed_vertex_counts)
    candidates = []

    for i, contour in enumerate(contours):
        approx = simplify_contour(contour, epsilon_ratio)
        if len(approx) in allowed:
            candidates.append(
                ContourCandidate(
                    index=i,
                    area=float(cv2.contourArea(approx)),
                    vertex_count=len(approx),
                    contour=contour,
                )
            )

    return candidates


def select_largest_candidate(
    candidates: Sequence[ContourCandidate],
) -> Optional[ContourCandidate]:
    """
    Pick the candidate with the largest simplified-polygon area.

    Among candidates with exactly equal area the last one in enumeration
    order wins, matching an area-keyed table where later entries overwrite
    earlier ones.

    Returns:
        The selected candidate, or None for an empty sequence.
    """
    best = None
    for candidate in candidates:
        if best is None or candidate.area >= best.area:
            best = candidate
    return best


def find_candidate(
    edge_map: np.ndarray,
    allowed_vertex_counts: Iterable[int] = STRICT_VERTEX_COUNTS,
    epsilon_ratio: float = DEFAULT_EPSILON_RATIO,
) -> Optional[np.ndarray]:
    """
    Find the largest contour whose simplified polygon has an allowed vertex count.

    Args:
        edge_map: Binary edge map (uint8, single channel).
        allowed_vertex_counts: Accepted vertex counts. Defaults to exact
                               quadrilaterals only.
        epsilon_ratio: Simplification tolerance as a fraction of perimeter.

    Returns:
        The original (unsimplified) contour of the best candidate, or None
        if no contour qualifies.

    Example:
        >>> edges = build_edge_map(image)
        >>> contour = find_candidate(edges, allowed_vertex_counts=range(4, 17))
    """
    allowed = tuple(allowed_vertex_counts)
    contours = trace_contours(edge_map)
    candidates = collect_candidates(contours, allowed, epsilon_ratio)

    logger.debug(
        f"Traced {len(contours)} contours, {len(candidates)} with vertex count "
        f"in {sorted(set(allowed))}"
    )

    best = select_largest_candidate(candidates)
    if best is None:
        return None

    logger.debug(
        f"Selected contour #{best.index}: area={best.area:.1f}, "
        f"vertices={best.vertex_count}"
    )
    return best.contour
