"""
Unit tests for vertex resolution.
"""

from itertools import combinations

import numpy as np
import pytest

from docscan.common.types import Point
from docscan.scanner.vertices import (
    assign_corners,
    deduplicate_vertices,
    polygon_to_points,
    resolve_vertices,
)


def _points(*coords):
    return [Point(x=x, y=y) for x, y in coords]


def _contour(*coords):
    return np.array([[list(c)] for c in coords], dtype=np.int32)


class TestDeduplicateVertices:
    """Tests for deduplicate_vertices."""

    def test_close_vertex_removed(self):
        points = _points((0, 0), (300, 0), (300, 300), (0, 300), (10, 10))
        result = deduplicate_vertices(points, 100)

        assert result == _points((0, 0), (300, 0), (300, 300), (0, 300))

    def test_reverse_scan_order(self):
        """With a chain of close points the first one survives."""
        points = _points((0, 0), (60, 0), (120, 0))
        assert deduplicate_vertices(points, 100) == _points((0, 0))

    def test_distance_measured_against_remaining_set(self):
        # (150, 0) is close to (60, 0), which is itself removed later;
        # (150, 0) is visited first and dropped while (60, 0) still exists.
        points = _points((0, 0), (60, 0), (150, 0), (400, 0))
        assert deduplicate_vertices(points, 100) == _points((0, 0), (400, 0))

    def test_exact_threshold_kept(self):
        points = _points((0, 0), (100, 0))
        assert deduplicate_vertices(points, 100) == points

    def test_coincident_points_collapse(self):
        points = _points((5, 5), (5, 5), (5, 5))
        assert deduplicate_vertices(points, 100) == _points((5, 5))

    def test_survivors_pairwise_separated(self):
        rng = np.random.default_rng(0)
        points = [Point(x=x, y=y) for x, y in rng.integers(0, 1000, size=(60, 2))]

        result = deduplicate_vertices(points, 100)

        assert len(result) >= 1
        for a, b in combinations(result, 2):
            assert a.distance_to(b) >= 100

    def test_empty(self):
        assert deduplicate_vertices([], 100) == []


class TestAssignCorners:
    """Tests for assign_corners."""

    def test_axis_aligned(self):
        points = _points((450, 50), (50, 350), (50, 50), (450, 350))
        corners = assign_corners(points)

        assert corners.tl == Point(x=50, y=50)
        assert corners.tr == Point(x=450, y=50)
        assert corners.bl == Point(x=50, y=350)
        assert corners.br == Point(x=450, y=350)

    def test_legacy_side_labels(self):
        """The lower-x side carries the right labels."""
        points = _points((450, 50), (50, 350), (50, 50), (450, 350))
        corners = assign_corners(points, legacy_side_labels=True)

        assert corners.tl == Point(x=450, y=50)
        assert corners.bl == Point(x=450, y=350)
        assert corners.tr == Point(x=50, y=50)
        assert corners.br == Point(x=50, y=350)

    def test_skewed_quad(self):
        points = _points((120, 80), (520, 60), (560, 420), (80, 400))
        corners = assign_corners(points)

        assert corners.tl == Point(x=120, y=80)
        assert corners.tr == Point(x=520, y=60)
        assert corners.br == Point(x=560, y=420)
        assert corners.bl == Point(x=80, y=400)

    def test_five_vertices_lower_half_is_two(self):
        points = _points((0, 0), (0, 400), (300, 0), (300, 200), (300, 400))
        corners = assign_corners(points)

        assert corners.tl == Point(x=0, y=0)
        assert corners.bl == Point(x=0, y=400)
        assert corners.tr == Point(x=300, y=0)
        assert corners.br == Point(x=300, y=400)

    def test_too_few_vertices(self):
        with pytest.raises(ValueError, match="at least 4"):
            assign_corners(_points((0, 0), (200, 0), (200, 200)))


class TestResolveVertices:
    """Tests for resolve_vertices."""

    def test_rectangle_contour(self):
        contour = _contour((50, 50), (50, 350), (450, 350), (450, 50))
        corners = resolve_vertices(contour)

        assert corners is not None
        assert corners.tl == Point(x=50, y=50)
        assert corners.br == Point(x=450, y=350)

    def test_corners_pairwise_separated(self):
        contour = _contour((120, 80), (80, 400), (560, 420), (520, 60))
        corners = resolve_vertices(contour)

        assert corners is not None
        assert len(set(corners.as_tuple())) == 4
        assert corners.min_pairwise_distance() >= 100

    def test_small_quad_collapses(self):
        """A valid quadrilateral smaller than the threshold resolves to nothing."""
        contour = _contour((0, 0), (0, 80), (80, 80), (80, 0))
        assert resolve_vertices(contour) is None

    def test_custom_threshold(self):
        contour = _contour((0, 0), (0, 80), (80, 80), (80, 0))
        corners = resolve_vertices(contour, min_corner_distance=50)

        assert corners is not None
        assert corners.tl == Point(x=0, y=0)
        assert corners.br == Point(x=80, y=80)

    def test_polygon_to_points_keeps_order(self):
        polygon = _contour((1, 2), (3, 4), (5, 6))
        assert polygon_to_points(polygon) == _points((1, 2), (3, 4), (5, 6))
