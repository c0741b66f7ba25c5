"""
Unit tests for image_rectification module.

Tests output sizing, the perspective warp and pass-through behaviour.
"""

import cv2
import numpy as np
import pytest
from pydantic import ValidationError

from docscan.common.types import Point
from docscan.scanner.image_rectification import compute_output_size, rectify
from docscan.scanner.types import QuadCorners


def _corners(tl, tr, br, bl):
    return QuadCorners(
        tl=Point(x=tl[0], y=tl[1]),
        tr=Point(x=tr[0], y=tr[1]),
        br=Point(x=br[0], y=br[1]),
        bl=Point(x=bl[0], y=bl[1]),
    )


@pytest.fixture
def trapezoid_corners():
    """Left edge taller than the right one."""
    return _corners((100, 50), (500, 100), (500, 400), (100, 450))


class TestComputeOutputSize:
    """Tests for compute_output_size."""

    def test_axis_aligned(self, document_corners):
        width, height = compute_output_size(document_corners)

        assert width == pytest.approx(400.0)
        assert height == pytest.approx(300.0)

    def test_max_of_opposite_edges(self):
        corners = _corners((0, 0), (300, 0), (400, 200), (0, 200))
        width, _ = compute_output_size(corners)
        assert width == pytest.approx(400.0)

    def test_left_height_uses_top_right_y_by_default(self, trapezoid_corners):
        """Left height is hypot(tl.x - bl.x, tr.y - bl.y) = 350, not 400."""
        _, height = compute_output_size(trapezoid_corners)
        assert height == pytest.approx(350.0)

    def test_corrected_left_height(self, trapezoid_corners):
        _, height = compute_output_size(trapezoid_corners, correct_left_height=True)
        assert height == pytest.approx(400.0)

    def test_not_rounded(self):
        corners = _corners((0, 0), (100, 1), (100, 101), (0, 100))
        width, _ = compute_output_size(corners)
        assert width == pytest.approx(np.hypot(100, 1))


class TestRectify:
    """Tests for rectify."""

    def test_none_corners_pass_through(self, document_image):
        assert rectify(document_image, None) is document_image

    def test_axis_aligned_document(self, document_image, document_corners):
        page = rectify(document_image, document_corners)

        assert page.shape == (300, 400, 3)
        assert page.dtype == np.uint8
        assert page.mean() > 250, "Rectified page should be the white document"

    def test_skewed_document(self, skewed_document):
        image, corners = skewed_document
        page = rectify(image, corners)

        width, height = compute_output_size(corners)
        assert page.shape == (int(height), int(width), 3)
        assert page.mean() > 230

    def test_collinear_corners_pass_through(self, document_image):
        corners = _corners((0, 0), (100, 0), (200, 0), (300, 0))
        assert rectify(document_image, corners) is document_image

    def test_grayscale_image(self, document_image, document_corners):
        gray = cv2.cvtColor(document_image, cv2.COLOR_BGR2GRAY)
        page = rectify(gray, document_corners)

        assert page.shape == (300, 400)

    def test_input_not_modified(self, document_image, document_corners):
        original = document_image.copy()
        rectify(document_image, document_corners)
        np.testing.assert_array_equal(document_image, original)

    @pytest.mark.parametrize("border_value", [0, 128])
    def test_out_of_bounds_filled(self, border_value):
        image = np.full((100, 100, 3), 255, dtype=np.uint8)
        corners = _corners((0, 0), (199, 0), (199, 199), (0, 199))

        page = rectify(image, corners, border_value=border_value)

        assert tuple(page[10, 10]) == (255, 255, 255)
        assert tuple(page[150, 150]) == (border_value,) * 3

    def test_coincident_corners_rejected(self):
        with pytest.raises(ValidationError):
            _corners((0, 0), (0, 0), (100, 100), (0, 100))
