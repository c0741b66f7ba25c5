"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import cv2
import numpy as np
import pytest

from docscan.common.types import Point
from docscan.scanner.types import QuadCorners


@pytest.fixture
def document_image():
    """500x500 black image with a filled white rectangle (50,50)-(450,350)."""
    image = np.zeros((500, 500, 3), dtype=np.uint8)
    cv2.rectangle(image, (50, 50), (450, 350), (255, 255, 255), thickness=-1)
    return image


@pytest.fixture
def document_corners():
    """Exact corners of the rectangle in ``document_image``."""
    return QuadCorners(
        tl=Point(x=50, y=50),
        tr=Point(x=450, y=50),
        bl=Point(x=50, y=350),
        br=Point(x=450, y=350),
    )


@pytest.fixture
def skewed_document():
    """A perspective-skewed white page on a black background, with its corners."""
    image = np.zeros((480, 640, 3), dtype=np.uint8)
    # tl, tr, br, bl
    pts = np.array([[120, 80], [520, 60], [560, 420], [80, 400]], dtype=np.int32)
    cv2.fillPoly(image, [pts], (255, 255, 255))

    corners = QuadCorners(
        tl=Point(x=120, y=80),
        tr=Point(x=520, y=60),
        br=Point(x=560, y=420),
        bl=Point(x=80, y=400),
    )
    return image, corners


@pytest.fixture
def blank_image():
    """500x500 black image without any document."""
    return np.zeros((500, 500, 3), dtype=np.uint8)


def _encode_png(image):
    ok, encoded = cv2.imencode(".png", image)
    assert ok
    return encoded.tobytes()


@pytest.fixture
def document_png(document_image):
    """``document_image`` encoded as PNG bytes."""
    return _encode_png(document_image)


@pytest.fixture
def blank_png(blank_image):
    """``blank_image`` encoded as PNG bytes."""
    return _encode_png(blank_image)
