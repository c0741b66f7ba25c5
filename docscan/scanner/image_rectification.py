"""
Image Rectification

Warps the detected document quadrilateral into a rectangular top-down
view. Images without detected corners pass through unchanged.
"""

import logging
import math
from typing import Optional, Tuple

import cv2
import numpy as np

from docscan.scanner.types import DetectionResult, QuadCorners

logger = logging.getLogger(__name__)

# |det(M)| below this is treated as a singular homography
_SINGULAR_DET = 1e-12


def compute_output_size(
    corners: QuadCorners, correct_left_height: bool = False
) -> Tuple[float, float]:
    """
    Compute the rectified document size from its corners.

    Width is the longer of the top and bottom edges, height the longer of
    the right and left edges.

    The left height is measured as ``hypot(tl.x - bl.x, tr.y - bl.y)``, mixing
    the top-right y with the top-left x. That is how the capture app has
    always sized its pages, so it stays the default; pass
    ``correct_left_height=True`` to use ``hypot(tl.x - bl.x, tl.y - bl.y)``.

    Args:
        corners: Labeled document corners.
        correct_left_height: Use the tl-to-bl distance for the left height.

    Returns:
        Tuple (width, height) in pixels, not rounded.
    """
    tl, tr, bl, br = corners.tl, corners.tr, corners.bl, corners.br

    width_bottom = math.hypot(br.x - bl.x, br.y - bl.y)
    width_top = math.hypot(tr.x - tl.x, tr.y - tl.y)
    width = max(width_bottom, width_top)

    height_right = math.hypot(tr.x - br.x, tr.y - br.y)
    if correct_left_height:
        height_left = math.hypot(tl.x - bl.x, tl.y - bl.y)
    else:
        height_left = math.hypot(tl.x - bl.x, tr.y - bl.y)
    height = max(height_right, height_left)

    logger.debug(
        f"Edge lengths - top: {width_top:.1f}, bottom: {width_bottom:.1f}, "
        f"right: {height_right:.1f}, left: {height_left:.1f}"
    )

    return width, height


def _is_invertible(matrix: Optional[np.ndarray]) -> bool:
    if matrix is None or matrix.shape != (3, 3):
        return False
    if not np.all(np.isfinite(matrix)):
        return False
    return abs(float(np.linalg.det(matrix))) > _SINGULAR_DET


def rectify(
    image: np.ndarray,
    corners: DetectionResult,
    correct_left_height: bool = False,
    border_value: int = 0,
) -> np.ndarray:
    """
    Warp the document quadrilateral to a top-down rectangle.

    Source corners tl, tr, br, bl map to (0, 0), (W-1, 0), (W-1, H-1),
    (0, H-1). The warp uses bilinear interpolation and fills destination
    pixels whose source falls outside the image with ``border_value``.

    Args:
        image: Input image (H, W, C) or (H, W).
        corners: Detected corners, or None when nothing was detected.
        correct_left_height: See ``compute_output_size``.
        border_value: Constant fill for out-of-bounds pixels.

    Returns:
        The rectified image. When ``corners`` is None, or when the corners
        are degenerate, the input image itself is returned untouched.

    Example:
        >>> corners = detect_document(image)
        >>> page = rectify(image, corners)
    """
    if corners is None:
        return image

    width, height = compute_output_size(corners, correct_left_height)
    out_w, out_h = int(width), int(height)

    if out_w < 1 or out_h < 1:
        logger.warning(
            f"Degenerate corners give a {width:.1f}x{height:.1f} page, "
            "returning image unchanged"
        )
        return image

    src = corners.to_numpy(np.float32)
    dst = np.array(
        [
            [0, 0],  # Top-Left
            [width - 1, 0],  # Top-Right
            [width - 1, height - 1],  # Bottom-Right
            [0, height - 1],  # Bottom-Left
        ],
        dtype=np.float32,
    )

    try:
        matrix = cv2.getPerspectiveTransform(src, dst)
    except cv2.error as e:
        logger.warning(f"Perspective transform failed ({e}), returning image unchanged")
        return image

    if not _is_invertible(matrix):
        logger.warning("Singular perspective transform, returning image unchanged")
        return image

    border = (border_value,) * (image.shape[2] if image.ndim == 3 else 1)
    rectified = cv2.warpPerspective(
        image,
        matrix,
        (out_w, out_h),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=border,
    )

    logger.info(f"Rectified document to {out_w}x{out_h}")

    return rectified
