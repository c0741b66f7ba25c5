"""
Edge map construction.

Converts a raster image to a single-channel binary edge map:
grayscale -> Gaussian smoothing -> Canny hysteresis thresholding.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from docscan.common.types import ImageBuffer
from docscan.scanner.types import EdgeMapConfig

logger = logging.getLogger(__name__)

DEFAULT_BLUR_KERNEL_SIZE = 11
DEFAULT_CANNY_LOW = 75
DEFAULT_CANNY_HIGH = 200


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert a BGR, BGRA or single-channel image to a 2D luma image."""
    if image.ndim == 2:
        return image
    channels = image.shape[2]
    if channels == 1:
        return image[:, :, 0]
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def build_edge_map(
    image: np.ndarray, config: Optional[EdgeMapConfig] = None
) -> np.ndarray:
    """
    Build a binary edge map at the source image's resolution.

    Args:
        image: Input image (BGR, BGRA or grayscale, uint8).
        config: Blur and Canny parameters. Defaults to an 11x11 kernel with
                thresholds 75/200.

    Returns:
        uint8 array of shape (H, W) with values 0 (no edge) or 255 (edge).

    Raises:
        ValueError: If the image is None, empty or not a uint8 raster.
    """
    buffer = ImageBuffer(data=image)

    if config is None:
        ksize = DEFAULT_BLUR_KERNEL_SIZE
        low, high = DEFAULT_CANNY_LOW, DEFAULT_CANNY_HIGH
    else:
        ksize = config.blur_kernel_size
        low, high = config.canny_low, config.canny_high

    gray = to_grayscale(buffer.data)
    # sigma=0 lets OpenCV derive it from the kernel size
    smoothed = cv2.GaussianBlur(gray, (ksize, ksize), 0)
    edges = cv2.Canny(smoothed, low, high)

    logger.debug(
        f"Edge map {buffer.width}x{buffer.height}: "
        f"{int(np.count_nonzero(edges))} edge pixels"
    )

    return edges
