"""
Preview rendering: draws detection feedback on a copy of the capture.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from docscan.scanner.contours import trace_contours
from docscan.scanner.edge_map import build_edge_map
from docscan.scanner.types import DetectionResult, EdgeMapConfig, PreviewConfig

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_CONFIG = PreviewConfig(
    outline_color=(255, 0, 0),
    outline_thickness=10,
    contour_color=(0, 255, 0),
    contour_thickness=2,
)


def _color_for(image: np.ndarray, color: tuple) -> tuple:
    # cv2 drawing takes as many components as the image has channels
    if image.ndim == 2:
        return (int(sum(color) / 3),)
    if image.shape[2] == 4:
        return tuple(color) + (255,)
    return tuple(color)


def render_preview(
    image: np.ndarray,
    corners: DetectionResult,
    debug_overlay: bool = False,
    config: Optional[PreviewConfig] = None,
    edge_config: Optional[EdgeMapConfig] = None,
) -> np.ndarray:
    """
    Draw the detected document outline, and optionally every traced contour.

    The input is never modified; drawing happens on a copy.

    Args:
        image: Captured image.
        corners: Detected corners or None.
        debug_overlay: Also recompute the edge map and draw all contours
                       underneath the outline.
        config: Colours and line thicknesses.
        edge_config: Edge-map parameters used for the debug overlay.

    Returns:
        Annotated copy of the image. Without corners and without overlay the
        copy is identical to the input.
    """
    config = config or DEFAULT_PREVIEW_CONFIG
    preview = image.copy()

    if debug_overlay:
        contours = trace_contours(build_edge_map(image, edge_config))
        cv2.drawContours(
            preview,
            list(contours),
            -1,
            _color_for(preview, config.contour_color),
            config.contour_thickness,
        )
        logger.debug(f"Debug overlay: drew {len(contours)} contours")

    if corners is not None:
        color = _color_for(preview, config.outline_color)
        outline = corners.as_tuple()  # tl, tr, br, bl
        for start, end in zip(outline, outline[1:] + outline[:1]):
            cv2.line(
                preview, start.to_tuple(), end.to_tuple(), color, config.outline_thickness
            )

    return preview
