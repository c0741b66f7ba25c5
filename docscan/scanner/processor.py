"""
Main processor for the scanner module.

Orchestrates document detection:
1. Edge map construction
2. Contour search with exact quadrilaterals only
3. Fallback contour search with a relaxed vertex-count range
4. Vertex resolution into labeled corners

and exposes rectification and preview rendering with the same config.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

import numpy as np

from docscan.scanner.config_loader import load_config
from docscan.scanner.contours import find_candidate
from docscan.scanner.edge_map import build_edge_map
from docscan.scanner.image_rectification import rectify
from docscan.scanner.preview import render_preview
from docscan.scanner.types import DetectionResult, ScannerConfig
from docscan.scanner.vertices import resolve_vertices

logger = logging.getLogger(__name__)


class DocumentScanner:
    """
    Detects, rectifies and previews documents in still photographs.

    All methods are pure functions of their arguments and the configuration;
    the scanner holds no image state and can be shared.

    Example:
        >>> scanner = DocumentScanner()
        >>> image = cv2.imread("receipt.jpg")
        >>> corners = scanner.detect(image)
        >>> page = scanner.rectify(image, corners)
    """

    def __init__(
        self,
        config: Optional[ScannerConfig] = None,
        config_path: Optional[Path] = None,
    ):
        """
        Initialize the scanner.

        Args:
            config: Pre-loaded configuration object. If None, will load from file.
            config_path: Path to config file. If None, uses default location.
        """
        if config is not None:
            self.config = config
            logger.debug("Using provided configuration")
        else:
            self.config = load_config(config_path) if config_path else load_config()
            logger.debug("Loaded configuration from file")

    def _search(
        self, edge_map: np.ndarray, allowed_vertex_counts: Iterable[int]
    ) -> DetectionResult:
        contour = find_candidate(
            edge_map,
            allowed_vertex_counts,
            self.config.contours.approx_epsilon_ratio,
        )
        if contour is None:
            return None

        return resolve_vertices(
            contour,
            epsilon_ratio=self.config.contours.approx_epsilon_ratio,
            min_corner_distance=self.config.vertices.min_corner_distance,
            legacy_side_labels=self.config.vertices.legacy_side_labels,
        )

    def detect(self, image: np.ndarray) -> DetectionResult:
        """
        Locate the document quadrilateral in an image.

        The strict pass accepts only contours that simplify to exactly four
        vertices. When it finds nothing, or its contour does not resolve to
        four separated corners, a second pass accepts 4 to 16 vertices and
        relies on deduplication to recover the corners.

        Args:
            image: Captured image (BGR, BGRA or grayscale, uint8).

        Returns:
            QuadCorners, or None if both passes fail.

        Raises:
            ValueError: If the image is None, empty or not uint8.
        """
        edge_map = build_edge_map(image, self.config.edge_map)

        corners = self._search(edge_map, self.config.contours.strict_vertex_counts)
        if corners is not None:
            logger.info(f"Document found in strict pass: {corners}")
            return corners

        logger.debug("Strict pass failed, retrying with relaxed vertex counts")
        corners = self._search(edge_map, self.config.contours.relaxed_vertex_counts)
        if corners is not None:
            logger.info(f"Document found in relaxed pass: {corners}")
        else:
            logger.info("No document found")

        return corners

    def rectify(self, image: np.ndarray, corners: DetectionResult) -> np.ndarray:
        """Warp the document to a top-down view; pass through when corners is None."""
        return rectify(
            image,
            corners,
            correct_left_height=self.config.rectification.correct_left_height,
            border_value=self.config.rectification.border_value,
        )

    def render_preview(
        self, image: np.ndarray, corners: DetectionResult, debug_overlay: bool = False
    ) -> np.ndarray:
        """Draw detection feedback on a copy of the image."""
        return render_preview(
            image,
            corners,
            debug_overlay=debug_overlay,
            config=self.config.preview,
            edge_config=self.config.edge_map,
        )


def detect_document(
    image: np.ndarray, config: Optional[ScannerConfig] = None
) -> DetectionResult:
    """
    Convenience function for one-shot document detection.

    Args:
        image: Captured image.
        config: Optional custom configuration. Uses default if None.

    Returns:
        QuadCorners or None.

    Example:
        >>> corners = detect_document(cv2.imread("receipt.jpg"))
        >>> if corners is not None:
        ...     print(corners.tl, corners.br)
    """
    scanner = DocumentScanner(config=config)
    return scanner.detect(image)
