"""
Document contour detection and perspective rectification.

Locates the quadrilateral boundary of a document in a photograph and
warps it into a rectangular top-down image.

Pipeline stages:
1. Edge map (grayscale, Gaussian blur, Canny)
2. Contour search (largest polygon with an accepted vertex count)
3. Vertex resolution (deduplication and corner labeling)
4. Perspective rectification
"""

from docscan.scanner.config_loader import load_config
from docscan.scanner.contours import find_candidate
from docscan.scanner.edge_map import build_edge_map
from docscan.scanner.image_rectification import compute_output_size, rectify
from docscan.scanner.preview import render_preview
from docscan.scanner.processor import DocumentScanner, detect_document
from docscan.scanner.types import DetectionResult, QuadCorners, ScannerConfig
from docscan.scanner.vertices import resolve_vertices

__all__ = [
    "DocumentScanner",
    "detect_document",
    "load_config",
    "build_edge_map",
    "find_candidate",
    "resolve_vertices",
    "rectify",
    "compute_output_size",
    "render_preview",
    "DetectionResult",
    "QuadCorners",
    "ScannerConfig",
]
