"""
Data types and structures for the scanner module.

Provides type-safe containers for configuration and detection results.
"""

from dataclasses import dataclass
from itertools import combinations
from typing import Optional, Tuple

import numpy as np
from pydantic import BaseModel, model_validator

from docscan.common.types import Point

BGRColor = Tuple[int, int, int]


class QuadCorners(BaseModel):
    """
    The four labeled corners of a detected document.

    No two labels may reference the same point. The minimum separation
    between corners is guaranteed by the vertex resolver, not checked here,
    so that a tuned ``min_corner_distance`` stays usable.

    Attributes:
        tl: Top-left corner.
        tr: Top-right corner.
        bl: Bottom-left corner.
        br: Bottom-right corner.
    """

    tl: Point
    tr: Point
    bl: Point
    br: Point

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _validate_distinct(self) -> "QuadCorners":
        points = self.as_tuple()
        for a, b in combinations(points, 2):
            if a == b:
                raise ValueError(f"Corners must be pairwise distinct, got {a} twice")
        return self

    def as_tuple(self) -> Tuple[Point, Point, Point, Point]:
        """Corners in outline order: tl, tr, br, bl."""
        return (self.tl, self.tr, self.br, self.bl)

    def to_numpy(self, dtype: type = np.float32) -> np.ndarray:
        """
        Convert to a (4, 2) array ordered tl, tr, br, bl.

        This is the order expected by cv2.getPerspectiveTransform when the
        destination is a rectangle listed clockwise from the origin.
        """
        return np.array([p.to_numpy(dtype) for p in self.as_tuple()], dtype=dtype)

    def min_pairwise_distance(self) -> float:
        """Smallest Euclidean distance between any two corners."""
        return min(a.distance_to(b) for a, b in combinations(self.as_tuple(), 2))


# Optional[QuadCorners]: None is an expected "not found" outcome.
DetectionResult = Optional[QuadCorners]


@dataclass
class EdgeMapConfig:
    """Configuration for edge-map construction."""

    blur_kernel_size: int  # Gaussian kernel side, sigma derived by OpenCV
    canny_low: int
    canny_high: int


@dataclass
class ContourConfig:
    """Configuration for contour search."""

    approx_epsilon_ratio: float  # approxPolyDP epsilon as a fraction of perimeter
    strict_vertex_counts: Tuple[int, ...]
    relaxed_vertex_range: Tuple[int, int]  # inclusive (min, max)

    @property
    def relaxed_vertex_counts(self) -> Tuple[int, ...]:
        low, high = self.relaxed_vertex_range
        return tuple(range(low, high + 1))


@dataclass
class VertexConfig:
    """Configuration for vertex deduplication and corner labeling."""

    min_corner_distance: float
    legacy_side_labels: bool  # lower-x group gets the "right" labels when True


@dataclass
class RectificationConfig:
    """Configuration for the perspective warp."""

    correct_left_height: bool  # False keeps hypot(tl.x - bl.x, tr.y - bl.y)
    border_value: int


@dataclass
class PreviewConfig:
    """Configuration for preview rendering."""

    outline_color: BGRColor
    outline_thickness: int
    contour_color: BGRColor
    contour_thickness: int


@dataclass
class ExportConfig:
    """Configuration for multi-page document assembly."""

    page_width_mm: float
    page_height_mm: float
    dpi: int
    jpeg_quality: int

    @property
    def page_size_px(self) -> Tuple[int, int]:
        """Page (width, height) in pixels at the configured resolution."""
        mm_per_inch = 25.4
        return (
            int(round(self.page_width_mm / mm_per_inch * self.dpi)),
            int(round(self.page_height_mm / mm_per_inch * self.dpi)),
        )


@dataclass
class ScannerConfig:
    """Complete scanner configuration."""

    edge_map: EdgeMapConfig
    contours: ContourConfig
    vertices: VertexConfig
    rectification: RectificationConfig
    preview: PreviewConfig
    export: ExportConfig
