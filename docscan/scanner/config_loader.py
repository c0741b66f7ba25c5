"""
Configuration loader for the scanner module.

Loads and validates configuration from config.yaml file.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from docscan.scanner.types import (
    ContourConfig,
    EdgeMapConfig,
    ExportConfig,
    PreviewConfig,
    RectificationConfig,
    ScannerConfig,
    VertexConfig,
)

logger = logging.getLogger(__name__)

# Default configuration path (relative to this file)
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> ScannerConfig:
    """
    Load scanner configuration from YAML file.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Validated ScannerConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid or missing required fields.

    Example:
        >>> config = load_config()
        >>> print(config.edge_map.canny_low)
        75
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading scanner config from {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    try:
        config = _parse_config(raw_config)
        _validate_config(config)
        logger.info("Successfully loaded scanner configuration")
        return config
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration file: {e}") from e


def _parse_color(raw: Any) -> tuple:
    return tuple(int(c) for c in raw)


def _parse_config(raw: Dict[str, Any]) -> ScannerConfig:
    """Parse raw dictionary into structured config objects."""
    relaxed = raw["contours"]["relaxed_vertex_range"]

    return ScannerConfig(
        edge_map=EdgeMapConfig(
            blur_kernel_size=int(raw["edge_map"]["blur_kernel_size"]),
            canny_low=int(raw["edge_map"]["canny_low"]),
            canny_high=int(raw["edge_map"]["canny_high"]),
        ),
        contours=ContourConfig(
            approx_epsilon_ratio=float(raw["contours"]["approx_epsilon_ratio"]),
            strict_vertex_counts=tuple(
                int(n) for n in raw["contours"]["strict_vertex_counts"]
            ),
            relaxed_vertex_range=(int(relaxed[0]), int(relaxed[1])),
        ),
        vertices=VertexConfig(
            min_corner_distance=float(raw["vertices"]["min_corner_distance"]),
            legacy_side_labels=bool(raw["vertices"]["legacy_side_labels"]),
        ),
        rectification=RectificationConfig(
            correct_left_height=bool(raw["rectification"]["correct_left_height"]),
            border_value=int(raw["rectification"]["border_value"]),
        ),
        preview=PreviewConfig(
            outline_color=_parse_color(raw["preview"]["outline_color"]),
            outline_thickness=int(raw["preview"]["outline_thickness"]),
            contour_color=_parse_color(raw["preview"]["contour_color"]),
            contour_thickness=int(raw["preview"]["contour_thickness"]),
        ),
        export=ExportConfig(
            page_width_mm=float(raw["export"]["page_width_mm"]),
            page_height_mm=float(raw["export"]["page_height_mm"]),
            dpi=int(raw["export"]["dpi"]),
            jpeg_quality=int(raw["export"]["jpeg_quality"]),
        ),
    )


def _validate_color(name: str, color: tuple) -> None:
    if len(color) != 3 or any(c < 0 or c > 255 for c in color):
        raise ValueError(f"{name} must be three values in [0, 255], got {color}")


def _validate_config(config: ScannerConfig) -> None:
    """
    Validate configuration values for logical consistency.

    Raises:
        ValueError: If any configuration value is invalid.
    """
    # Edge map
    ksize = config.edge_map.blur_kernel_size
    if ksize < 1 or ksize % 2 == 0:
        raise ValueError(f"blur_kernel_size must be a positive odd number, got {ksize}")

    if not 0 <= config.edge_map.canny_low < config.edge_map.canny_high:
        raise ValueError(
            f"Canny thresholds must satisfy 0 <= low < high, got "
            f"low={config.edge_map.canny_low}, high={config.edge_map.canny_high}"
        )

    # Contours
    if not 0 < config.contours.approx_epsilon_ratio < 1:
        raise ValueError("approx_epsilon_ratio must be in (0, 1)")

    if not config.contours.strict_vertex_counts:
        raise ValueError("At least one strict vertex count must be defined")

    if any(n < 3 for n in config.contours.strict_vertex_counts):
        raise ValueError("Vertex counts must be at least 3")

    low, high = config.contours.relaxed_vertex_range
    if low < 3 or low > high:
        raise ValueError(
            f"relaxed_vertex_range must satisfy 3 <= min <= max, got ({low}, {high})"
        )

    # Vertices
    if config.vertices.min_corner_distance <= 0:
        raise ValueError("min_corner_distance must be positive")

    # Rectification
    if not 0 <= config.rectification.border_value <= 255:
        raise ValueError("border_value must be in [0, 255]")

    # Preview
    _validate_color("outline_color", config.preview.outline_color)
    _validate_color("contour_color", config.preview.contour_color)
    if config.preview.outline_thickness < 1 or config.preview.contour_thickness < 1:
        raise ValueError("Preview line thickness must be at least 1")

    # Export
    if config.export.page_width_mm <= 0 or config.export.page_height_mm <= 0:
        raise ValueError("Page size must be positive")

    if config.export.dpi < 1:
        raise ValueError("dpi must be at least 1")

    if not 1 <= config.export.jpeg_quality <= 100:
        raise ValueError("jpeg_quality must be in [1, 100]")

    logger.debug("Configuration validation passed")
