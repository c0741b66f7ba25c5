"""
Document assembly: lays out rectified pages into a multi-page PDF.
"""

import io
import logging
from pathlib import Path
from typing import Optional, Sequence

import cv2
import numpy as np
from PIL import Image

from docscan.scanner.types import ExportConfig

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_CONFIG = ExportConfig(
    page_width_mm=210.0,
    page_height_mm=297.0,
    dpi=150,
    jpeg_quality=95,
)


def _to_pil(page: np.ndarray) -> Image.Image:
    if page.ndim == 2:
        rgb = cv2.cvtColor(page, cv2.COLOR_GRAY2RGB)
    elif page.shape[2] == 4:
        rgb = cv2.cvtColor(page, cv2.COLOR_BGRA2RGB)
    elif page.shape[2] == 1:
        rgb = cv2.cvtColor(page[:, :, 0], cv2.COLOR_GRAY2RGB)
    else:
        rgb = cv2.cvtColor(page, cv2.COLOR_BGR2RGB)
    return Image.fromarray(rgb)


def assemble_pdf(
    pages: Sequence[np.ndarray], config: Optional[ExportConfig] = None
) -> Optional[bytes]:
    """
    Build a PDF with one page per image.

    Every image is stretched to fill the fixed page size, so the page
    geometry does not depend on the rectified image size.

    Args:
        pages: BGR (or grayscale/BGRA) images in page order.
        config: Page size, resolution and JPEG quality. Defaults to A4 at 150 dpi.

    Returns:
        PDF bytes, or None when there are no pages.
    """
    if not pages:
        logger.info("No pages to assemble")
        return None

    config = config or DEFAULT_EXPORT_CONFIG
    page_size = config.page_size_px

    images = [
        _to_pil(page).resize(page_size, Image.Resampling.LANCZOS) for page in pages
    ]

    buffer = io.BytesIO()
    images[0].save(
        buffer,
        format="PDF",
        save_all=True,
        append_images=images[1:],
        resolution=float(config.dpi),
        quality=config.jpeg_quality,
    )

    logger.info(
        f"Assembled {len(images)}-page PDF at {page_size[0]}x{page_size[1]} px/page"
    )
    return buffer.getvalue()


def save_pdf(data: bytes, path: Path) -> Path:
    """Write PDF bytes to disk, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info(f"Saved document to {path}")
    return path
