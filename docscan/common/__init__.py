"""
Common types shared across the scanner and the capture session.
"""

from docscan.common.types import ImageBuffer, Point

__all__ = ["ImageBuffer", "Point"]
