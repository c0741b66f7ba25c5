"""
Shared Utilities

Image codec helpers and logging setup.
"""

from docscan.utils.image_io import (
    ImageDecodeError,
    decode_image,
    encode_image,
)
from docscan.utils.logging_config import setup_logging

__all__ = [
    "ImageDecodeError",
    "decode_image",
    "encode_image",
    "setup_logging",
]
