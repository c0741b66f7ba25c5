"""
Image codec utilities.

Decodes captured images (raw bytes or base64 data URLs) into the BGR
numpy arrays the scanner works on, and encodes previews back to bytes.
"""

import base64
import binascii
import logging
import re
from typing import Union

import cv2
import numpy as np

logger = logging.getLogger(__name__)

_DATA_URL = re.compile(r"^data:image/[\w.+-]+;base64,", re.IGNORECASE)


class ImageDecodeError(ValueError):
    """Raised when encoded image data cannot be turned into a raster."""


def _to_bytes(data: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)

    if not isinstance(data, str):
        raise ImageDecodeError(f"Expected bytes or str, got {type(data)}")

    payload = _DATA_URL.sub("", data.strip(), count=1)
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image data: {e}") from e


def decode_image(data: Union[bytes, bytearray, str]) -> np.ndarray:
    """
    Decode an encoded image into a BGR uint8 array.

    Args:
        data: Encoded image bytes (PNG, JPEG, ...), a ``data:image/...;base64,``
              URL, or a bare base64 string.

    Returns:
        Image array of shape (H, W, 3).

    Raises:
        ImageDecodeError: If the data is empty or not a decodable image.
    """
    raw = _to_bytes(data)
    if not raw:
        raise ImageDecodeError("Image data is empty")

    buffer = np.frombuffer(raw, dtype=np.uint8)
    try:
        image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    except cv2.error as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e

    if image is None:
        raise ImageDecodeError(f"Could not decode image ({len(raw)} bytes)")

    logger.debug(f"Decoded image {image.shape[1]}x{image.shape[0]}")
    return image


def encode_image(image: np.ndarray, ext: str = ".png") -> bytes:
    """
    Encode an image array.

    Args:
        image: Image array.
        ext: Target format extension understood by cv2.imencode.

    Returns:
        Encoded bytes.

    Raises:
        ValueError: If OpenCV cannot encode the image.
    """
    ok, encoded = cv2.imencode(ext, image)
    if not ok:
        raise ValueError(f"Could not encode image as {ext}")
    return encoded.tobytes()
