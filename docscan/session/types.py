"""
Data types for the capture session.
"""

from dataclasses import dataclass
from typing import Union

from docscan.scanner.types import DetectionResult

EncodedImage = Union[bytes, str]


@dataclass(frozen=True)
class DocumentPhoto:
    """
    One captured page.

    The detection result is computed once at capture time and never changes.
    The rectified page is not stored: it is recomputed from ``raw`` and
    ``corners`` whenever the document is exported.

    Attributes:
        raw: Encoded image as captured (bytes or base64 data URL).
        corners: Detected document corners, or None if detection missed.
        preview: PNG-encoded preview with the detected outline drawn.
    """

    raw: EncodedImage
    corners: DetectionResult
    preview: bytes

    @property
    def has_document(self) -> bool:
        """Whether a document outline was detected."""
        return self.corners is not None
