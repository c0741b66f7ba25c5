"""
Capture session: the ordered collection of captured pages.

Each capture runs decode -> detect -> preview synchronously and puts the
new page at the front of the collection. Appends are not thread-safe;
callers that capture concurrently must serialize calls to ``capture``.
"""

import logging
from pathlib import Path
from typing import List, Optional, Protocol, Tuple

import numpy as np

from docscan.scanner.processor import DocumentScanner
from docscan.session.export import assemble_pdf
from docscan.session.types import DocumentPhoto, EncodedImage
from docscan.utils.image_io import decode_image, encode_image

logger = logging.getLogger(__name__)


class ImageSource(Protocol):
    """Anything that can hand over one encoded image (camera, file picker, ...)."""

    def acquire(self) -> EncodedImage:
        ...


class FileImageSource:
    """Reads an encoded image from disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def acquire(self) -> bytes:
        if not self.path.exists():
            raise FileNotFoundError(f"Image not found: {self.path}")
        return self.path.read_bytes()

    def __repr__(self) -> str:
        return f"FileImageSource({self.path})"


class ScanSession:
    """
    Ordered collection of captured pages, most recent first.

    Example:
        >>> session = ScanSession()
        >>> session.take_photo(FileImageSource("page1.jpg"))
        >>> session.take_photo(FileImageSource("page2.jpg"))
        >>> pdf = session.export_pdf()  # page2 first, then page1
    """

    def __init__(self, scanner: Optional[DocumentScanner] = None):
        """
        Args:
            scanner: Scanner used for detection, preview and export.
                     Defaults to one built from the default configuration.
        """
        self.scanner = scanner if scanner is not None else DocumentScanner()
        self._photos: List[DocumentPhoto] = []

    @property
    def photos(self) -> Tuple[DocumentPhoto, ...]:
        """Captured pages, most recent first."""
        return tuple(self._photos)

    def __len__(self) -> int:
        return len(self._photos)

    def capture(self, raw: EncodedImage, debug_overlay: bool = False) -> DocumentPhoto:
        """
        Detect the document in an encoded image and add it to the session.

        Args:
            raw: Encoded image bytes or base64 data URL.
            debug_overlay: Draw all traced contours in the preview.

        Returns:
            The new DocumentPhoto, now first in ``photos``.

        Raises:
            ImageDecodeError: If ``raw`` cannot be decoded. The session is
                              left unchanged.
        """
        image = decode_image(raw)
        corners = self.scanner.detect(image)

        if corners is None:
            logger.warning("No document outline found, page will be kept as captured")

        preview = self.scanner.render_preview(image, corners, debug_overlay)
        photo = DocumentPhoto(raw=raw, corners=corners, preview=encode_image(preview))

        self._photos.insert(0, photo)
        logger.info(f"Captured page ({len(self._photos)} in session)")
        return photo

    def take_photo(self, source: ImageSource, debug_overlay: bool = False) -> DocumentPhoto:
        """Acquire an image from ``source`` and capture it."""
        return self.capture(source.acquire(), debug_overlay)

    def clear(self) -> None:
        """Discard every captured page."""
        logger.info(f"Clearing {len(self._photos)} captured pages")
        self._photos = []

    def rectified_pages(self) -> List[np.ndarray]:
        """
        Rectify every page from its stored raw image and corners.

        Nothing is cached: each call decodes and warps again. Stored photos
        are not modified.
        """
        return [
            self.scanner.rectify(decode_image(photo.raw), photo.corners)
            for photo in self._photos
        ]

    def export_pdf(self) -> Optional[bytes]:
        """
        Assemble all pages into a PDF, most recent capture first.

        Returns:
            PDF bytes, or None if the session is empty.
        """
        if not self._photos:
            logger.info("Session is empty, nothing to export")
            return None

        return assemble_pdf(self.rectified_pages(), self.scanner.config.export)
