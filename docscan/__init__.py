"""
docscan: document boundary detection and perspective rectification.

Finds the quadrilateral outline of a document in a photograph, warps it
to a top-down page and assembles captured pages into a PDF.
"""

from docscan.scanner import DocumentScanner, QuadCorners, detect_document, rectify
from docscan.session import DocumentPhoto, ScanSession

__version__ = "0.1.0"

__all__ = [
    "DocumentScanner",
    "QuadCorners",
    "detect_document",
    "rectify",
    "DocumentPhoto",
    "ScanSession",
]
