"""
Capture session: captured pages, acquisition sources and PDF export.
"""

from docscan.session.capture import FileImageSource, ImageSource, ScanSession
from docscan.session.export import assemble_pdf, save_pdf
from docscan.session.types import DocumentPhoto

__all__ = [
    "ScanSession",
    "ImageSource",
    "FileImageSource",
    "DocumentPhoto",
    "assemble_pdf",
    "save_pdf",
]
