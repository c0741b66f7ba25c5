"""
Command line entry point.

Captures each input image into a session, writes the previews and
assembles the rectified pages into a PDF.
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from docscan.scanner.config_loader import DEFAULT_CONFIG_PATH, load_config
from docscan.scanner.processor import DocumentScanner
from docscan.session.capture import FileImageSource, ScanSession
from docscan.session.export import save_pdf
from docscan.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detect and rectify documents in photos, then assemble a PDF",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("images", nargs="+", type=Path, help="Input photos")
    parser.add_argument(
        "--output", type=Path, default=Path("document.pdf"), help="PDF output path"
    )
    parser.add_argument(
        "--preview-dir", type=Path, default=None, help="Directory for preview PNGs"
    )
    parser.add_argument(
        "--debug-overlay",
        action="store_true",
        help="Draw every traced contour in the previews",
    )
    parser.add_argument(
        "--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Scanner config file"
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser


def run(args: argparse.Namespace) -> int:
    """Run a scan session for the parsed arguments. Returns the exit status."""
    scanner = DocumentScanner(config=load_config(args.config))
    session = ScanSession(scanner)

    for path in args.images:
        photo = session.take_photo(FileImageSource(path), args.debug_overlay)
        status = "document found" if photo.has_document else "no document"
        logger.info(f"{path}: {status}")

        if args.preview_dir is not None:
            args.preview_dir.mkdir(parents=True, exist_ok=True)
            (args.preview_dir / f"{path.stem}_preview.png").write_bytes(photo.preview)

    pdf = session.export_pdf()
    if pdf is None:
        logger.warning("No pages captured, no PDF written")
        return 1

    save_pdf(pdf, args.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        return run(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Scan failed: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error during scan: {e}")
        raise


if __name__ == "__main__":
    raise SystemExit(main())
