"""
Logging setup for command line entry points.

Library modules only create named loggers; configuring handlers is left
to the application.
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Union[int, str] = "INFO", log_file: Optional[Path] = None
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name or number.
        log_file: Optional file to write logs to, in addition to stderr.
    """
    if isinstance(level, str):
        level = level.upper()

    handlers = [logging.StreamHandler()]
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
