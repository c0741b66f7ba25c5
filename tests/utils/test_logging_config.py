"""
Tests for logging setup.
"""

import logging

import pytest

from docscan.utils.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def test_level_name_case_insensitive(restore_root_logger):
    setup_logging("debug")
    assert restore_root_logger.level == logging.DEBUG


def test_log_file_written(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "scan.log"
    setup_logging("INFO", log_file=log_file)

    logging.getLogger("docscan.test").info("captured page")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert "captured page" in log_file.read_text(encoding="utf-8")
