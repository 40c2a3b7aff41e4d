# tests/test_logger.py
"""Unit tests for the logging setup."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging
from logging.handlers import RotatingFileHandler

from fleetseed.utils.logger import LOG_FILE, get_logger


class TestLogger:
    def test_named_logger(self):
        assert get_logger("fleetseed.test").name == "fleetseed.test"

    def test_http_client_request_lines_are_quiet(self):
        get_logger("fleetseed.test")
        assert logging.getLogger("httpx").getEffectiveLevel() >= logging.WARNING
        assert logging.getLogger("httpcore").getEffectiveLevel() >= logging.WARNING

    def test_rotating_file_handler_installed_once(self):
        get_logger("a")
        get_logger("b")
        handlers = [
            h for h in logging.getLogger().handlers
            if isinstance(h, RotatingFileHandler) and h.baseFilename.endswith(LOG_FILE)
        ]
        assert len(handlers) == 1
