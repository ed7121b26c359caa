# tests/test_logger.py
"""Unit tests for the logging setup."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging
from app.utils import logger as log_setup


class TestRotatingFileHandler:
    def test_writes_to_file_in_log_dir(self, tmp_path):
        handler = log_setup.rotating_file_handler(str(tmp_path / "logs"), "registry.log", "INFO")
        try:
            record = logging.makeLogRecord({"name": "test", "levelno": logging.INFO,
                                            "levelname": "INFO", "msg": "admitted AAA111"})
            handler.emit(record)
            handler.flush()
        finally:
            handler.close()

        content = (tmp_path / "logs" / "registry.log").read_text(encoding="utf-8")
        assert "| INFO     | test | admitted AAA111" in content

    def test_unwritable_dir_returns_none(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        assert log_setup.rotating_file_handler(str(blocker / "logs"), "registry.log", "INFO") is None


class TestGetLogger:
    def test_admissions_logger_name_matches_registry_module(self):
        from app.services import vehicle_service
        assert vehicle_service.logger.name == log_setup.ADMISSIONS_LOGGER
