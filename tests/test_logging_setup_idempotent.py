from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler

from courier.core.config import LoggingSettings
from courier.core.logging.setup import configure_logging


def test_configure_logging_is_idempotent(monkeypatch) -> None:
    monkeypatch.setenv("COURIER_LOG_TO_FILE", "off")

    logger = logging.getLogger("courier")
    logger.handlers = []

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    assert first_count == 1
    assert len(logger.handlers) == first_count
    assert logger.propagate is False


def test_file_rotation_configured(tmp_path) -> None:
    logger = logging.getLogger("courier")
    logger.handlers = []
    settings = LoggingSettings(level="DEBUG", to_file=True, dir=str(tmp_path), max_bytes=1024, backup_count=2)

    configure_logging(settings)
    configure_logging(settings)

    file_handlers = [handler for handler in logger.handlers if isinstance(handler, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename == str(tmp_path / "courier.log")
    assert file_handlers[0].maxBytes == 1024
    assert file_handlers[0].backupCount == 2
    assert logger.level == logging.DEBUG


def test_file_logging_can_be_disabled_explicitly(tmp_path) -> None:
    logger = logging.getLogger("courier")
    logger.handlers = []

    configure_logging(LoggingSettings(to_file=False, dir=str(tmp_path)))

    assert not any(isinstance(handler, RotatingFileHandler) for handler in logger.handlers)
    assert not (tmp_path / "courier.log").exists()


def test_stream_is_chosen_from_settings() -> None:
    logger = logging.getLogger("courier")
    logger.handlers = []

    configure_logging(LoggingSettings(stream="stderr"))

    streams = [handler.stream for handler in logger.handlers if isinstance(handler, logging.StreamHandler)]
    assert streams == [sys.stderr]


def test_unknown_level_falls_back_to_info() -> None:
    logger = configure_logging(LoggingSettings(level="chatty"))

    assert logger.level == logging.INFO
