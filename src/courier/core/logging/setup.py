from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from courier.core.config import LoggingSettings, logging_settings_from_env

from .json_formatter import JSONFormatter

_LOGGER_NAME = "courier"
_HANDLER_ROLE_ATTR = "_courier_handler_role"
_DEFAULT_LOG_DIR = Path.home() / ".courier" / "logs"


def _parse_level(raw: str) -> int:
    return getattr(logging, raw.strip().upper(), logging.INFO)


def _handler_with_role(logger: logging.Logger, role: str) -> logging.Handler | None:
    for handler in logger.handlers:
        if getattr(handler, _HANDLER_ROLE_ATTR, None) == role:
            return handler
    return None


def _ensure_stream_handler(logger: logging.Logger, stream_name: str) -> None:
    role = f"stream:{stream_name}"
    if _handler_with_role(logger, role) is not None:
        return
    handler = logging.StreamHandler(stream=sys.stderr if stream_name == "stderr" else sys.stdout)
    handler.setFormatter(JSONFormatter())
    setattr(handler, _HANDLER_ROLE_ATTR, role)
    logger.addHandler(handler)


def _ensure_file_handler(logger: logging.Logger, settings: LoggingSettings) -> Path:
    log_dir = Path(settings.dir) if settings.dir else _DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / "courier.log"
    role = f"file:{log_path}"
    if _handler_with_role(logger, role) is None:
        handler = RotatingFileHandler(
            filename=log_path,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(JSONFormatter())
        setattr(handler, _HANDLER_ROLE_ATTR, role)
        logger.addHandler(handler)
    return log_path


def configure_logging(settings: LoggingSettings | None = None) -> logging.Logger:
    """Attach JSON handlers to the ``courier`` logger; safe to call repeatedly."""
    settings = settings or logging_settings_from_env()
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(_parse_level(settings.level))
    logger.propagate = False

    _ensure_stream_handler(logger, settings.stream)
    if settings.to_file:
        _ensure_file_handler(logger, settings)
    return logger
