from __future__ import annotations

"""Configuration loader for the courier HTTP client."""

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

_DEFAULT_TIMEOUT_S = 15.0
_DEFAULT_CONNECT_TIMEOUT_S = 5.0
_DEFAULT_BACKOFF_BASE_S = 0.0
_DEFAULT_BACKOFF_MAX_S = 2.0
_DEFAULT_WORKERS = 8


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class HTTPSettings(BaseModel):
    timeout_s: float = _DEFAULT_TIMEOUT_S
    connect_timeout_s: float = _DEFAULT_CONNECT_TIMEOUT_S
    backoff_base_s: float = _DEFAULT_BACKOFF_BASE_S
    backoff_max_s: float = _DEFAULT_BACKOFF_MAX_S
    workers: int = _DEFAULT_WORKERS

    @field_validator("timeout_s", "connect_timeout_s")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        return max(0.1, value)

    @field_validator("backoff_base_s", "backoff_max_s")
    @classmethod
    def _non_negative_backoff(cls, value: float) -> float:
        return max(0.0, value)

    @field_validator("workers")
    @classmethod
    def _at_least_one_worker(cls, value: int) -> int:
        return max(1, value)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    to_file: bool = False
    dir: Optional[str] = None
    max_bytes: int = 5_000_000
    backup_count: int = 5
    stream: Literal["stdout", "stderr"] = "stdout"


class CourierConfig(BaseModel):
    http: HTTPSettings = Field(default_factory=HTTPSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def http_settings_from_env() -> HTTPSettings:
    return HTTPSettings(
        timeout_s=_get_float_env("COURIER_HTTP_TIMEOUT_S", _DEFAULT_TIMEOUT_S),
        connect_timeout_s=_get_float_env("COURIER_HTTP_CONNECT_TIMEOUT_S", _DEFAULT_CONNECT_TIMEOUT_S),
        backoff_base_s=_get_float_env("COURIER_HTTP_BACKOFF_BASE_S", _DEFAULT_BACKOFF_BASE_S),
        backoff_max_s=_get_float_env("COURIER_HTTP_BACKOFF_MAX_S", _DEFAULT_BACKOFF_MAX_S),
        workers=_get_int_env("COURIER_HTTP_WORKERS", _DEFAULT_WORKERS),
    )


def logging_settings_from_env() -> LoggingSettings:
    return LoggingSettings(
        level=os.getenv("COURIER_LOG_LEVEL", "INFO"),
        to_file=os.getenv("COURIER_LOG_TO_FILE", "off").strip().casefold() == "on",
        dir=os.getenv("COURIER_LOG_DIR") or None,
        max_bytes=_get_int_env("COURIER_LOG_MAX_BYTES", 5_000_000),
        backup_count=_get_int_env("COURIER_LOG_BACKUP_COUNT", 5),
        stream="stderr" if os.getenv("COURIER_LOG_STREAM", "stdout").strip().casefold() == "stderr" else "stdout",
    )


def load_config(path: Optional[str | Path] = None) -> CourierConfig:
    """Load and validate configuration from a YAML file, falling back to the environment."""
    if path is None:
        return CourierConfig(http=http_settings_from_env(), logging=logging_settings_from_env())
    cfg_path = Path(path)
    with cfg_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return CourierConfig.model_validate(data)
