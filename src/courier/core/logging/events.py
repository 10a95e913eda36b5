from __future__ import annotations

import logging

EVENT_KEY = "event"


def log_event(logger: logging.Logger, level: int, event: str, msg: str, *args: object, **fields: object) -> None:
    """Log ``msg`` with a machine-readable ``event`` name and typed ``fields``.

    The fields travel as ``extra_fields`` and are rendered as top-level keys by
    ``JSONFormatter``.
    """
    if not logger.isEnabledFor(level):
        return
    extra_fields = {EVENT_KEY: event, **fields}
    logger.log(level, msg, *args, extra={"extra_fields": extra_fields})
