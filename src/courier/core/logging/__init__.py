from .context import CallLogContext, attempt_context, call_context, current_call
from .events import log_event
from .redact import redact_string, redact_url
from .setup import configure_logging

__all__ = [
    "CallLogContext",
    "attempt_context",
    "call_context",
    "current_call",
    "configure_logging",
    "log_event",
    "redact_string",
    "redact_url",
]
