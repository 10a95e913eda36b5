from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Iterator


@dataclass(frozen=True)
class CallLogContext:
    """Identity of the HTTP call a log record belongs to."""

    call_id: str
    method: str
    url: str
    attempt: int
    max_retries: int

    def as_fields(self) -> dict[str, object]:
        return {
            "call_id": self.call_id,
            "method": self.method,
            "url": self.url,
            "attempt": self.attempt,
            "max_retries": self.max_retries,
        }


_current_call: ContextVar[CallLogContext | None] = ContextVar("courier_call", default=None)


@contextmanager
def call_context(context: CallLogContext) -> Iterator[CallLogContext]:
    token = _current_call.set(context)
    try:
        yield context
    finally:
        _current_call.reset(token)


@contextmanager
def attempt_context(context: CallLogContext, attempt: int) -> Iterator[CallLogContext]:
    with call_context(replace(context, attempt=attempt)) as current:
        yield current


def current_call() -> CallLogContext | None:
    return _current_call.get()
