from __future__ import annotations

import logging
import random
import threading
import uuid
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from courier.core.config import HTTPSettings, http_settings_from_env
from courier.core.logging import CallLogContext, attempt_context, log_event, redact_string, redact_url

from .errors import (
    CourierDecodeError,
    CourierHTTPError,
    CourierTransportError,
    IncorrectRequestError,
    ResponseWithoutDataError,
)
from .request import Request, RequestDescriptor, RequestType
from .result import CallResult, Failure, Success
from .status import error_from_status
from .transport import classify_transport_error, is_retryable

logger = logging.getLogger(__name__)

T = TypeVar("T")
Completion = Callable[[CallResult[T]], None]

_client: httpx.Client | None = None
_client_lock = threading.Lock()
_networking: Networking | None = None
_networking_lock = threading.Lock()


def _build_timeout(settings: HTTPSettings) -> httpx.Timeout:
    return httpx.Timeout(settings.timeout_s, connect=min(settings.connect_timeout_s, settings.timeout_s))


def build_http_client(settings: HTTPSettings, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    return httpx.Client(timeout=_build_timeout(settings), follow_redirects=False, transport=transport)


def get_http_client() -> httpx.Client:
    """Process-wide transport, configured from the ``COURIER_HTTP_*`` environment."""
    global _client
    if _client is not None:
        return _client

    with _client_lock:
        if _client is None:
            _client = build_http_client(http_settings_from_env())
    return _client


def decode(model: type[T] | Any, data: bytes) -> T:
    return TypeAdapter(model).validate_json(data)


@dataclass
class RetryState:
    max_retries: int
    attempts_so_far: int = 0

    def can_retry(self) -> bool:
        return self.attempts_so_far < self.max_retries

    def advance(self) -> None:
        self.attempts_so_far += 1


class _Completion:
    """Delivers a single result to the caller's handler and ignores any later one."""

    def __init__(self, handler: Completion[Any]) -> None:
        self._handler = handler
        self._fired = False
        self._lock = threading.Lock()

    def __call__(self, result: CallResult[Any]) -> None:
        with self._lock:
            if self._fired:
                logger.error("Dropping duplicate result for an already completed call")
                return
            self._fired = True
        try:
            self._handler(result)
        except Exception:
            logger.exception("Completion handler raised")


@dataclass
class _Call:
    descriptor: RequestDescriptor
    model: Any
    client: httpx.Client | None
    retry: RetryState
    done: _Completion
    log: CallLogContext

    @property
    def safe_url(self) -> str:
        return self.log.url


class Networking:
    """Runs requests on a worker pool and reports each call's outcome to a completion handler.

    A transport failure of a retryable kind is retried up to the request's
    ``max_retries``, each retry being submitted as a fresh task once the previous
    attempt has finished. HTTP status failures are never retried.

    Without explicit ``settings`` calls go through the process-wide
    ``get_http_client()``. With ``settings`` the instance builds and owns a client
    carrying those timeouts. A ``client`` passed here, or per call, wins over both.
    """

    def __init__(
        self,
        executor: Executor | None = None,
        settings: HTTPSettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings or http_settings_from_env()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.settings.workers,
            thread_name_prefix="courier-http",
        )
        self._client = client
        self._owns_client = client is None and settings is not None
        self._client_lock = threading.Lock()

    def get(self, request: Request[T], completion: Completion[T], *, client: httpx.Client | None = None) -> None:
        self.perform(request, RequestType.GET, completion, client=client)

    def post(self, request: Request[T], completion: Completion[T], *, client: httpx.Client | None = None) -> None:
        self.perform(request, RequestType.POST, completion, client=client)

    def delete(self, request: Request[T], completion: Completion[T], *, client: httpx.Client | None = None) -> None:
        self.perform(request, RequestType.DELETE, completion, client=client)

    def upload(self, request: Request[T], completion: Completion[T], *, client: httpx.Client | None = None) -> None:
        self.perform(request, RequestType.UPLOAD, completion, client=client)

    def perform(
        self,
        request: Request[T],
        method: RequestType,
        completion: Completion[T],
        *,
        client: httpx.Client | None = None,
    ) -> None:
        done = _Completion(completion)
        descriptor = request.descriptor(method)
        if descriptor is None:
            log_event(
                logger,
                logging.WARNING,
                "incorrect_request",
                "Incorrect request, endpoint is not a usable URL: %s",
                redact_url(request.endpoint),
                method=method.value,
            )
            done(Failure(IncorrectRequestError(f"Cannot build {method.value} request for endpoint")))
            return

        call = _Call(
            descriptor=descriptor,
            model=request.model,
            client=client,
            retry=RetryState(max_retries=descriptor.max_retries),
            done=done,
            log=CallLogContext(
                call_id=uuid.uuid4().hex[:12],
                method=method.value,
                url=redact_url(descriptor.url),
                attempt=1,
                max_retries=descriptor.max_retries,
            ),
        )
        try:
            self._submit(call)
        except RuntimeError as exc:
            done(Failure(exc))

    def call(
        self,
        request: Request[T],
        method: RequestType = RequestType.GET,
        *,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> CallResult[T]:
        """Blocking variant of ``perform`` for scripts; returns the call's result."""
        finished = threading.Event()
        results: list[CallResult[T]] = []

        def _store(result: CallResult[T]) -> None:
            results.append(result)
            finished.set()

        self.perform(request, method, _store, client=client)
        if not finished.wait(timeout):
            return Failure(CourierHTTPError(f"Call did not complete within {timeout}s"))
        return results[0]

    def client_for(self, call_client: httpx.Client | None = None) -> httpx.Client:
        if call_client is not None:
            return call_client
        if not self._owns_client:
            return self._client if self._client is not None else get_http_client()
        with self._client_lock:
            if self._client is None:
                self._client = build_http_client(self.settings)
            return self._client

    def shutdown(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)
        if self._owns_client:
            with self._client_lock:
                if self._client is not None:
                    self._client.close()
                    self._client = None

    def _submit(self, call: _Call) -> None:
        self._executor.submit(self._attempt, call)

    def _submit_delayed(self, call: _Call) -> None:
        try:
            self._submit(call)
        except RuntimeError as exc:
            call.done(Failure(exc))

    def _schedule_retry(self, call: _Call, delay: float) -> None:
        if delay <= 0:
            self._submit(call)
            return
        timer = threading.Timer(delay, self._submit_delayed, args=(call,))
        timer.daemon = True
        timer.start()

    def _backoff_delay(self, attempts_so_far: int) -> float:
        base = self.settings.backoff_base_s
        if base <= 0:
            return 0.0
        exponent = max(0, attempts_so_far - 1)
        return min(self.settings.backoff_max_s, base * (2**exponent)) * (0.5 + random.random())

    def _attempt(self, call: _Call) -> None:
        with attempt_context(call.log, attempt=call.retry.attempts_so_far + 1):
            try:
                result = self._run_attempt(call)
            except Exception as exc:
                logger.exception(
                    "Unexpected failure calling %s: %s", call.safe_url, redact_string(str(exc)) or exc.__class__.__name__
                )
                result = Failure(exc)
            if result is not None:
                call.done(result)

    def _run_attempt(self, call: _Call) -> CallResult[Any] | None:
        descriptor = call.descriptor
        client = self.client_for(call.client)
        log_event(logger, logging.DEBUG, "attempt", "Sending %s %s", descriptor.method.value, call.safe_url)
        try:
            response = client.request(descriptor.method.value, descriptor.url, content=descriptor.body)
        except httpx.HTTPError as exc:
            return self._transport_failure(call, exc)

        status_error = error_from_status(response.status_code)
        if status_error is not None:
            log_event(
                logger,
                logging.WARNING,
                "status_failure",
                "HTTP status %d for %s",
                response.status_code,
                call.safe_url,
                status_code=response.status_code,
            )
            return Failure(status_error)
        return self._decode_response(call, response)

    def _transport_failure(self, call: _Call, exc: httpx.HTTPError) -> CallResult[Any] | None:
        kind = classify_transport_error(exc)
        detail = redact_string(str(exc)) or exc.__class__.__name__
        if is_retryable(kind) and call.retry.can_retry():
            call.retry.advance()
            delay = self._backoff_delay(call.retry.attempts_so_far)
            log_event(
                logger,
                logging.INFO,
                "retry",
                "Retrying %s after %s (%d/%d)",
                call.safe_url,
                kind.value,
                call.retry.attempts_so_far,
                call.retry.max_retries,
                error_kind=kind.value,
                error=detail,
                delay_s=round(delay, 3),
            )
            self._schedule_retry(call, delay)
            return None

        log_event(
            logger,
            logging.WARNING,
            "transport_failure",
            "HTTP transport error for %s: %s",
            call.safe_url,
            detail,
            error_kind=kind.value,
            retryable=is_retryable(kind),
            exc_type=exc.__class__.__name__,
        )
        error = CourierTransportError(
            f"HTTP transport error for {call.safe_url}: {exc.__class__.__name__}",
            kind=kind,
            original=exc,
        )
        error.__cause__ = exc
        return Failure(error)

    def _decode_response(self, call: _Call, response: httpx.Response) -> CallResult[Any]:
        data = response.content
        if not data:
            log_event(
                logger,
                logging.WARNING,
                "empty_body",
                "Empty response body for %s",
                call.safe_url,
                status_code=response.status_code,
            )
            return Failure(ResponseWithoutDataError(f"Response without data for {call.safe_url}"))
        try:
            value = decode(call.model, data)
        except ValidationError as exc:
            log_event(
                logger,
                logging.WARNING,
                "decode_failure",
                "Cannot decode response from %s: %d error(s)",
                call.safe_url,
                exc.error_count(),
                status_code=response.status_code,
                body_bytes=len(data),
            )
            error = CourierDecodeError(f"Cannot decode response from {call.safe_url}")
            error.__cause__ = exc
            return Failure(error)
        return Success(value)


def get_networking() -> Networking:
    global _networking
    if _networking is not None:
        return _networking

    with _networking_lock:
        if _networking is None:
            _networking = Networking()
    return _networking


def set_networking(networking: Networking | None) -> None:
    global _networking
    with _networking_lock:
        _networking = networking
