from __future__ import annotations

import socket

import httpx
import pytest

from courier.core.http import RETRYABLE_ERROR_KINDS, TransportErrorKind, classify_transport_error, is_retryable


def _connect_error_caused_by(cause: BaseException) -> httpx.ConnectError:
    exc = httpx.ConnectError(str(cause))
    exc.__cause__ = cause
    return exc


def test_retryable_set_is_closed() -> None:
    assert RETRYABLE_ERROR_KINDS == {
        TransportErrorKind.TIMED_OUT,
        TransportErrorKind.CANNOT_FIND_HOST,
        TransportErrorKind.CANNOT_CONNECT_TO_HOST,
        TransportErrorKind.CONNECTION_LOST,
        TransportErrorKind.DNS_LOOKUP_FAILED,
    }
    assert is_retryable(TransportErrorKind.OTHER) is False


@pytest.mark.parametrize(
    "exc",
    [httpx.ConnectTimeout("t"), httpx.ReadTimeout("t"), httpx.WriteTimeout("t"), httpx.PoolTimeout("t")],
)
def test_timeouts(exc: httpx.HTTPError) -> None:
    assert classify_transport_error(exc) is TransportErrorKind.TIMED_OUT


def test_unknown_host_from_resolver_error() -> None:
    exc = _connect_error_caused_by(socket.gaierror(socket.EAI_NONAME, "Name or service not known"))

    assert classify_transport_error(exc) is TransportErrorKind.CANNOT_FIND_HOST


def test_resolver_failure_is_dns_lookup_failed() -> None:
    exc = _connect_error_caused_by(socket.gaierror(socket.EAI_AGAIN, "Temporary failure in name resolution"))

    assert classify_transport_error(exc) is TransportErrorKind.DNS_LOOKUP_FAILED


@pytest.mark.parametrize(
    ("message", "kind"),
    [
        ("[Errno -2] Name or service not known", TransportErrorKind.CANNOT_FIND_HOST),
        ("[Errno 8] nodename nor servname provided, or not known", TransportErrorKind.CANNOT_FIND_HOST),
        ("[Errno -3] Temporary failure in name resolution", TransportErrorKind.DNS_LOOKUP_FAILED),
        ("[Errno 111] Connection refused", TransportErrorKind.CANNOT_CONNECT_TO_HOST),
        ("[Errno 113] No route to host", TransportErrorKind.CANNOT_CONNECT_TO_HOST),
    ],
)
def test_connect_errors_by_message(message: str, kind: TransportErrorKind) -> None:
    assert classify_transport_error(httpx.ConnectError(message)) is kind


@pytest.mark.parametrize(
    "exc",
    [httpx.ReadError("r"), httpx.WriteError("w"), httpx.CloseError("c"), httpx.RemoteProtocolError("p")],
)
def test_dropped_connections_are_connection_lost(exc: httpx.HTTPError) -> None:
    assert classify_transport_error(exc) is TransportErrorKind.CONNECTION_LOST


@pytest.mark.parametrize(
    "exc",
    [
        httpx.UnsupportedProtocol("u"),
        httpx.LocalProtocolError("l"),
        httpx.ProxyError("p"),
        httpx.TooManyRedirects("r"),
        httpx.DecodingError("d"),
    ],
)
def test_other_errors_are_not_retryable(exc: httpx.HTTPError) -> None:
    kind = classify_transport_error(exc)

    assert kind is TransportErrorKind.OTHER
    assert is_retryable(kind) is False


@pytest.mark.parametrize(
    "message",
    [
        "[Errno 111] Connection refused (dns.example.com)",
        "[Errno 113] No route to host: dnsmasq.internal",
    ],
)
def test_hostnames_mentioning_dns_are_not_resolver_failures(message: str) -> None:
    assert classify_transport_error(httpx.ConnectError(message)) is TransportErrorKind.CANNOT_CONNECT_TO_HOST


def test_gaierror_is_a_resolver_failure_whatever_its_text() -> None:
    exc = _connect_error_caused_by(socket.gaierror(socket.EAI_FAIL, "Non-recoverable failure in resolution"))

    assert classify_transport_error(exc) is TransportErrorKind.DNS_LOOKUP_FAILED
