from __future__ import annotations

import socket
from enum import Enum

import httpx


class TransportErrorKind(str, Enum):
    TIMED_OUT = "timed_out"
    CANNOT_FIND_HOST = "cannot_find_host"
    CANNOT_CONNECT_TO_HOST = "cannot_connect_to_host"
    CONNECTION_LOST = "connection_lost"
    DNS_LOOKUP_FAILED = "dns_lookup_failed"
    OTHER = "other"


RETRYABLE_ERROR_KINDS: frozenset[TransportErrorKind] = frozenset(
    {
        TransportErrorKind.TIMED_OUT,
        TransportErrorKind.CANNOT_FIND_HOST,
        TransportErrorKind.CANNOT_CONNECT_TO_HOST,
        TransportErrorKind.CONNECTION_LOST,
        TransportErrorKind.DNS_LOOKUP_FAILED,
    }
)

_UNKNOWN_HOST_MARKERS = (
    "name or service not known",
    "nodename nor servname provided",
    "no address associated with hostname",
    "getaddrinfo failed",
)
_RESOLVER_FAILURE_MARKERS = (
    "temporary failure in name resolution",
    "name resolution",
    "dns lookup failed",
)
_CONNECTION_LOST_ERRORS = (httpx.ReadError, httpx.WriteError, httpx.CloseError, httpx.RemoteProtocolError)


def _cause_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__
    return chain


def _classify_connect_error(exc: httpx.ConnectError) -> TransportErrorKind:
    chain = _cause_chain(exc)
    for link in chain:
        if isinstance(link, socket.gaierror):
            if link.errno in {socket.EAI_NONAME, getattr(socket, "EAI_NODATA", socket.EAI_NONAME)}:
                return TransportErrorKind.CANNOT_FIND_HOST
            return TransportErrorKind.DNS_LOOKUP_FAILED

    message = " ".join(str(link) for link in chain).casefold()
    if any(marker in message for marker in _UNKNOWN_HOST_MARKERS):
        return TransportErrorKind.CANNOT_FIND_HOST
    if any(marker in message for marker in _RESOLVER_FAILURE_MARKERS):
        return TransportErrorKind.DNS_LOOKUP_FAILED
    return TransportErrorKind.CANNOT_CONNECT_TO_HOST


def classify_transport_error(exc: httpx.HTTPError) -> TransportErrorKind:
    if isinstance(exc, httpx.TimeoutException):
        return TransportErrorKind.TIMED_OUT
    if isinstance(exc, httpx.ConnectError):
        return _classify_connect_error(exc)
    if isinstance(exc, _CONNECTION_LOST_ERRORS):
        return TransportErrorKind.CONNECTION_LOST
    return TransportErrorKind.OTHER


def is_retryable(kind: TransportErrorKind) -> bool:
    return kind in RETRYABLE_ERROR_KINDS
