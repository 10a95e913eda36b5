from __future__ import annotations

from typing import TYPE_CHECKING

from .transport import TransportErrorKind, is_retryable

if TYPE_CHECKING:
    import httpx

    from .status import StatusCode


class CourierHTTPError(RuntimeError):
    """Base error for every failure delivered through a call result."""


class IncorrectRequestError(CourierHTTPError):
    """The endpoint could not be turned into a request; the transport was never used."""


class CourierTransportError(CourierHTTPError):
    def __init__(self, message: str, kind: TransportErrorKind, original: httpx.HTTPError) -> None:
        super().__init__(message)
        self.kind = kind
        self.original = original

    @property
    def retryable(self) -> bool:
        return is_retryable(self.kind)


class CourierStatusError(CourierHTTPError):
    def __init__(self, message: str, status_code: StatusCode) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResponseWithoutDataError(CourierHTTPError):
    """Raised when a successful status arrives with an empty body."""


class CourierDecodeError(CourierHTTPError):
    """The body could not be decoded into the requested model."""
