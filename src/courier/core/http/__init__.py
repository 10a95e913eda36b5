from .client import Networking, RetryState, build_http_client, decode, get_http_client, get_networking, set_networking
from .errors import (
    CourierDecodeError,
    CourierHTTPError,
    CourierStatusError,
    CourierTransportError,
    IncorrectRequestError,
    ResponseWithoutDataError,
)
from .request import MAX_RETRIES_CEILING, Request, RequestDescriptor, RequestType
from .result import CallResult, Failure, Success
from .status import StatusCode, StatusFamily, StatusOutcome, classify, error_from_status, family_of
from .transport import RETRYABLE_ERROR_KINDS, TransportErrorKind, classify_transport_error, is_retryable

__all__ = [
    "Networking",
    "RetryState",
    "build_http_client",
    "decode",
    "get_http_client",
    "get_networking",
    "set_networking",
    "CourierHTTPError",
    "CourierTransportError",
    "CourierStatusError",
    "CourierDecodeError",
    "IncorrectRequestError",
    "ResponseWithoutDataError",
    "MAX_RETRIES_CEILING",
    "Request",
    "RequestDescriptor",
    "RequestType",
    "CallResult",
    "Success",
    "Failure",
    "StatusCode",
    "StatusFamily",
    "StatusOutcome",
    "classify",
    "error_from_status",
    "family_of",
    "RETRYABLE_ERROR_KINDS",
    "TransportErrorKind",
    "classify_transport_error",
    "is_retryable",
]
