from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from .errors import CourierStatusError


class StatusCode(IntEnum):
    # Informational
    CONTINUE = 100
    SWITCHING_PROTOCOLS = 101
    PROCESSING = 102

    # Success
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NON_AUTHORITATIVE_INFORMATION = 203
    NO_CONTENT = 204
    RESET_CONTENT = 205
    PARTIAL_CONTENT = 206
    MULTI_STATUS = 207
    ALREADY_REPORTED = 208
    IM_USED = 209

    # Redirection
    MULTIPLE_CHOICES = 300
    MOVED_PERMANENTLY = 301
    FOUND = 302
    SEE_OTHER = 303
    NOT_MODIFIED = 304
    USE_PROXY = 305
    SWITCH_PROXY = 306
    TEMPORARY_REDIRECT = 307
    PERMANENT_REDIRECT = 308

    # Client error
    BAD_REQUEST = 400
    UNAUTHORISED = 401
    PAYMENT_REQUIRED = 402
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    NOT_ACCEPTABLE = 406
    PROXY_AUTHENTICATION_REQUIRED = 407
    REQUEST_TIMEOUT = 408
    CONFLICT = 409
    GONE = 410
    LENGTH_REQUIRED = 411
    PRECONDITION_FAILED = 412
    REQUEST_ENTITY_TOO_LARGE = 413
    REQUEST_URI_TOO_LONG = 414
    UNSUPPORTED_MEDIA_TYPE = 415
    REQUESTED_RANGE_NOT_SATISFIABLE = 416
    EXPECTATION_FAILED = 417
    IM_A_TEAPOT = 418
    AUTHENTICATION_TIMEOUT = 419
    METHOD_FAILURE = 420
    MISDIRECTED_REQUEST = 421
    UNPROCESSABLE_ENTITY = 422
    LOCKED = 423
    FAILED_DEPENDENCY = 424
    UNORDERED_COLLECTION = 425
    UPGRADE_REQUIRED = 426
    PRECONDITION_REQUIRED = 428
    TOO_MANY_REQUESTS = 429
    REQUEST_HEADER_FIELDS_TOO_LARGE = 431
    NO_RESPONSE = 444
    RETRY_WITH = 449
    BLOCKED_BY_WINDOWS_PARENTAL_CONTROLS = 450
    UNAVAILABLE_FOR_LEGAL_REASONS = 451

    # Server error
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504
    HTTP_VERSION_NOT_SUPPORTED = 505
    VARIANT_ALSO_NEGOTIATES = 506
    INSUFFICIENT_STORAGE = 507
    LOOP_DETECTED = 508
    BANDWIDTH_LIMIT_EXCEEDED = 509
    NOT_EXTENDED = 510
    NETWORK_AUTHENTICATION_REQUIRED = 511
    CONNECTION_TIMED_OUT = 522
    NETWORK_READ_TIMEOUT = 598
    NETWORK_CONNECT_TIMEOUT = 599

    @property
    def is_informational(self) -> bool:
        return self.value // 100 == 1

    @property
    def is_success(self) -> bool:
        return self.value // 100 == 2

    @property
    def is_redirection(self) -> bool:
        return self.value // 100 == 3

    @property
    def is_client_error(self) -> bool:
        return self.value // 100 == 4

    @property
    def is_server_error(self) -> bool:
        return self.value // 100 == 5

    @classmethod
    def lookup(cls, code: int) -> StatusCode | None:
        try:
            return cls(code)
        except ValueError:
            return None


class StatusFamily(str, Enum):
    INFORMATIONAL = "informational"
    SUCCESS = "success"
    REDIRECTION = "redirection"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    UNRECOGNIZED = "unrecognized"


_FAMILIES: dict[int, StatusFamily] = {
    1: StatusFamily.INFORMATIONAL,
    2: StatusFamily.SUCCESS,
    3: StatusFamily.REDIRECTION,
    4: StatusFamily.CLIENT_ERROR,
    5: StatusFamily.SERVER_ERROR,
}


@dataclass(frozen=True)
class StatusOutcome:
    code: int
    family: StatusFamily
    is_success: bool
    known: StatusCode | None


def family_of(code: int) -> StatusFamily:
    if code < 0:
        return StatusFamily.UNRECOGNIZED
    return _FAMILIES.get(code // 100, StatusFamily.UNRECOGNIZED)


def classify(code: int) -> StatusOutcome:
    family = family_of(code)
    return StatusOutcome(
        code=code,
        family=family,
        is_success=family is StatusFamily.SUCCESS,
        known=StatusCode.lookup(code),
    )


def error_from_status(code: int) -> CourierStatusError | None:
    """Map a response status to the error it represents, if any.

    Codes missing from ``StatusCode`` pass through as non-failing, whatever
    their family; only named non-2xx codes produce an error.
    """
    known = StatusCode.lookup(code)
    if known is None or known.is_success:
        return None
    return CourierStatusError(f"HTTP status {known.value} ({known.name})", status_code=known)
