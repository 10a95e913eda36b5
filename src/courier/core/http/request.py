from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

import httpx

ModelT = TypeVar("ModelT")

MAX_RETRIES_CEILING = 10
_ALLOWED_SCHEMES = {"http", "https"}


class RequestType(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"
    UPLOAD = "UPLOAD"


@dataclass(frozen=True)
class RequestDescriptor:
    url: httpx.URL
    method: RequestType
    body: bytes | None
    max_retries: int


@dataclass(frozen=True)
class Request(Generic[ModelT]):
    """A call to ``endpoint`` whose response body decodes into ``model``.

    ``parameters`` replace the endpoint's query string and are also sent as the
    request body, for every method. ``max_retries`` is clamped to
    ``MAX_RETRIES_CEILING``.
    """

    endpoint: str
    model: type[ModelT] | Any
    parameters: Mapping[str, str] | None = None
    max_retries: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "max_retries", max(0, min(int(self.max_retries), MAX_RETRIES_CEILING)))
        if self.parameters is not None:
            object.__setattr__(self, "parameters", dict(self.parameters))

    def url(self) -> httpx.URL | None:
        try:
            if self.parameters is None:
                url = httpx.URL(self.endpoint)
            else:
                url = httpx.URL(self.endpoint, params=self.parameters)
        except (httpx.InvalidURL, TypeError, ValueError):
            return None
        if url.scheme not in _ALLOWED_SCHEMES or not url.host:
            return None
        return url

    def descriptor(self, method: RequestType) -> RequestDescriptor | None:
        url = self.url()
        if url is None:
            return None
        return RequestDescriptor(
            url=url,
            method=method,
            body=url.query or None,
            max_retries=self.max_retries,
        )
