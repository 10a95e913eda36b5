from __future__ import annotations

import logging
import os
from concurrent.futures import Executor, Future

import httpx
import pytest

import courier.core.http.client as http_client
from courier.core.config import HTTPSettings
from courier.core.http import Networking, set_networking


class InlineExecutor(Executor):
    """Runs every submitted task immediately on the submitting thread."""

    def __init__(self) -> None:
        self.submitted = 0

    def submit(self, fn, /, *args, **kwargs) -> Future:
        self.submitted += 1
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


@pytest.fixture(autouse=True)
def isolate_courier_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("COURIER_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_shared_state():
    yield
    set_networking(None)
    if http_client._client is not None:
        http_client._client.close()
        http_client._client = None
    courier_logger = logging.getLogger("courier")
    for handler in list(courier_logger.handlers):
        courier_logger.removeHandler(handler)
        handler.close()
    courier_logger.propagate = True
    courier_logger.setLevel(logging.NOTSET)


@pytest.fixture
def inline_executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture
def networking(inline_executor: InlineExecutor) -> Networking:
    return Networking(executor=inline_executor, settings=HTTPSettings())


@pytest.fixture
def results() -> list:
    return []


@pytest.fixture
def make_client():
    clients: list[httpx.Client] = []

    def _make(handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
