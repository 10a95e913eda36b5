from __future__ import annotations

import logging

import httpx

from courier.core.http import CallResult, Networking, Request, RequestType, get_networking
from courier.core.http.client import Completion

from .schemas import TranslationResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.funtranslations.com/translate"
DEFAULT_TRANSLATION = "yoda"


class TranslationClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        networking: Networking | None = None,
        max_retries: int = 3,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.networking = networking
        self.max_retries = max_retries

    def _networking(self) -> Networking:
        return self.networking if self.networking is not None else get_networking()

    def request_for(self, text: str, translation: str = DEFAULT_TRANSLATION) -> Request[TranslationResponse]:
        return Request(
            endpoint=f"{self.base_url}/{translation}.json",
            model=TranslationResponse,
            parameters={"text": text},
            max_retries=self.max_retries,
        )

    def translate(
        self,
        text: str,
        completion: Completion[TranslationResponse],
        *,
        translation: str = DEFAULT_TRANSLATION,
        client: httpx.Client | None = None,
    ) -> None:
        logger.debug("Requesting %s translation", translation)
        self._networking().post(self.request_for(text, translation), completion, client=client)

    def translate_blocking(
        self,
        text: str,
        *,
        translation: str = DEFAULT_TRANSLATION,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> CallResult[TranslationResponse]:
        return self._networking().call(
            self.request_for(text, translation),
            RequestType.POST,
            client=client,
            timeout=timeout,
        )
