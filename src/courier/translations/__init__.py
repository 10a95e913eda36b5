from .client import DEFAULT_BASE_URL, DEFAULT_TRANSLATION, TranslationClient
from .schemas import TranslationContents, TranslationResponse, TranslationSuccess

__all__ = [
    "TranslationClient",
    "TranslationContents",
    "TranslationResponse",
    "TranslationSuccess",
    "DEFAULT_BASE_URL",
    "DEFAULT_TRANSLATION",
]
