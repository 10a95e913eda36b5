from __future__ import annotations

from pydantic import BaseModel


class TranslationContents(BaseModel):
    text: str
    translated: str
    translation: str


class TranslationSuccess(BaseModel):
    total: int


class TranslationResponse(BaseModel):
    contents: TranslationContents
    success: TranslationSuccess
