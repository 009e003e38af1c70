"""Translator API client package — async HTTP interface to Azure Translator.

WHY: The pipeline needs to translate a batch of sentences and learn the
writing direction of the target language. This package encapsulates all
translator communication behind one async client class.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. Response data is
parsed into typed dataclasses defined in models.py.

RULES:
- All HTTP calls go through TranslationClient (no direct httpx usage elsewhere)
- Authentication is via subscription key and region headers
"""

from vtt_translate.api.client import (
    TranslationAPIError,
    TranslationClient,
    TranslationContractError,
)
from vtt_translate.api.models import Language, TranslationResult

__all__ = [
    "Language",
    "TranslationAPIError",
    "TranslationClient",
    "TranslationContractError",
    "TranslationResult",
]
