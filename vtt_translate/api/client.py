"""Async HTTP client for the Azure Translator v3 text API.

WHY: The pipeline translates every reconstructed sentence in one batch
and needs the writing direction of the target language to mark RTL
output. This module wraps both calls behind a single client class so the
CLI and tests don't need to know HTTP details.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. TranslationClient is
an async context manager — enter it to get an authenticated client, exit
to close the connection pool. translate() posts the sentence batch to
/translate, validates the response against the request, then resolves
the target's direction from /languages.

RULES:
- Always use the async context manager (async with TranslationClient(...) as client:)
- One request per batch; no retries — any non-200 response is fatal
- Every response item must hold exactly one translation into the target
- The response must have exactly one item per request sentence, in order
- A translation not ending with "." gets one appended
- Source language: explicit value wins; otherwise the highest-scoring
  detected language, starting from en-gb at score 0.0
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence

import httpx

from vtt_translate.api.models import (
    Language,
    TranslateResponseItem,
    TranslationLanguage,
    TranslationResult,
)
from vtt_translate.config import (
    AZURE_TRANSLATOR_API_VERSION,
    AZURE_TRANSLATOR_ENDPOINT,
    load_credentials,
)
from vtt_translate.core.direction import Direction

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TRANSLATE_PATH = "/translate"
LANGUAGES_PATH = "/languages"

_FALLBACK_SOURCE_LANGUAGE = Language.EN_GB
_SENTENCE_TERMINATOR = "."


class TranslationAPIError(Exception):
    """Raised when the translator returns a non-success response.

    RULES:
    - Always include status_code and message
    - message is the response body text or a summary
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(
            "Azure translation API returned error response code {}: {}".format(
                status_code, message
            )
        )


class TranslationContractError(Exception):
    """Raised when a translator response does not match its request.

    WHY: Reflow relies on a 1:1, in-order mapping between source and
    translated sentences. A mismatch would silently put text on the wrong
    lines, so it aborts the run instead.
    """


class TranslationClient:
    """Async client for Azure Translator.

    WHY: Provides a typed interface for the two calls the pipeline needs
    (translate a batch, look up a language's direction) and wraps HTTP
    errors and malformed bodies into typed exceptions.

    HOW: Wraps httpx.AsyncClient with the subscription key and region
    headers. Use as an async context manager to ensure the connection
    pool is closed.

    RULES:
    - key/region default to load_credentials() from the environment
    - endpoint/version default to the values in config
    - transport is for tests (httpx.MockTransport)
    """

    def __init__(
        self,
        key: str | None = None,
        region: str | None = None,
        endpoint: str | None = None,
        version: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._key, self._region = load_credentials(key, region)
        self._endpoint = (endpoint or AZURE_TRANSLATOR_ENDPOINT).rstrip("/")
        self._version = version or AZURE_TRANSLATOR_API_VERSION
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> TranslationClient:
        self._client = httpx.AsyncClient(
            base_url=self._endpoint,
            headers={
                "Ocp-Apim-Subscription-Key": self._key,
                "Ocp-Apim-Subscription-Region": self._region,
            },
            timeout=httpx.Timeout(120.0, connect=30.0),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "TranslationClient must be used as an async context manager: "
                "async with TranslationClient() as client: ..."
            )
        return self._client

    # ------------------------------------------------------------------
    # Supported languages
    # ------------------------------------------------------------------

    async def translation_languages(self) -> dict[str, TranslationLanguage]:
        """Fetch the translation language catalogue, keyed by language code.

        Raises:
            TranslationAPIError: On a non-200 response.
            TranslationContractError: If the body is malformed.
        """
        client = self._ensure_client()
        resp = await client.get(
            LANGUAGES_PATH,
            params={"api-version": self._version, "scope": "translation"},
        )
        if resp.status_code != 200:
            raise TranslationAPIError(resp.status_code, resp.text)

        try:
            catalogue = resp.json()["translation"]
            return {
                code.lower(): TranslationLanguage.from_dict(info)
                for code, info in catalogue.items()
            }
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise TranslationContractError(
                "Malformed response from the /languages endpoint"
            ) from exc

    async def direction_of(self, language: Language) -> Direction:
        """Return the writing direction the translator reports for ``language``."""
        catalogue = await self.translation_languages()
        info = catalogue.get(language.value)
        if info is None:
            raise TranslationContractError(
                "Target language {} not returned by /languages endpoint".format(language)
            )
        return info.direction

    # ------------------------------------------------------------------
    # Translate
    # ------------------------------------------------------------------

    async def translate(
        self,
        sentences: Sequence[str],
        source: Language | None,
        target: Language,
        on_status: Callable[[str], None] | None = None,
    ) -> TranslationResult:
        """Translate a batch of sentences in one request.

        Args:
            sentences: Plain-text sentences, in document order.
            source: Source language, or None to auto-detect.
            target: Language to translate into.
            on_status: Optional callback for status updates.

        Returns:
            TranslationResult with the confirmed or detected source
            language, the target's text direction, and one translated
            sentence per input sentence.

        Raises:
            TranslationAPIError: On a non-200 response.
            TranslationContractError: If the response does not match the request.
            httpx.HTTPError: On network failure.
        """
        client = self._ensure_client()

        if source is not None:
            detected_language, detected_score = source, 1.0
        else:
            detected_language, detected_score = _FALLBACK_SOURCE_LANGUAGE, 0.0

        translated: list[str] = []
        if sentences:
            if on_status:
                on_status("Translating {} sentences...".format(len(sentences)))
            params = {"api-version": self._version, "to": target.value}
            if source is not None:
                params["from"] = source.value

            resp = await client.post(
                TRANSLATE_PATH,
                params=params,
                json=[{"text": s} for s in sentences],
                headers={"X-ClientTraceId": str(uuid.uuid4())},
            )
            if resp.status_code != 200:
                raise TranslationAPIError(resp.status_code, resp.text)

            items = _parse_translate_response(resp)
            if len(items) != len(sentences):
                raise TranslationContractError(
                    "Translator returned {} items for {} sentences".format(
                        len(items), len(sentences)
                    )
                )

            for index, item in enumerate(items):
                detected = item.detected_language
                if detected is not None and detected.score > detected_score:
                    try:
                        detected_language = Language.from_code(detected.language)
                    except ValueError as exc:
                        raise TranslationContractError(
                            "Detected source language is not supported"
                        ) from exc
                    detected_score = detected.score

                if len(item.translations) != 1:
                    raise TranslationContractError(
                        "Item {} has {} translations, expected 1".format(
                            index, len(item.translations)
                        )
                    )
                translation = item.translations[0]
                if translation.to.lower() != target.value:
                    raise TranslationContractError(
                        "Item {} was translated to '{}', expected '{}'".format(
                            index, translation.to, target
                        )
                    )

                text = translation.text
                if not text.endswith(_SENTENCE_TERMINATOR):
                    text += _SENTENCE_TERMINATOR
                translated.append(text)
        else:
            logger.debug("No sentences to translate; skipping /translate request")

        direction = await self.direction_of(target)
        return TranslationResult(
            source_language=detected_language,
            direction=direction,
            sentences=translated,
        )


def _parse_translate_response(resp: httpx.Response) -> list[TranslateResponseItem]:
    """Parse the /translate body, wrapping malformed JSON into a contract error."""
    try:
        return [TranslateResponseItem.from_dict(item) for item in resp.json()]
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        raise TranslationContractError(
            "Malformed response from the /translate endpoint"
        ) from exc
