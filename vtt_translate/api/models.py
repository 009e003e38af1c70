"""Translator request and response models.

WHY: Azure Translator returns plain JSON for translations, detected
languages, and the supported-language catalogue. Typed models make the
expected shape explicit and turn a malformed body into an immediate
KeyError/ValueError instead of a silent None further down.

HOW: Language is a closed enum of the codes this tool supports. Each
response dataclass maps 1:1 to a JSON object and has a from_dict()
factory. TranslationResult is what TranslationClient.translate returns.

RULES:
- Language values are the translator's lowercase codes ("en", "en-gb", "fa")
- Language.from_code is case-insensitive ("en-GB" → Language.EN_GB)
- detected_language is None when the source language was given explicitly
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import NamedTuple

from vtt_translate.core.direction import Direction


class Language(enum.Enum):
    """Languages supported for source and target."""

    EN = "en"
    EN_GB = "en-gb"
    FA = "fa"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: str) -> Language:
        """Look up a Language by code, ignoring case.

        Raises:
            ValueError: If the code is not a supported language.
        """
        try:
            return cls(code.strip().lower())
        except ValueError:
            supported = ", ".join(lang.value for lang in cls)
            raise ValueError(
                "Unsupported language '{}'. Supported languages: {}".format(code, supported)
            ) from None


@dataclass
class DetectedLanguage:
    """``detectedLanguage`` object of a translate response item."""

    language: str
    score: float

    @classmethod
    def from_dict(cls, data: dict) -> DetectedLanguage:
        return cls(language=data["language"], score=float(data["score"]))


@dataclass
class Translation:
    """One entry of a response item's ``translations`` array."""

    to: str
    text: str

    @classmethod
    def from_dict(cls, data: dict) -> Translation:
        return cls(to=data["to"], text=data["text"])


@dataclass
class TranslateResponseItem:
    """One element of the POST /translate response array.

    RULES:
    - One item per request sentence, in request order
    - translations holds one entry per requested target language
    """

    translations: list[Translation]
    detected_language: DetectedLanguage | None = None

    @classmethod
    def from_dict(cls, data: dict) -> TranslateResponseItem:
        detected = data.get("detectedLanguage")
        return cls(
            translations=[Translation.from_dict(t) for t in data["translations"]],
            detected_language=DetectedLanguage.from_dict(detected) if detected else None,
        )


@dataclass
class TranslationLanguage:
    """One entry of the GET /languages ``translation`` catalogue."""

    name: str
    native_name: str
    direction: Direction

    @classmethod
    def from_dict(cls, data: dict) -> TranslationLanguage:
        return cls(
            name=data["name"],
            native_name=data["nativeName"],
            direction=Direction(data["dir"]),
        )


class TranslationResult(NamedTuple):
    """Outcome of translating one batch of sentences."""

    source_language: Language
    direction: Direction
    sentences: list[str]
