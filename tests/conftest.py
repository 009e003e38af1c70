"""Shared test fixtures for the vtt_translate test suite.

WHY: Several test modules need the same small subtitle file, its parsed
Document, and a fake translator. Centralizing them keeps every test on
the same two-block example.

HOW: SAMPLE_VTT is the canonical file text (it round-trips exactly).
FakeTranslator is an httpx.MockTransport handler that answers
/translate and /languages from canned data and records every request.

RULES:
- No test touches the network; all HTTP goes through FakeTranslator
- File I/O uses tmp_path for isolation
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from vtt_translate.core.document import Block, Document


BLOCK_A_ID = "f9e6254d-71b5-400f-bdcc-802831ce24f4-0"
BLOCK_B_ID = "0b1c2d3e-4f50-6172-8394-a5b6c7d8e9f0-1"
BLOCK_A_TIMING = "00:00:05.020 --> 00:00:08.874"
BLOCK_B_TIMING = "00:00:08.874 --> 00:00:10.100"

SAMPLE_VTT = (
    "WEBVTT\n"
    "\n"
    "{a_id}\n"
    "{a_timing}\n"
    "Hello there.\n"
    "How are you\n"
    "\n"
    "{b_id}\n"
    "{b_timing}\n"
    "today?\n"
    "\n"
).format(a_id=BLOCK_A_ID, a_timing=BLOCK_A_TIMING, b_id=BLOCK_B_ID, b_timing=BLOCK_B_TIMING)

TEST_ENDPOINT = "https://translator.test"

LANGUAGES_CATALOGUE: Dict[str, Any] = {
    "translation": {
        "en": {"name": "English", "nativeName": "English", "dir": "ltr"},
        "fa": {"name": "Persian", "nativeName": "فارسی", "dir": "rtl"},
    }
}


@pytest.fixture
def sample_document() -> Document:
    """Two blocks: "Hello there." / "How are you" then "today?"."""
    return Document(blocks=[
        Block(id=BLOCK_A_ID, timing=BLOCK_A_TIMING, lines=["Hello there.", "How are you"]),
        Block(id=BLOCK_B_ID, timing=BLOCK_B_TIMING, lines=["today?"]),
    ])


@pytest.fixture
def sample_vtt_file(tmp_path):
    path = tmp_path / "talk-en.vtt"
    path.write_text(SAMPLE_VTT, encoding="utf-8")
    return path


class FakeTranslator:
    """Canned Azure Translator for httpx.MockTransport.

    translations maps source sentence → translated text. Each response
    item is tagged with ``to`` and, when detected is set, carries a
    detectedLanguage object.
    """

    def __init__(
        self,
        translations: Optional[Dict[str, str]] = None,
        detected: Optional[Dict[str, Any]] = None,
        translate_status: int = 200,
        languages_status: int = 200,
        translate_body: Any = None,
        languages_body: Any = None,
    ) -> None:
        self.translations = translations or {}
        self.detected = detected
        self.translate_status = translate_status
        self.languages_status = languages_status
        self.translate_body = translate_body
        self.languages_body = languages_body
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/languages":
            body = self.languages_body if self.languages_body is not None else LANGUAGES_CATALOGUE
            return httpx.Response(self.languages_status, json=body)
        if request.url.path == "/translate":
            if self.translate_status != 200:
                return httpx.Response(self.translate_status, text="quota exceeded")
            if self.translate_body is not None:
                return httpx.Response(200, json=self.translate_body)
            target = request.url.params["to"]
            items = []
            for entry in json.loads(request.content):
                item: Dict[str, Any] = {
                    "translations": [{
                        "to": target,
                        "text": self.translations.get(entry["text"], entry["text"]),
                    }],
                }
                if self.detected is not None:
                    item["detectedLanguage"] = dict(self.detected)
                items.append(item)
            return httpx.Response(200, json=items)
        return httpx.Response(404, text="not found")

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def fake_translator():
    return FakeTranslator(
        translations={
            "Hello there.": "Bonjour.",
            "How are you today?": "Comment vas-tu aujourd'hui?",
        },
        detected={"language": "en", "score": 1.0},
    )
