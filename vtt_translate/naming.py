"""Output filename derivation for translated VTT files.

WHY: Subtitle files are commonly named ``<title>-<language>.vtt``. When
no output path is given, the translated file should sit next to the
source with the language tag swapped, e.g. ``talk-en-GB.vtt`` →
``talk-fa.vtt``.

HOW: The source stem is matched against ``<prefix>[-<source>[-XX]]``,
where ``<source>`` is the detected or given source language (matched
case-insensitively) and ``-XX`` an optional region suffix, so a file
tagged ``en-us`` still matches a detected ``en``. The target name is
``<prefix>-<target>`` plus the original extension.

RULES:
- A leading dot belongs to the stem (``.stem-en-GB`` → ``.stem-fa``)
- Only the trailing language tag is replaced; other hyphens are kept
- Untagged stems get the target tag appended (``stem`` → ``stem-fa``)
- The result is in the source file's directory
"""

from __future__ import annotations

import re
from pathlib import Path

from vtt_translate.api.models import Language

FALLBACK_STEM = "vtt-translate-output"
FALLBACK_EXTENSION = ".vtt"


def default_target_filename(
    source_path: str | Path,
    source_language: Language,
    target_language: Language,
) -> Path:
    """Derive the translated file's path from the source path."""
    source_path = Path(source_path)
    stem = source_path.stem
    extension = source_path.suffix

    filename_re = re.compile(
        r"^(?P<prefix>.+?)"
        r"(?P<language>-(?i:" + re.escape(source_language.value) + r")(-[A-Za-z]{2})?)?$"
    )
    match = filename_re.match(stem)
    if match:
        target_name = "{}-{}{}".format(match.group("prefix"), target_language, extension)
    else:
        target_name = FALLBACK_STEM + (extension or FALLBACK_EXTENSION)
    return source_path.parent / target_name
