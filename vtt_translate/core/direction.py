"""Text direction values and right-to-left line marking.

WHY: Right-to-left subtitle text that starts or ends with a left-to-right
token (a number, a Latin product name) renders in the wrong order in many
players, because the paragraph direction is guessed from the first strong
character. A zero-width RIGHT-TO-LEFT MARK at the edge anchors it.

HOW: For RTL output, a line whose first character is ASCII gets U+200F
prepended; a line whose last non-whitespace character is ASCII gets U+200F
appended. LTR output passes through untouched.

RULES:
- Empty and whitespace-only lines are never marked
- The mark itself is not ASCII, so re-marking an already marked line is a no-op
- apply_direction returns a new Document; the input is not modified
"""

from __future__ import annotations

import enum

from vtt_translate.core.document import Document

RIGHT_TO_LEFT_MARK = "\u200f"


class Direction(enum.Enum):
    """Writing direction of a language, as reported by the translator."""

    LTR = "ltr"
    RTL = "rtl"


def mark_line(line: str, direction: Direction) -> str:
    """Add RTL marks to the edges of one line when ``direction`` is RTL."""
    if direction is not Direction.RTL:
        return line
    stripped = line.rstrip()
    if not stripped:
        return line
    if line[0].isascii():
        line = RIGHT_TO_LEFT_MARK + line
    if stripped[-1].isascii():
        line = line + RIGHT_TO_LEFT_MARK
    return line


def apply_direction(document: Document, direction: Direction) -> Document:
    """Return a copy of ``document`` with every line marked for ``direction``."""
    result = document.copy()
    for block in result.blocks:
        block.lines = [mark_line(line, direction) for line in block.lines]
    return result
