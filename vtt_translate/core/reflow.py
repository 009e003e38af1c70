"""Proportional reflow of replacement sentences onto original lines.

WHY: A translated sentence has a different length and word count from its
source, but it still has to be shown across the same timed blocks. Giving
each original fragment a share of the translation proportional to the
fragment's share of the source sentence keeps on-screen pacing roughly
aligned with the original timing.

HOW: Reflow writes into a blanked copy of the Document. For each sentence
the replacement text is split on single spaces. Each FragmentPosition gets
a target size of ``fragment_length * len(text) // total_length`` and
greedily takes whole words: at least one, and more while the chunk
(measured with a trailing space per word) plus a slack of 3 still fits
the target. The last position takes every remaining word.

RULES:
- Words are never split, dropped, or duplicated
- Empty words (from doubled or trailing spaces) are consumed but not written
- Fragments landing on an already filled line are joined with one space
- The input Document is never modified
- A zero total fragment length raises ReflowError
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from vtt_translate.core.document import Document, Sentence

logger = logging.getLogger(__name__)

# Lookahead slack for the next short word when filling a chunk.
_CHUNK_SLACK = 3


class ReflowError(ArithmeticError):
    """Raised when sentences cannot be flowed back into a Document.

    RULES:
    - Zero total fragment length (the proportion denominator)
    - A FragmentPosition outside the Document's blocks or lines
    """


def split_words(text: str) -> list[str]:
    """Split on single spaces; empty strings mark doubled or trailing spaces."""
    return text.split(" ")


def reflow(document: Document, sentences: Sequence[Sentence]) -> Document:
    """Distribute each sentence's text across its original fragment positions.

    Args:
        document: The original Document the sentences were reconstructed
            from. It is only used for its shape and is not modified.
        sentences: Sentences in reconstruction order, with ``text``
            replaced by the new (e.g. translated) sentence.

    Returns:
        A new Document with the same blocks and line counts, holding the
        reflowed text.

    Raises:
        ReflowError: On a zero-length sentence or an invalid position.
    """
    result = document.blanked()

    for sentence_index, sentence in enumerate(sentences):
        total_length = sentence.total_length
        if total_length == 0:
            raise ReflowError(
                "Sentence {} has zero total fragment length; cannot "
                "proportion {!r}".format(sentence_index, sentence.text)
            )

        new_text = sentence.text
        words = iter(split_words(new_text))
        next_word = next(words, None)
        last_index = len(sentence.positions) - 1

        for position_index, position in enumerate(sentence.positions):
            target_size = position.fragment_length * len(new_text) // total_length
            is_last = position_index == last_index

            chunk = ""
            while (
                not chunk
                or len(chunk) + _CHUNK_SLACK <= target_size
                or is_last
            ) and next_word is not None:
                if next_word:
                    chunk += next_word + " "
                next_word = next(words, None)

            lines = _resolve_lines(result, position.block_index, position.line_index)
            chunk = chunk.rstrip(" ")
            if lines[position.line_index] and chunk:
                lines[position.line_index] += " "
            lines[position.line_index] += chunk

    logger.debug("Reflowed %d sentences into %d lines",
                 len(sentences), result.line_count())
    return result


def _resolve_lines(document: Document, block_index: int, line_index: int) -> list[str]:
    """Return the line list of the addressed block, validating both indexes."""
    if not 0 <= block_index < len(document.blocks):
        raise ReflowError("Block index {} out of range ({} blocks)".format(
            block_index, len(document.blocks)))
    lines = document.blocks[block_index].lines
    if not 0 <= line_index < len(lines):
        raise ReflowError("Line index {} out of range in block {} ({} lines)".format(
            line_index, block_index, len(lines)))
    return lines
