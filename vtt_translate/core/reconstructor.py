"""Sentence reconstruction from timed subtitle lines.

WHY: Subtitle lines are fragments of sentences broken by screen duration.
Translating fragments in isolation loses grammar, so the lines are first
stitched back into whole sentences. Each sentence remembers which
(block, line) pairs it was assembled from and how long each fragment was,
so the translation can be flowed back later.

HOW: Walk blocks in order, then lines in order. Each trimmed line is split
on ".". Every non-empty chunk is appended to an accumulator together with
a FragmentPosition. A chunk followed by another split result (i.e. a "."
came after it) closes the sentence; a line's final chunk leaves the
sentence open and a space is appended before the next fragment.

RULES:
- Only "." terminates a sentence ("?" and "!" do not)
- Empty and whitespace-only chunks carry no fragment and are discarded
- Blank lines do not break an open sentence
- Emitted order is block order, then line order, then left to right
- A sentence still open at the end of the Document is flushed (text
  right-trimmed, no "." added) unless flush_trailing=False
"""

from __future__ import annotations

import logging

from vtt_translate.core.document import Document, FragmentPosition, Sentence

logger = logging.getLogger(__name__)

SENTENCE_DELIMITER = "."


def reconstruct_sentences(
    document: Document,
    flush_trailing: bool = True,
) -> list[Sentence]:
    """Assemble whole sentences from the lines of a Document.

    Args:
        document: The parsed timeline. It is not modified.
        flush_trailing: Emit a final sentence that never met a fullstop.
            When False, such trailing text is dropped.

    Returns:
        Sentences in reading order, each with its FragmentPositions.
    """
    sentences: list[Sentence] = []
    text = ""
    positions: list[FragmentPosition] = []

    for block_index, block in enumerate(document.blocks):
        for line_index, line in enumerate(block.lines):
            chunks = line.strip().split(SENTENCE_DELIMITER)
            for chunk_index, chunk in enumerate(chunks):
                chunk = chunk.strip()
                if not chunk:
                    continue

                text += chunk
                positions.append(FragmentPosition(
                    block_index=block_index,
                    line_index=line_index,
                    fragment_length=len(chunk),
                ))

                if chunk_index < len(chunks) - 1:
                    text += SENTENCE_DELIMITER
                    sentences.append(Sentence(positions=positions, text=text))
                    text = ""
                    positions = []
                else:
                    text += " "

    if positions:
        if flush_trailing:
            sentences.append(Sentence(positions=positions, text=text.rstrip()))
        else:
            logger.warning(
                "Dropping unterminated trailing text (%d fragments): %r",
                len(positions), text.rstrip(),
            )

    logger.debug("Reconstructed %d sentences from %d blocks",
                 len(sentences), len(document.blocks))
    return sentences
