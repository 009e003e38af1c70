"""Timeline document model and sentence provenance dataclasses.

WHY: A subtitle file is an ordered sequence of timed caption blocks, each
holding one or more displayed lines. Sentence reconstruction and reflow
both need that structure, plus a way to point back at exactly which line
a sentence fragment came from without aliasing the mutable Document.

HOW: Four dataclasses:
  Block            — one timed caption unit (id, timing, lines)
  Document         — the ordered blocks of one file
  FragmentPosition — (block_index, line_index, fragment_length) reference
  Sentence         — ordered FragmentPositions plus the full sentence text

RULES:
- Block ids and timings are opaque strings, preserved verbatim
- Block order is playback order; line order is display order
- The number of lines per block never changes after parsing
- FragmentPositions are indexes into a Document, resolved at reflow time
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field


@dataclass
class Block:
    """One timed caption unit.

    RULES:
    - id: opaque identifier line (UUID-like token, optionally suffixed)
    - timing: opaque timing line containing "-->"
    - lines: displayed text lines, trimmed, in display order
    """

    id: str
    timing: str
    lines: list[str] = field(default_factory=list)


@dataclass
class Document:
    """An ordered sequence of Blocks parsed from one subtitle file."""

    blocks: list[Block] = field(default_factory=list)

    def copy(self) -> Document:
        """Return a deep copy that shares no mutable state with this Document."""
        return copy.deepcopy(self)

    def blanked(self) -> Document:
        """Return a copy with every line emptied.

        WHY: Reflow writes into a fresh copy while still consulting the
        original fragment lengths; the copy must keep the exact block and
        line counts so FragmentPositions stay valid.
        """
        return Document(
            blocks=[
                Block(id=block.id, timing=block.timing, lines=[""] * len(block.lines))
                for block in self.blocks
            ]
        )

    def line_count(self) -> int:
        return sum(len(block.lines) for block in self.blocks)


@dataclass(frozen=True)
class FragmentPosition:
    """Location of one sentence fragment inside a Document.

    RULES:
    - block_index / line_index index into Document.blocks / Block.lines
    - fragment_length is the character length of the trimmed fragment
    - One line may hold fragments of several sentences, recorded left to right
    """

    block_index: int
    line_index: int
    fragment_length: int


@dataclass
class Sentence:
    """A fullstop-delimited sentence reassembled from one or more fragments.

    WHY: The translator works on whole sentences, but the result has to
    land back on the original lines. ``positions`` remembers where the
    sentence came from; ``text`` starts as the source sentence and is
    replaced by the translation before reflow.
    """

    positions: list[FragmentPosition]
    text: str

    @property
    def total_length(self) -> int:
        """Sum of the original fragment lengths."""
        return sum(p.fragment_length for p in self.positions)
