"""WebVTT reader and writer for UUID-identified caption blocks.

WHY: The translator round-trips subtitle files exported with UUID-like
cue identifiers (e.g. ``f9e6254d-71b5-400f-bdcc-802831ce24f4-0``). Only
the cue structure matters here; ids and timings are carried verbatim.

HOW: Parsing is line oriented. Blank lines and the ``WEBVTT`` header are
ignored. An identifier line starts a new block, a line containing ``-->``
is the current block's timing, and any other line is a text line of the
current block. Writing emits the header, a blank line, then each block
followed by a blank line.

RULES:
- Files are UTF-8; a leading byte-order mark is tolerated on read
- Text lines are trimmed on read and on write
- Lines before the first identifier are skipped with a warning
- A block without a timing line is a VttFormatError
- Writing renders the whole file in memory before opening the target
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from vtt_translate.core.direction import Direction, mark_line
from vtt_translate.core.document import Block, Document

logger = logging.getLogger(__name__)

HEADER = "WEBVTT"
TIMING_ARROW = "-->"

_BLANK_RE = re.compile(r"^\s*$")
_BLOCK_ID_RE = re.compile(
    r"^[0-9a-fA-F]{8}\b-[0-9a-fA-F]{4}\b-[0-9a-fA-F]{4}\b-[0-9a-fA-F]{4}\b-[0-9a-fA-F]{12}"
)
_LINE_BREAK_RE = re.compile(r"\r?\n")


class VttFormatError(ValueError):
    """Raised when a file's content does not have the expected cue structure."""


class VttFileError(OSError):
    """Raised when a VTT file cannot be read or written.

    The message names the file; the underlying OSError is chained.
    """


def is_blank(line: str) -> bool:
    return bool(_BLANK_RE.match(line))


def is_block_id(line: str) -> bool:
    return bool(_BLOCK_ID_RE.match(line))


def is_timing(line: str) -> bool:
    return TIMING_ARROW in line


def parse_vtt_text(text: str) -> Document:
    """Parse VTT file content into a Document.

    Raises:
        VttFormatError: If a block has no timing line.
    """
    document = Document()
    block: Block | None = None

    for line_number, line in enumerate(_LINE_BREAK_RE.split(text), start=1):
        if is_blank(line) or line == HEADER:
            continue
        if is_block_id(line):
            if block is not None:
                document.blocks.append(_finish_block(block))
            block = Block(id=line, timing="")
        elif block is None:
            logger.warning("Skipping line %d before the first block: %r",
                           line_number, line)
        elif is_timing(line):
            block.timing = line
        else:
            block.lines.append(line.strip())

    if block is not None:
        document.blocks.append(_finish_block(block))

    logger.debug("Parsed %d blocks", len(document.blocks))
    return document


def _finish_block(block: Block) -> Block:
    if not block.timing:
        raise VttFormatError("Block {} has no timing line".format(block.id))
    return block


def parse_vtt(path: str | Path) -> Document:
    """Read and parse a VTT file.

    Raises:
        VttFileError: If the file cannot be opened or read.
        VttFormatError: If the file is not UTF-8 or has a malformed block.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise VttFileError("Failed to open VTT file {}".format(path)) from exc

    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise VttFormatError("VTT file {} is not valid UTF-8".format(path)) from exc

    try:
        return parse_vtt_text(text)
    except VttFormatError as exc:
        raise VttFormatError("Failed to parse VTT file {}: {}".format(path, exc)) from exc


def render_vtt(document: Document, direction: Direction = Direction.LTR) -> str:
    """Render a Document as VTT text, marking lines for ``direction``."""
    out = [HEADER, ""]
    for block in document.blocks:
        out.append(block.id)
        out.append(block.timing)
        for line in block.lines:
            out.append(mark_line(line.strip(), direction))
        out.append("")
    return "\n".join(out) + "\n"


def write_vtt(
    document: Document,
    path: str | Path,
    direction: Direction = Direction.LTR,
) -> None:
    """Render ``document`` and write it to ``path`` (overwriting).

    Raises:
        VttFileError: If the file cannot be written.
    """
    path = Path(path)
    content = render_vtt(document, direction)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise VttFileError("Failed to write VTT file {}".format(path)) from exc
