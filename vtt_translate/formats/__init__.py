"""On-disk subtitle formats.

WHY: The core works on the in-memory Document only. This package owns
the translation between that model and file text, so a new format means
one new module here and no core changes.
"""

from vtt_translate.formats.vtt import (
    VttFileError,
    VttFormatError,
    parse_vtt,
    parse_vtt_text,
    render_vtt,
    write_vtt,
)

__all__ = [
    "VttFileError",
    "VttFormatError",
    "parse_vtt",
    "parse_vtt_text",
    "render_vtt",
    "write_vtt",
]
