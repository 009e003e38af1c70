"""VTT Translate — re-time translated text into a subtitle timeline.

WHY: Subtitle authors break lines by screen duration, not by grammar, so a
single sentence routinely spans several timed blocks. Translating block by
block produces nonsense; translating whole sentences loses the timing. This
package translates whole sentences and then flows the translated text back
across the original block/line boundaries.

HOW: Four-stage pipeline — parse (formats), reconstruct sentences with
provenance (core), translate (api client), reflow and write (core + formats).
Each stage is independently testable.

RULES:
- The Document model is the stable contract between parsing and writing
- Sentences refer back into the Document by index, never by reference
- The original Document is never mutated; reflow works on a blanked copy
"""

__version__ = "0.1.0"
