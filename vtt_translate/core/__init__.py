"""Core document model, sentence reconstruction, and text reflow.

WHY: The core package holds the stable heart of the translator — the
in-memory timeline model and the two transformations that map between
timed lines and whole sentences. It knows nothing about HTTP or files.

HOW: document.py defines the data structures, reconstructor.py turns a
Document into provenance-tagged Sentences, reflow.py writes replacement
sentence text back into a blanked copy, direction.py adds RTL marks.

RULES:
- Pure in-memory transformations, no I/O
- Document and Sentence dataclasses are the contract — change with care
"""
