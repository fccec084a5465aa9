# diffy/core/normalizer.py
"""
Text normalizers applied to the copies the aligner compares.

Every function here is pure and idempotent. None of them is ever applied to
the text whose offsets end up in a hunk.
"""
from __future__ import annotations

import re
from typing import List, NamedTuple

from diffy.config import PUNCTUATION_CHARS

_HSPACE_RUN = re.compile(r"[ \t]+")
_LEADING_HSPACE = re.compile(r"^[ \t]+", re.MULTILINE)
_TRAILING_HSPACE = re.compile(r"[ \t]+$", re.MULTILINE)

# A blank line boundary: newline, any whitespace (more blank lines included), newline
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_LINE_JOIN = re.compile(r"\s*\n\s*")

_PUNCT_TABLE = str.maketrans("", "", PUNCTUATION_CHARS)


class Paragraph(NamedTuple):
    text: str      # lines joined with single spaces, trimmed
    start: int     # offset of the first non-space character in the source
    end: int       # offset just past the last non-space character


def normalize_whitespace(text: str) -> str:
    """Collapse horizontal whitespace runs and trim every line. Newlines stay put."""
    result = _HSPACE_RUN.sub(" ", text)
    result = _TRAILING_HSPACE.sub("", result)
    result = _LEADING_HSPACE.sub("", result)
    return result


def remove_punctuation(text: str) -> str:
    return text.translate(_PUNCT_TABLE)


def reflow_paragraphs(text: str) -> List[Paragraph]:
    """
    Split text on blank-line boundaries and reflow each paragraph onto one line.

    Whitespace-only paragraphs are dropped. The returned spans point at the
    trimmed paragraph inside ``text`` so callers can report offsets against
    the source.
    """
    paragraphs: List[Paragraph] = []
    pos = 0
    for m in _PARAGRAPH_BREAK.finditer(text):
        _append_paragraph(paragraphs, text, pos, m.start())
        pos = m.end()
    _append_paragraph(paragraphs, text, pos, len(text))
    return paragraphs


def _append_paragraph(out: List[Paragraph], text: str, start: int, end: int) -> None:
    chunk = text[start:end]
    joined = _LINE_JOIN.sub(" ", chunk).strip()
    if not joined:
        return
    lead = len(chunk) - len(chunk.lstrip())
    trail = len(chunk) - len(chunk.rstrip())
    out.append(Paragraph(joined, start + lead, end - trail))


def normalize_reflow(text: str) -> str:
    return "\n\n".join(p.text for p in reflow_paragraphs(text))
