# diffy/core/diff_engine.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, replace
from typing import Dict, List, NamedTuple, Optional

from diffy.core.aligner import (
    CancelEventLike, DiffCancelled, DiffError, EditOp,
    edit_distance, shortest_edit_script,
)
from diffy.core.hunks import Hunk, HunkKind, Span, build_hunks, line_spans, split_lines
from diffy.core.normalizer import (
    normalize_whitespace, remove_punctuation, reflow_paragraphs,
)
from diffy.utils.logger import get_logger

logger = get_logger("diff_engine")

__all__ = [
    "DiffFlags", "DiffEngine", "DiffCancelled", "DiffError", "AlignedUnits",
    "compute_diff", "compute_edit_script", "diff_stats",
]


@dataclass(frozen=True)
class DiffFlags:
    ignore_whitespace: bool = False
    ignore_reflow: bool = False
    ignore_punctuation: bool = False

    @classmethod
    def from_mapping(cls, opts: Optional[dict]) -> "DiffFlags":
        opts = opts or {}
        return cls(
            ignore_whitespace=bool(opts.get("ignore_whitespace", False)),
            ignore_reflow=bool(opts.get("ignore_reflow", False)),
            ignore_punctuation=bool(opts.get("ignore_punctuation", False)),
        )


class AlignedUnits(NamedTuple):
    """What the aligner saw for one side: unit text, comparison key, original span."""
    units: List[str]
    keys: List[str]
    spans: List[Span]


def _units(text: str, flags: DiffFlags) -> AlignedUnits:
    # Reflow changes the line structure, so paragraphs become the unit and
    # each one keeps the span of its source lines.
    if flags.ignore_reflow:
        paras = reflow_paragraphs(text)
        units = [text[p.start:p.end] for p in paras]
        keys = [p.text for p in paras]
        spans = [(p.start, p.end) for p in paras]
    else:
        units = split_lines(text)
        keys = list(units)
        spans = line_spans(units)

    if flags.ignore_whitespace:
        keys = [normalize_whitespace(k) for k in keys]
    if flags.ignore_punctuation:
        keys = [remove_punctuation(k) for k in keys]
    return AlignedUnits(units, keys, spans)


def compute_edit_script(
    text1: str,
    text2: str,
    flags: Optional[DiffFlags] = None,
    *,
    cancel_event: Optional[CancelEventLike] = None,
) -> tuple[AlignedUnits, AlignedUnits, List[EditOp]]:
    """Align the normalized units of both texts; returns (left, right, script)."""
    flags = flags or DiffFlags()
    left = _units(text1 or "", flags)
    right = _units(text2 or "", flags)
    script = shortest_edit_script(left.keys, right.keys, cancel_event)
    return left, right, script


def compute_diff(
    text1: str,
    text2: str,
    flags: Optional[DiffFlags] = None,
    *,
    cancel_event: Optional[CancelEventLike] = None,
) -> List[Hunk]:
    """
    Diff two texts and return the ordered hunks a renderer needs.

    ``flags`` only change what counts as equal; every offset in the result
    indexes ``text1`` / ``text2`` exactly as given. Raises DiffCancelled if
    ``cancel_event`` gets set; no partial result is returned.
    """
    text1 = text1 or ""
    text2 = text2 or ""
    flags = flags or DiffFlags()
    left, right, script = compute_edit_script(text1, text2, flags, cancel_event=cancel_event)
    hunks = build_hunks(script, left.spans, right.spans, len(text1), len(text2))
    logger.debug(
        "compute_diff: %d/%d units, edit distance %d, %d hunks (%s)",
        len(left.units), len(right.units), edit_distance(script), len(hunks), flags,
    )
    return hunks


def diff_stats(hunks: List[Hunk]) -> Dict[str, int]:
    """Hunk counts per kind, keyed by HunkKind value (unchanged is always 0)."""
    counts = Counter(h.kind for h in hunks)
    return {kind.value: counts.get(kind, 0) for kind in HunkKind}


class DiffEngine:
    """
    Holds the current ignore toggles for a view and diffs with them.

    Nothing else is kept between calls; toggling a flag does not re-run
    anything by itself, the caller decides when to call compute() again.
    """

    def __init__(self, flags: Optional[DiffFlags] = None):
        self.flags = flags or DiffFlags()

    def set_ignore_whitespace(self, ignore: bool) -> None:
        self.flags = replace(self.flags, ignore_whitespace=bool(ignore))

    def set_ignore_reflow(self, ignore: bool) -> None:
        self.flags = replace(self.flags, ignore_reflow=bool(ignore))

    def set_ignore_punctuation(self, ignore: bool) -> None:
        self.flags = replace(self.flags, ignore_punctuation=bool(ignore))

    def compute(self, text1: str, text2: str, cancel_event: Optional[CancelEventLike] = None) -> List[Hunk]:
        return compute_diff(text1, text2, self.flags, cancel_event=cancel_event)
