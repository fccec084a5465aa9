# diffy/core/hunks.py
from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import List, Sequence, Tuple

from diffy.core.aligner import EditKind, EditOp

Span = Tuple[int, int]


class HunkKind(str, Enum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"


@dataclass(frozen=True)
class Hunk:
    kind: HunkKind
    left_start: int
    left_end: int
    right_start: int
    right_end: int
    # unit coordinates (0-based first unit, unit count), like a unified-diff header
    left_line: int = 0
    left_count: int = 0
    right_line: int = 0
    right_count: int = 0

    @property
    def left_range(self) -> Span:
        return (self.left_start, self.left_end)

    @property
    def right_range(self) -> Span:
        return (self.right_start, self.right_end)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["kind"] = self.kind.value
        return d


def split_lines(text: str) -> List[str]:
    """Split on '\\n'. Empty text has zero lines; otherwise count('\\n') + 1."""
    if not text:
        return []
    return text.split("\n")


def line_spans(lines: Sequence[str]) -> List[Span]:
    """
    Absolute [start, end) of each line's text, newline excluded.

    The cursor moves by len(line) + 1 for every line but the last, which
    has no terminator after it.
    """
    spans: List[Span] = []
    pos = 0
    last = len(lines) - 1
    for i, line in enumerate(lines):
        spans.append((pos, pos + len(line)))
        pos += len(line) + (1 if i < last else 0)
    return spans


def build_hunks(
    script: Sequence[EditOp],
    left_spans: Sequence[Span],
    right_spans: Sequence[Span],
    left_length: int,
    right_length: int,
) -> List[Hunk]:
    """
    Walk an edit script once and emit one hunk per run of edits.

    A run holding both deletes and inserts is a MODIFIED hunk; a run of only
    deletes is DELETED (zero-width on the right at the current right cursor);
    a run of only inserts is ADDED (zero-width on the left). Offsets come
    from the spans, which index the original, un-normalized text.

    Runs are merged rather than paired op by op so a viewer paints one block
    per changed region: a rewritten paragraph is a single MODIFIED hunk, and
    diffing an empty document against text gives one ADDED hunk covering all
    of it instead of a hunk per line.
    """
    hunks: List[Hunk] = []
    # cursor = start of the next unconsumed unit, or end of text
    i1 = i2 = 0
    n1 = len(left_spans)
    n2 = len(right_spans)

    def cursor(spans: Sequence[Span], idx: int, length: int) -> int:
        return spans[idx][0] if idx < len(spans) else length

    k = 0
    total = len(script)
    while k < total:
        op = script[k]
        if op.kind is EditKind.EQUAL:
            i1 += 1
            i2 += 1
            k += 1
            continue

        first1, first2 = i1, i2
        while k < total and script[k].kind is not EditKind.EQUAL:
            if script[k].kind is EditKind.DELETE:
                i1 += 1
            else:
                i2 += 1
            k += 1
        dels = i1 - first1
        ins = i2 - first2

        if dels:
            l_start, l_end = left_spans[first1][0], left_spans[i1 - 1][1]
        else:
            l_start = l_end = cursor(left_spans, first1, left_length)
        if ins:
            r_start, r_end = right_spans[first2][0], right_spans[i2 - 1][1]
        else:
            r_start = r_end = cursor(right_spans, first2, right_length)

        if dels and ins:
            kind = HunkKind.MODIFIED
        elif dels:
            kind = HunkKind.DELETED
        else:
            kind = HunkKind.ADDED

        hunks.append(Hunk(kind, l_start, l_end, r_start, r_end,
                          first1, dels, first2, ins))

    if i1 != n1 or i2 != n2:
        raise ValueError(
            f"edit script consumed {i1}/{n1} left and {i2}/{n2} right units"
        )
    return hunks


def changed_unit_count(hunks: Sequence[Hunk]) -> int:
    """Deleted plus inserted units behind the hunks (the edit distance)."""
    return sum(h.left_count + h.right_count for h in hunks)
