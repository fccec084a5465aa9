# diffy/core/aligner.py
"""
Shortest edit script between two sequences (Myers, "An O(ND) Difference
Algorithm and Its Variations", 1986).

The forward greedy search only records the insert/delete moves as a linked
history; diagonal (equal) moves are replayed afterwards, since after every
edit the search slides down its diagonal as far as it can.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Sequence, Tuple

from diffy.utils.logger import get_logger

logger = get_logger("aligner")


class DiffError(Exception):
    """Base class for errors raised by the diff core."""


class DiffCancelled(DiffError):
    """The caller's cancel event was set while the alignment was running."""


class CancelEventLike(Protocol):
    """Duck-typed cancel event (e.g., threading.Event)."""
    def is_set(self) -> bool: ...


class EditKind(str, Enum):
    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"


@dataclass(frozen=True)
class EditOp:
    kind: EditKind
    old_index: int    # index into seq1; for INSERT, the pivot before which the line goes
    new_index: int    # index into seq2; for DELETE, the pivot in seq2


# History node: (kind, previous node). Only edits are stored.
_History = Optional[Tuple[EditKind, "_History"]]


def shortest_edit_script(
    seq1: Sequence[str],
    seq2: Sequence[str],
    cancel_event: Optional[CancelEventLike] = None,
) -> List[EditOp]:
    """
    Return a minimal list of EditOps turning ``seq1`` into ``seq2``.

    Ties between equally short scripts are broken the same way every time:
    matching elements are consumed as early as possible, and where a delete
    and an insert lead to the same point the path deletes before it inserts.
    A changed element therefore always comes out as DELETE followed by INSERT.

    Raises DiffCancelled if ``cancel_event`` is set between rounds.
    """
    n = len(seq1)
    m = len(seq2)

    # Common prefix / suffix are equal regardless of what happens in between.
    prefix = 0
    while prefix < n and prefix < m and seq1[prefix] == seq2[prefix]:
        prefix += 1
    suffix = 0
    while (suffix < n - prefix and suffix < m - prefix
           and seq1[n - 1 - suffix] == seq2[m - 1 - suffix]):
        suffix += 1

    a = seq1[prefix:n - suffix]
    b = seq2[prefix:m - suffix]

    script = [EditOp(EditKind.EQUAL, i, i) for i in range(prefix)]
    history = _search(a, b, cancel_event)
    script.extend(_replay(history, a, b, prefix))
    di = n - suffix
    dj = m - suffix
    script.extend(EditOp(EditKind.EQUAL, di + k, dj + k) for k in range(suffix))
    return script


def _search(a: Sequence[str], b: Sequence[str], cancel_event: Optional[CancelEventLike]) -> _History:
    n = len(a)
    m = len(b)
    if n == 0 and m == 0:
        return None

    max_d = n + m
    offset = max_d + 1
    # frontier[k + offset] = (furthest x on diagonal k, history)
    frontier: List[Tuple[int, _History]] = [(-1, None)] * (2 * max_d + 3)

    x = 0
    while x < n and x < m and a[x] == b[x]:
        x += 1
    frontier[offset] = (x, None)
    if x >= n and x >= m:
        return None

    for d in range(1, max_d + 1):
        if cancel_event is not None and cancel_event.is_set():
            logger.info("Alignment cancelled at edit distance %d", d)
            raise DiffCancelled(f"alignment cancelled at edit distance {d}")

        for k in range(-d, d + 1, 2):
            x_minus, h_minus = frontier[offset + k - 1]
            x_plus, h_plus = frontier[offset + k + 1]

            # insert comes down from diagonal k+1, delete comes across from k-1
            can_insert = k != d and x_plus >= 0 and x_plus - k <= m
            can_delete = k != -d and x_minus >= 0 and x_minus < n

            # Furthest reach wins. When both land on the same point the insert
            # is taken, so the path deletes first and inserts last.
            if can_insert and (not can_delete or x_minus < x_plus):
                x = x_plus
                history: _History = (EditKind.INSERT, h_plus)
            elif can_delete:
                x = x_minus + 1
                history = (EditKind.DELETE, h_minus)
            else:
                frontier[offset + k] = (-1, None)
                continue

            y = x - k

            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1

            frontier[offset + k] = (x, history)
            if x >= n and y >= m:
                return history

    # unreachable: d == n + m always reaches the corner
    raise AssertionError("edit graph search did not terminate")


def _replay(history: _History, a: Sequence[str], b: Sequence[str], base: int) -> List[EditOp]:
    edits: List[EditKind] = []
    node = history
    while node is not None:
        edits.append(node[0])
        node = node[1]
    edits.reverse()

    n = len(a)
    m = len(b)
    out: List[EditOp] = []
    x = y = 0

    def snake() -> None:
        nonlocal x, y
        while x < n and y < m and a[x] == b[y]:
            out.append(EditOp(EditKind.EQUAL, base + x, base + y))
            x += 1
            y += 1

    snake()
    for kind in edits:
        if kind is EditKind.DELETE:
            out.append(EditOp(EditKind.DELETE, base + x, base + y))
            x += 1
        else:
            out.append(EditOp(EditKind.INSERT, base + x, base + y))
            y += 1
        snake()
    return out


def edit_distance(script: Sequence[EditOp]) -> int:
    """Number of INSERT + DELETE operations in a script."""
    return sum(1 for op in script if op.kind is not EditKind.EQUAL)


def apply_script(seq1: Sequence[str], seq2: Sequence[str], script: Sequence[EditOp]) -> List[str]:
    """Replay ``script`` on ``seq1``; the result equals ``seq2`` for a valid script."""
    out: List[str] = []
    for op in script:
        if op.kind is EditKind.EQUAL:
            out.append(seq1[op.old_index])
        elif op.kind is EditKind.INSERT:
            out.append(seq2[op.new_index])
    return out
