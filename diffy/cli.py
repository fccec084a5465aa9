from __future__ import annotations

import os
import sys
import json
import argparse
from typing import List

from diffy.core.diff_engine import DiffFlags, compute_diff, diff_stats
from diffy.core.document_parser import extract_text
from diffy.core.folder_compare import EntryStatus, FolderComparer
from diffy.core.hunks import Hunk, HunkKind
from diffy.config import FOLDER_COMPARE_EXCLUDED_DEFAULT

_MARKS = {
    HunkKind.ADDED: "added",
    HunkKind.DELETED: "deleted",
    HunkKind.MODIFIED: "modified",
}


def format_hunks_text(hunks: List[Hunk], left_text: str, right_text: str) -> str:
    """One '@@ -l,c +l,c @@ kind' header per hunk followed by -/+ lines."""
    out: List[str] = []
    for h in hunks:
        out.append(f"@@ -{h.left_line + 1},{h.left_count} +{h.right_line + 1},{h.right_count} @@ {_MARKS[h.kind]}")
        if h.left_count:
            for line in left_text[h.left_start:h.left_end].split("\n"):
                out.append("-" + line)
        if h.right_count:
            for line in right_text[h.right_start:h.right_end].split("\n"):
                out.append("+" + line)
    return "\n".join(out)


def _compare_files(left: str, right: str, flags: DiffFlags, fmt: str) -> int:
    left_text = extract_text(left)
    right_text = extract_text(right)
    hunks = compute_diff(left_text, right_text, flags)

    if fmt == "json":
        print(json.dumps({
            "left": left,
            "right": right,
            "flags": {
                "ignore_whitespace": flags.ignore_whitespace,
                "ignore_reflow": flags.ignore_reflow,
                "ignore_punctuation": flags.ignore_punctuation,
            },
            "stats": diff_stats(hunks),
            "hunks": [h.to_dict() for h in hunks],
        }, indent=2))
    elif hunks:
        print(f"--- {left}")
        print(f"+++ {right}")
        print(format_hunks_text(hunks, left_text, right_text))
    return 1 if hunks else 0


def _compare_folders(left: str, right: str, fmt: str, use_default_excludes: bool) -> int:
    comparer = FolderComparer(left, right, FOLDER_COMPARE_EXCLUDED_DEFAULT if use_default_excludes else [])
    entries = list(comparer.yield_entries())
    if fmt == "json":
        print(json.dumps([
            {"path": e.rel_path.replace(os.sep, "/"), "status": e.status.value, "depth": e.depth}
            for e in entries
        ], indent=2))
    else:
        for e in entries:
            print(f"{'  ' * e.depth}{e.name}{'/' if e.is_dir else ''}  [{e.status.value}]")
    differs = any(e.status not in (EntryStatus.IDENTICAL, EntryStatus.DIRECTORY) for e in entries)
    return 1 if differs else 0


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Compare two documents (txt, md, docx, pdf) or two folders")
    p.add_argument("left", help="Original file or folder")
    p.add_argument("right", help="Modified file or folder")
    p.add_argument("--ignore-whitespace", "-w", action="store_true", help="Treat lines differing only in spacing as equal")
    p.add_argument("--ignore-reflow", "-r", action="store_true", help="Compare paragraphs instead of lines")
    p.add_argument("--ignore-punctuation", "-p", action="store_true", help="Ignore . , ; : ! ? ' \" changes")
    p.add_argument("--format", "-f", choices=("text", "json"), default="text", help="Output format")
    p.add_argument("--no-default-excludes", action="store_true", help="Folders: also compare .git, __pycache__, …")

    args = p.parse_args(argv)
    left = os.path.abspath(args.left)
    right = os.path.abspath(args.right)

    if os.path.isdir(left) and os.path.isdir(right):
        return _compare_folders(left, right, args.format, not args.no_default_excludes)

    for path in (left, right):
        if not os.path.isfile(path):
            print(f"Not a file or folder pair: {path}", file=sys.stderr)
            return 2

    flags = DiffFlags(
        ignore_whitespace=args.ignore_whitespace,
        ignore_reflow=args.ignore_reflow,
        ignore_punctuation=args.ignore_punctuation,
    )
    return _compare_files(left, right, flags, args.format)


if __name__ == "__main__":
    raise SystemExit(main())
