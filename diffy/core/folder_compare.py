# diffy/core/folder_compare.py

import os
from dataclasses import dataclass
from enum import Enum
from typing import Generator, Iterable, Optional, Tuple

from pathspec import PathSpec

from diffy.utils.logger import get_logger

logger = get_logger("folders")

_CHUNK = 1024 * 1024


class EntryStatus(str, Enum):
    DIRECTORY = "Directory"
    IDENTICAL = "Identical"
    MODIFIED = "Modified"
    ADDED = "Added"
    DELETED = "Deleted"
    TYPE_MISMATCH = "Type mismatch"


@dataclass(frozen=True)
class FolderEntry:
    name: str
    rel_path: str
    status: EntryStatus
    left_path: str      # "" when the entry only exists on the right
    right_path: str     # "" when the entry only exists on the left
    depth: int = 0

    @property
    def is_dir(self) -> bool:
        return self.status is EntryStatus.DIRECTORY

    @property
    def is_file(self) -> bool:
        path = self.left_path or self.right_path
        return bool(path) and os.path.isfile(path)


def files_identical(path1: str, path2: str) -> bool:
    """Byte equality; different sizes short-circuit without reading."""
    if os.path.getsize(path1) != os.path.getsize(path2):
        return False
    with open(path1, "rb") as f1, open(path2, "rb") as f2:
        while True:
            b1 = f1.read(_CHUNK)
            b2 = f2.read(_CHUNK)
            if b1 != b2:
                return False
            if not b1:
                return True


def _kind(path: str) -> str:
    """
    "dir", "file", "link" or "other" without following directory links.
    A link to a regular file reads as "file" and is compared by content;
    links to directories and dangling links are "link" and never walked.
    """
    if os.path.islink(path):
        return "file" if os.path.isfile(path) else "link"
    if os.path.isdir(path):
        return "dir"
    if os.path.isfile(path):
        return "file"
    return "other"


def files_for_entry(entry: FolderEntry) -> Tuple[str, str]:
    """
    Pair of paths to diff for a picked entry. A one-sided file is paired
    with "" so the viewer shows it against an empty document.
    """
    return entry.left_path, entry.right_path


class FolderComparer:
    """Walks two trees side by side and classifies every entry by name."""

    def __init__(self, left_root: str, right_root: str, excluded_patterns: Optional[Iterable[str]] = None):
        self.left_root = os.path.abspath(left_root)
        self.right_root = os.path.abspath(right_root)
        self._spec: Optional[PathSpec] = None
        self.set_excluded_patterns(excluded_patterns or [])

    def set_excluded_patterns(self, patterns: Iterable[str]) -> None:
        patterns = [p for p in patterns if p and p.strip()]
        self.excluded_patterns = patterns
        self._spec = PathSpec.from_lines("gitwildmatch", patterns) if patterns else None

    def _excluded(self, rel_path: str, is_dir: bool) -> bool:
        if not self._spec:
            return False
        rel = rel_path.replace(os.sep, "/")
        # directory patterns ("build/") only match paths with a trailing slash
        return self._spec.match_file(rel + "/" if is_dir else rel)

    def _list(self, path: str) -> set:
        try:
            return set(os.listdir(path))
        except FileNotFoundError:
            return set()
        except OSError as e:
            logger.error(f"Cannot list {path}: {e}")
            return set()

    def yield_entries(self) -> Generator[FolderEntry, None, None]:
        """Depth-first, names sorted case-insensitively within each folder."""
        yield from self._walk("", 0)

    def _walk(self, rel_dir: str, depth: int) -> Generator[FolderEntry, None, None]:
        left_dir = os.path.join(self.left_root, rel_dir) if rel_dir else self.left_root
        right_dir = os.path.join(self.right_root, rel_dir) if rel_dir else self.right_root
        left_names = self._list(left_dir)
        right_names = self._list(right_dir)

        for name in sorted(left_names | right_names, key=lambda s: (s.lower(), s)):
            rel_path = os.path.join(rel_dir, name) if rel_dir else name
            p1 = os.path.join(left_dir, name)
            p2 = os.path.join(right_dir, name)
            # sides come from the listings so dangling links still count as present
            on_left = name in left_names
            on_right = name in right_names
            kind1 = _kind(p1) if on_left else None
            kind2 = _kind(p2) if on_right else None
            is_dir = (kind1 or kind2) == "dir"
            if self._excluded(rel_path, is_dir):
                logger.debug(f"Excluding {rel_path} from folder comparison")
                continue

            if on_left and on_right:
                if kind1 != kind2 or kind1 == "other":
                    yield FolderEntry(name, rel_path, EntryStatus.TYPE_MISMATCH, p1, p2, depth)
                elif kind1 == "dir":
                    yield FolderEntry(name, rel_path, EntryStatus.DIRECTORY, p1, p2, depth)
                    yield from self._walk(rel_path, depth + 1)
                elif kind1 == "link":
                    yield FolderEntry(name, rel_path, self._link_status(p1, p2), p1, p2, depth)
                else:
                    yield FolderEntry(name, rel_path, self._file_status(p1, p2), p1, p2, depth)
            elif on_left:
                yield FolderEntry(name, rel_path, EntryStatus.DELETED, p1, "", depth)
            else:
                yield FolderEntry(name, rel_path, EntryStatus.ADDED, "", p2, depth)

    def _file_status(self, p1: str, p2: str) -> EntryStatus:
        try:
            return EntryStatus.IDENTICAL if files_identical(p1, p2) else EntryStatus.MODIFIED
        except OSError as e:
            logger.error(f"Failed to compare {p1} and {p2}: {e}")
            return EntryStatus.MODIFIED

    def _link_status(self, p1: str, p2: str) -> EntryStatus:
        try:
            return EntryStatus.IDENTICAL if os.readlink(p1) == os.readlink(p2) else EntryStatus.MODIFIED
        except OSError as e:
            logger.error(f"Failed to read links {p1} and {p2}: {e}")
            return EntryStatus.MODIFIED
