# diffy/ui_qt/widgets/diff_view.py
from __future__ import annotations

from bisect import bisect_right
from typing import List, Sequence

from PySide6.QtCore import Qt
from PySide6.QtGui import QTextCharFormat, QColor, QPalette, QTextCursor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPlainTextEdit, QSplitter, QTextEdit
)

from diffy.core.hunks import Hunk, HunkKind

# Monospace stack
MONO = 'Consolas, "Cascadia Mono", "Fira Code", ui-monospace, monospace'


def _theme_colors(pal: QPalette) -> dict:
    """Return a small palette that works in both dark and light themes."""
    # detect dark via window color lightness
    dark = pal.color(QPalette.Window).lightness() < 128

    if dark:
        add_bg = QColor(46, 160, 67, int(255 * 0.35))     # green
        del_bg = QColor(248, 81, 73, int(255 * 0.35))     # red
        chg_bg = QColor(250, 208, 0, int(255 * 0.30))     # amber
    else:
        add_bg = QColor(200, 255, 200)                    # light green
        del_bg = QColor(255, 200, 200)                    # light red
        chg_bg = QColor(255, 255, 200)                    # light yellow

    return dict(dark=dark, add_bg=add_bg, del_bg=del_bg, chg_bg=chg_bg)


class Utf16Positions:
    """
    Maps Python code point offsets to Qt (UTF-16) document positions.

    Characters outside the BMP take two UTF-16 units, so every offset past
    one of them shifts by one.
    """
    def __init__(self, text: str):
        self._astral: List[int] = [i for i, ch in enumerate(text) if ord(ch) > 0xFFFF]

    def __call__(self, offset: int) -> int:
        if not self._astral:
            return offset
        return offset + bisect_right(self._astral, offset - 1)


class DiffPane(QWidget):
    def __init__(self, title: str, parent: QWidget | None = None):
        super().__init__(parent)
        lay = QVBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        self.label = QLabel(title)
        self.label.setStyleSheet("font-weight: 600; padding: 5px;")
        self.edit = QPlainTextEdit(self)
        self.edit.setReadOnly(True)
        self.edit.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.edit.setStyleSheet(f"QPlainTextEdit {{ font-family: {MONO}; font-size: 13px; }}")
        lay.addWidget(self.label)
        lay.addWidget(self.edit, 1)


class DiffView(QWidget):
    """
    Side-by-side viewer: original on the left, modified on the right.

    Hunk offsets index the texts handed to show_diff(); they are painted as
    extra selections so the documents themselves stay untouched.
    """
    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self._left_text = ""
        self._right_text = ""
        self._hunks: List[Hunk] = []

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        self.splitter = QSplitter(Qt.Horizontal, self)
        self.left = DiffPane("Original", self)
        self.right = DiffPane("Modified", self)
        self.splitter.addWidget(self.left)
        self.splitter.addWidget(self.right)
        self.splitter.setStretchFactor(0, 1)
        self.splitter.setStretchFactor(1, 1)
        root.addWidget(self.splitter)

        self._sync_scrollbars()

    # -- public API -------------------------------------------------------------
    def set_titles(self, left: str, right: str):
        self.left.label.setText(left or "Original")
        self.right.label.setText(right or "Modified")

    def show_diff(self, left_text: str, right_text: str, hunks: Sequence[Hunk]):
        self._left_text = left_text or ""
        self._right_text = right_text or ""
        self._hunks = list(hunks)
        self.left.edit.setPlainText(self._left_text)
        self.right.edit.setPlainText(self._right_text)
        self._highlight()

    def clear(self):
        self.show_diff("", "", [])

    def refresh_colors(self):
        self._highlight()

    # -- internals --------------------------------------------------------------
    def _sync_scrollbars(self):
        lv = self.left.edit.verticalScrollBar()
        rv = self.right.edit.verticalScrollBar()
        lv.valueChanged.connect(rv.setValue)
        rv.valueChanged.connect(lv.setValue)
        lh = self.left.edit.horizontalScrollBar()
        rh = self.right.edit.horizontalScrollBar()
        lh.valueChanged.connect(rh.setValue)
        rh.valueChanged.connect(lh.setValue)

    def _selection(self, edit: QPlainTextEdit, pos, start: int, end: int, color: QColor):
        fmt = QTextCharFormat()
        fmt.setBackground(color)
        cursor = QTextCursor(edit.document())
        cursor.setPosition(pos(start))
        cursor.setPosition(pos(end), QTextCursor.KeepAnchor)
        sel = QTextEdit.ExtraSelection()
        sel.cursor = cursor
        sel.format = fmt
        return sel

    def _highlight(self):
        c = _theme_colors(self.palette())
        lpos = Utf16Positions(self._left_text)
        rpos = Utf16Positions(self._right_text)
        left_sel = []
        right_sel = []
        for h in self._hunks:
            # zero-width sides (the gap of an insert or delete) get nothing
            if h.kind is HunkKind.ADDED:
                colors = (None, c["add_bg"])
            elif h.kind is HunkKind.DELETED:
                colors = (c["del_bg"], None)
            elif h.kind is HunkKind.MODIFIED:
                colors = (c["chg_bg"], c["chg_bg"])
            else:
                continue
            if colors[0] is not None and h.left_end > h.left_start:
                left_sel.append(self._selection(self.left.edit, lpos, h.left_start, h.left_end, colors[0]))
            if colors[1] is not None and h.right_end > h.right_start:
                right_sel.append(self._selection(self.right.edit, rpos, h.right_start, h.right_end, colors[1]))
        self.left.edit.setExtraSelections(left_sel)
        self.right.edit.setExtraSelections(right_sel)
