# diffy/ui_qt/pages/folders_page.py
from __future__ import annotations

import os
import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QFileDialog,
    QTreeWidget, QTreeWidgetItem
)
from qfluentwidgets import InfoBar, InfoBarPosition, PrimaryPushButton, PushButton, SwitchButton

from diffy.config import FOLDER_COMPARE_EXCLUDED_DEFAULT
from diffy.core.folder_compare import EntryStatus, FolderComparer, FolderEntry, files_for_entry
from diffy.ui_qt.workers.folder_worker import FolderWorker
from diffy.utils.prefs import load_prefs, update_prefs

if TYPE_CHECKING:
    from diffy.ui_qt.app_window import MainFluentWindow

log = logging.getLogger("folders")

STATUS_COLORS = {
    EntryStatus.MODIFIED: QColor(255, 140, 0),     # orange
    EntryStatus.ADDED: QColor(0, 128, 0),          # green
    EntryStatus.DELETED: QColor(255, 0, 0),        # red
    EntryStatus.IDENTICAL: QColor(128, 128, 128),  # gray
}

ENTRY_ROLE = Qt.UserRole


class FoldersPage(QWidget):
    """Two folders compared entry by entry; clicking a file opens it in Compare."""
    fileSelected = Signal(str, str)

    def __init__(self, appwin: "MainFluentWindow"):
        super().__init__(parent=appwin)
        self.setObjectName("FoldersPage")
        self.appwin = appwin
        self._worker: Optional[FolderWorker] = None
        self._items: Dict[str, QTreeWidgetItem] = {}

        root = QVBoxLayout(self)
        root.setContentsMargins(16, 16, 16, 16)

        title = QLabel("Folders")
        title.setStyleSheet("font-size:20px; font-weight:600;")
        root.addWidget(title)

        row = QHBoxLayout()
        self.left_edit = QLineEdit(self)
        self.left_edit.setPlaceholderText("First folder")
        self.right_edit = QLineEdit(self)
        self.right_edit.setPlaceholderText("Second folder")
        browse_left = PushButton("Browse…")
        browse_right = PushButton("Browse…")
        row.addWidget(self.left_edit, 1)
        row.addWidget(browse_left)
        row.addSpacing(12)
        row.addWidget(self.right_edit, 1)
        row.addWidget(browse_right)
        root.addLayout(row)

        opts = QHBoxLayout()
        self.skip_junk_chk = SwitchButton("Skip .git / __pycache__", self)
        self.skip_junk_chk.setChecked(bool(load_prefs().get("folder_skip_default", True)))
        self.hide_identical_chk = SwitchButton("Hide identical", self)
        self.status_lbl = QLabel("", self)
        compare_btn = PrimaryPushButton("Compare Folders")
        opts.addWidget(self.skip_junk_chk)
        opts.addWidget(self.hide_identical_chk)
        opts.addStretch(1)
        opts.addWidget(self.status_lbl)
        opts.addWidget(compare_btn)
        root.addLayout(opts)

        self.tree = QTreeWidget(self)
        self.tree.setHeaderLabels(["File", "Status"])
        self.tree.setColumnWidth(0, 360)
        root.addWidget(self.tree, 1)

        browse_left.clicked.connect(lambda: self._browse(self.left_edit, "Select First Folder"))
        browse_right.clicked.connect(lambda: self._browse(self.right_edit, "Select Second Folder"))
        compare_btn.clicked.connect(self.compare)
        self.hide_identical_chk.checkedChanged.connect(self._apply_filter)
        self.skip_junk_chk.checkedChanged.connect(self._on_skip_changed)
        self.tree.itemClicked.connect(self._on_item_clicked)

    # ---------- Public API

    def load_folders(self, left: str, right: str):
        self.left_edit.setText(left)
        self.right_edit.setText(right)
        self.compare()

    def compare(self):
        left = self.left_edit.text().strip()
        right = self.right_edit.text().strip()
        if not (os.path.isdir(left) and os.path.isdir(right)):
            InfoBar.warning("Folders", "Pick two existing folders first.",
                            parent=self.appwin, position=InfoBarPosition.TOP_RIGHT)
            return
        if self._worker and self._worker.isRunning():
            self._worker.stop()
            self._worker.wait(2000)

        self.tree.clear()
        self._items.clear()
        root_item = QTreeWidgetItem(self.tree, ["Comparing Folders", ""])
        root_item.setExpanded(True)
        self._items[""] = root_item

        patterns = FOLDER_COMPARE_EXCLUDED_DEFAULT if self.skip_junk_chk.isChecked() else []
        comparer = FolderComparer(left, right, patterns)
        self._worker = FolderWorker(comparer)
        self._worker.batch.connect(self._add_entries)
        self._worker.status.connect(self.status_lbl.setText)
        self._worker.finishedOk.connect(self._on_finished)
        self._worker.start()
        self.appwin.show_status(f"Comparing folders: {left} and {right}")
        log.info("Comparing folders %s and %s", left, right)

    def shutdown(self):
        if self._worker and self._worker.isRunning():
            self._worker.stop()
            self._worker.wait(2000)

    # ---------- Internals

    def _browse(self, edit: QLineEdit, caption: str):
        base = edit.text().strip() or load_prefs().get("last_folder_dir") or os.path.expanduser("~")
        path = QFileDialog.getExistingDirectory(self, caption, base)
        if path:
            edit.setText(path)
            update_prefs(last_folder_dir=os.path.dirname(path))

    def _add_entries(self, entries: List[FolderEntry]):
        for e in entries:
            parent = self._items.get(os.path.dirname(e.rel_path), self._items[""])
            item = QTreeWidgetItem(parent, [e.name, e.status.value])
            item.setData(0, ENTRY_ROLE, e)
            color = STATUS_COLORS.get(e.status)
            if color is not None:
                item.setForeground(1, color)
            if e.is_dir:
                self._items[e.rel_path] = item
                item.setExpanded(True)
        self._apply_filter()

    def _apply_filter(self, *_):
        hide = self.hide_identical_chk.isChecked()
        for item in self._iter_items(self.tree.invisibleRootItem()):
            e = item.data(0, ENTRY_ROLE)
            if isinstance(e, FolderEntry) and e.status is EntryStatus.IDENTICAL:
                item.setHidden(hide)

    def _iter_items(self, parent: QTreeWidgetItem):
        for i in range(parent.childCount()):
            child = parent.child(i)
            yield child
            yield from self._iter_items(child)

    def _on_skip_changed(self, on: bool):
        update_prefs(folder_skip_default=bool(on))

    def _on_finished(self):
        log.info("Folder comparison finished")

    def _on_item_clicked(self, item: QTreeWidgetItem, _column: int):
        e = item.data(0, ENTRY_ROLE)
        if not isinstance(e, FolderEntry) or not e.is_file:
            return
        left, right = files_for_entry(e)
        self.fileSelected.emit(left, right)
