# diffy/ui_qt/pages/compare_page.py
from __future__ import annotations

import os
import logging
from typing import TYPE_CHECKING, List, Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QFileDialog
)
from qfluentwidgets import (
    InfoBar, InfoBarPosition, PrimaryPushButton, PushButton, SwitchButton
)

from diffy.config import OPEN_FILES_FILTER
from diffy.core.diff_engine import DiffFlags, diff_stats
from diffy.core.hunks import Hunk
from diffy.ui_qt.widgets.busy_overlay import BusyOverlay
from diffy.ui_qt.widgets.diff_view import DiffView
from diffy.ui_qt.workers.diff_worker import DiffWorker
from diffy.utils.prefs import load_flag_prefs, load_prefs, save_flag_prefs, update_prefs

if TYPE_CHECKING:
    from diffy.ui_qt.app_window import MainFluentWindow

log = logging.getLogger("compare")


class ComparePage(QWidget):
    """Compare two documents side by side; ignore toggles re-run the diff."""
    def __init__(self, appwin: "MainFluentWindow"):
        super().__init__(parent=appwin)
        self.setObjectName("ComparePage")
        self.appwin = appwin
        self._worker: Optional[DiffWorker] = None
        self._live: set = set()    # running workers, kept alive until finished

        self.left_path_edit = QLineEdit(self)
        self.right_path_edit = QLineEdit(self)

        self.ignore_ws_chk = SwitchButton("Ignore whitespace", self)
        self.ignore_reflow_chk = SwitchButton("Ignore reflow", self)
        self.ignore_punct_chk = SwitchButton("Ignore punctuation", self)

        self.summary = QLabel("", self)
        self.diff = DiffView(self)

        root = QVBoxLayout(self)
        root.setContentsMargins(16, 16, 16, 16)

        title = QLabel("Compare")
        title.setStyleSheet("font-size:20px; font-weight:600;")
        root.addWidget(title)

        # --- File row
        files = QHBoxLayout()
        self.left_path_edit.setPlaceholderText("Original: .txt, .md, .docx or .pdf")
        self.right_path_edit.setPlaceholderText("Modified: .txt, .md, .docx or .pdf")
        browse_left_btn = PushButton("Browse…")
        browse_right_btn = PushButton("Browse…")
        files.addWidget(self.left_path_edit, 1)
        files.addWidget(browse_left_btn)
        files.addSpacing(12)
        files.addWidget(self.right_path_edit, 1)
        files.addWidget(browse_right_btn)
        root.addLayout(files)

        # --- Options row
        opts = QHBoxLayout()
        flags = load_flag_prefs()
        self.ignore_ws_chk.setChecked(flags["ignore_whitespace"])
        self.ignore_reflow_chk.setChecked(flags["ignore_reflow"])
        self.ignore_punct_chk.setChecked(flags["ignore_punctuation"])
        opts.addWidget(self.ignore_ws_chk)
        opts.addWidget(self.ignore_reflow_chk)
        opts.addWidget(self.ignore_punct_chk)
        opts.addStretch(1)
        opts.addWidget(self.summary)
        opts.addSpacing(12)
        open_btn = PushButton("Open Files…")
        swap_btn = PushButton("Swap Sides")
        compare_btn = PrimaryPushButton("Compare")
        opts.addWidget(open_btn)
        opts.addWidget(swap_btn)
        opts.addWidget(compare_btn)
        root.addLayout(opts)

        # --- Diff area
        root.addWidget(self.diff, 1)
        self.overlay = BusyOverlay(self)
        self.overlay.cancelRequested.connect(self.cancel)

        browse_left_btn.clicked.connect(lambda: self._browse(self.left_path_edit, "Choose original file"))
        browse_right_btn.clicked.connect(lambda: self._browse(self.right_path_edit, "Choose modified file"))
        open_btn.clicked.connect(self.open_files)
        swap_btn.clicked.connect(self._swap_sides)
        compare_btn.clicked.connect(lambda: self.recompute(silent=False))

        self.ignore_ws_chk.checkedChanged.connect(lambda _on: self._on_flag_changed())
        self.ignore_reflow_chk.checkedChanged.connect(lambda _on: self._on_flag_changed())
        self.ignore_punct_chk.checkedChanged.connect(lambda _on: self._on_flag_changed())

    # ---------- Public API

    def flags(self) -> DiffFlags:
        return DiffFlags(
            ignore_whitespace=self.ignore_ws_chk.isChecked(),
            ignore_reflow=self.ignore_reflow_chk.isChecked(),
            ignore_punctuation=self.ignore_punct_chk.isChecked(),
        )

    def set_flags(self, flags: DiffFlags):
        """Apply default toggles (Settings page); re-diffs if a pair is loaded."""
        for chk, on in ((self.ignore_ws_chk, flags.ignore_whitespace),
                        (self.ignore_reflow_chk, flags.ignore_reflow),
                        (self.ignore_punct_chk, flags.ignore_punctuation)):
            chk.blockSignals(True)
            chk.setChecked(on)
            chk.blockSignals(False)
        self._on_flag_changed()

    def load_files(self, left_path: str, right_path: str):
        self.left_path_edit.setText(left_path or "")
        self.right_path_edit.setText(right_path or "")
        self.recompute(silent=False)

    def open_files(self):
        base = load_prefs().get("last_file_dir") or os.path.expanduser("~")
        files, _ = QFileDialog.getOpenFileNames(self, "Select Two Files to Compare", base, OPEN_FILES_FILTER)
        if len(files) == 2:
            self._remember_dir(files[0])
            self.load_files(files[0], files[1])
        elif files:
            InfoBar.warning("File Selection", "Please select exactly two files to compare.",
                            parent=self.appwin, position=InfoBarPosition.TOP_RIGHT)

    def recompute(self, silent: bool = True):
        left = self.left_path_edit.text().strip()
        right = self.right_path_edit.text().strip()
        if not left and not right:
            return
        for p in (left, right):
            if p and not os.path.isfile(p):
                if not silent:
                    InfoBar.error("Not found", p, parent=self.appwin, position=InfoBarPosition.TOP_RIGHT)
                return
        self._start(DiffWorker(left, right, self.flags()), silent)

    def cancel(self):
        if self._worker and self._worker.isRunning():
            self._worker.cancel()

    def shutdown(self):
        """Stop a running diff before the window goes away."""
        for w in list(self._live):
            w.cancel()
            w.wait(2000)

    # ---------- Worker plumbing

    def _start(self, worker: DiffWorker, silent: bool):
        # only the newest run may update the view
        if self._worker and self._worker.isRunning():
            self._worker.cancel()
        self._worker = worker
        worker.status.connect(self.overlay.set_message)
        worker.done.connect(lambda l, r, h, w=worker: self._on_done(w, l, r, h, silent))
        worker.failed.connect(lambda err, w=worker: self._on_failed(w, err))
        worker.cancelled.connect(lambda w=worker: self._on_cancelled(w))
        worker.finished.connect(lambda w=worker: self._live.discard(w))
        self._live.add(worker)
        self.overlay.show_message("Comparing…")
        worker.start()

    def _on_done(self, worker: DiffWorker, left: str, right: str, hunks: List[Hunk], silent: bool):
        if worker is not self._worker:
            return
        self.overlay.stop()
        self.diff.set_titles(self._title(worker.left_path, "Original"), self._title(worker.right_path, "Modified"))
        self.diff.show_diff(left, right, hunks)

        stats = diff_stats(hunks)
        if hunks:
            self.summary.setText(
                f"{stats['modified']} modified · {stats['added']} added · {stats['deleted']} deleted"
            )
        else:
            self.summary.setText("No differences")
        self.appwin.show_status(f"Comparing: {worker.left_path} and {worker.right_path}")
        log.info("Diff ready: %d hunks (%s)", len(hunks), stats)
        if not silent:
            InfoBar.success("Diff ready",
                            f"{os.path.basename(worker.left_path)}  ↔  {os.path.basename(worker.right_path)}",
                            parent=self.appwin, position=InfoBarPosition.TOP_RIGHT, duration=1500)

    def _on_failed(self, worker: DiffWorker, err: str):
        if worker is not self._worker:
            return
        self.overlay.stop()
        InfoBar.error("Compare failed", err, parent=self.appwin, position=InfoBarPosition.TOP_RIGHT)

    def _on_cancelled(self, worker: DiffWorker):
        if worker is not self._worker:
            return
        self.overlay.stop()
        self.summary.setText("Comparison cancelled")

    # ---------- Helpers

    def _title(self, path: str, fallback: str) -> str:
        return f"{fallback}: {os.path.basename(path)}" if path else f"{fallback} (missing)"

    def _browse(self, edit: QLineEdit, caption: str):
        base = os.path.dirname(edit.text().strip()) or load_prefs().get("last_file_dir") or os.path.expanduser("~")
        path, _ = QFileDialog.getOpenFileName(self, caption, base, OPEN_FILES_FILTER)
        if path:
            edit.setText(path)
            self._remember_dir(path)
            if self.left_path_edit.text().strip() and self.right_path_edit.text().strip():
                self.recompute(silent=False)

    def _remember_dir(self, path: str):
        update_prefs(last_file_dir=os.path.dirname(path))

    def _on_flag_changed(self):
        f = self.flags()
        save_flag_prefs(
            ignore_whitespace=f.ignore_whitespace,
            ignore_reflow=f.ignore_reflow,
            ignore_punctuation=f.ignore_punctuation,
        )
        self.recompute(silent=True)

    def _swap_sides(self):
        left = self.left_path_edit.text()
        right = self.right_path_edit.text()
        self.left_path_edit.setText(right)
        self.right_path_edit.setText(left)
        self.recompute(silent=True)

    def resizeEvent(self, e):
        super().resizeEvent(e)
        if self.overlay.isVisible():
            self.overlay.setGeometry(self.rect())
