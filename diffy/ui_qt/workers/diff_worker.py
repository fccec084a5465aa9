# diffy/ui_qt/workers/diff_worker.py
from __future__ import annotations
import logging
from PySide6.QtCore import QThread, Signal

from diffy.core.diff_engine import DiffCancelled, DiffFlags, compute_diff
from diffy.core.document_parser import extract_text
from diffy.ui_qt.workers.common import QtCancelEvent

log = logging.getLogger("diff_worker")


class DiffWorker(QThread):
    status = Signal(str)
    done = Signal(str, str, list)    # left_text, right_text, hunks
    failed = Signal(str)
    cancelled = Signal()

    def __init__(self, left_path: str, right_path: str, flags: DiffFlags):
        super().__init__()
        self.left_path = left_path
        self.right_path = right_path
        self.flags = flags
        self.cancel_event = QtCancelEvent()

    def cancel(self):
        self.cancel_event.set()

    def _load(self, path: str) -> str:
        if not path:
            return ""
        self.status.emit(f"Reading {path}…")
        return extract_text(path)

    def run(self):
        try:
            left = self._load(self.left_path)
            if self.cancel_event.is_set():
                self.cancelled.emit()
                return
            right = self._load(self.right_path)
            if self.cancel_event.is_set():
                self.cancelled.emit()
                return

            self.status.emit("Computing differences…")
            hunks = compute_diff(left, right, self.flags, cancel_event=self.cancel_event)
            self.done.emit(left, right, hunks)
        except DiffCancelled:
            log.info("Diff cancelled: %s vs %s", self.left_path, self.right_path)
            self.cancelled.emit()
        except Exception as e:
            log.exception("Diff failed: %s", e)
            self.failed.emit(str(e))
