# diffy/ui_qt/workers/folder_worker.py
from __future__ import annotations
import logging
from typing import List
from PySide6.QtCore import QThread, Signal
import time

from diffy.core.folder_compare import FolderComparer, FolderEntry

log = logging.getLogger("folder_worker")


class FolderWorker(QThread):
    batch = Signal(list)                 # List[FolderEntry]
    status = Signal(str)
    finishedOk = Signal()

    def __init__(self, comparer: FolderComparer):
        super().__init__()
        self.comparer = comparer
        self._stop = False

    def stop(self):
        self._stop = True

    def run(self):
        processed = 0
        batch: List[FolderEntry] = []
        chunk_size = 180

        try:
            for entry in self.comparer.yield_entries():
                if self._stop:
                    self.status.emit("Comparison cancelled.")
                    break
                batch.append(entry)
                processed += 1
                if len(batch) >= chunk_size:
                    self.batch.emit(batch.copy())
                    batch.clear()
                    self.status.emit(f"Comparing… {processed} entries")
                    time.sleep(0.003)

            if not self._stop:
                if batch:
                    self.batch.emit(batch.copy())
                if processed == 0:
                    self.status.emit("Both folders are empty.")
                else:
                    self.status.emit(f"Comparison complete. {processed} entries.")
        except Exception as e:
            log.exception("Folder comparison failed: %s", e)
            # keep what was already compared on screen
            if batch:
                self.batch.emit(batch.copy())
            self.status.emit(f"Comparison failed: {e}")

        # the page leaves its busy state on this signal, so it fires on every path
        self.finishedOk.emit()
