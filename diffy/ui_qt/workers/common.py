# diffy/ui_qt/workers/common.py
from __future__ import annotations


class QtCancelEvent:
    """Flag a QThread worker polls between steps (threading.Event-compatible)."""
    def __init__(self):
        self._flag = False

    def is_set(self) -> bool:
        return self._flag

    def set(self):
        self._flag = True
