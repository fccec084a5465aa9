# diffy/ui_qt/widgets/busy_overlay.py
from __future__ import annotations

from PySide6.QtCore import Qt, QSize, Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QFrame
from qfluentwidgets import IndeterminateProgressRing, PushButton


class BusyOverlay(QFrame):
    """Spinner + message over the parent widget, with a Cancel button."""
    cancelRequested = Signal()

    def __init__(self, parent: QWidget):
        super().__init__(parent)
        self.setObjectName("BusyOverlay")
        self.setAttribute(Qt.WA_TransparentForMouseEvents, False)
        self.setWindowFlags(Qt.Widget)
        self.setStyleSheet("""
            #BusyOverlay {
                background: rgba(0,0,0,0.35);
                border: none;
            }
        """)
        self.hide()

        box = QVBoxLayout(self)
        box.setAlignment(Qt.AlignCenter)

        self.spinner = IndeterminateProgressRing(self)
        self.spinner.setFixedSize(QSize(56, 56))
        box.addWidget(self.spinner, 0, Qt.AlignHCenter)

        self.msg = QLabel("Working…", self)
        self.msg.setStyleSheet("font-size:15px; font-weight:600; color: white;")
        box.addSpacing(8)
        box.addWidget(self.msg, 0, Qt.AlignHCenter)

        self.cancel_btn = PushButton("Cancel", self)
        self.cancel_btn.clicked.connect(self._on_cancel)
        box.addSpacing(8)
        box.addWidget(self.cancel_btn, 0, Qt.AlignHCenter)

    def show_message(self, text: str = "Working…"):
        self.msg.setText(text)
        self.cancel_btn.setEnabled(True)
        self._reposition()
        self.raise_()
        self.show()

    def set_message(self, text: str):
        self.msg.setText(text)

    def stop(self):
        self.hide()

    def _on_cancel(self):
        self.cancel_btn.setEnabled(False)
        self.msg.setText("Cancelling…")
        self.cancelRequested.emit()

    def resizeEvent(self, e):
        super().resizeEvent(e)
        self._reposition()

    def _reposition(self):
        if not self.parent():
            return
        self.setGeometry(self.parent().rect())
