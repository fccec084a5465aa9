# diffy/ui_qt/pages/about_page.py
from __future__ import annotations

import platform
from typing import TYPE_CHECKING

from PySide6.QtCore import qVersion
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QTableWidget, QTableWidgetItem,
    QHeaderView, QAbstractItemView
)

from diffy.config import APP_NAME, APP_VERSION, DOCX_EXTENSIONS, PDF_EXTENSIONS, TEXT_EXTENSIONS

if TYPE_CHECKING:
    from diffy.ui_qt.app_window import MainFluentWindow

FORMATS = [
    ("Plain text", TEXT_EXTENSIONS, "Read as-is, encoding detected"),
    ("Word", DOCX_EXTENSIONS, "Headings, lists and tables flattened to Markdown-like text"),
    ("PDF", PDF_EXTENSIONS, "Text layer only, one block per page"),
]


class AboutPage(QWidget):
    def __init__(self, appwin: "MainFluentWindow"):
        super().__init__(parent=appwin)
        self.setObjectName("AboutPage")
        self.appwin = appwin

        root = QVBoxLayout(self)
        root.setContentsMargins(16, 16, 16, 16)

        title = QLabel(f"{APP_NAME} {APP_VERSION}")
        title.setStyleSheet("font-size:24px; font-weight:700;")
        subtitle = QLabel("Side-by-side document diffs that can ignore whitespace, reflow and punctuation.")
        subtitle.setStyleSheet("color:gray;")
        root.addWidget(title)
        root.addWidget(subtitle)
        root.addSpacing(12)

        root.addWidget(QLabel("Supported formats"))
        self.formats_table = QTableWidget(0, 3, self)
        self.formats_table.setHorizontalHeaderLabels(["Format", "Extensions", "Notes"])
        self.formats_table.verticalHeader().setVisible(False)
        self.formats_table.setSelectionMode(QAbstractItemView.NoSelection)
        self.formats_table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.formats_table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.formats_table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeToContents)
        self.formats_table.horizontalHeader().setSectionResizeMode(2, QHeaderView.Stretch)
        for name, exts, notes in FORMATS:
            r = self.formats_table.rowCount()
            self.formats_table.insertRow(r)
            self.formats_table.setItem(r, 0, QTableWidgetItem(name))
            self.formats_table.setItem(r, 1, QTableWidgetItem(", ".join(sorted(exts))))
            self.formats_table.setItem(r, 2, QTableWidgetItem(notes))
        root.addWidget(self.formats_table)

        runtime = QLabel(f"Python {platform.python_version()} · Qt {qVersion()}")
        runtime.setStyleSheet("color:gray;")
        root.addWidget(runtime)
        root.addStretch(1)
