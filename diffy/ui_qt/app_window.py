from __future__ import annotations
import os
import sys
import logging
from typing import List

from PySide6.QtWidgets import QApplication, QLabel
from qfluentwidgets import (
    FluentWindow,
    NavigationItemPosition, FluentIcon,
    InfoBar, InfoBarPosition
)

from diffy.ui_qt.pages.compare_page import ComparePage
from diffy.ui_qt.pages.folders_page import FoldersPage
from diffy.ui_qt.pages.settings_page import SettingsPage, apply_theme_by_name
from diffy.ui_qt.pages.about_page import AboutPage
from diffy.utils.prefs import load_prefs, update_prefs
from diffy.config import WINDOW_SIZE, WINDOW_TITLE

log = logging.getLogger("app")


class MainFluentWindow(FluentWindow):
    def __init__(self):
        super().__init__()

        self.setWindowTitle(WINDOW_TITLE)
        self.resize(*WINDOW_SIZE)
        self.setAcceptDrops(True)

        prefs = load_prefs()
        theme_pref = prefs.get("theme_mode", "Auto")
        log.info("Launching MainFluentWindow (theme_pref=%s)", theme_pref)

        # Pages
        self.compare_page = ComparePage(self)
        self.folders_page = FoldersPage(self)
        self.settings_page = SettingsPage(self)
        self.about_page = AboutPage(self)

        self.addSubInterface(self.compare_page,  FluentIcon.DOCUMENT, "Compare",  NavigationItemPosition.TOP)
        self.addSubInterface(self.folders_page,  FluentIcon.FOLDER,   "Folders",  NavigationItemPosition.TOP)
        self.addSubInterface(self.settings_page, FluentIcon.SETTING,  "Settings", NavigationItemPosition.BOTTOM)
        self.addSubInterface(self.about_page,    FluentIcon.INFO,     "About",    NavigationItemPosition.BOTTOM)

        self.folders_page.fileSelected.connect(self.open_pair)

        # Status line under the title bar
        self.status_lbl = QLabel("", self)
        self.status_lbl.setStyleSheet("color:gray; padding: 0 8px;")
        self.titleBar.hBoxLayout.insertWidget(2, self.status_lbl, 1)

        self.update_theme(theme_pref)
        self._restore_window_state()

    def update_theme(self, name: str):
        log.info("update_theme(%s)", name)
        apply_theme_by_name(name)
        self.compare_page.diff.refresh_colors()

    def show_status(self, msg: str):
        self.status_lbl.setText(msg)

    def open_pair(self, left: str, right: str):
        self.switchTo(self.compare_page)
        self.compare_page.load_files(left, right)

    def dragEnterEvent(self, e):
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):
        paths: List[str] = [u.toLocalFile() for u in e.mimeData().urls() if u.toLocalFile()]
        if len(paths) == 2 and all(os.path.isfile(p) for p in paths):
            self.open_pair(paths[0], paths[1])
        elif len(paths) == 2 and all(os.path.isdir(p) for p in paths):
            self.switchTo(self.folders_page)
            self.folders_page.load_folders(paths[0], paths[1])
        else:
            InfoBar.warning("Drop", "Drop exactly two files or two folders to compare.",
                            parent=self, duration=2500, position=InfoBarPosition.TOP_RIGHT)

    def _restore_window_state(self):
        prefs = load_prefs()
        geom_hex = prefs.get("window_geometry_hex")
        maximized = bool(prefs.get("window_maximized", False))
        try:
            if geom_hex:
                self.restoreGeometry(bytes.fromhex(geom_hex))
        except ValueError:
            log.warning("Ignoring malformed window geometry in prefs")
        if maximized:
            self.showMaximized()

    def _save_window_state(self):
        update_prefs(
            window_geometry_hex=bytes(self.saveGeometry()).hex(),
            window_maximized=self.isMaximized(),
        )

    def closeEvent(self, event):
        self.compare_page.shutdown()
        self.folders_page.shutdown()
        self._save_window_state()
        super().closeEvent(event)


def launch_qt() -> int:
    app = QApplication(sys.argv)
    win = MainFluentWindow()
    win.show()

    # diffy-gui LEFT RIGHT opens straight into a comparison
    args = [a for a in sys.argv[1:] if not a.startswith("-")]
    if len(args) == 2:
        if all(os.path.isdir(a) for a in args):
            win.switchTo(win.folders_page)
            win.folders_page.load_folders(*args)
        else:
            win.open_pair(*args)
    return app.exec()
