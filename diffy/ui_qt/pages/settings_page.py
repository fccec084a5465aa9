from __future__ import annotations
import logging
from typing import TYPE_CHECKING
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel
from qfluentwidgets import ComboBox, SwitchButton, Theme, setTheme
from diffy.core.diff_engine import DiffFlags
from diffy.utils.prefs import load_flag_prefs, load_prefs, update_prefs

if TYPE_CHECKING:
    from diffy.ui_qt.app_window import MainFluentWindow

log = logging.getLogger("settings")

THEMES = {
    "Light": Theme.LIGHT,
    "Dark": Theme.DARK,
    "Auto": Theme.AUTO,
}


def apply_theme_by_name(name: str) -> str:
    """Switch the fluent theme; unknown names fall back to Auto."""
    if name not in THEMES:
        name = "Auto"
    setTheme(THEMES[name])
    return name


class SettingsPage(QWidget):
    def __init__(self, appwin: "MainFluentWindow"):
        super().__init__(parent=appwin)
        self.setObjectName("SettingsPage")
        self.appwin = appwin

        root = QVBoxLayout(self)
        root.setContentsMargins(16, 16, 16, 16)

        title = QLabel("Settings")
        title.setStyleSheet("font-size:20px; font-weight:600;")
        root.addWidget(title)

        theme_row = QHBoxLayout()
        theme_row.addWidget(QLabel("Theme:"))
        self.theme_combo = ComboBox(self)
        self.theme_combo.addItems(list(THEMES))
        theme_row.addWidget(self.theme_combo)
        theme_row.addStretch(1)
        root.addLayout(theme_row)

        root.addSpacing(12)
        root.addWidget(QLabel("Default comparison options:"))
        self.ws_switch = SwitchButton("Ignore whitespace", self)
        self.reflow_switch = SwitchButton("Ignore reflow", self)
        self.punct_switch = SwitchButton("Ignore punctuation", self)
        for sw in (self.ws_switch, self.reflow_switch, self.punct_switch):
            root.addWidget(sw)

        root.addStretch(1)

        theme_pref = load_prefs().get("theme_mode", "Auto")
        if theme_pref not in THEMES:
            theme_pref = "Auto"
        self.theme_combo.setCurrentText(theme_pref)
        self._sync_flag_switches()

        self.theme_combo.currentTextChanged.connect(self._on_theme_change)
        for sw in (self.ws_switch, self.reflow_switch, self.punct_switch):
            sw.checkedChanged.connect(lambda _on: self._on_flags_change())

    def showEvent(self, e):
        # the compare page may have changed the toggles since we were last shown
        self._sync_flag_switches()
        super().showEvent(e)

    def _sync_flag_switches(self):
        flags = load_flag_prefs()
        for sw, key in ((self.ws_switch, "ignore_whitespace"),
                        (self.reflow_switch, "ignore_reflow"),
                        (self.punct_switch, "ignore_punctuation")):
            sw.blockSignals(True)
            sw.setChecked(flags[key])
            sw.blockSignals(False)

    def _on_theme_change(self, name: str):
        log.info("SettingsPage: theme changed to '%s'", name)
        self.appwin.update_theme(name)
        update_prefs(theme_mode=name)

    def _on_flags_change(self):
        flags = DiffFlags(
            ignore_whitespace=self.ws_switch.isChecked(),
            ignore_reflow=self.reflow_switch.isChecked(),
            ignore_punctuation=self.punct_switch.isChecked(),
        )
        log.info("SettingsPage: default flags -> %s", flags)
        # compare page persists them and re-runs a loaded diff
        self.appwin.compare_page.set_flags(flags)
