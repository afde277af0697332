from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..config import LINKEDIN_URL, PLUGIN_NAME, REPO_URL

ABOUT_TEXT = f"""{PLUGIN_NAME}

License
- Apache License 2.0 (see LICENSE)

Repository
- {REPO_URL}

How to use
1) Plugins > {PLUGIN_NAME} > Start or Stop Autosave
2) Select interval: 1, 3, or 10 minutes
3) Optional: Show Timer Selection (Debug)

Notes
- Untitled tabs can trigger Save As prompts when Save All runs

Contact
- LinkedIn: dsii (connect for collaboration)
"""


class AboutDialog(QDialog):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(f"About {PLUGIN_NAME}")
        self.setModal(False)
        self.resize(640, 460)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)

        self.text_view = QPlainTextEdit(self)
        self.text_view.setReadOnly(True)
        self.text_view.setPlainText(ABOUT_TEXT)
        layout.addWidget(self.text_view, 1)

        button_row = QHBoxLayout()
        self.repo_button = QPushButton("Open GitHub Repository", self)
        self.linkedin_button = QPushButton("Open LinkedIn", self)
        self.repo_button.clicked.connect(lambda: open_url(REPO_URL))
        self.linkedin_button.clicked.connect(lambda: open_url(LINKEDIN_URL))
        button_row.addWidget(self.repo_button)
        button_row.addWidget(self.linkedin_button)
        button_row.addStretch(1)
        layout.addLayout(button_row)

    def bring_to_front(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()


def open_url(url: str) -> bool:
    return QDesktopServices.openUrl(QUrl(url))


def about_dialog_factory(parent: QWidget | None = None) -> Callable[[], AboutDialog]:
    def factory() -> AboutDialog:
        dialog = AboutDialog(parent)
        dialog.show()
        return dialog

    return factory
