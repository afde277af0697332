from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QCloseEvent, QFontDatabase
from PySide6.QtWidgets import QPlainTextEdit, QVBoxLayout, QWidget

from ..config import PLUGIN_NAME


class DebugWindow(QWidget):
    """Resizable tool window showing the autosave countdown."""

    closed = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent, Qt.Tool)
        self.setWindowTitle(f"{PLUGIN_NAME} Debug")
        self.resize(560, 320)
        self.setAttribute(Qt.WA_DeleteOnClose)
        self._disposing = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)

        self.text_view = QPlainTextEdit(self)
        self.text_view.setReadOnly(True)
        self.text_view.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.text_view.setFont(QFontDatabase.systemFont(QFontDatabase.FixedFont))
        layout.addWidget(self.text_view)

    def set_text(self, text: str) -> None:
        if self.text_view.toPlainText() != text:
            self.text_view.setPlainText(text)

    def bring_to_front(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    def dispose(self) -> None:
        self._disposing = True
        self.close()

    def closeEvent(self, event: QCloseEvent) -> None:  # type: ignore[override]
        if not self._disposing:
            self.closed.emit()
        super().closeEvent(event)


def debug_window_factory(parent: QWidget | None = None) -> Callable[[Callable[[], None]], Optional[DebugWindow]]:
    def factory(on_user_close: Callable[[], None]) -> Optional[DebugWindow]:
        window = DebugWindow(parent)
        if parent is not None:
            origin = parent.frameGeometry().topLeft()
            window.move(origin.x() + 40, origin.y() + 80)
        window.closed.connect(on_user_close)
        window.show()
        return window

    return factory
