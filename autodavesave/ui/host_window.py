from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QAction, QCloseEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QMainWindow,
    QMenuBar,
    QMessageBox,
    QPlainTextEdit,
    QStatusBar,
    QTabWidget,
)

from ..core.commands import Command, CommandItem
from ..core.host import (
    ERROR_INVALID_PARAMETER,
    ERROR_INVALID_WINDOW_HANDLE,
    SAVE_ALL_COMMAND_ID,
    DispatchError,
)
from ..plugin import AutoDaveSavePlugin

logger = logging.getLogger(__name__)


@dataclass
class Document:
    editor: QPlainTextEdit
    path: Optional[Path] = None

    @property
    def title(self) -> str:
        name = self.path.name if self.path else "new"
        return f"*{name}" if self.modified else name

    @property
    def modified(self) -> bool:
        return self.editor.document().isModified()


class HostWindow(QMainWindow):
    """
    Minimal tabbed text editor that hosts the AutoDaveSave plugin.

    Plugin commands appear under the Plugins menu as checkable actions; the
    plugin drives their check marks and posts Save All through post_command.
    """

    def __init__(self, plugin: AutoDaveSavePlugin, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.plugin = plugin
        self.documents: List[Document] = []
        self.plugin_actions: Dict[Command, QAction] = {}
        self._closing = False

        self.setWindowTitle("AutoDaveSave Host")
        self.resize(1024, 720)

        self._build_ui()
        self._create_actions()
        self._create_menus()
        self._connect_signals()
        self._load_plugin()
        self._new_document()

        self.plugin.on_host_ready()

    # ------------------------------------------------------------------ UI setup ---
    def _build_ui(self) -> None:
        self.tabs = QTabWidget(self)
        self.tabs.setTabsClosable(True)
        self.tabs.setDocumentMode(True)
        self.setCentralWidget(self.tabs)

        self.status = QStatusBar(self)
        self.setStatusBar(self.status)
        self.status.showMessage("Ready")

    def _create_actions(self) -> None:
        self.new_action = QAction("New", self)
        self.open_action = QAction("Open...", self)
        self.save_all_action = QAction("Save All", self)
        self.exit_action = QAction("Exit", self)

    def _create_menus(self) -> None:
        menubar: QMenuBar = self.menuBar()
        file_menu = menubar.addMenu("&File")
        file_menu.addAction(self.new_action)
        file_menu.addAction(self.open_action)
        file_menu.addSeparator()
        file_menu.addAction(self.save_all_action)
        file_menu.addSeparator()
        file_menu.addAction(self.exit_action)

        self.plugins_menu = menubar.addMenu("&Plugins")

    def _connect_signals(self) -> None:
        self.new_action.triggered.connect(lambda: self._new_document())
        self.open_action.triggered.connect(self._open_document)
        self.save_all_action.triggered.connect(self.save_all)
        self.exit_action.triggered.connect(self.close)
        self.tabs.tabCloseRequested.connect(self._close_tab)

    def _load_plugin(self) -> None:
        items = self.plugin.load(self)
        plugin_menu = self.plugins_menu.addMenu(self.plugin.name)
        for item in items:
            plugin_menu.addAction(self._plugin_action(item))

    def _plugin_action(self, item: CommandItem) -> QAction:
        action = QAction(item.label, self)
        action.setCheckable(item.command.checkable)
        action.setChecked(item.checked)
        # The plugin owns the check state; the action only forwards the click.
        action.triggered.connect(lambda _checked=False, item=item: self._run_plugin_command(item))
        self.plugin_actions[item.command] = action
        return action

    def _run_plugin_command(self, item: CommandItem) -> None:
        action = self.plugin_actions[item.command]
        if action.isCheckable():
            action.setChecked(not action.isChecked())
        item.callback()

    # ------------------------------------------------------------ host protocol ---
    def set_command_checked(self, command: Command, checked: bool) -> None:
        action = self.plugin_actions.get(command)
        if action is not None and action.isCheckable():
            action.setChecked(checked)

    def post_command(self, command_id: int) -> None:
        if self._closing:
            raise DispatchError(ERROR_INVALID_WINDOW_HANDLE)
        if command_id != SAVE_ALL_COMMAND_ID:
            raise DispatchError(ERROR_INVALID_PARAMETER)
        QTimer.singleShot(0, self.save_all)

    # ---------------------------------------------------------------- documents ---
    def _new_document(self, text: str = "", path: Optional[Path] = None) -> Document:
        editor = QPlainTextEdit(self.tabs)
        editor.setPlainText(text)
        editor.document().setModified(False)
        document = Document(editor=editor, path=path)
        editor.modificationChanged.connect(lambda _modified, document=document: self._refresh_title(document))
        self.documents.append(document)
        self.tabs.setCurrentIndex(self.tabs.addTab(editor, document.title))
        return document

    def _open_document(self) -> None:
        path_str, _ = QFileDialog.getOpenFileName(self, "Open File", "", "Text Files (*.txt);;All Files (*.*)")
        if not path_str:
            return
        path = Path(path_str)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            QMessageBox.critical(self, "Failed to open file", str(exc))
            return
        self._new_document(text, path)
        self._notify(f"Opened {path.name}")

    def _close_tab(self, index: int) -> None:
        widget = self.tabs.widget(index)
        self.documents = [doc for doc in self.documents if doc.editor is not widget]
        self.tabs.removeTab(index)
        if widget is not None:
            widget.deleteLater()

    def save_all(self) -> int:
        saved = 0
        for document in list(self.documents):
            if not document.modified:
                continue
            if document.path is None:
                logger.info("Skipping untitled document during Save All")
                continue
            try:
                document.path.write_text(document.editor.toPlainText(), encoding="utf-8")
            except OSError as exc:
                logger.error("Failed to save %s: %s", document.path, exc)
                self._notify(f"Failed to save {document.path.name}")
                continue
            document.editor.document().setModified(False)
            saved += 1
        self._notify(f"Saved {saved} file(s)")
        return saved

    def _refresh_title(self, document: Document) -> None:
        index = self.tabs.indexOf(document.editor)
        if index >= 0:
            self.tabs.setTabText(index, document.title)

    # -------------------------------------------------------------- utilities -----
    def _notify(self, message: str) -> None:
        self.status.showMessage(message, 4000)

    # ---------------------------------------------------------------- lifecycle ---
    def closeEvent(self, event: QCloseEvent) -> None:  # type: ignore[override]
        self._closing = True
        self.plugin.unload()
        super().closeEvent(event)
