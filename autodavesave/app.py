from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from .config import configure_logging
from .io.timers import qt_task_factory
from .plugin import AutoDaveSavePlugin
from .ui.about_dialog import about_dialog_factory
from .ui.debug_window import debug_window_factory
from .ui.host_window import HostWindow

logger = logging.getLogger(__name__)


def main() -> int:
    configure_logging()
    app = QApplication(sys.argv)
    plugin = AutoDaveSavePlugin(
        task_factory=qt_task_factory(),
        debug_surface_factory=debug_window_factory(),
        about_factory=about_dialog_factory(),
    )
    window = HostWindow(plugin)
    window.show()
    logger.debug("Host window shown")
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
