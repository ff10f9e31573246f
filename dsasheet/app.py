"""Application entry point and setup for the DSA sheet tracker."""

import logging
import sys

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication

from dsasheet.config import AppSettings
from dsasheet.core.catalog import load_catalog
from dsasheet.core.completion import CompletionStore
from dsasheet.core.lifecycle import ACTIVE, BACKGROUND, INACTIVE, ResumeWatcher
from dsasheet.core.storage import LocalStorage
from dsasheet.ui.main_window import MainWindow

_APP_STATES = {
    Qt.ApplicationState.ApplicationActive: ACTIVE,
    Qt.ApplicationState.ApplicationInactive: INACTIVE,
    Qt.ApplicationState.ApplicationHidden: BACKGROUND,
    Qt.ApplicationState.ApplicationSuspended: BACKGROUND,
}


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load settings, catalog and saved progress, then start the main window."""
    settings = AppSettings.from_env()
    configure_logging(settings.log_level_value)

    app = QApplication(sys.argv)
    app.setApplicationName("DSA Sheet")
    app.setApplicationDisplayName("DSA Sheet")

    catalog = load_catalog(settings.catalog_path)
    store = CompletionStore(LocalStorage(settings.data_dir))
    store.refresh()

    watcher = ResumeWatcher(on_resume=store.refresh)

    def _on_state_changed(state: Qt.ApplicationState) -> None:
        watcher.update(_APP_STATES.get(state, BACKGROUND))

    app.applicationStateChanged.connect(_on_state_changed)

    window = MainWindow(catalog=catalog, store=store)
    window.show()
    logging.info("Tracking %d problems, data in %s", len(catalog.problems()), settings.data_dir)

    sys.exit(app.exec())
