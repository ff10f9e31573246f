from __future__ import annotations

from PySide6.QtWidgets import QMainWindow, QTabWidget

from dsasheet.core.catalog import Catalog
from dsasheet.core.completion import CompletionStore
from dsasheet.ui.colors import SheetColors
from dsasheet.ui.problem_list import ProblemListScreen
from dsasheet.ui.progress_view import ProgressScreen


class MainWindow(QMainWindow):
    """Two tabs, Home (problem list) and Progress (analytics), sharing one store.

    Both screens get the catalog and the store through their constructors and
    re-render from the store's change notifications.
    """

    def __init__(self, catalog: Catalog, store: CompletionStore) -> None:
        super().__init__()
        self.setWindowTitle("DSA Sheet")
        self.resize(480, 820)

        self._tabs = QTabWidget()
        self._tabs.setDocumentMode(True)
        self._home = ProblemListScreen(
            catalog=catalog,
            store=store,
            on_show_progress=lambda: self._tabs.setCurrentIndex(1),
        )
        self._progress = ProgressScreen(catalog=catalog, store=store)
        self._tabs.addTab(self._home, "Home")
        self._tabs.addTab(self._progress, "Progress")
        self.setCentralWidget(self._tabs)

        self.setStyleSheet(
            f"""
            QMainWindow {{ background: {SheetColors.BG}; }}
            QTabBar::tab:selected {{ color: {SheetColors.HEADER}; font-weight: bold; }}
            """
        )
