"""Home screen: progress header, filter bar and the topic/problem tree."""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from PySide6.QtCore import Qt, QTimer, QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QProgressBar,
    QPushButton,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from dsasheet.core.catalog import LINK_LABELS, Catalog
from dsasheet.core.completion import CompletionStore
from dsasheet.core.filters import ALL, DIFFICULTY_CHOICES, SOURCE_CHOICES, ProblemFilter, filter_problems
from dsasheet.core.progress import summarize
from dsasheet.ui.colors import DIFFICULTY_COLORS, LINK_COLORS, SheetColors
from dsasheet.ui.models import ProblemRowState, TopicRowState, build_topic_rows

logger = logging.getLogger(__name__)


class ProblemRow(QFrame):
    """One problem: title, difficulty, source links and the completion toggle."""

    def __init__(
        self,
        state: ProblemRowState,
        *,
        on_toggle: Callable[[str], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("problemRow")
        problem = state.problem

        title = QLabel(problem.title)
        title.setObjectName("problemTitle")
        title.setWordWrap(True)
        if state.completed:
            font = title.font()
            font.setStrikeOut(True)
            title.setFont(font)

        difficulty = QLabel(problem.difficulty.label)
        difficulty.setStyleSheet(
            f"color: {DIFFICULTY_COLORS[problem.difficulty]}; font-weight: 600;"
        )

        top = QHBoxLayout()
        top.addWidget(title, 1)
        top.addWidget(difficulty, 0, Qt.AlignRight)

        links = QHBoxLayout()
        links.setSpacing(6)
        for kind, label, url in state.link_buttons():
            button = QPushButton(label)
            button.setCursor(Qt.PointingHandCursor)
            button.setStyleSheet(_pill_style(LINK_COLORS[kind]))
            button.clicked.connect(lambda _=False, u=url: _open_url(u))
            links.addWidget(button)
        links.addStretch(1)

        toggle = QPushButton(state.action_label)
        toggle.setCursor(Qt.PointingHandCursor)
        toggle.setStyleSheet(_pill_style(SheetColors.SUCCESS if state.completed else SheetColors.PRIMARY))
        toggle.clicked.connect(lambda _=False, pid=problem.id: on_toggle(pid))
        links.addWidget(toggle)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 8, 10, 8)
        layout.setSpacing(6)
        layout.addLayout(top)
        layout.addLayout(links)

        border = SheetColors.SUCCESS if state.completed else SheetColors.CARD_BORDER
        self.setStyleSheet(
            f"""
            QFrame#problemRow {{
                background: {SheetColors.CARD_BG};
                border-left: 4px solid {border};
                border-radius: 6px;
            }}
            QLabel#problemTitle {{
                color: {SheetColors.TEXT_MUTED if state.completed else SheetColors.TEXT_PRIMARY};
                font-size: 13px;
            }}
            """
        )


class ProblemListScreen(QWidget):
    """Filterable list of topics and problems backed by the completion store."""

    def __init__(
        self,
        *,
        catalog: Catalog,
        store: CompletionStore,
        on_show_progress: Optional[Callable[[], None]] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._catalog = catalog
        self._store = store
        self._filter = ProblemFilter()
        self._expanded: set[str] = set()

        header = QLabel("DSA Topics")
        header.setStyleSheet("font-size: 22px; font-weight: bold;")
        self._progress_label = QLabel("")
        self._progress_label.setStyleSheet(f"color: {SheetColors.TEXT_SECONDARY}; font-size: 12px;")
        self._progress_bar = QProgressBar()
        self._progress_bar.setTextVisible(False)
        self._progress_bar.setFixedHeight(6)
        self._progress_bar.setRange(0, 1000)
        self._progress_bar.setStyleSheet(
            f"""
            QProgressBar {{ border: none; border-radius: 3px; background: {SheetColors.TRACK}; }}
            QProgressBar::chunk {{ border-radius: 3px; background: {SheetColors.SUCCESS}; }}
            """
        )

        self._filter_toggle = QPushButton("Filter")
        self._filter_toggle.setCheckable(True)
        self._filter_toggle.toggled.connect(self._on_filter_toggled)

        header_row = QHBoxLayout()
        header_col = QVBoxLayout()
        header_col.addWidget(header)
        header_col.addWidget(self._progress_label)
        header_col.addWidget(self._progress_bar)
        header_row.addLayout(header_col, 1)
        header_row.addWidget(self._filter_toggle, 0, Qt.AlignTop)

        self._filter_panel = self._build_filter_panel()
        self._filter_panel.setVisible(False)

        self._tree = QTreeWidget()
        self._tree.setHeaderHidden(True)
        self._tree.setIndentation(12)
        self._tree.itemExpanded.connect(lambda item: self._expanded.add(item.data(0, Qt.UserRole)))
        self._tree.itemCollapsed.connect(lambda item: self._expanded.discard(item.data(0, Qt.UserRole)))

        self._no_results = QLabel("No problems match your filters")
        self._no_results.setAlignment(Qt.AlignCenter)
        self._no_results.setStyleSheet(f"color: {SheetColors.TEXT_SECONDARY}; font-size: 15px; padding: 20px;")

        footer = QHBoxLayout()
        if on_show_progress is not None:
            progress_link = QPushButton("View Progress")
            progress_link.setFlat(True)
            progress_link.setStyleSheet(f"color: {SheetColors.HEADER}; font-weight: 600;")
            progress_link.clicked.connect(on_show_progress)
            footer.addWidget(progress_link)
        footer.addStretch(1)
        self._reset_button = QPushButton("Reset All Progress")
        self._reset_button.setStyleSheet(_pill_style(SheetColors.RESET))
        self._reset_button.clicked.connect(self._on_reset_progress)
        footer.addWidget(self._reset_button)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)
        layout.addLayout(header_row)
        layout.addWidget(self._filter_panel)
        layout.addWidget(self._tree, 1)
        layout.addWidget(self._no_results)
        layout.addLayout(footer)

        self._unsubscribe = store.subscribe(self._on_store_changed)
        self.refresh(store.snapshot())

    @property
    def problem_filter(self) -> ProblemFilter:
        return self._filter

    def set_filter(self, problem_filter: ProblemFilter) -> None:
        self._filter = problem_filter
        self._filter_toggle.setText(("Hide Filters" if self._filter_toggle.isChecked() else "Filter")
                                    + (" ✓" if problem_filter.is_active else ""))
        self.refresh(self._store.snapshot())

    def refresh(self, completed: Mapping[str, bool]) -> None:
        summary = summarize(self._catalog, completed)
        self._progress_label.setText(
            f"Progress: {summary.completed}/{summary.total} ({round(summary.percentage)}%)"
        )
        self._progress_bar.setValue(int(min(summary.percentage, 100.0) * 10))
        self._reset_button.setVisible(summary.completed > 0)

        rows = build_topic_rows(filter_problems(self._catalog, self._filter), completed)
        self._populate(rows)

    def _populate(self, rows: list[TopicRowState]) -> None:
        self._tree.clear()
        self._no_results.setVisible(not rows)
        self._tree.setVisible(bool(rows))
        for topic in rows:
            item = QTreeWidgetItem([f"{topic.name}  ({topic.completed}/{len(topic.problems)})"])
            item.setData(0, Qt.UserRole, topic.name)
            font = item.font(0)
            font.setBold(True)
            item.setFont(0, font)
            self._tree.addTopLevelItem(item)
            for problem_state in topic.problems:
                child = QTreeWidgetItem()
                item.addChild(child)
                self._tree.setItemWidget(child, 0, ProblemRow(problem_state, on_toggle=self._on_toggle))
            item.setExpanded(topic.name in self._expanded)

    def _build_filter_panel(self) -> QWidget:
        panel = QFrame()
        panel.setObjectName("filterPanel")
        panel.setStyleSheet(
            f"QFrame#filterPanel {{ background: {SheetColors.CARD_BG}; border-radius: 8px; }}"
        )

        self._company_input = QLineEdit()
        self._company_input.setPlaceholderText("Company name...")
        self._company_input.textChanged.connect(self._on_filter_inputs_changed)

        self._source_combo = QComboBox()
        for choice in SOURCE_CHOICES:
            self._source_combo.addItem("All" if choice == ALL else LINK_LABELS[choice], choice)
        self._source_combo.currentIndexChanged.connect(self._on_filter_inputs_changed)

        self._difficulty_combo = QComboBox()
        for choice in DIFFICULTY_CHOICES:
            self._difficulty_combo.addItem(choice.capitalize(), choice)
        self._difficulty_combo.currentIndexChanged.connect(self._on_filter_inputs_changed)

        reset = QPushButton("Reset Filters")
        reset.setStyleSheet(_pill_style("#ff6b6b"))
        reset.clicked.connect(self._on_reset_filters)

        row = QHBoxLayout()
        row.addWidget(QLabel("Source:"))
        row.addWidget(self._source_combo)
        row.addWidget(QLabel("Difficulty:"))
        row.addWidget(self._difficulty_combo)
        row.addStretch(1)
        row.addWidget(reset)

        layout = QVBoxLayout(panel)
        layout.setContentsMargins(15, 15, 15, 15)
        title = QLabel("Filters")
        title.setStyleSheet("font-size: 16px; font-weight: 600;")
        layout.addWidget(title)
        layout.addWidget(self._company_input)
        layout.addLayout(row)
        return panel

    def _on_filter_toggled(self, checked: bool) -> None:
        self._filter_panel.setVisible(checked)
        self.set_filter(self._filter)

    def _on_filter_inputs_changed(self, *_args) -> None:
        self.set_filter(
            ProblemFilter(
                company=self._company_input.text().strip(),
                source=self._source_combo.currentData(),
                difficulty=self._difficulty_combo.currentData(),
            )
        )

    def _on_reset_filters(self) -> None:
        for widget in (self._company_input, self._source_combo, self._difficulty_combo):
            widget.blockSignals(True)
        self._company_input.clear()
        self._source_combo.setCurrentIndex(0)
        self._difficulty_combo.setCurrentIndex(0)
        for widget in (self._company_input, self._source_combo, self._difficulty_combo):
            widget.blockSignals(False)
        self.set_filter(ProblemFilter())

    def _on_toggle(self, problem_id: str) -> None:
        result = self._store.toggle(problem_id)
        if not result.ok:
            logger.warning("Completion of %s shown but not saved", problem_id)

    def _on_reset_progress(self) -> None:
        result = self._store.clear()
        if not result.ok:
            logger.warning("Progress cleared on screen but not on disk")

    def _on_store_changed(self, completed: Mapping[str, bool]) -> None:
        # The toggle button that triggered this lives inside the tree being rebuilt.
        QTimer.singleShot(0, lambda: self.refresh(self._store.snapshot()))

    def closeEvent(self, event) -> None:
        self._unsubscribe()
        super().closeEvent(event)


def _pill_style(color: str) -> str:
    return (
        f"QPushButton {{ background: {color}; color: white; border: none;"
        f" border-radius: 4px; padding: 5px 12px; font-size: 12px; font-weight: 500; }}"
    )


def _open_url(url: str) -> None:
    if url and not QDesktopServices.openUrl(QUrl(url)):
        logger.warning("Could not open %s", url)
