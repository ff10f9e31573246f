"""Progress screen: overview numbers, charts and the motivation card."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPen
from PySide6.QtWidgets import (
    QButtonGroup,
    QFrame,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QScrollArea,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from dsasheet.core.catalog import Catalog, Difficulty
from dsasheet.core.completion import CompletionStore
from dsasheet.core.progress import ProgressSummary, TopicStats, motivation_message, progress_percentage, summarize
from dsasheet.ui.colors import DIFFICULTY_COLORS, SheetColors, progress_color
from dsasheet.ui.models import short_topic_name


class PieChart(QWidget):
    """Completed vs remaining as a two-slice pie with a legend."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._completed = 0
        self._remaining = 0
        self.setMinimumHeight(200)

    def set_counts(self, completed: int, remaining: int) -> None:
        self._completed = max(0, completed)
        self._remaining = max(0, remaining)
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        size = min(self.height() - 20, int(self.width() * 0.5))
        rect = QRectF(15, (self.height() - size) / 2, size, size)
        total = self._completed + self._remaining

        painter.setPen(Qt.NoPen)
        if total == 0:
            painter.setBrush(QColor(SheetColors.TRACK))
            painter.drawEllipse(rect)
        else:
            start = 90 * 16
            for count, color in ((self._completed, SheetColors.SUCCESS), (self._remaining, SheetColors.DANGER)):
                span = -int(round(360 * 16 * count / total))
                painter.setBrush(QColor(color))
                painter.drawPie(rect, start, span)
                start += span

        # legend
        x = rect.right() + 30
        y = self.height() / 2 - 20
        for label, count, color in (
            ("Completed", self._completed, SheetColors.SUCCESS),
            ("Remaining", self._remaining, SheetColors.DANGER),
        ):
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(color))
            painter.drawEllipse(QRectF(x, y - 6, 12, 12))
            painter.setPen(QColor("#7F7F7F"))
            painter.drawText(int(x + 20), int(y + 5), f"{count} {label}")
            y += 28


class TopicBar(QWidget):
    """A labelled horizontal bar for one topic's completion."""

    def __init__(self, name: str, stats: TopicStats, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._percentage = stats.percentage

        label = QLabel(short_topic_name(name, limit=28))
        label.setToolTip(name)
        label.setStyleSheet(f"color: {SheetColors.TEXT_PRIMARY}; font-weight: 500;")
        count = QLabel(f"{stats.completed}/{stats.total}")
        count.setStyleSheet(f"color: {SheetColors.TEXT_SECONDARY}; font-size: 11px;")

        row = QHBoxLayout()
        row.addWidget(label, 1)
        row.addWidget(count)

        self._bar = QFrame()
        self._bar.setFixedHeight(20)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 4)
        layout.setSpacing(3)
        layout.addLayout(row)
        layout.addWidget(self._bar)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        r = self._bar.geometry()
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(SheetColors.TRACK))
        painter.drawRoundedRect(QRectF(r), 10, 10)

        fill_width = r.width() * min(self._percentage, 100.0) / 100.0
        if fill_width > 0:
            painter.setBrush(QColor(SheetColors.PRIMARY))
            painter.drawRoundedRect(QRectF(r.x(), r.y(), fill_width, r.height()), 10, 10)

        text = f"{round(self._percentage)}%"
        if self._percentage > 15:
            painter.setPen(QColor("white"))
            painter.drawText(QRectF(r.x() + 8, r.y(), fill_width, r.height()), Qt.AlignVCenter, text)
        else:
            painter.setPen(QColor("#555555"))
            painter.drawText(
                QRectF(r.x() + fill_width + 6, r.y(), r.width(), r.height()), Qt.AlignVCenter, text
            )


class DifficultyRings(QWidget):
    """Concentric completion rings, one per difficulty (outer = Easy)."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._ratios: Dict[Difficulty, float] = {d: 0.0 for d in Difficulty}
        self.setMinimumHeight(200)

    def set_stats(self, per_difficulty: Mapping[Difficulty, List[int]]) -> None:
        self._ratios = {
            d: progress_percentage(done, total) / 100.0 for d, (done, total) in per_difficulty.items()
        }
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        stroke = 16
        size = min(self.width(), self.height()) - stroke
        cx, cy = self.width() / 2, self.height() / 2
        for i, difficulty in enumerate(Difficulty):
            radius = size / 2 - i * (stroke + 6)
            if radius <= stroke:
                break
            rect = QRectF(cx - radius, cy - radius, radius * 2, radius * 2)
            color = QColor(DIFFICULTY_COLORS[difficulty])

            track = QColor(color)
            track.setAlpha(50)
            pen = QPen(track, stroke)
            pen.setCapStyle(Qt.RoundCap)
            painter.setPen(pen)
            painter.drawArc(rect, 90 * 16, -360 * 16)

            pen.setColor(color)
            painter.setPen(pen)
            painter.drawArc(rect, 90 * 16, -int(360 * 16 * self._ratios.get(difficulty, 0.0)))


class ProgressScreen(QWidget):
    """Analytics view over the catalog and the completion store."""

    CHARTS = (("pie", "Overview"), ("topic", "By Topic"), ("difficulty", "By Difficulty"))

    def __init__(
        self,
        *,
        catalog: Catalog,
        store: CompletionStore,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._catalog = catalog
        self._store = store

        title = QLabel("Your DSA Journey")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 22px; font-weight: bold;")

        self._overview_labels: Dict[str, QLabel] = {}
        overview = QHBoxLayout()
        for key in ("Completed", "Total", "Progress"):
            number = QLabel("0")
            number.setAlignment(Qt.AlignCenter)
            number.setStyleSheet(f"font-size: 24px; font-weight: bold; color: {SheetColors.PRIMARY};")
            caption = QLabel(key)
            caption.setAlignment(Qt.AlignCenter)
            caption.setStyleSheet(f"color: {SheetColors.TEXT_SECONDARY};")
            col = QVBoxLayout()
            col.addWidget(number)
            col.addWidget(caption)
            overview.addLayout(col)
            self._overview_labels[key] = number

        self._progress_bar = QProgressBar()
        self._progress_bar.setTextVisible(False)
        self._progress_bar.setFixedHeight(8)
        self._progress_bar.setRange(0, 1000)

        switch = QHBoxLayout()
        self._switch_group = QButtonGroup(self)
        self._switch_group.setExclusive(True)
        for index, (_key, label) in enumerate(self.CHARTS):
            button = QPushButton(label)
            button.setCheckable(True)
            button.setChecked(index == 0)
            self._switch_group.addButton(button, index)
            switch.addWidget(button)
        self._switch_group.idClicked.connect(self._on_chart_selected)

        self._pie = PieChart()
        self._topic_container = QWidget()
        self._topic_layout = QVBoxLayout(self._topic_container)
        self._topic_layout.setContentsMargins(5, 5, 5, 5)
        topic_scroll = QScrollArea()
        topic_scroll.setWidgetResizable(True)
        topic_scroll.setFrameShape(QFrame.NoFrame)
        topic_scroll.setWidget(self._topic_container)

        difficulty_page = QWidget()
        self._rings = DifficultyRings()
        self._difficulty_legend = QLabel("")
        self._difficulty_legend.setAlignment(Qt.AlignCenter)
        self._difficulty_legend.setTextFormat(Qt.RichText)
        difficulty_layout = QVBoxLayout(difficulty_page)
        breakdown = QLabel("Difficulty Breakdown")
        breakdown.setAlignment(Qt.AlignCenter)
        breakdown.setStyleSheet("font-size: 16px; font-weight: 600;")
        difficulty_layout.addWidget(breakdown)
        difficulty_layout.addWidget(self._rings, 1)
        difficulty_layout.addWidget(self._difficulty_legend)

        self._charts = QStackedWidget()
        self._charts.addWidget(self._pie)
        self._charts.addWidget(topic_scroll)
        self._charts.addWidget(difficulty_page)

        self._motivation_title = QLabel("")
        self._motivation_title.setAlignment(Qt.AlignCenter)
        self._motivation_title.setStyleSheet("font-size: 18px; font-weight: bold;")
        self._motivation_text = QLabel("")
        self._motivation_text.setAlignment(Qt.AlignCenter)
        self._motivation_text.setWordWrap(True)
        self._motivation_text.setStyleSheet(f"color: {SheetColors.TEXT_SECONDARY};")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(15, 15, 15, 15)
        layout.setSpacing(12)
        layout.addWidget(title)
        layout.addLayout(overview)
        layout.addWidget(self._progress_bar)
        layout.addLayout(switch)
        layout.addWidget(self._charts, 1)
        layout.addWidget(self._motivation_title)
        layout.addWidget(self._motivation_text)

        self._unsubscribe = store.subscribe(self.refresh)
        self.refresh(store.snapshot())

    def refresh(self, completed: Mapping[str, bool]) -> None:
        summary = summarize(self._catalog, completed)
        self._overview_labels["Completed"].setText(str(summary.completed))
        self._overview_labels["Total"].setText(str(summary.total))
        self._overview_labels["Progress"].setText(f"{round(summary.percentage)}%")
        self._progress_bar.setValue(int(min(summary.percentage, 100.0) * 10))
        self._progress_bar.setStyleSheet(
            f"""
            QProgressBar {{ border: none; border-radius: 4px; background: {SheetColors.TRACK}; }}
            QProgressBar::chunk {{ border-radius: 4px; background: {progress_color(summary.percentage)}; }}
            """
        )

        self._pie.set_counts(summary.completed, summary.remaining)
        self._fill_topics(summary)
        self._rings.set_stats(summary.per_difficulty)
        self._difficulty_legend.setText("&nbsp;&nbsp;&nbsp;".join(
            f"<span style='color:{DIFFICULTY_COLORS[d]}'>●</span> {d.label}: {done}/{total}"
            f" ({round(progress_percentage(done, total))}%)"
            for d, (done, total) in summary.per_difficulty.items()
        ))

        heading, body = motivation_message(summary.band)
        self._motivation_title.setText(heading)
        self._motivation_text.setText(body)

    def _fill_topics(self, summary: ProgressSummary) -> None:
        while self._topic_layout.count():
            item = self._topic_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        for name, stats in summary.per_topic.items():
            self._topic_layout.addWidget(TopicBar(name, stats))
        self._topic_layout.addStretch(1)

    def _on_chart_selected(self, index: int) -> None:
        self._charts.setCurrentIndex(index)

    def closeEvent(self, event) -> None:
        self._unsubscribe()
        super().closeEvent(event)
