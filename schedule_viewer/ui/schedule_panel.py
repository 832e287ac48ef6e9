from __future__ import annotations

from PySide6.QtCore import QEasingCurve, QObject, QPropertyAnimation, Qt, QTimer, Signal, Slot
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from schedule_viewer.core.models import ClassRecord
from schedule_viewer.core.schedule import CARD_STAGGER_SECONDS, format_period, render_status
from schedule_viewer.core.state import DisplayStatus
from schedule_viewer.ui.styles import status_notice_style, subject_badge_style


class ClassCard(QFrame):
    """Card de uma aula: marcador de período, nome, professor, sala e badge."""

    def __init__(self, record: ClassRecord) -> None:
        super().__init__()
        self.setObjectName("ClassItem")
        self.record = record
        self._build_ui()

    def _build_ui(self) -> None:
        row = QHBoxLayout(self)
        row.setContentsMargins(12, 12, 12, 12)
        row.setSpacing(14)

        marker = QLabel(format_period(self.record.period))
        marker.setObjectName("PeriodMarker")
        marker.setAlignment(Qt.AlignCenter)
        row.addWidget(marker, 0, Qt.AlignTop)

        content = QVBoxLayout()
        content.setSpacing(4)
        row.addLayout(content, 1)

        name = QLabel(self.record.class_name)
        name.setObjectName("ClassName")
        name.setTextFormat(Qt.PlainText)
        content.addWidget(name)

        for label_text, value in (("Teacher", self.record.teacher), ("Room", self.record.room_number)):
            detail = QHBoxLayout()
            label = QLabel(label_text)
            label.setObjectName("DetailLabel")
            detail.addWidget(label)
            value_label = QLabel(value)
            value_label.setTextFormat(Qt.PlainText)
            detail.addWidget(value_label, 1)
            content.addLayout(detail)

        badge = QLabel(self.record.subject_area)
        badge.setObjectName("SubjectBadge")
        badge.setTextFormat(Qt.PlainText)
        badge.setProperty("category", self.record.style_category)
        badge.setStyleSheet(subject_badge_style(self.record.style_category))
        row.addWidget(badge, 0, Qt.AlignTop)


class SchedulePanel(QWidget):
    """Região de status + lista rolável de cards."""

    def __init__(self) -> None:
        super().__init__()
        self._cards: list[ClassCard] = []
        self._generation = 0
        self._build_ui()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(10)

        self.status_label = QLabel()
        self.status_label.setObjectName("StatusNotice")
        self.status_label.setTextFormat(Qt.RichText)
        self.status_label.setWordWrap(True)
        self.status_label.hide()
        root.addWidget(self.status_label)

        self.scroll = QScrollArea()
        self.scroll.setObjectName("CardScroll")
        self.scroll.setWidgetResizable(True)
        self.scroll.setFrameShape(QFrame.NoFrame)
        root.addWidget(self.scroll, 1)

        self.card_list = QWidget()
        self.card_list.setObjectName("CardList")
        self.card_layout = QVBoxLayout(self.card_list)
        self.card_layout.setContentsMargins(0, 0, 0, 0)
        self.card_layout.setSpacing(10)
        self.card_layout.addStretch(1)
        self.scroll.setWidget(self.card_list)

    @property
    def records(self) -> list[ClassRecord]:
        return [card.record for card in self._cards]

    @Slot(object)
    def show_status(self, status: DisplayStatus) -> None:
        self.status_label.setText(render_status(status))
        self.status_label.setStyleSheet(status_notice_style(status))
        self.status_label.setVisible(status != DisplayStatus.EMPTY)

    @Slot()
    def clear_cards(self) -> None:
        self._generation += 1
        for card in self._cards:
            self.card_layout.removeWidget(card)
            card.deleteLater()
        self._cards.clear()

    @Slot(str, object, int)
    def append_card(self, _markup: str, record: ClassRecord, index: int) -> None:
        card = ClassCard(record)
        effect = QGraphicsOpacityEffect(card)
        effect.setOpacity(0.0)
        card.setGraphicsEffect(effect)
        self.card_layout.insertWidget(self.card_layout.count() - 1, card)
        self._cards.append(card)

        generation = self._generation
        delay_ms = int(index * CARD_STAGGER_SECONDS * 1000)
        QTimer.singleShot(delay_ms, lambda: self._fade_in(card, generation))

    def _fade_in(self, card: ClassCard, generation: int) -> None:
        # Card removido por um carregamento mais novo.
        if generation != self._generation or card not in self._cards:
            return
        effect = card.graphicsEffect()
        anim = QPropertyAnimation(effect, b"opacity", card)
        anim.setDuration(300)
        anim.setStartValue(0.0)
        anim.setEndValue(1.0)
        anim.setEasingCurve(QEasingCurve.OutCubic)
        anim.start()


class QtStatusSink(QObject):
    """Encaminha mudanças de status para a thread da UI via sinal."""

    status_changed = Signal(object)

    def show(self, status: DisplayStatus) -> None:
        self.status_changed.emit(status)


class QtListSink(QObject):
    cleared = Signal()
    card_appended = Signal(str, object, int)

    def clear(self) -> None:
        self.cleared.emit()

    def append(self, card_markup: str, record: ClassRecord, index: int) -> None:
        self.card_appended.emit(card_markup, record, index)
