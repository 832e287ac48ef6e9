from __future__ import annotations

from PySide6.QtGui import QFont, QGuiApplication
from PySide6.QtWidgets import QDialog, QHBoxLayout, QLabel, QPlainTextEdit, QPushButton, QVBoxLayout

from schedule_viewer.core.models import ClassRecord
from schedule_viewer.core.schedule import summarize_schedule


class SummaryDialog(QDialog):
    """Resumo em texto das aulas exibidas, com botão para copiar."""

    def __init__(self, parent, *, student: str, records: list[ClassRecord]) -> None:
        super().__init__(parent)
        self.setWindowTitle(f"{student} - Summary")
        self.resize(720, 420)
        self.summary_text = summarize_schedule(records)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        header = QLabel(f"{student}: {len(records)} classes")
        header.setObjectName("TitleLabel")
        layout.addWidget(header)

        self.text_box = QPlainTextEdit(self.summary_text)
        self.text_box.setReadOnly(True)
        self.text_box.setFont(QFont("Consolas", 10))
        layout.addWidget(self.text_box, 1)

        row = QHBoxLayout()
        self.btn_copy = QPushButton("Copy")
        self.btn_copy.clicked.connect(self.copy_to_clipboard)
        row.addWidget(self.btn_copy)
        row.addStretch(1)
        btn_close = QPushButton("Close")
        btn_close.setObjectName("PrimaryButton")
        btn_close.clicked.connect(self.accept)
        row.addWidget(btn_close)
        layout.addLayout(row)

    def copy_to_clipboard(self) -> None:
        QGuiApplication.clipboard().setText(self.summary_text)
        self.btn_copy.setText("Copied")
