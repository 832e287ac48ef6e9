from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from concurrent.futures import Future
from datetime import datetime
from typing import Coroutine

from PySide6.QtCore import QThread, QTimer, Signal, Slot
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from schedule_viewer.core.export_png import default_png_name, export_schedule_png
from schedule_viewer.core.loader import ScheduleLoader
from schedule_viewer.core.models import ClassRecord
from schedule_viewer.core.state import LoadOutcome
from schedule_viewer.core.storage import build_data_source, discover_sources
from schedule_viewer.infra.config import ViewerSettings
from schedule_viewer.infra.logger import open_logs_folder
from schedule_viewer.ui.report_dialog import SummaryDialog
from schedule_viewer.ui.schedule_panel import QtListSink, QtStatusSink, SchedulePanel

logger = logging.getLogger(__name__)


class EventLoopThread(QThread):
    """QThread com um event loop asyncio permanente para os carregamentos."""

    def __init__(self) -> None:
        super().__init__()
        self.setObjectName("LoaderThread")
        self._loop: asyncio.AbstractEventLoop | None = None
        self._ready = threading.Event()

    def run(self) -> None:  # noqa: D401
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._ready.set()
        try:
            loop.run_forever()
        finally:
            with contextlib.suppress(Exception):
                pending = [t for t in asyncio.all_tasks(loop) if not t.done()]
                for t in pending:
                    t.cancel()
                if pending:
                    loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.close()
            self._loop = None

    def submit(self, coro: Coroutine[object, object, LoadOutcome]) -> Future[LoadOutcome]:
        self._ready.wait()
        assert self._loop is not None
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def stop(self) -> None:
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._loop.stop)


class ExportThread(QThread):
    """Thread simples para exportar PNG sem travar a UI."""

    done_ok = Signal(str)
    done_error = Signal(str)

    def __init__(self, *, records: list[ClassRecord], output_path: str, title: str) -> None:
        super().__init__()
        self._records = records
        self._output_path = output_path
        self._title = title

    def run(self) -> None:  # noqa: D401
        try:
            subtitle = datetime.now().strftime("Gerado em %Y-%m-%d %H:%M")
            export_schedule_png(self._records, self._output_path, title=self._title, subtitle=subtitle)
            self.done_ok.emit(self._output_path)
        except Exception as exc:
            logger.exception("Falha ao exportar PNG")
            self.done_error.emit(str(exc))


class MainWindow(QMainWindow):
    """Janela principal: seletor de aluno + lista de aulas."""

    def __init__(self, settings: ViewerSettings, *, smoke_ms: int | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Class Schedule")
        self.resize(760, 860)
        self.setMinimumSize(560, 520)

        self._settings = settings
        self._export_thread: ExportThread | None = None
        self.last_load: Future[LoadOutcome] | None = None

        self._build_ui()
        self._setup_loader()
        self._populate_sources()

        # Carga inicial antes de qualquer interação.
        self.load_schedule(self._settings.default_source)

        if smoke_ms:
            QTimer.singleShot(smoke_ms, self.close)

    # ---------- UI ----------
    def _build_ui(self) -> None:
        root = QWidget()
        root.setObjectName("RootWidget")
        self.setCentralWidget(root)

        root_layout = QVBoxLayout(root)
        root_layout.setContentsMargins(14, 14, 14, 14)
        root_layout.setSpacing(10)

        self.top_bar = QFrame()
        self.top_bar.setObjectName("TopBar")
        top_layout = QHBoxLayout(self.top_bar)
        top_layout.setContentsMargins(14, 10, 14, 10)
        top_layout.setSpacing(10)

        title = QLabel("Class Schedule")
        title.setObjectName("TitleLabel")
        top_layout.addWidget(title)
        top_layout.addStretch(1)

        student_label = QLabel("Student")
        student_label.setObjectName("MutedLabel")
        top_layout.addWidget(student_label)
        self.schedule_select = QComboBox()
        top_layout.addWidget(self.schedule_select)
        root_layout.addWidget(self.top_bar)

        self.schedule_panel = SchedulePanel()
        root_layout.addWidget(self.schedule_panel, 1)

        actions = QHBoxLayout()
        self.btn_logs = QPushButton("Open logs")
        self.btn_logs.clicked.connect(self._open_logs)
        actions.addWidget(self.btn_logs)
        actions.addStretch(1)
        self.btn_summary = QPushButton("Summary")
        self.btn_summary.clicked.connect(self._show_summary)
        actions.addWidget(self.btn_summary)
        self.btn_export = QPushButton("Export PNG")
        self.btn_export.setObjectName("PrimaryButton")
        self.btn_export.clicked.connect(self._export_png)
        actions.addWidget(self.btn_export)
        root_layout.addLayout(actions)

    def _populate_sources(self) -> None:
        data_dir = None if self._settings.base_url else self._settings.data_dir
        self.schedule_select.blockSignals(True)
        for source in discover_sources(data_dir, self._settings.default_source):
            self.schedule_select.addItem(source.label, source.file_name)
        self.schedule_select.setCurrentIndex(0)
        self.schedule_select.blockSignals(False)
        self.schedule_select.currentIndexChanged.connect(self._on_selection_changed)

    # ---------- Loader ----------
    def _setup_loader(self) -> None:
        self._status_sink = QtStatusSink(self)
        self._list_sink = QtListSink(self)
        self._status_sink.status_changed.connect(self.schedule_panel.show_status)
        self._list_sink.cleared.connect(self.schedule_panel.clear_cards)
        self._list_sink.card_appended.connect(self.schedule_panel.append_card)

        source = build_data_source(
            data_dir=self._settings.data_dir,
            base_url=self._settings.base_url,
            timeout=self._settings.http_timeout,
        )
        self._loader = ScheduleLoader(source, self._status_sink, self._list_sink)

        self._loop_thread = EventLoopThread()
        self._loop_thread.start()

    def load_schedule(self, source_id: str) -> Future[LoadOutcome]:
        future = self._loop_thread.submit(self._loader.load_schedule(source_id))
        future.add_done_callback(self._on_load_done)
        self.last_load = future
        return future

    @staticmethod
    def _on_load_done(future: Future[LoadOutcome]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Falha inesperada no carregamento", exc_info=exc)

    @Slot(int)
    def _on_selection_changed(self, index: int) -> None:
        source_id = self.schedule_select.itemData(index)
        if not source_id:
            return
        self.load_schedule(str(source_id))

    # ---------- Ações ----------
    def _current_label(self) -> str:
        return self.schedule_select.currentText().strip() or "schedule"

    def _open_logs(self) -> None:
        try:
            open_logs_folder()
        except Exception as exc:
            logger.exception("Falha ao abrir pasta de logs")
            QMessageBox.warning(self, "Logs", f"Unable to open the logs folder:\n{exc}")

    def _show_summary(self) -> None:
        SummaryDialog(self, student=self._current_label(), records=self.schedule_panel.records).exec()

    def _export_png(self) -> None:
        records = self.schedule_panel.records
        if not records:
            QMessageBox.warning(self, "Export", "No schedule is displayed.")
            return
        if self._export_thread is not None and self._export_thread.isRunning():
            QMessageBox.information(self, "Export", "An export is already running.")
            return
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Save schedule as PNG",
            default_png_name(self._current_label()),
            "PNG (*.png)",
        )
        if not path:
            return
        self._export_thread = ExportThread(
            records=records,
            output_path=path,
            title=f"{self._current_label()} - Class Schedule",
        )
        self._export_thread.done_ok.connect(self._on_export_ok)
        self._export_thread.done_error.connect(self._on_export_error)
        self._export_thread.finished.connect(lambda: self.btn_export.setEnabled(True))
        self.btn_export.setEnabled(False)
        self._export_thread.start()

    def _on_export_ok(self, path: str) -> None:
        logger.info("PNG salvo em %s", path)
        QMessageBox.information(self, "Export", f"Image saved to:\n{path}")

    def _on_export_error(self, message: str) -> None:
        QMessageBox.critical(self, "Export failed", message)

    # ---------- Encerramento ----------
    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        if self._export_thread is not None and self._export_thread.isRunning():
            self._export_thread.wait(1500)
        self._loop_thread.stop()
        self._loop_thread.wait(2000)
        super().closeEvent(event)
