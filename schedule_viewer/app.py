from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from schedule_viewer.core.loader import MemoryListSink, MemoryStatusSink, ScheduleLoader
from schedule_viewer.core.schedule import render_status, summarize_schedule
from schedule_viewer.core.storage import build_data_source
from schedule_viewer.infra.config import ViewerSettings
from schedule_viewer.infra.logger import setup_logging

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Class Schedule viewer (PySide6)")
    parser.add_argument("--source", default=None, help="Arquivo de horario carregado ao iniciar.")
    parser.add_argument("--data-dir", default=None, help="Pasta com os arquivos JSON de horario.")
    parser.add_argument("--base-url", default=None, help="Busca os horarios via HTTP a partir desta URL.")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Carrega o horario sem abrir janela e imprime o resultado.",
    )
    parser.add_argument("--html", action="store_true", help="No modo headless, imprime o markup dos cards.")
    parser.add_argument("--debug", action="store_true", help="Logging em nivel DEBUG.")
    parser.add_argument(
        "--smoke-ms",
        type=int,
        default=None,
        help="Abre a UI e fecha automaticamente apos N ms (teste rapido).",
    )
    return parser


def run_headless(settings: ViewerSettings, *, html: bool = False) -> int:
    """Executa um carregamento com sinks em memória; 0 se exibido, 1 se falhou."""
    status_sink = MemoryStatusSink()
    list_sink = MemoryListSink()
    source = build_data_source(
        data_dir=settings.data_dir,
        base_url=settings.base_url,
        timeout=settings.http_timeout,
    )
    loader = ScheduleLoader(source, status_sink, list_sink)
    outcome = asyncio.run(loader.load_schedule(settings.default_source))

    notice = render_status(status_sink.status)
    if notice:
        print(notice)
    if html:
        print("\n".join(list_sink.cards))
    elif outcome.ok:
        print(summarize_schedule(list_sink.records))
    return 0 if outcome.ok else 1


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_arg_parser().parse_args(argv)
    settings = ViewerSettings.from_env().with_overrides(
        data_dir=args.data_dir,
        default_source=args.source,
        base_url=args.base_url,
        debug=args.debug,
    )
    setup_logging(debug=settings.debug)

    if args.headless:
        return run_headless(settings, html=args.html)

    from PySide6.QtWidgets import QApplication

    from schedule_viewer.ui.main_window import MainWindow
    from schedule_viewer.ui.styles import app_stylesheet

    app = QApplication(sys.argv)
    app.setApplicationName("Class Schedule")
    app.setStyleSheet(app_stylesheet())

    window = MainWindow(settings, smoke_ms=args.smoke_ms)
    window.show()

    logger.info("Aplicativo iniciado")
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
