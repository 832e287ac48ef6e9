from __future__ import annotations

import logging
import os
import subprocess
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[2]
LOG_DIR = Path(os.getenv("SCHEDULE_LOG_DIR", str(ROOT_DIR / "logs")))
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(threadName)s | %(name)s | %(message)s"

# Bibliotecas de rede que poluem o console em DEBUG.
NOISY_LOGGERS = ("urllib3", "requests", "PIL")


def log_file(log_dir: Path | None = None) -> Path:
    return (log_dir or LOG_DIR) / "schedule_viewer.log"


def setup_logging(debug: bool = False, *, log_dir: Path | None = None) -> Path:
    """Liga o log rotativo em arquivo + console; chamadas repetidas só ajustam o nível.

    Retorna o caminho do arquivo de log em uso.
    """
    target = log_file(log_dir)
    root = logging.getLogger()
    level = logging.DEBUG if debug else logging.INFO
    ready_path = getattr(root, "_schedule_viewer_log_file", None)
    if ready_path is not None:
        root.setLevel(min(root.level, level))
        return ready_path

    target.parent.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(target, maxBytes=1_500_000, backupCount=5, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(fmt)
    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)

    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(file_handler)
    root.addHandler(console)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    root._schedule_viewer_log_file = target  # type: ignore[attr-defined]
    logging.getLogger(__name__).debug("Log em %s", target)
    return target


def open_logs_folder(log_dir: Path | None = None) -> None:
    """Abre a pasta de logs no gerenciador de arquivos do sistema."""
    folder = log_dir or LOG_DIR
    folder.mkdir(parents=True, exist_ok=True)
    if sys.platform.startswith("win"):
        os.startfile(str(folder))  # type: ignore[attr-defined]
    elif sys.platform == "darwin":
        subprocess.Popen(["open", str(folder)])
    else:
        subprocess.Popen(["xdg-open", str(folder)])
