from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

import requests

from .errors import TransportError
from .models import FetchResponse, ScheduleSource

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parents[2]
DEFAULT_DATA_DIR = ROOT_DIR / "json"
DEFAULT_SOURCE_ID = "JosephSchedule.json"


class ScheduleDataSource(Protocol):
    """Colaborador que recupera o conteúdo bruto de um horário."""

    async def fetch(self, source_id: str) -> FetchResponse: ...


class FileScheduleSource:
    """Lê `<root>/<source_id>` do disco fora da thread do event loop."""

    def __init__(self, root: str | Path = DEFAULT_DATA_DIR) -> None:
        self.root = Path(root)

    def _read(self, source_id: str) -> FetchResponse:
        target = self.root / source_id
        try:
            text = target.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return FetchResponse(ok=False, status=404, url=str(target))
        except (OSError, UnicodeDecodeError) as exc:
            raise TransportError(f"Falha ao ler {target}: {exc}", source_id=source_id) from exc
        return FetchResponse(ok=True, status=200, text=text, url=str(target))

    async def fetch(self, source_id: str) -> FetchResponse:
        logger.debug("Lendo horario %s em %s", source_id, self.root)
        return await asyncio.to_thread(self._read, source_id)


class HttpScheduleSource:
    """Busca `<base_url>/<source_id>` via requests (sem timeout por padrão)."""

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def url_for(self, source_id: str) -> str:
        return f"{self.base_url}/{source_id}"

    def _get(self, source_id: str) -> FetchResponse:
        url = self.url_for(source_id)
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Falha de rede em {url}: {exc}", source_id=source_id) from exc
        if not resp.ok:
            return FetchResponse(ok=False, status=resp.status_code, url=url)
        resp.encoding = resp.encoding or "utf-8"
        return FetchResponse(ok=True, status=resp.status_code, text=resp.text, url=url)

    async def fetch(self, source_id: str) -> FetchResponse:
        logger.debug("GET %s", self.url_for(source_id))
        return await asyncio.to_thread(self._get, source_id)


def build_data_source(
    *,
    data_dir: str | Path | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
) -> ScheduleDataSource:
    if base_url:
        logger.info("Usando fonte HTTP: %s", base_url)
        return HttpScheduleSource(base_url, timeout=timeout)
    root = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
    logger.info("Usando fonte local: %s", root)
    return FileScheduleSource(root)


def discover_sources(data_dir: str | Path | None, default: str = DEFAULT_SOURCE_ID) -> list[ScheduleSource]:
    """Opções do seletor: arquivos `*.json` da pasta, com o padrão primeiro."""
    names: list[str] = []
    if data_dir is not None:
        root = Path(data_dir)
        if root.is_dir():
            names = sorted(p.name for p in root.glob("*.json") if p.is_file())
        else:
            logger.warning("Pasta de horarios nao encontrada: %s", root)
    ordered = [default, *(n for n in names if n != default)]
    return [ScheduleSource.from_file_name(name) for name in ordered]
