from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from schedule_viewer.infra.request_token import RequestSequencer, SupersededError

from .errors import ResourceNotFoundError, ScheduleLoadError
from .models import ClassRecord
from .schedule import parse_schedule, render_card, sort_by_period
from .state import DisplayStatus, LoadOutcome, LoadStatus
from .storage import ScheduleDataSource

logger = logging.getLogger(__name__)


class StatusSink(Protocol):
    """Região de status (vazia, carregando ou erro)."""

    def show(self, status: DisplayStatus) -> None: ...


class ListSink(Protocol):
    """Região da lista de cards."""

    def clear(self) -> None: ...

    def append(self, card_markup: str, record: ClassRecord, index: int) -> None: ...


@dataclass(slots=True)
class MemoryStatusSink:
    """Sink de status em memória (modo headless e testes)."""

    status: DisplayStatus = DisplayStatus.EMPTY
    history: list[DisplayStatus] = field(default_factory=list)

    def show(self, status: DisplayStatus) -> None:
        self.status = status
        self.history.append(status)


@dataclass(slots=True)
class MemoryListSink:
    cards: list[str] = field(default_factory=list)
    records: list[ClassRecord] = field(default_factory=list)
    clear_count: int = 0

    def clear(self) -> None:
        self.cards.clear()
        self.records.clear()
        self.clear_count += 1

    def append(self, card_markup: str, record: ClassRecord, index: int) -> None:
        self.cards.append(card_markup)
        self.records.append(record)


async def fetch_records(source: ScheduleDataSource, source_id: str) -> list[ClassRecord]:
    """Busca, parseia e ordena um horário; falhas sobem como `ScheduleLoadError`."""
    response = await source.fetch(source_id)
    if not response.ok:
        raise ResourceNotFoundError(
            f"Fonte {response.url or source_id} respondeu status {response.status}",
            source_id=source_id,
            status=response.status,
        )
    records = parse_schedule(response.text or "", source_id=source_id)
    return sort_by_period(records)


class ScheduleLoader:
    """Carrega um horário e o desenha nas regiões de status e lista."""

    def __init__(
        self,
        source: ScheduleDataSource,
        status_sink: StatusSink,
        list_sink: ListSink,
        *,
        sequencer: RequestSequencer | None = None,
    ) -> None:
        self.source = source
        self.status_sink = status_sink
        self.list_sink = list_sink
        self.sequencer = sequencer or RequestSequencer()

    async def load_schedule(self, source_id: str) -> LoadOutcome:
        token = self.sequencer.issue()
        logger.info("Carregando horario %s (requisicao %d)", source_id, token)
        self.status_sink.show(DisplayStatus.LOADING)
        self.list_sink.clear()

        try:
            records = await fetch_records(self.source, source_id)
        except ScheduleLoadError as exc:
            try:
                self.sequencer.raise_if_superseded(token)
            except SupersededError:
                logger.debug("Falha descartada de %s: %s", source_id, exc)
                return LoadOutcome(LoadStatus.SUPERSEDED, source_id, token, error_kind=exc.kind)
            logger.warning("Falha ao carregar horario %s [%s]: %s", source_id, exc.kind.value, exc)
            self.list_sink.clear()
            self.status_sink.show(DisplayStatus.ERROR)
            return LoadOutcome(LoadStatus.FAILED, source_id, token, error_kind=exc.kind)

        try:
            self.sequencer.raise_if_superseded(token)
        except SupersededError as exc:
            logger.debug("Resultado descartado de %s: %s", source_id, exc)
            return LoadOutcome(LoadStatus.SUPERSEDED, source_id, token, record_count=len(records))

        self.status_sink.show(DisplayStatus.EMPTY)
        for index, record in enumerate(records):
            self.list_sink.append(render_card(record, index), record, index)
        logger.info("Horario %s exibido (%d aulas)", source_id, len(records))
        return LoadOutcome(LoadStatus.RENDERED, source_id, token, record_count=len(records))
