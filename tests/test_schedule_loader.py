from __future__ import annotations

import asyncio
import json

from schedule_viewer.core.errors import LoadErrorKind, TransportError
from schedule_viewer.core.loader import MemoryListSink, MemoryStatusSink, ScheduleLoader, fetch_records
from schedule_viewer.core.models import FetchResponse
from schedule_viewer.core.schedule import render_card
from schedule_viewer.core.state import DisplayStatus, LoadStatus

EXEMPLO = [
    {"period": 2, "className": "Biology", "teacher": "Dr. X", "roomNumber": "204", "subjectArea": "Science"},
    {"period": 1, "className": "Algebra", "teacher": "Mr. Y", "roomNumber": "101", "subjectArea": "Math"},
]


class FakeSource:
    """Fonte em memória: id -> texto; ids ausentes respondem 404."""

    def __init__(self, files: dict[str, str]) -> None:
        self.files = files
        self.calls: list[str] = []

    async def fetch(self, source_id: str) -> FetchResponse:
        self.calls.append(source_id)
        if source_id not in self.files:
            return FetchResponse(ok=False, status=404)
        return FetchResponse(ok=True, status=200, text=self.files[source_id])


class BrokenSource:
    async def fetch(self, source_id: str) -> FetchResponse:
        raise TransportError("conexao recusada", source_id=source_id)


class GatedSource:
    """Cada id só responde quando o respectivo gate é liberado."""

    def __init__(self, files: dict[str, str | None]) -> None:
        self.files = files
        self.gates = {name: asyncio.Event() for name in files}

    async def fetch(self, source_id: str) -> FetchResponse:
        await self.gates[source_id].wait()
        text = self.files[source_id]
        if text is None:
            return FetchResponse(ok=False, status=404)
        return FetchResponse(ok=True, status=200, text=text)


def _mk_loader(source) -> tuple[ScheduleLoader, MemoryStatusSink, MemoryListSink]:
    status = MemoryStatusSink()
    cards = MemoryListSink()
    return ScheduleLoader(source, status, cards), status, cards


def test_load_schedule_exemplo_ordena_por_periodo() -> None:
    loader, status, cards = _mk_loader(FakeSource({"a.json": json.dumps(EXEMPLO)}))

    outcome = asyncio.run(loader.load_schedule("a.json"))

    assert outcome.status == LoadStatus.RENDERED
    assert outcome.record_count == 2
    assert [r.class_name for r in cards.records] == ["Algebra", "Biology"]
    assert status.status == DisplayStatus.EMPTY
    assert status.history == [DisplayStatus.LOADING, DisplayStatus.EMPTY]


def test_load_schedule_um_card_por_registro_com_valores_originais() -> None:
    loader, _status, cards = _mk_loader(FakeSource({"a.json": json.dumps(EXEMPLO)}))
    asyncio.run(loader.load_schedule("a.json"))

    assert len(cards.cards) == 2
    assert cards.cards[0] == render_card(cards.records[0], 0)
    assert cards.cards[1] == render_card(cards.records[1], 1)
    for card, raw in zip(cards.cards, sorted(EXEMPLO, key=lambda d: d["period"])):
        for key in ("className", "teacher", "roomNumber", "subjectArea"):
            assert f">{raw[key]}<" in card


def test_load_schedule_repetido_e_idempotente() -> None:
    loader, _status, cards = _mk_loader(FakeSource({"a.json": json.dumps(EXEMPLO)}))

    asyncio.run(loader.load_schedule("a.json"))
    first = list(cards.cards)
    asyncio.run(loader.load_schedule("a.json"))

    assert cards.cards == first
    assert cards.clear_count == 2


def test_load_schedule_arquivo_ausente_mostra_erro_sem_excecao() -> None:
    source = FakeSource({"a.json": json.dumps(EXEMPLO)})
    loader, status, cards = _mk_loader(source)
    asyncio.run(loader.load_schedule("a.json"))

    outcome = asyncio.run(loader.load_schedule("nao_existe.json"))

    assert outcome.status == LoadStatus.FAILED
    assert outcome.error_kind == LoadErrorKind.NOT_FOUND
    assert cards.cards == []
    assert status.status == DisplayStatus.ERROR


def test_load_schedule_conteudo_malformado_mostra_erro() -> None:
    loader, status, cards = _mk_loader(FakeSource({"obj.json": '{"period": 1}', "lixo.json": "{{"}))

    for name in ("obj.json", "lixo.json"):
        outcome = asyncio.run(loader.load_schedule(name))
        assert outcome.status == LoadStatus.FAILED
        assert outcome.error_kind == LoadErrorKind.MALFORMED
        assert cards.cards == []
        assert status.status == DisplayStatus.ERROR


def test_load_schedule_periodo_nan_ou_aninhamento_profundo_mostra_erro() -> None:
    com_nan = (
        '[{"period": 3, "className": "C", "teacher": "T", "roomNumber": "1", "subjectArea": "Math"},'
        ' {"period": NaN, "className": "N", "teacher": "T", "roomNumber": "2", "subjectArea": "Math"},'
        ' {"period": 1, "className": "A", "teacher": "T", "roomNumber": "3", "subjectArea": "Math"}]'
    )
    fundo = "[" * 200_000 + "]" * 200_000
    loader, status, cards = _mk_loader(FakeSource({"nan.json": com_nan, "fundo.json": fundo}))

    for name in ("nan.json", "fundo.json"):
        outcome = asyncio.run(loader.load_schedule(name))
        assert outcome.status == LoadStatus.FAILED
        assert outcome.error_kind == LoadErrorKind.MALFORMED
        assert cards.cards == []
        assert status.status == DisplayStatus.ERROR


def test_load_schedule_falha_de_transporte_mostra_erro() -> None:
    loader, status, cards = _mk_loader(BrokenSource())

    outcome = asyncio.run(loader.load_schedule("a.json"))

    assert outcome.error_kind == LoadErrorKind.TRANSPORT
    assert cards.cards == []
    assert status.history == [DisplayStatus.LOADING, DisplayStatus.ERROR]


def test_resposta_antiga_nao_sobrescreve_selecao_nova() -> None:
    novo = [{"period": 1, "className": "Chemistry", "teacher": "Dr. N", "roomNumber": "Lab A", "subjectArea": "Science"}]

    async def _run():
        source = GatedSource({"old.json": json.dumps(EXEMPLO), "new.json": json.dumps(novo)})
        loader, status, cards = _mk_loader(source)
        old_task = asyncio.create_task(loader.load_schedule("old.json"))
        await asyncio.sleep(0)
        new_task = asyncio.create_task(loader.load_schedule("new.json"))
        await asyncio.sleep(0)

        source.gates["new.json"].set()
        new_outcome = await new_task
        source.gates["old.json"].set()
        old_outcome = await old_task
        return old_outcome, new_outcome, status, cards

    old_outcome, new_outcome, status, cards = asyncio.run(_run())

    assert new_outcome.status == LoadStatus.RENDERED
    assert old_outcome.status == LoadStatus.SUPERSEDED
    assert old_outcome.token < new_outcome.token
    assert [r.class_name for r in cards.records] == ["Chemistry"]
    assert status.status == DisplayStatus.EMPTY


def test_falha_antiga_descartada_apos_selecao_nova() -> None:
    async def _run():
        source = GatedSource({"missing.json": None, "new.json": json.dumps(EXEMPLO)})
        loader, status, cards = _mk_loader(source)
        old_task = asyncio.create_task(loader.load_schedule("missing.json"))
        await asyncio.sleep(0)
        new_task = asyncio.create_task(loader.load_schedule("new.json"))
        await asyncio.sleep(0)

        source.gates["new.json"].set()
        await new_task
        source.gates["missing.json"].set()
        old_outcome = await old_task
        return old_outcome, status, cards

    old_outcome, status, cards = asyncio.run(_run())

    assert old_outcome.status == LoadStatus.SUPERSEDED
    assert old_outcome.error_kind == LoadErrorKind.NOT_FOUND
    assert status.status == DisplayStatus.EMPTY
    assert len(cards.cards) == 2


def test_fetch_records_retorna_ordenado() -> None:
    source = FakeSource({"a.json": json.dumps(EXEMPLO)})
    records = asyncio.run(fetch_records(source, "a.json"))
    assert [r.period for r in records] == [1, 2]
