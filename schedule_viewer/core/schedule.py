from __future__ import annotations

import html
import json
import logging
from operator import attrgetter

from .errors import MalformedContentError
from .models import ClassRecord
from .state import DisplayStatus

logger = logging.getLogger(__name__)

CARD_STAGGER_SECONDS = 0.1

LOADING_NOTICE = '<div class="alert alert-info">Loading schedule...</div>'
ERROR_NOTICE = (
    '<div class="alert alert-danger">'
    "<strong>Oops!</strong> Unable to load the schedule. "
    "Please check that the file exists in the json folder."
    "</div>"
)


def parse_schedule(text: str, *, source_id: str | None = None) -> list[ClassRecord]:
    """Converte o JSON de um horário em `ClassRecord`s (ordem original)."""
    try:
        raw = json.loads(text)
    except (TypeError, ValueError, RecursionError) as exc:
        raise MalformedContentError(f"JSON invalido: {exc}", source_id=source_id) from exc

    if not isinstance(raw, list):
        raise MalformedContentError(
            f"JSON invalido: esperado lista de aulas, recebido {type(raw).__name__}",
            source_id=source_id,
        )

    records: list[ClassRecord] = []
    for idx, item in enumerate(raw):
        if not isinstance(item, dict):
            raise MalformedContentError(f"Item {idx} nao e um objeto: {item!r}", source_id=source_id)
        try:
            records.append(ClassRecord.from_dict(item))
        except KeyError as exc:
            raise MalformedContentError(f"Item {idx} sem campo {exc}", source_id=source_id) from exc
        except ValueError as exc:
            raise MalformedContentError(f"Item {idx} invalido: {exc}", source_id=source_id) from exc
    logger.debug("Horario %s parseado (%d aulas)", source_id, len(records))
    return records


def sort_by_period(records: list[ClassRecord]) -> list[ClassRecord]:
    """Ordenação estável por período; empates mantêm a ordem de entrada."""
    return sorted(records, key=attrgetter("period"))


def format_period(period: int | float) -> str:
    if isinstance(period, float) and period.is_integer():
        return str(int(period))
    return str(period)


def render_card(record: ClassRecord, index: int) -> str:
    """Markup de um card; `index` só controla o atraso da animação."""
    e = html.escape
    delay = f"{index * CARD_STAGGER_SECONDS:g}"
    return (
        f'<div class="class-item" style="animation-delay: {delay}s">'
        f'<div class="period-marker">{e(format_period(record.period))}</div>'
        '<div class="class-content">'
        f'<h3 class="class-name">{e(record.class_name)}</h3>'
        '<div class="class-details">'
        '<div class="detail-row">'
        '<span class="detail-label">Teacher</span>'
        f'<span class="detail-value">{e(record.teacher)}</span>'
        "</div>"
        '<div class="detail-row">'
        '<span class="detail-label">Room</span>'
        f'<span class="detail-value">{e(record.room_number)}</span>'
        "</div>"
        "</div>"
        f'<span class="subject-badge subject-{e(record.style_category)}">{e(record.subject_area)}</span>'
        "</div>"
        "</div>"
    )


def render_status(status: DisplayStatus) -> str:
    if status == DisplayStatus.LOADING:
        return LOADING_NOTICE
    if status == DisplayStatus.ERROR:
        return ERROR_NOTICE
    return ""


def summarize_schedule(records: list[ClassRecord]) -> str:
    lines = [
        f"{format_period(r.period)}. {r.class_name} | {r.teacher} | Room {r.room_number} | {r.subject_area}"
        for r in records
    ]
    if not lines:
        lines.append("No classes loaded.")
    return "\n".join(lines)
