from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

_WHITESPACE_RE = re.compile(r"\s+")


def style_category(subject_area: str) -> str:
    """Categoria visual do badge: `Social Studies` -> `Social-Studies`."""
    return _WHITESPACE_RE.sub("-", subject_area)


@dataclass(frozen=True, slots=True)
class ClassRecord:
    """Uma aula do horário de um aluno."""

    period: int | float
    class_name: str
    teacher: str
    room_number: str
    subject_area: str

    @property
    def style_category(self) -> str:
        return style_category(self.subject_area)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClassRecord":
        period = data["period"]
        # bool é subclasse de int; não é um período válido.
        if isinstance(period, bool) or not isinstance(period, (int, float)):
            raise ValueError(f"period deve ser numerico, recebido {period!r}")
        # NaN/Infinity passam pelo json.loads, mas quebram a ordenação.
        if isinstance(period, float) and not math.isfinite(period):
            raise ValueError(f"period deve ser finito, recebido {period!r}")
        subject_area = data["subjectArea"]
        if not isinstance(subject_area, str):
            raise ValueError(f"subjectArea deve ser texto, recebido {subject_area!r}")
        return cls(
            period=period,
            class_name=str(data["className"]),
            teacher=str(data["teacher"]),
            room_number=str(data["roomNumber"]),
            subject_area=subject_area,
        )


@dataclass(frozen=True, slots=True)
class ScheduleSource:
    """Opção do seletor: identificador do arquivo + rótulo exibido."""

    file_name: str
    label: str

    @classmethod
    def from_file_name(cls, file_name: str) -> "ScheduleSource":
        stem = file_name.rsplit(".", maxsplit=1)[0] if file_name.lower().endswith(".json") else file_name
        label = stem[: -len("Schedule")] if stem.endswith("Schedule") and stem != "Schedule" else stem
        return cls(file_name=file_name, label=label or file_name)


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Resposta bruta de uma fonte de dados (sucesso separado do conteúdo)."""

    ok: bool
    status: int
    text: str | None = None
    url: str = ""
