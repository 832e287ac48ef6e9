from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import LoadErrorKind


class LoadStatus(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    RENDERED = "RENDERED"
    FAILED = "FAILED"
    SUPERSEDED = "SUPERSEDED"


class DisplayStatus(str, Enum):
    """Conteúdo possível da região de status."""

    EMPTY = "EMPTY"
    LOADING = "LOADING"
    ERROR = "ERROR"


@dataclass(slots=True)
class LoadOutcome:
    """Resultado de uma chamada de `load_schedule` (a UI ignora)."""

    status: LoadStatus
    source_id: str
    token: int
    record_count: int = 0
    error_kind: LoadErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.status == LoadStatus.RENDERED
