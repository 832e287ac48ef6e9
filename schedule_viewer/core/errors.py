"""Erros tipados do carregamento de horários.

Toda falha entre a busca e a ordenação vira uma subclasse de
`ScheduleLoadError`; o `ScheduleLoader` é o único lugar que transforma
essas falhas em apresentação (lista vazia + aviso genérico).
"""

from __future__ import annotations

from enum import Enum


class LoadErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    MALFORMED = "MALFORMED"
    TRANSPORT = "TRANSPORT"


class ScheduleLoadError(RuntimeError):
    """Base das falhas de carregamento."""

    kind: LoadErrorKind = LoadErrorKind.TRANSPORT

    def __init__(self, message: str, *, source_id: str | None = None) -> None:
        super().__init__(message)
        self.source_id = source_id


class ResourceNotFoundError(ScheduleLoadError):
    """A fonte respondeu, mas sem sucesso (arquivo ausente, HTTP 404...)."""

    kind = LoadErrorKind.NOT_FOUND

    def __init__(self, message: str, *, source_id: str | None = None, status: int | None = None) -> None:
        super().__init__(message, source_id=source_id)
        self.status = status


class MalformedContentError(ScheduleLoadError):
    """Conteúdo recuperado não é uma lista JSON de aulas."""

    kind = LoadErrorKind.MALFORMED


class TransportError(ScheduleLoadError):
    """Falha de leitura/rede antes de existir uma resposta."""

    kind = LoadErrorKind.TRANSPORT
