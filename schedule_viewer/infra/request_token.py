from __future__ import annotations

import threading


class SupersededError(RuntimeError):
    """Resultado de uma requisição que já foi substituida por outra mais nova."""


class RequestSequencer:
    """Emite tokens crescentes; só o último emitido é considerado atual."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest = 0

    def issue(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    @property
    def latest(self) -> int:
        with self._lock:
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest

    def raise_if_superseded(self, token: int) -> None:
        with self._lock:
            latest = self._latest
        if token != latest:
            raise SupersededError(f"Requisicao {token} substituida pela {latest}")
