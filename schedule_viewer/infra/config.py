from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from schedule_viewer.core.storage import DEFAULT_DATA_DIR, DEFAULT_SOURCE_ID

logger = logging.getLogger(__name__)


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off", ""}


def _float_env(name: str) -> float | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("%s invalido (%r); ignorando", name, raw)
        return None


@dataclass(slots=True)
class ViewerSettings:
    """Configuração lida do ambiente (`.env` carregado pelo app)."""

    data_dir: Path = DEFAULT_DATA_DIR
    default_source: str = DEFAULT_SOURCE_ID
    base_url: str | None = None
    http_timeout: float | None = None
    debug: bool = False

    @classmethod
    def from_env(cls) -> "ViewerSettings":
        data_dir = (os.getenv("SCHEDULE_DATA_DIR") or "").strip()
        return cls(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            default_source=(os.getenv("SCHEDULE_DEFAULT_SOURCE") or "").strip() or DEFAULT_SOURCE_ID,
            base_url=(os.getenv("SCHEDULE_BASE_URL") or "").strip() or None,
            http_timeout=_float_env("SCHEDULE_HTTP_TIMEOUT"),
            debug=_bool_env("SCHEDULE_DEBUG", False),
        )

    def with_overrides(
        self,
        *,
        data_dir: str | None = None,
        default_source: str | None = None,
        base_url: str | None = None,
        debug: bool = False,
    ) -> "ViewerSettings":
        return replace(
            self,
            data_dir=Path(data_dir) if data_dir else self.data_dir,
            default_source=default_source or self.default_source,
            base_url=base_url or self.base_url,
            debug=self.debug or debug,
        )
