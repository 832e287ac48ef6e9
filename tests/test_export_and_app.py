from __future__ import annotations

import json
from pathlib import Path

from PIL import Image

from schedule_viewer.app import run_headless
from schedule_viewer.core.export_png import badge_color, default_png_name, export_schedule_png
from schedule_viewer.core.models import ClassRecord
from schedule_viewer.core.schedule import ERROR_NOTICE
from schedule_viewer.infra.config import ViewerSettings
from schedule_viewer.infra.logger import log_file
from schedule_viewer.infra.request_token import RequestSequencer


def test_export_png_gera_imagem(tmp_path: Path) -> None:
    records = [
        ClassRecord(1, "Algebra", "Mr. Y", "101", "Math"),
        ClassRecord(2, "World History", "Ms. A", "214", "Social Studies"),
    ]
    out = export_schedule_png(records, tmp_path / "out" / "grade.png", subtitle="teste")
    assert out.exists()
    with Image.open(out) as img:
        assert img.format == "PNG"
        assert img.width == 1200


def test_badge_color_estavel_por_categoria() -> None:
    assert badge_color("Social-Studies") == badge_color("Social-Studies")
    assert badge_color("Math").startswith("#")
    assert default_png_name("Joseph").startswith("Joseph_")


def test_request_sequencer_so_o_ultimo_e_atual() -> None:
    seq = RequestSequencer()
    first = seq.issue()
    second = seq.issue()
    assert second > first
    assert seq.is_current(second)
    assert not seq.is_current(first)
    assert seq.latest == second


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SCHEDULE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SCHEDULE_DEFAULT_SOURCE", "MayaSchedule.json")
    monkeypatch.setenv("SCHEDULE_BASE_URL", "")
    monkeypatch.setenv("SCHEDULE_HTTP_TIMEOUT", "abc")
    monkeypatch.setenv("SCHEDULE_DEBUG", "1")

    settings = ViewerSettings.from_env()

    assert settings.data_dir == tmp_path
    assert settings.default_source == "MayaSchedule.json"
    assert settings.base_url is None
    assert settings.http_timeout is None
    assert settings.debug is True
    assert settings.with_overrides(default_source="x.json").default_source == "x.json"


def test_run_headless_imprime_resumo_ordenado(tmp_path: Path, capsys) -> None:
    data = [
        {"period": 2, "className": "Biology", "teacher": "Dr. X", "roomNumber": "204", "subjectArea": "Science"},
        {"period": 1, "className": "Algebra", "teacher": "Mr. Y", "roomNumber": "101", "subjectArea": "Math"},
    ]
    (tmp_path / "a.json").write_text(json.dumps(data), encoding="utf-8")
    settings = ViewerSettings(data_dir=tmp_path, default_source="a.json")

    assert run_headless(settings) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("1. Algebra")
    assert lines[1].startswith("2. Biology")


def test_run_headless_falha_imprime_aviso(tmp_path: Path, capsys) -> None:
    settings = ViewerSettings(data_dir=tmp_path, default_source="nao_existe.json")
    assert run_headless(settings) == 1
    assert ERROR_NOTICE in capsys.readouterr().out


def test_log_file_fica_na_pasta_configurada(tmp_path: Path) -> None:
    assert log_file(tmp_path) == tmp_path / "schedule_viewer.log"
