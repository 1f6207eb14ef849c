from __future__ import annotations

import logging
from pathlib import Path

import pytest

from retrores.cli import main
from retrores.persistence import save_resource
from retrores.runtime import Runtime
from retrores.settings import RESOURCE_FORMAT_VERSION, EngineSettings


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)
    monkeypatch.delenv("RETRORES_WAVEFORM_SIZE", raising=False)


@pytest.fixture
def archive(tmp_path: Path, small_settings: EngineSettings) -> Path:
    src = Runtime(small_settings)
    with src.images[0].lock() as img:
        img.pset(1, 2, 3)
    return save_resource(src, tmp_path / "res.zip", include_colors=True, include_channels=True, include_waveforms=True)


def test_dump_prints_snapshot(archive: Path, capsys: pytest.CaptureFixture) -> None:
    assert main(["dump", str(archive)]) == 0
    out = capsys.readouterr().out
    assert f"format_version = {RESOURCE_FORMAT_VERSION}" in out
    assert "[[waveforms]]" in out


def test_check_reports_applied_categories(archive: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    settings = tmp_path / "settings.toml"
    settings.write_text("[engine]\nwaveform_size = 8\n")

    assert main(["--settings", str(settings), "check", str(archive)]) == 0
    out = capsys.readouterr().out
    assert "images" in out and "waveforms" in out


def test_check_fails_on_mismatched_waveform_size(archive: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert main(["--settings", str(tmp_path / "absent.toml"), "check", str(archive)]) == 1
    assert "Waveform table" in capsys.readouterr().err


def test_missing_archive_is_an_error(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert main(["dump", str(tmp_path / "nope.zip")]) == 1
    assert "not found" in capsys.readouterr().err
