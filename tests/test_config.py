from __future__ import annotations

from pathlib import Path

import pytest

from md_engine.runtime.config import DEFAULT_SLOT, EngineSettings, env_flag


def test_defaults_follow_engine_timings() -> None:
    settings = EngineSettings()

    assert settings.save_delay_ms == 1000
    assert settings.scroll_window_ms == 100
    assert settings.storage_slot == DEFAULT_SLOT
    assert settings.outline_marker == "[TOC]"


def test_from_env_reads_prefixed_variables(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("MD_ENGINE_SAVE_DELAY_MS", "250")
    monkeypatch.setenv("MD_ENGINE_SCROLL_WINDOW_MS", "not-a-number")
    monkeypatch.setenv("MD_ENGINE_STORAGE_DIR", str(tmp_path))
    monkeypatch.setenv("MD_ENGINE_STORAGE_SLOT", "notes")

    settings = EngineSettings.from_env()

    assert settings.save_delay_ms == 250
    assert settings.scroll_window_ms == 100
    assert settings.storage_dir == tmp_path
    assert settings.storage_slot == "notes"


def test_with_overrides_ignores_none() -> None:
    settings = EngineSettings().with_overrides(storage_slot=None, save_delay_ms=5)

    assert settings.storage_slot == DEFAULT_SLOT
    assert settings.save_delay_ms == 5


@pytest.mark.parametrize(
    "changes",
    [
        {"save_delay_ms": -1},
        {"scroll_window_ms": -5},
        {"storage_slot": ""},
        {"outline_marker": ""},
    ],
)
def test_invalid_settings_rejected(changes: dict) -> None:
    with pytest.raises(ValueError):
        EngineSettings(**changes)


def test_env_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MD_ENGINE_VERBOSE", "Yes")

    assert env_flag("VERBOSE", False) is True
    assert env_flag("MISSING_FLAG", True) is True
