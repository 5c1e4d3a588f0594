from __future__ import annotations

import logging

import pytest

from progression_engine.config import Config
from progression_engine.time_frames import TimeFrame


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PROGRESSION_LOG_FORMAT", "PROGRESSION_LOG_LEVEL", "PROGRESSION_TIME_FRAME"):
        monkeypatch.delenv(name, raising=False)


def test_config_from_env_defaults() -> None:
    cfg = Config.from_env()
    assert cfg.log_format == "json"
    assert cfg.log_level == "INFO"
    assert cfg.log_level_number == logging.INFO
    assert cfg.time_frame is TimeFrame.ALL_TIME


def test_config_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROGRESSION_LOG_FORMAT", "TEXT")
    monkeypatch.setenv("PROGRESSION_LOG_LEVEL", "debug")
    monkeypatch.setenv("PROGRESSION_TIME_FRAME", "monthly")

    cfg = Config.from_env()
    assert cfg.log_format == "text"
    assert cfg.log_level_number == logging.DEBUG
    assert cfg.time_frame is TimeFrame.MONTHLY


def test_config_from_env_rejects_unknown_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROGRESSION_LOG_FORMAT", "xml")
    with pytest.raises(RuntimeError, match="PROGRESSION_LOG_FORMAT"):
        Config.from_env()


def test_config_from_env_rejects_unknown_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROGRESSION_LOG_LEVEL", "LOUD")
    with pytest.raises(RuntimeError, match="PROGRESSION_LOG_LEVEL"):
        Config.from_env()


def test_config_from_env_rejects_unknown_time_frame(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROGRESSION_TIME_FRAME", "weekly")
    with pytest.raises(RuntimeError, match="PROGRESSION_TIME_FRAME"):
        Config.from_env()
