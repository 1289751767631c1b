import os

import pytest

from core.config import DEFAULT_TICK_MS, MAX_TICK_MS, MIN_TICK_MS, load_config

ENV_VARS = ("LRCPLAYER_MUSIC_DIR", "LRCPLAYER_TICK_MS", "LRCPLAYER_SYNC_LYRICS", "LRCPLAYER_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path):
    cfg = load_config(str(tmp_path))
    assert cfg.app_data_dir == str(tmp_path)
    assert cfg.music_dir == os.path.join(str(tmp_path), "mp3")
    assert os.path.isdir(cfg.music_dir)
    assert cfg.tick_interval_ms == DEFAULT_TICK_MS
    assert cfg.default_volume == 50
    assert cfg.async_lyrics is True
    assert cfg.log_level == "INFO"


def test_music_dir_override(tmp_path, monkeypatch):
    target = tmp_path / "elsewhere"
    monkeypatch.setenv("LRCPLAYER_MUSIC_DIR", str(target))
    cfg = load_config(str(tmp_path))
    assert cfg.music_dir == str(target)
    assert target.is_dir()


@pytest.mark.parametrize(
    "raw, expected",
    [("250", 250), ("1", MIN_TICK_MS), ("999999", MAX_TICK_MS), ("fast", DEFAULT_TICK_MS), ("", DEFAULT_TICK_MS)],
)
def test_tick_interval(tmp_path, monkeypatch, raw, expected):
    monkeypatch.setenv("LRCPLAYER_TICK_MS", raw)
    assert load_config(str(tmp_path)).tick_interval_ms == expected


def test_sync_lyrics_and_log_level(tmp_path, monkeypatch):
    monkeypatch.setenv("LRCPLAYER_SYNC_LYRICS", "1")
    monkeypatch.setenv("LRCPLAYER_LOG_LEVEL", "debug")
    cfg = load_config(str(tmp_path))
    assert cfg.async_lyrics is False
    assert cfg.log_level == "DEBUG"
