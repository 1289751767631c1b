# core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from PySide6.QtCore import QStandardPaths

from core.models import DEFAULT_VOLUME

logger = logging.getLogger(__name__)

DEFAULT_TICK_MS = 500
MIN_TICK_MS = 50
MAX_TICK_MS = 2000


@dataclass(frozen=True)
class AppConfig:
    app_data_dir: str
    music_dir: str
    tick_interval_ms: int = DEFAULT_TICK_MS
    default_volume: int = DEFAULT_VOLUME
    async_lyrics: bool = True
    log_level: str = "INFO"


def get_app_data_dir() -> str:
    base = QStandardPaths.writableLocation(QStandardPaths.AppDataLocation)
    os.makedirs(base, exist_ok=True)
    return base


def _env_int(name: str, default: int, lo: int, hi: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return default
    return min(hi, max(lo, value))


def load_config(app_data_dir: str | None = None) -> AppConfig:
    """
    Environment overrides:
      LRCPLAYER_MUSIC_DIR    watched music folder (default <app data>/mp3)
      LRCPLAYER_TICK_MS      position poll interval
      LRCPLAYER_SYNC_LYRICS  "1" loads lyric files on the UI thread
      LRCPLAYER_LOG_LEVEL    logging level name
    """
    app_data_dir = app_data_dir or get_app_data_dir()

    music_dir = os.getenv("LRCPLAYER_MUSIC_DIR") or os.path.join(app_data_dir, "mp3")
    try:
        os.makedirs(music_dir, exist_ok=True)
    except OSError as e:
        logger.warning("Cannot create music folder %s: %s", music_dir, e)

    return AppConfig(
        app_data_dir=app_data_dir,
        music_dir=music_dir,
        tick_interval_ms=_env_int("LRCPLAYER_TICK_MS", DEFAULT_TICK_MS, MIN_TICK_MS, MAX_TICK_MS),
        async_lyrics=os.getenv("LRCPLAYER_SYNC_LYRICS") != "1",
        log_level=(os.getenv("LRCPLAYER_LOG_LEVEL") or "INFO").upper(),
    )
