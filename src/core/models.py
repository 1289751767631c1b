# core/models.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto

DEFAULT_VOLUME = 50


class PlaybackState(Enum):
    STOPPED = auto()
    PLAYING = auto()
    PAUSED = auto()


@dataclass(frozen=True)
class LyricLine:
    timestamp_ms: int
    text: str


@dataclass(frozen=True)
class PlaylistEntry:
    file_path: str
    volume: int = DEFAULT_VOLUME  # 0..100


@dataclass
class PlaybackSession:
    current_index: int | None = None
    state: PlaybackState = PlaybackState.STOPPED
    position_ms: int = 0
    duration_ms: int = 0
