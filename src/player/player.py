# src/player/player.py
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal, QUrl
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput

from core.errors import EngineError

logger = logging.getLogger(__name__)

_ERROR_CATEGORIES = {
    QMediaPlayer.Error.ResourceError: "Media resource could not be resolved",
    QMediaPlayer.Error.FormatError: "Media format not supported",
    QMediaPlayer.Error.NetworkError: "Network error",
    QMediaPlayer.Error.AccessDeniedError: "Access denied",
}


def describe_media_error(error) -> str:
    return _ERROR_CATEGORIES.get(error, "Unknown media error")


class Player(QObject):
    """
    Audio engine over QMediaPlayer.

    Every play_file() call is tagged with a token; finished/errorOccurred
    report the token of the media they belong to.
    """
    durationChanged = Signal(int)       # ms
    finished = Signal(int)              # token
    errorOccurred = Signal(int, str)    # token, message

    def __init__(self, parent=None):
        super().__init__(parent)

        self.audio = QAudioOutput()
        self.media = QMediaPlayer()
        self.media.setAudioOutput(self.audio)

        self._token: int = 0
        self._volume: int = 50
        self.audio.setVolume(self._volume / 100.0)

        self.media.durationChanged.connect(lambda ms: self.durationChanged.emit(int(ms)))
        self.media.mediaStatusChanged.connect(self._on_media_status)
        self.media.errorOccurred.connect(self._on_error)

    # ----------------------------
    # Qt handlers
    # ----------------------------

    def _on_media_status(self, status: QMediaPlayer.MediaStatus) -> None:
        if status == QMediaPlayer.MediaStatus.LoadedMedia:
            self.durationChanged.emit(int(self.media.duration()))
        elif status == QMediaPlayer.MediaStatus.EndOfMedia:
            self.finished.emit(self._token)

    def _on_error(self, error: QMediaPlayer.Error, error_string: str = "") -> None:
        if error == QMediaPlayer.Error.NoError:
            return
        category = describe_media_error(error)
        message = f"{category}: {error_string}" if error_string else category
        logger.error("Engine error on %s: %s", self.media.source().toLocalFile(), message)
        self.errorOccurred.emit(self._token, message)

    # ----------------------------
    # Engine API
    # ----------------------------

    def play_file(self, path: str, token: int) -> None:
        if not self.media.isAvailable():
            raise EngineError("No audio backend is available")
        self._token = int(token)
        self.media.setSource(QUrl.fromLocalFile(path))
        self.media.play()

    def play(self) -> None:
        if self.media.playbackState() != QMediaPlayer.PlaybackState.PlayingState:
            self.media.play()

    def pause(self) -> None:
        if self.media.playbackState() == QMediaPlayer.PlaybackState.PlayingState:
            self.media.pause()

    def stop(self) -> None:
        self.media.stop()

    def seek_ms(self, ms: int) -> None:
        self.media.setPosition(max(0, int(ms)))

    def set_volume(self, volume: int) -> None:
        self._volume = min(100, max(0, int(volume)))
        self.audio.setVolume(self._volume / 100.0)

    def volume(self) -> int:
        return self._volume

    def position_ms(self) -> int:
        return int(self.media.position())

    def duration_ms(self) -> int:
        return int(self.media.duration())
