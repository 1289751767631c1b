# src/library/local_library.py
from __future__ import annotations

import os
import logging

from PySide6.QtCore import QObject, QTimer, QFileSystemWatcher, Signal

from core import formats

logger = logging.getLogger(__name__)

RESCAN_DEBOUNCE_MS = 500


def list_audio_files(directory: str) -> list[str]:
    """File names (not paths) of playable files directly inside `directory`."""
    if not directory or not os.path.isdir(directory):
        return []
    names: list[str] = []
    try:
        with os.scandir(directory) as it:
            for entry in it:
                if entry.is_file() and formats.supported(entry.name):
                    names.append(entry.name)
    except OSError as e:
        logger.warning("Cannot list %s: %s", directory, e)
        return []
    return sorted(names, key=str.lower)


def filter_songs(songs: list[str], query: str) -> list[str]:
    q = (query or "").strip().lower()
    if not q:
        return list(songs)
    return [s for s in songs if q in s.lower()]


class LocalLibrary(QObject):
    """
    Watched music folder. Directory change notifications are debounced and
    libraryUpdated fires only when the listing actually changed.
    """
    libraryUpdated = Signal()

    def __init__(self, directory: str, parent=None):
        super().__init__(parent)
        self._directory = directory
        self._songs: list[str] = []

        os.makedirs(directory, exist_ok=True)

        self._rescan_timer = QTimer(self)
        self._rescan_timer.setSingleShot(True)
        self._rescan_timer.setInterval(RESCAN_DEBOUNCE_MS)
        self._rescan_timer.timeout.connect(self.scan)

        self._watcher = QFileSystemWatcher(self)
        self._watcher.directoryChanged.connect(self._on_directory_changed)
        if not self._watcher.addPath(directory):
            logger.warning("Cannot watch music folder %s", directory)

        self.scan()

    def directory(self) -> str:
        return self._directory

    def songs(self) -> list[str]:
        return list(self._songs)

    def path_for(self, name: str) -> str:
        return os.path.join(self._directory, name)

    def search(self, query: str) -> list[str]:
        return filter_songs(self._songs, query)

    def scan(self) -> bool:
        songs = list_audio_files(self._directory)
        if songs == self._songs:
            return False
        self._songs = songs
        logger.info("Music folder %s: %d songs", self._directory, len(songs))
        self.libraryUpdated.emit()
        return True

    def _on_directory_changed(self, _path: str) -> None:
        self._rescan_timer.start()
