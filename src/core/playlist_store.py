# core/playlist_store.py
from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from core.models import DEFAULT_VOLUME, PlaylistEntry

logger = logging.getLogger(__name__)


def clamp_volume(volume: int) -> int:
    return min(100, max(0, int(volume)))


class PlaylistStore(QObject):
    """
    Ordered playlist entries. Entries are addressed by position only.

    Structural signals (itemRemoved, itemMoved, cleared) fire before
    playlistChanged so listeners tracking a position can renumber first.
    """
    playlistChanged = Signal()
    itemVolumeChanged = Signal(int)   # index
    itemRemoved = Signal(int)         # index
    itemMoved = Signal(int, int)      # from, to
    cleared = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._items: List[PlaylistEntry] = []

    # --- reads ---
    def count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def at(self, index: int) -> Optional[PlaylistEntry]:
        if self._valid(index):
            return self._items[index]
        return None

    def all(self) -> List[PlaylistEntry]:
        return list(self._items)

    # --- mutations ---
    def append(self, file_path: str, volume: int = DEFAULT_VOLUME) -> None:
        self._items.append(PlaylistEntry(file_path=file_path, volume=clamp_volume(volume)))
        logger.debug("Appended %s at %d", file_path, len(self._items) - 1)
        self.playlistChanged.emit()

    def remove_at(self, index: int) -> bool:
        if not self._valid(index):
            return False
        entry = self._items.pop(index)
        logger.debug("Removed %s from %d", entry.file_path, index)
        self.itemRemoved.emit(index)
        self.playlistChanged.emit()
        return True

    def move_item(self, src: int, dst: int) -> bool:
        if not (self._valid(src) and self._valid(dst)):
            return False
        entry = self._items.pop(src)
        self._items.insert(dst, entry)
        self.itemMoved.emit(src, dst)
        self.playlistChanged.emit()
        return True

    def set_volume(self, index: int, volume: int) -> bool:
        if not self._valid(index):
            return False
        self._items[index] = replace(self._items[index], volume=clamp_volume(volume))
        self.itemVolumeChanged.emit(index)
        return True

    def clear(self) -> None:
        self._items.clear()
        self.cleared.emit()
        self.playlistChanged.emit()

    def _valid(self, index: int) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._items)
