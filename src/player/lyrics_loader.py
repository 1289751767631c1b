# player/lyrics_loader.py
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QThread, Signal

from library.lyrics_source import find_lyrics

logger = logging.getLogger(__name__)


class _LyricsLoadWorker(QThread):
    done = Signal(int, object)  # generation, text | None

    def __init__(self, path: str, generation: int, lookup: Callable[[str], Optional[str]], parent=None):
        super().__init__(parent)
        self.path = path
        self.generation = generation
        self.lookup = lookup

    def run(self):
        try:
            text = self.lookup(self.path)
        except Exception as e:
            logger.warning("Lyric lookup failed for %s: %s", self.path, e)
            text = None
        self.done.emit(self.generation, text)


class LyricsLoader(QObject):
    """
    Looks up lyrics for a track, off the UI thread when `asynchronous`.
    Results carry the generation they were requested for; the receiver
    decides whether that generation is still current.
    """
    loaded = Signal(int, object)  # generation, text | None

    def __init__(self, asynchronous: bool = True, lookup: Callable[[str], Optional[str]] = find_lyrics, parent=None):
        super().__init__(parent)
        self.asynchronous = asynchronous
        self.lookup = lookup
        self._workers: set[_LyricsLoadWorker] = set()

    def request(self, path: str, generation: int) -> None:
        if not self.asynchronous:
            try:
                text = self.lookup(path)
            except Exception as e:
                logger.warning("Lyric lookup failed for %s: %s", path, e)
                text = None
            self.loaded.emit(generation, text)
            return

        worker = _LyricsLoadWorker(path, generation, self.lookup, self)
        worker.done.connect(self.loaded.emit)
        worker.finished.connect(lambda w=worker: self._forget(w))
        self._workers.add(worker)
        worker.start()

    def pending(self) -> int:
        return len(self._workers)

    def shutdown(self, timeout_ms: int = 2000) -> None:
        for worker in list(self._workers):
            worker.wait(timeout_ms)
        self._workers.clear()

    def _forget(self, worker: _LyricsLoadWorker) -> None:
        self._workers.discard(worker)
        worker.deleteLater()
