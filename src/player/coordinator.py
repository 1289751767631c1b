# player/coordinator.py
from __future__ import annotations

import logging
import os
import queue
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal, QTimer

from core import formats
from core.config import DEFAULT_TICK_MS
from core.errors import EngineError, FileMissingError, FormatUnsupportedError, PlayerError
from core.lyrics_index import LyricsTracker
from core.models import PlaybackSession, PlaybackState, PlaylistEntry
from core.playlist_store import PlaylistStore
from player.lyrics_loader import LyricsLoader

logger = logging.getLogger(__name__)


def track_title(file_path: str) -> str:
    return os.path.splitext(os.path.basename(file_path))[0]


class PlaybackCoordinator(QObject):
    """
    Binds a PlaylistStore, an audio engine and the lyric tracker.

    Owns the playback session: which playlist position is current, the
    play state, and the last polled position. The engine is any QObject with
    play_file(path, token)/play/pause/stop/seek_ms/set_volume/position_ms/
    duration_ms and the signals durationChanged(int), finished(int),
    errorOccurred(int, str).

    Every load and every stop starts a new generation; engine completions
    tagged with an older one are dropped. Lyric lookups carry a separate
    lyrics generation, bumped on track change and by set_lyrics_text(), so
    hand-loaded lyrics are not overwritten by a lookup still in flight.
    """
    positionChanged = Signal(int)        # ms
    durationChanged = Signal(int)        # ms
    stateChanged = Signal(object)        # PlaybackState
    currentTrackChanged = Signal(str)    # title ("" when nothing is current)
    trackError = Signal(str)
    trackFinished = Signal()
    lyricsChanged = Signal()
    lyricWindowChanged = Signal(object)  # list[(LyricLine, is_current)]

    def __init__(
        self,
        playlist: PlaylistStore,
        engine,
        lyrics_loader: Optional[LyricsLoader] = None,
        tick_interval_ms: int = DEFAULT_TICK_MS,
        file_exists: Callable[[str], bool] = os.path.isfile,
        parent=None,
    ):
        super().__init__(parent)
        self.playlist = playlist
        self.engine = engine
        self.lyrics = LyricsTracker()
        self.lyrics_loader = lyrics_loader or LyricsLoader(parent=self)
        self._file_exists = file_exists

        self.session = PlaybackSession()
        self._generation: int = 0
        self._lyrics_generation: int = 0
        self._pending: "queue.Queue[Callable[[], None]]" = queue.Queue()

        self.playlist.itemRemoved.connect(self._on_item_removed)
        self.playlist.itemMoved.connect(self._on_item_moved)
        self.playlist.cleared.connect(self._on_cleared)
        self.playlist.itemVolumeChanged.connect(self._on_item_volume_changed)

        self.engine.finished.connect(self._on_engine_finished)
        self.engine.errorOccurred.connect(self._on_engine_error)
        self.engine.durationChanged.connect(self._on_engine_duration)

        self.lyrics_loader.loaded.connect(self._on_lyrics_loaded)

        self._poll_timer = QTimer(self)
        self._poll_timer.setInterval(int(tick_interval_ms))
        self._poll_timer.timeout.connect(self._poll)

    # ----------------------------
    # Session accessors
    # ----------------------------

    @property
    def current_index(self) -> Optional[int]:
        return self.session.current_index

    @property
    def state(self) -> PlaybackState:
        return self.session.state

    @property
    def position_ms(self) -> int:
        return self.session.position_ms

    @property
    def duration_ms(self) -> int:
        return self.session.duration_ms

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def lyrics_generation(self) -> int:
        return self._lyrics_generation

    def current_entry(self) -> Optional[PlaylistEntry]:
        if self.session.current_index is None:
            return None
        return self.playlist.at(self.session.current_index)

    # ----------------------------
    # Timer
    # ----------------------------

    def start(self) -> None:
        self._poll_timer.start()

    def shutdown(self) -> None:
        self._poll_timer.stop()
        self.engine.stop()
        self.lyrics_loader.shutdown()

    def _poll(self) -> None:
        self.process_pending()
        if self.session.state != PlaybackState.STOPPED:
            self.on_tick(self.engine.position_ms())

    # ----------------------------
    # Mutation queue
    # ----------------------------

    def submit(self, fn: Callable[[], None]) -> None:
        """Queue a playlist mutation from any thread; it runs on the next poll."""
        self._pending.put(fn)

    def process_pending(self, max_items: int = 200) -> int:
        done = 0
        for _ in range(max_items):
            try:
                fn = self._pending.get_nowait()
            except queue.Empty:
                break
            try:
                fn()
            except Exception:
                logger.exception("Queued playlist mutation failed")
            done += 1
        return done

    # ----------------------------
    # Navigation
    # ----------------------------

    def _check_playable(self, file_path: str) -> None:
        if not self._file_exists(file_path):
            raise FileMissingError(f"File does not exist: {file_path}")
        if not formats.supported(file_path):
            ext = formats.extension_of(file_path)
            raise FormatUnsupportedError(f"Unsupported audio format: {ext or '(none)'}")

    def select_and_play(self, index: int) -> bool:
        entry = self.playlist.at(index)
        if entry is None:
            return False

        try:
            self._check_playable(entry.file_path)
        except PlayerError as e:
            logger.warning("Cannot play entry %d: %s", index, e)
            self.trackError.emit(str(e))
            return False

        self._generation += 1
        generation = self._generation
        try:
            self.engine.set_volume(entry.volume)
            self.engine.play_file(entry.file_path, self._generation)
        except EngineError as e:
            logger.error("Engine refused %s: %s", entry.file_path, e)
            self.stop()
            self.trackError.emit(str(e))
            return False
        if self._generation != generation:
            # the engine failed while loading; its error handler already stopped us
            return False

        self.session.current_index = index
        self.session.position_ms = 0
        self.session.duration_ms = 0
        self._set_state(PlaybackState.PLAYING)

        title = track_title(entry.file_path)
        logger.info("Playing [%d] %s", index, title)
        self.currentTrackChanged.emit(title)

        self._lyrics_generation += 1
        self._apply_lyrics(None)
        self.lyrics_loader.request(entry.file_path, self._lyrics_generation)
        return True

    def toggle_play_pause(self) -> None:
        state = self.session.state
        if state == PlaybackState.PLAYING:
            self.engine.pause()
            self._set_state(PlaybackState.PAUSED)
        elif self.current_entry() is not None:
            if state == PlaybackState.PAUSED:
                self.engine.play()
                self._set_state(PlaybackState.PLAYING)
            else:
                self.select_and_play(self.session.current_index)
        elif self.playlist.count() > 0:
            self.select_and_play(0)

    def next(self) -> bool:
        count = self.playlist.count()
        if count == 0:
            return False
        cur = self.session.current_index
        start = -1 if cur is None else cur
        return self.select_and_play((start + 1) % count)

    def previous(self) -> bool:
        count = self.playlist.count()
        if count == 0:
            return False
        cur = self.session.current_index
        start = 0 if cur is None else cur
        return self.select_and_play((start - 1 + count) % count)

    def stop(self) -> None:
        self._generation += 1
        self.engine.stop()
        if self.session.position_ms != 0:
            self.session.position_ms = 0
            self.positionChanged.emit(0)
        self._set_state(PlaybackState.STOPPED)
        self.lyrics.reset()

    def seek_ms(self, ms: int) -> None:
        if self.session.current_index is None:
            return
        self.engine.seek_ms(ms)
        self.on_tick(ms)

    # ----------------------------
    # Position
    # ----------------------------

    def on_tick(self, position_ms: int) -> None:
        if self.session.state == PlaybackState.STOPPED:
            return

        pos = max(0, int(position_ms))
        if pos != self.session.position_ms:
            self.session.position_ms = pos
            self.positionChanged.emit(pos)

        window = self.lyrics.update(pos)
        if window is not None:
            self.lyricWindowChanged.emit(window)

    # ----------------------------
    # Lyrics
    # ----------------------------

    def set_lyrics_text(self, text: Optional[str]) -> None:
        self._lyrics_generation += 1
        self._apply_lyrics(text)

    def _apply_lyrics(self, text: Optional[str]) -> None:
        self.lyrics.load(text)
        self.lyricsChanged.emit()
        window = self.lyrics.update(self.session.position_ms)
        self.lyricWindowChanged.emit(window or [])

    def _on_lyrics_loaded(self, generation: int, text) -> None:
        if generation != self._lyrics_generation:
            logger.debug("Dropping lyrics for stale generation %d", generation)
            return
        self._apply_lyrics(text)

    # ----------------------------
    # Engine notifications
    # ----------------------------

    def _on_engine_duration(self, ms: int) -> None:
        ms = max(0, int(ms))
        if ms != self.session.duration_ms:
            self.session.duration_ms = ms
            self.durationChanged.emit(ms)

    def _on_engine_finished(self, token: int) -> None:
        if token != self._generation or self.session.state == PlaybackState.STOPPED:
            logger.debug("Ignoring finished for token %d", token)
            return
        self.trackFinished.emit()
        if not self.next():
            self.stop()

    def _on_engine_error(self, token: int, message: str) -> None:
        if token != self._generation:
            logger.debug("Ignoring engine error for stale token %d: %s", token, message)
            return
        logger.error("Playback error: %s", message)
        self.stop()
        self.trackError.emit(message)

    # ----------------------------
    # Playlist reconciliation
    # ----------------------------

    def _drop_current(self) -> None:
        self.stop()
        self.session.current_index = None
        self.session.duration_ms = 0
        self.currentTrackChanged.emit("")
        self._lyrics_generation += 1
        self._apply_lyrics(None)

    def _on_item_removed(self, index: int) -> None:
        cur = self.session.current_index
        if cur is None:
            return
        if index == cur:
            logger.info("Current entry %d removed; stopping", index)
            self._drop_current()
        elif index < cur:
            self.session.current_index = cur - 1

    def _on_item_moved(self, src: int, dst: int) -> None:
        cur = self.session.current_index
        if cur is None:
            return
        if src == cur:
            self.session.current_index = dst
        elif src < cur <= dst:
            self.session.current_index = cur - 1
        elif dst <= cur < src:
            self.session.current_index = cur + 1

    def _on_cleared(self) -> None:
        if self.session.current_index is not None:
            self._drop_current()

    def _on_item_volume_changed(self, index: int) -> None:
        if index != self.session.current_index:
            return
        entry = self.playlist.at(index)
        if entry is not None:
            self.engine.set_volume(entry.volume)

    # ----------------------------
    # Helpers
    # ----------------------------

    def _set_state(self, new_state: PlaybackState) -> None:
        if self.session.state != new_state:
            self.session.state = new_state
            self.stateChanged.emit(new_state)
