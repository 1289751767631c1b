"""
Shared fixtures: a Qt core application, a scripted audio engine and a
coordinator wired to both.
"""

import pytest
from PySide6.QtCore import QCoreApplication, QObject, Signal

from core.errors import EngineError
from core.playlist_store import PlaylistStore
from player.coordinator import PlaybackCoordinator
from player.lyrics_loader import LyricsLoader


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeEngine(QObject):
    durationChanged = Signal(int)
    finished = Signal(int)
    errorOccurred = Signal(int, str)

    def __init__(self):
        super().__init__()
        self.calls = []
        self.loaded = []
        self.token = 0
        self.volume = None
        self.position = 0
        self.refuse_loads = False
        self.error_on_load = None

    def play_file(self, path, token):
        if self.refuse_loads:
            raise EngineError("No audio backend is available")
        self.calls.append("play_file")
        self.loaded.append(path)
        self.token = token
        if self.error_on_load:
            self.errorOccurred.emit(token, self.error_on_load)

    def play(self):
        self.calls.append("play")

    def pause(self):
        self.calls.append("pause")

    def stop(self):
        self.calls.append("stop")

    def seek_ms(self, ms):
        self.calls.append("seek")
        self.position = ms

    def set_volume(self, volume):
        self.volume = volume

    def position_ms(self):
        return self.position

    def duration_ms(self):
        return 0

    # test helpers
    def finish(self, token=None):
        self.finished.emit(self.token if token is None else token)

    def fail(self, message, token=None):
        self.errorOccurred.emit(self.token if token is None else token, message)


class Recorder:
    """Collects signal emissions as tuples."""

    def __init__(self, *signals):
        self.events = []
        for name, sig in signals:
            sig.connect(lambda *args, n=name: self.events.append((n,) + args))

    def of(self, name):
        return [e[1:] for e in self.events if e[0] == name]


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def store():
    return PlaylistStore()


@pytest.fixture
def lyrics_by_path():
    return {}


@pytest.fixture
def missing_paths():
    return set()


@pytest.fixture
def coordinator(store, engine, lyrics_by_path, missing_paths):
    loader = LyricsLoader(asynchronous=False, lookup=lambda p: lyrics_by_path.get(p))
    return PlaybackCoordinator(
        store,
        engine,
        lyrics_loader=loader,
        file_exists=lambda p: p not in missing_paths,
    )


@pytest.fixture
def make_recorder():
    return Recorder
