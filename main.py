import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.config import load_config
from core.playlist_store import PlaylistStore
from core.state import AppState
from library.local_library import LocalLibrary
from player.coordinator import PlaybackCoordinator
from player.lyrics_loader import LyricsLoader
from player.player import Player
from ui.main_window import MainWindow

logger = logging.getLogger("lrcplayer")


def init_app_state() -> AppState:
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Music folder: %s", config.music_dir)

    app_state = AppState(config)
    app_state.playlist = PlaylistStore()
    app_state.player = Player()
    app_state.bind_coordinator(PlaybackCoordinator(
        app_state.playlist,
        app_state.player,
        lyrics_loader=LyricsLoader(asynchronous=config.async_lyrics),
        tick_interval_ms=config.tick_interval_ms,
    ))
    app_state.library = LocalLibrary(config.music_dir)
    if not app_state.library.songs():
        app_state.notify(f"No playable files in {config.music_dir}", "warn")
    return app_state


def main() -> int:
    qt_app = QApplication(sys.argv)
    qt_app.setApplicationName("LrcPlayer")

    try:
        app_state = init_app_state()
    except Exception as e:
        logger.exception("Startup failed")
        QMessageBox.critical(None, "LrcPlayer", f"Failed to initialize audio player: {e}")
        return 1

    main_window = MainWindow(app_state)
    main_window.show()
    app_state.coordinator.start()

    return qt_app.exec()

if __name__ == "__main__":
    raise SystemExit(main())
