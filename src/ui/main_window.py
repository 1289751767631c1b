from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QTabWidget, QPushButton,
    QListWidget, QListWidgetItem, QLineEdit, QSplitter, QMenu, QMessageBox,
    QFileDialog, QInputDialog
)
from PySide6.QtCore import Qt, QDir
from PySide6.QtGui import QShortcut, QKeySequence, QFont
import logging
import os

from core import formats
from core.errors import PlaylistIOError
from core.playlist_io import export_playlist, import_playlist
from ui.lyrics_view import LyricsView
from ui.player_bar import PlayerBar
from ui.toast import show_toast

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, app_state):
        super().__init__()
        self.setWindowTitle("LrcPlayer")
        self.resize(900, 600)
        self.app_state = app_state
        self.playlist = app_state.playlist
        self.coordinator = app_state.coordinator
        self.library = app_state.library

        # --- Shortcuts ---
        QShortcut(QKeySequence("Space"), self, activated=self.coordinator.toggle_play_pause)
        QShortcut(QKeySequence("Ctrl+Right"), self, activated=self.coordinator.next)
        QShortcut(QKeySequence("Ctrl+Left"), self, activated=self.coordinator.previous)

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)

        self.app_state.notification.connect(self._on_notify)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        # --- Tabs ---
        self.tabs = QTabWidget()
        self.tabs.addTab(self._build_playlist_tab(), "Playlist")
        self.tabs.addTab(self._build_local_tab(), "Local")
        splitter.addWidget(self.tabs)

        self.lyrics_view = LyricsView()
        splitter.addWidget(self.lyrics_view)
        splitter.setStretchFactor(0, 2)
        splitter.setStretchFactor(1, 3)

        self.layout.addWidget(splitter, 1)

        self.player_bar = PlayerBar(self.coordinator, self)
        self.layout.addWidget(self.player_bar)

        # --- Core signals ---
        self.playlist.playlistChanged.connect(self._refresh_playlist)
        self.library.libraryUpdated.connect(self._refresh_local)
        self.coordinator.currentTrackChanged.connect(self._on_track_changed)
        self.coordinator.lyricWindowChanged.connect(self.lyrics_view.on_window_changed)

        self._refresh_playlist()
        self._refresh_local()
        self.show_queued_notifications()

    # ------------------ layout ------------------
    def _build_playlist_tab(self) -> QWidget:
        tab = QWidget()
        lay = QVBoxLayout(tab)
        lay.setContentsMargins(0, 0, 0, 0)

        self.playlist_list = QListWidget()
        self.playlist_list.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.playlist_list.customContextMenuRequested.connect(self._on_playlist_context_menu)
        self.playlist_list.itemDoubleClicked.connect(
            lambda item: self.coordinator.select_and_play(self.playlist_list.row(item))
        )
        lay.addWidget(self.playlist_list, 1)

        buttons = QHBoxLayout()
        btn_import = QPushButton("Import")
        btn_export = QPushButton("Export")
        btn_clear = QPushButton("Clear")
        btn_import.clicked.connect(self.import_playlist)
        btn_export.clicked.connect(self.export_playlist)
        btn_clear.clicked.connect(self.playlist.clear)
        buttons.addWidget(btn_import)
        buttons.addWidget(btn_export)
        buttons.addStretch(1)
        buttons.addWidget(btn_clear)
        lay.addLayout(buttons)
        return tab

    def _build_local_tab(self) -> QWidget:
        tab = QWidget()
        lay = QVBoxLayout(tab)
        lay.setContentsMargins(0, 0, 0, 0)

        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Search local songs...")
        self.search_box.textChanged.connect(self._refresh_local)
        lay.addWidget(self.search_box)

        self.local_list = QListWidget()
        self.local_list.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.local_list.customContextMenuRequested.connect(self._on_local_context_menu)
        self.local_list.itemDoubleClicked.connect(lambda item: self._add_local(item.text()))
        lay.addWidget(self.local_list, 1)
        return tab

    # ------------------ list refresh ------------------
    def _refresh_playlist(self):
        self.playlist_list.clear()
        current = self.coordinator.current_index
        for i, entry in enumerate(self.playlist.all()):
            item = QListWidgetItem(os.path.basename(entry.file_path))
            item.setToolTip(f"{entry.file_path}\nVolume: {entry.volume}")
            if i == current:
                font = QFont(item.font())
                font.setBold(True)
                item.setFont(font)
            self.playlist_list.addItem(item)

    def _refresh_local(self, *_args):
        self.local_list.clear()
        for name in self.library.search(self.search_box.text()):
            item = QListWidgetItem(name)
            item.setToolTip(formats.describe_format(formats.extension_of(name)))
            self.local_list.addItem(item)

    def _on_track_changed(self, title: str):
        self.lyrics_view.set_title(title)
        self._refresh_playlist()

    # ------------------ context menus ------------------
    def _on_playlist_context_menu(self, pos):
        item = self.playlist_list.itemAt(pos)
        if not item:
            return
        index = self.playlist_list.row(item)
        entry = self.playlist.at(index)
        if entry is None:
            return

        menu = QMenu(self)
        act_up = menu.addAction("Move up")
        act_down = menu.addAction("Move down")
        act_volume = menu.addAction("Volume…")
        act_lyrics = menu.addAction("Load lyrics…")
        act_lyrics.setEnabled(index == self.coordinator.current_index)
        act_remove = menu.addAction("Remove")
        act_up.setEnabled(index > 0)
        act_down.setEnabled(index < self.playlist.count() - 1)

        chosen = menu.exec(self.playlist_list.viewport().mapToGlobal(pos))
        if chosen is act_up:
            self.playlist.move_item(index, index - 1)
        elif chosen is act_down:
            self.playlist.move_item(index, index + 1)
        elif chosen is act_volume:
            volume, ok = QInputDialog.getInt(self, "Volume", "Volume (0-100):", entry.volume, 0, 100, 1)
            if ok:
                self.playlist.set_volume(index, volume)
        elif chosen is act_lyrics:
            self.load_lyrics_file()
        elif chosen is act_remove:
            self.playlist.remove_at(index)

    def _on_local_context_menu(self, pos):
        item = self.local_list.itemAt(pos)
        if not item:
            return
        name = item.text()

        menu = QMenu(self)
        act_add = menu.addAction("Add to playlist")
        if not formats.supported(name):
            act_add.setEnabled(False)
            act_add.setToolTip(f"Unsupported audio format: {formats.extension_of(name)}")

        if menu.exec(self.local_list.viewport().mapToGlobal(pos)) is act_add:
            self._add_local(name)

    def _add_local(self, name: str):
        self.playlist.append(self.library.path_for(name), self.app_state.config.default_volume)

    def load_lyrics_file(self):
        entry = self.coordinator.current_entry()
        start_dir = os.path.dirname(entry.file_path) if entry else QDir.homePath()
        path, _ = QFileDialog.getOpenFileName(self, "Load lyrics", start_dir, "Lyrics (*.lrc *.txt)")
        if not path:
            return
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                text = f.read()
        except OSError as e:
            self.app_state.notify(f"Cannot read {path}: {e}", "error")
            return
        self.coordinator.set_lyrics_text(text)
        if self.coordinator.lyrics.index.is_empty:
            self.app_state.notify("No timed lines found in that file.", "warn")

    # ------------------ import / export ------------------
    def export_playlist(self) -> bool:
        path, _ = QFileDialog.getSaveFileName(
            self, "Export playlist", os.path.join(QDir.homePath(), "playlist.txt"), "Playlist (*.txt)"
        )
        if not path:
            return False
        try:
            export_playlist(self.playlist.all(), path)
        except PlaylistIOError as e:
            self.app_state.notify(str(e), "error")
            return False
        self.app_state.notify("Playlist exported.", "success")
        return True

    def import_playlist(self):
        if self.playlist.count() > 0:
            res = QMessageBox.question(
                self,
                "Import playlist",
                "The current playlist is not empty. Save it first?",
                QMessageBox.StandardButton.Save
                | QMessageBox.StandardButton.Discard
                | QMessageBox.StandardButton.Cancel,
                QMessageBox.StandardButton.Save,
            )
            if res == QMessageBox.StandardButton.Cancel:
                return
            if res == QMessageBox.StandardButton.Save:
                self.export_playlist()
            self.playlist.clear()

        path, _ = QFileDialog.getOpenFileName(self, "Import playlist", QDir.homePath(), "Playlist (*.txt)")
        if not path:
            return
        try:
            added = import_playlist(self.playlist, path, self.library.directory())
        except PlaylistIOError as e:
            self.app_state.notify(str(e), "error")
            return
        self.app_state.notify(f"Imported {added} song(s).", "success")

    # ------------------ notifications ------------------
    def show_queued_notifications(self):
        for n in self.app_state.take_queued():
            self._on_notify(n)

    def _on_notify(self, n):
        msg = getattr(n, "message", "") or ""
        if not msg:
            return
        show_toast(self, msg, kind=(n.notify_type or "info").lower())

    def closeEvent(self, event):
        self.coordinator.shutdown()
        super().closeEvent(event)
