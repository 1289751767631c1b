# ui/lyrics_view.py
from __future__ import annotations

import html
from typing import List, Tuple

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QTextEdit

from core.lyrics_index import format_timestamp
from core.models import LyricLine

_CURRENT_STYLE = "color: #1DB954; font-size: 18pt; margin: 10px 0;"
_OTHER_STYLE = "color: #e5e7eb; font-size: 14pt; margin: 5px 0;"


def render_window(window: List[Tuple[LyricLine, bool]]) -> str:
    parts = []
    for line, is_current in window:
        style = _CURRENT_STYLE if is_current else _OTHER_STYLE
        parts.append(f"<p align='center' style='{style}'>{html.escape(line.text)}</p>")
    return "".join(parts)


class LyricsView(QWidget):
    """
    Lyric panel: the current line highlighted with its neighbours.
    Only redrawn when the coordinator reports a new window.
    """

    def __init__(self, parent=None):
        super().__init__(parent)

        root = QVBoxLayout(self)
        root.setContentsMargins(10, 10, 10, 10)
        root.setSpacing(8)

        self.title = QLabel("Lyrics")
        self.title.setAlignment(Qt.AlignCenter)
        self.title.setStyleSheet("font-weight: 650; font-size: 14px;")
        root.addWidget(self.title)

        self.stamp = QLabel("")
        self.stamp.setAlignment(Qt.AlignCenter)
        self.stamp.setStyleSheet("color: #9ca3af; font-size: 11px;")
        root.addWidget(self.stamp)

        self.text = QTextEdit()
        self.text.setReadOnly(True)
        self.text.setTextInteractionFlags(Qt.NoTextInteraction)
        self.text.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.text.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.text.setStyleSheet("QTextEdit { background: #020617; border: none; }")
        root.addWidget(self.text, 1)

        self.show_none("No track selected")

    # --- public API ---
    def set_title(self, title: str):
        self.title.setText(title or "Lyrics")

    def show_none(self, message: str = "No lyrics"):
        self.stamp.setText("")
        self.text.setHtml(
            f"<p align='center' style='{_OTHER_STYLE}'>{html.escape(message)}</p>"
        )

    def on_window_changed(self, window):
        if not window:
            self.show_none("No lyrics")
            return
        current = [line for line, is_current in window if is_current]
        self.stamp.setText(format_timestamp(current[0].timestamp_ms) if current else "")
        self.text.setHtml(render_window(window))
