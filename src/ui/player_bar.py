# ui/player_bar.py
from __future__ import annotations

from PySide6.QtCore import Qt, QSize, QByteArray
from PySide6.QtGui import QIcon, QPixmap, QPainter
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QToolButton, QSlider
from PySide6.QtSvg import QSvgRenderer

from core.models import PlaybackState


def _fmt(ms: int) -> str:
    ms = max(0, int(ms))
    s = ms // 1000
    m = s // 60
    s = s % 60
    return f"{m:02d}:{s:02d}"


def _svg_icon(path_d: str, size: int = 20, color: str = "#e5e7eb") -> QIcon:
    svg = f"""
    <svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 24 24">
      <path d="{path_d}" fill="{color}"/>
    </svg>
    """.strip()

    renderer = QSvgRenderer(QByteArray(svg.encode("utf-8")))
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)

    p = QPainter(pm)
    renderer.render(p)
    p.end()

    return QIcon(pm)


SVG_PREV = "M6 18V6h2v12H6zm3.5-6L18 6v12l-8.5-6z"
SVG_NEXT = "M16 6v12h2V6h-2zM6 18l8.5-6L6 6v12z"
SVG_PLAY = "M8 5v14l11-7L8 5z"
SVG_PAUSE = "M6 5h4v14H6V5zm8 0h4v14h-4V5z"


class PlayerBar(QWidget):
    """Transport controls, title and seek slider bound to a PlaybackCoordinator."""

    def __init__(self, coordinator, parent=None):
        super().__init__(parent)
        self.coordinator = coordinator

        self._dragging = False
        self._duration_ms = 0
        self._position_ms = 0

        root = QHBoxLayout(self)
        root.setContentsMargins(8, 6, 8, 6)
        root.setSpacing(10)

        self.btn_prev = self._tool_button("BtnPrev", SVG_PREV, 20, "Previous")
        self.btn_play = self._tool_button("BtnPlay", SVG_PLAY, 22, "Play")
        self.btn_next = self._tool_button("BtnNext", SVG_NEXT, 20, "Next")
        self._play_icon = self.btn_play.icon()
        self._pause_icon = _svg_icon(SVG_PAUSE, 22)

        self.lbl_title = QLabel("Nothing playing")
        self.lbl_title.setMinimumWidth(220)
        self.lbl_title.setObjectName("NowPlaying")

        self.lbl_time = QLabel("00:00 / 00:00")
        self.lbl_volume = QLabel("")
        self.lbl_volume.setObjectName("EntryVolume")

        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(0, 0)
        self.slider.setSingleStep(1000)
        self.slider.setPageStep(5000)

        root.addWidget(self.btn_prev)
        root.addWidget(self.btn_play)
        root.addWidget(self.btn_next)
        root.addSpacing(6)
        root.addWidget(self.lbl_title, 1)
        root.addWidget(self.slider, 3)
        root.addWidget(self.lbl_time)
        root.addWidget(self.lbl_volume)

        self.slider.sliderPressed.connect(self._on_slider_pressed)
        self.slider.sliderReleased.connect(self._on_slider_released)
        self.slider.sliderMoved.connect(self._on_slider_moved)

        self.btn_prev.clicked.connect(self.coordinator.previous)
        self.btn_next.clicked.connect(self.coordinator.next)
        self.btn_play.clicked.connect(self.coordinator.toggle_play_pause)

        self.coordinator.currentTrackChanged.connect(self._on_track_changed)
        self.coordinator.stateChanged.connect(self._on_state_changed)
        self.coordinator.positionChanged.connect(self._on_position)
        self.coordinator.durationChanged.connect(self._on_duration)
        self.coordinator.playlist.itemVolumeChanged.connect(self._on_entry_volume)

        self.setObjectName("PlayerBar")
        self._apply_styles()

    def _tool_button(self, name: str, svg: str, size: int, tip: str) -> QToolButton:
        btn = QToolButton()
        btn.setObjectName(name)
        btn.setIcon(_svg_icon(svg, size))
        btn.setIconSize(QSize(size, size))
        btn.setToolTip(tip)
        return btn

    # --- slider handling ---
    def _on_slider_pressed(self):
        self._dragging = True

    def _on_slider_moved(self, value: int):
        self._update_time_label(value)

    def _on_slider_released(self):
        self._dragging = False
        self.coordinator.seek_ms(int(self.slider.value()))

    # --- coordinator updates ---
    def _on_track_changed(self, title: str):
        self._show_volume()
        if title:
            self.lbl_title.setText(title)
            return
        self.lbl_title.setText("Nothing playing")
        self._duration_ms = 0
        self.slider.setRange(0, 0)
        self._on_position(0)

    def _on_state_changed(self, state):
        playing = state == PlaybackState.PLAYING
        self.btn_play.setIcon(self._pause_icon if playing else self._play_icon)
        self.btn_play.setToolTip("Pause" if playing else "Play")

    def _on_duration(self, ms: int):
        self._duration_ms = int(ms)
        self.slider.setRange(0, max(0, int(ms)))
        self._update_time_label(self._position_ms)

    def _on_position(self, ms: int):
        self._position_ms = int(ms)
        if self._dragging:
            return
        self.slider.setValue(int(ms))
        self._update_time_label(ms)

    def _on_entry_volume(self, index: int):
        if index == self.coordinator.current_index:
            self._show_volume()

    def _show_volume(self):
        entry = self.coordinator.current_entry()
        self.lbl_volume.setText(f"Vol {entry.volume}" if entry else "")

    def _update_time_label(self, ms: int):
        self.lbl_time.setText(f"{_fmt(ms)} / {_fmt(self._duration_ms)}")

    def _apply_styles(self):
        self.setStyleSheet("""
        QWidget#PlayerBar {
            background-color: #020617;
            border-top: 1px solid #111827;
        }
        QToolButton {
            border: 1px solid transparent;
            background: transparent;
            padding: 6px;
            border-radius: 10px;
        }
        QToolButton#BtnPlay {
            background: #111827;
            border: 1px solid #1f2937;
            border-radius: 999px;
            padding: 8px;
        }
        QSlider::groove:horizontal {
            height: 4px;
            background: #0f172a;
            border-radius: 2px;
        }
        QSlider::handle:horizontal {
            width: 12px;
            height: 12px;
            margin: -4px 0;
            border-radius: 6px;
            background: #38bdf8;
        }
        QLabel { color: #9ca3af; font-size: 11px; }
        QLabel#NowPlaying { color: #e5e7eb; font-size: 12px; }
        QLabel#EntryVolume { color: #38bdf8; }
        """)
