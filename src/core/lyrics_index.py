# core/lyrics_index.py
from __future__ import annotations

import logging
import re
from bisect import bisect_right
from typing import List, Optional, Tuple

from core.models import LyricLine

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"\[([0-9]+):([0-9]+)(?:\.([0-9]{1,3}))?\](.*)")

_FRACTION_SCALE = {1: 100, 2: 10, 3: 1}

WindowLine = Tuple[LyricLine, bool]  # (line, is_current)


def _ts_to_ms(mm: str, ss: str, frac: str | None) -> int:
    ms = int(frac) * _FRACTION_SCALE[len(frac)] if frac else 0
    return int(mm) * 60000 + int(ss) * 1000 + ms


def format_timestamp(ms: int) -> str:
    """Format milliseconds as mm:ss.xx (centiseconds)."""
    if ms < 0:
        ms = 0
    total_s = ms // 1000
    m = total_s // 60
    s = total_s % 60
    cs = (ms % 1000) // 10
    return f"{m:02d}:{s:02d}.{cs:02d}"


class TimedLyricsIndex:
    """
    Sorted (time, text) lyric lines for one track.

    When several lines share a timestamp the last listed one is current,
    since lookup resolves to the last entry at or before the position.
    """

    def __init__(self, source: str | None = None):
        self._lines: List[LyricLine] = []
        self._times: List[int] = []
        if source:
            self.parse(source)

    def parse(self, source: str) -> None:
        self.clear()
        if not source:
            return

        lines: List[LyricLine] = []
        skipped = 0
        for raw_line in source.splitlines():
            m = _LINE_RE.search(raw_line)
            if not m:
                skipped += 1
                continue

            text = m.group(4).strip()
            if not text:
                continue

            lines.append(LyricLine(_ts_to_ms(m.group(1), m.group(2), m.group(3)), text))

        # list.sort is stable: equal timestamps keep input order
        lines.sort(key=lambda line: line.timestamp_ms)

        self._lines = lines
        self._times = [line.timestamp_ms for line in lines]
        logger.debug("Parsed %d lyric lines (%d lines without a timestamp)", len(lines), skipped)

    def clear(self) -> None:
        self._lines = []
        self._times = []

    def current_index_for(self, position_ms: int) -> Optional[int]:
        if not self._times:
            return None
        idx = bisect_right(self._times, int(position_ms)) - 1
        return idx if idx >= 0 else None

    def window_around(self, index: Optional[int], radius: int = 2) -> List[WindowLine]:
        if not self._lines:
            return []
        radius = max(0, int(radius))
        center = -1 if index is None else int(index)

        start = max(0, center - radius)
        end = min(len(self._lines) - 1, center + radius)
        return [(self._lines[i], i == center) for i in range(start, end + 1)]

    def lines(self) -> List[LyricLine]:
        return list(self._lines)

    def at(self, index: int) -> Optional[LyricLine]:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)


class LyricsTracker:
    """
    Follows playback position over a TimedLyricsIndex and only rebuilds the
    visible window when the resolved line changes.
    """

    _UNSET = object()

    def __init__(self, index: TimedLyricsIndex | None = None, radius: int = 2):
        self.index = index if index is not None else TimedLyricsIndex()
        self.radius = radius
        self._current: object = self._UNSET

    @property
    def current_index(self) -> Optional[int]:
        return None if self._current is self._UNSET else self._current  # type: ignore[return-value]

    def load(self, source: str | None) -> None:
        if source:
            self.index.parse(source)
        else:
            self.index.clear()
        self.reset()

    def reset(self) -> None:
        self._current = self._UNSET

    def update(self, position_ms: int) -> Optional[List[WindowLine]]:
        """Returns the new window, or None when the current line is unchanged."""
        idx = self.index.current_index_for(position_ms)
        if idx == self._current:
            return None
        self._current = idx
        return self.index.window_around(idx, self.radius)
