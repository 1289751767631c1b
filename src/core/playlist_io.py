# core/playlist_io.py
from __future__ import annotations

import logging
import os
from typing import Iterable, List, Tuple

from core.errors import PlaylistIOError
from core.models import DEFAULT_VOLUME, PlaylistEntry

logger = logging.getLogger(__name__)

SEPARATOR = "|"


def format_playlist(entries: Iterable[PlaylistEntry]) -> str:
    """One `fileName|volume` line per entry (base names only)."""
    return "".join(
        f"{os.path.basename(e.file_path)}{SEPARATOR}{int(e.volume)}\n" for e in entries
    )


def _parse_volume(raw: str) -> int:
    try:
        volume = int(raw.strip())
    except ValueError:
        return DEFAULT_VOLUME
    if volume < 0 or volume > 100:
        return DEFAULT_VOLUME
    return volume


def parse_playlist(text: str) -> List[Tuple[str, int]]:
    """
    Returns (file_name, volume) pairs.
    Lines with fewer than two fields are skipped; a bad volume becomes 50.
    """
    out: List[Tuple[str, int]] = []
    for line in (text or "").splitlines():
        parts = line.split(SEPARATOR)
        if len(parts) < 2:
            continue
        name = parts[0].strip()
        if not name:
            continue
        out.append((name, _parse_volume(parts[1])))
    return out


def export_playlist(entries: Iterable[PlaylistEntry], path: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(format_playlist(entries))
    except OSError as e:
        raise PlaylistIOError(f"Cannot write playlist {path}: {e}") from e
    logger.info("Exported playlist to %s", path)


def import_playlist(store, path: str, music_dir: str) -> int:
    """
    Appends the entries of a playlist file to `store`, resolving names in
    `music_dir`. Entries whose file is missing are skipped. Returns the
    number of entries added.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
    except OSError as e:
        raise PlaylistIOError(f"Cannot read playlist {path}: {e}") from e

    added = 0
    for name, volume in parse_playlist(text):
        full_path = os.path.join(music_dir, name)
        if not os.path.isfile(full_path):
            logger.warning("Skipping missing playlist entry %s", full_path)
            continue
        store.append(full_path, volume)
        added += 1

    logger.info("Imported %d entries from %s", added, path)
    return added
