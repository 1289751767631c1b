# library/lyrics_source.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from mutagen import File as MutagenFile
from mutagen.id3 import ID3, ID3NoHeaderError
from mutagen.mp4 import MP4
from mutagen._util import MutagenError

logger = logging.getLogger(__name__)

VORBIS_LYRICS_KEYS = ("LYRICS", "lyrics", "UNSYNCEDLYRICS")
MP4_LYRICS_KEY = "\xa9lyr"


def sidecar_path(audio_path: str) -> str:
    """`<dir>/<name without last extension>.lrc`"""
    base, _ = os.path.splitext(audio_path)
    return base + ".lrc"


def read_sidecar_lyrics(audio_path: str) -> Optional[str]:
    lrc_path = sidecar_path(audio_path)
    if not os.path.isfile(lrc_path):
        return None
    try:
        with open(lrc_path, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
    except OSError as e:
        logger.warning("Cannot read lyric file %s: %s", lrc_path, e)
        return None
    return text.strip() or None


def _first_text(value) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return str(value)


def read_embedded_lyrics(audio_path: str) -> Optional[str]:
    """
    Lyrics stored in the file's own tags:
      - MP3: first ID3 USLT frame
      - MP4/M4A: '\\xa9lyr' atom
      - Vorbis-comment formats (FLAC/Ogg/Opus): LYRICS / UNSYNCEDLYRICS
    """
    ext = Path(audio_path).suffix.lower()
    text: Optional[str] = None

    try:
        if ext == ".mp3":
            try:
                tags = ID3(audio_path)
            except ID3NoHeaderError:
                return None
            frames = tags.getall("USLT")
            if frames:
                text = _first_text(getattr(frames[0], "text", None))

        elif ext in {".m4a", ".mp4"}:
            audio = MP4(audio_path)
            text = _first_text((audio.tags or {}).get(MP4_LYRICS_KEY))

        else:
            audio = MutagenFile(audio_path)
            tags = getattr(audio, "tags", None) if audio is not None else None
            if tags:
                for key in VORBIS_LYRICS_KEYS:
                    try:
                        value = tags.get(key)
                    except (KeyError, ValueError):
                        value = None
                    text = _first_text(value)
                    if text:
                        break
    except (MutagenError, OSError) as e:
        logger.debug("No embedded lyrics in %s: %s", audio_path, e)
        return None

    text = (text or "").strip()
    return text or None


def find_lyrics(audio_path: str) -> Optional[str]:
    """Side-car .lrc first, then embedded tags."""
    return read_sidecar_lyrics(audio_path) or read_embedded_lyrics(audio_path)
