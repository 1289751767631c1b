# core/formats.py
from __future__ import annotations

import os
import sys

_CORE_FORMATS = {
    "mp3": "MP3 Audio",
    "wav": "WAV Audio",
    "ogg": "Ogg Vorbis",
    "flac": "FLAC Audio",
    "aac": "AAC Audio",
    "m4a": "MPEG-4 Audio",
    "wma": "Windows Media Audio",
}

_PLATFORM_FORMATS = {
    "win32": {"ac3": "Dolby Digital", "dts": "DTS Audio"},
    "darwin": {"aiff": "AIFF Audio", "caf": "Core Audio Format"},
    "linux": {"opus": "Opus Audio"},
}


def _build_format_table(platform: str) -> dict[str, str]:
    table = dict(_CORE_FORMATS)
    for prefix, extra in _PLATFORM_FORMATS.items():
        if platform.startswith(prefix):
            table.update(extra)
    return table


# built once at import, never mutated
_FORMAT_TABLE: dict[str, str] = _build_format_table(sys.platform)
_SUPPORTED: frozenset[str] = frozenset(_FORMAT_TABLE)


def extension_of(file_path: str) -> str:
    """Lower-cased extension without the dot ("" when there is none)."""
    return os.path.splitext(file_path or "")[1].lstrip(".").lower()


def supported(file_path: str) -> bool:
    return extension_of(file_path) in _SUPPORTED


def supported_extensions() -> frozenset[str]:
    return _SUPPORTED


def describe_format(ext: str) -> str:
    ext = (ext or "").lstrip(".").lower()
    return _FORMAT_TABLE.get(ext, ext.upper() or "unknown")
