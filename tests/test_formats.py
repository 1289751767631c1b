import pytest

from core import formats


@pytest.mark.parametrize("ext", ["mp3", "wav", "flac", "ogg", "wma", "aac", "m4a"])
def test_baseline_formats_supported(ext):
    assert formats.supported(f"/music/song.{ext}")


def test_extension_check_is_case_insensitive():
    assert formats.supported("song.MP3")
    assert formats.supported("Song.Flac")


@pytest.mark.parametrize("path", ["song.mov", "song", "archive.mp3.zip", "", ".mp3x"])
def test_unsupported(path):
    assert not formats.supported(path)


def test_only_last_extension_counts():
    assert formats.supported("my.song.v2.ogg")
    assert formats.extension_of("my.song.v2.OGG") == "ogg"


def test_allowlist_is_immutable():
    exts = formats.supported_extensions()
    assert isinstance(exts, frozenset)
    assert {"mp3", "wav", "flac", "ogg", "wma", "aac", "m4a"} <= exts


def test_describe_format():
    assert formats.describe_format("MP3") == "MP3 Audio"
    assert formats.describe_format(".xyz") == "XYZ"
