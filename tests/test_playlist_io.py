import pytest

from core.errors import PlaylistIOError
from core.models import PlaylistEntry
from core.playlist_io import export_playlist, format_playlist, import_playlist, parse_playlist


def test_format_writes_base_names():
    text = format_playlist([PlaylistEntry("/music/a.mp3", 40), PlaylistEntry("/other/b.flac", 100)])
    assert text == "a.mp3|40\nb.flac|100\n"


@pytest.mark.parametrize("line", ["track.mp3|150", "track.mp3|abc", "track.mp3|-1", "track.mp3|"])
def test_bad_volume_defaults_to_50(line):
    assert parse_playlist(line) == [("track.mp3", 50)]


def test_parse_skips_short_and_empty_lines():
    text = "a.mp3|10\nno separator here\n\n|30\nb.mp3|0|extra\nc.mp3| 100 \n"
    assert parse_playlist(text) == [("a.mp3", 10), ("b.mp3", 0), ("c.mp3", 100)]


def test_import_resolves_names_and_skips_missing(tmp_path, store):
    music = tmp_path / "mp3"
    music.mkdir()
    (music / "a.mp3").write_bytes(b"")
    (music / "c.mp3").write_bytes(b"")

    playlist_file = tmp_path / "list.txt"
    playlist_file.write_text("a.mp3|20\nb.mp3|30\nc.mp3|999\n", encoding="utf-8")

    added = import_playlist(store, str(playlist_file), str(music))

    assert added == 2
    assert store.all() == [
        PlaylistEntry(str(music / "a.mp3"), 20),
        PlaylistEntry(str(music / "c.mp3"), 50),
    ]


def test_export_then_import_restores_entries(tmp_path, store):
    music = tmp_path / "mp3"
    music.mkdir()
    for name in ("x.mp3", "y.wav"):
        (music / name).write_bytes(b"")
    store.append(str(music / "x.mp3"), 15)
    store.append(str(music / "y.wav"), 85)

    out = tmp_path / "playlist.txt"
    export_playlist(store.all(), str(out))
    assert out.read_text(encoding="utf-8") == "x.mp3|15\ny.wav|85\n"

    original = store.all()
    store.clear()
    import_playlist(store, str(out), str(music))
    assert store.all() == original


def test_io_errors_are_wrapped(tmp_path, store):
    with pytest.raises(PlaylistIOError):
        import_playlist(store, str(tmp_path / "missing.txt"), str(tmp_path))
    with pytest.raises(PlaylistIOError):
        export_playlist([], str(tmp_path / "no-such-dir" / "out.txt"))
