from library.lyrics_source import find_lyrics, read_embedded_lyrics, read_sidecar_lyrics, sidecar_path
from player.lyrics_loader import LyricsLoader


def test_sidecar_path_replaces_last_extension():
    assert sidecar_path("/music/My.Song.mp3") == "/music/My.Song.lrc"


def test_sidecar_lyrics_read(tmp_path):
    audio = tmp_path / "song.mp3"
    audio.write_bytes(b"")
    (tmp_path / "song.lrc").write_text("\n[00:01.00]hello\n", encoding="utf-8")

    assert read_sidecar_lyrics(str(audio)) == "[00:01.00]hello"


def test_blank_sidecar_counts_as_missing(tmp_path):
    audio = tmp_path / "song.mp3"
    (tmp_path / "song.lrc").write_text("   \n", encoding="utf-8")
    assert read_sidecar_lyrics(str(audio)) is None


def test_no_sidecar(tmp_path):
    assert read_sidecar_lyrics(str(tmp_path / "song.mp3")) is None


def test_untagged_files_have_no_embedded_lyrics(tmp_path):
    mp3 = tmp_path / "song.mp3"
    mp3.write_bytes(b"this is not an mpeg stream")
    ogg = tmp_path / "song.ogg"
    ogg.write_bytes(b"nor is this an ogg stream")

    assert read_embedded_lyrics(str(mp3)) is None
    assert read_embedded_lyrics(str(ogg)) is None
    assert read_embedded_lyrics(str(tmp_path / "absent.flac")) is None


def test_find_lyrics_prefers_sidecar(tmp_path):
    audio = tmp_path / "song.mp3"
    audio.write_bytes(b"this is not an mpeg stream")
    assert find_lyrics(str(audio)) is None

    (tmp_path / "song.lrc").write_text("[00:02]side", encoding="utf-8")
    assert find_lyrics(str(audio)) == "[00:02]side"


def test_synchronous_loader_emits_inline():
    loader = LyricsLoader(asynchronous=False, lookup=lambda p: f"lyrics for {p}")
    got = []
    loader.loaded.connect(lambda gen, text: got.append((gen, text)))

    loader.request("/music/a.mp3", 7)

    assert got == [(7, "lyrics for /music/a.mp3")]
    assert loader.pending() == 0


def test_loader_reports_none_when_lookup_raises():
    def broken(_path):
        raise OSError("disk gone")

    loader = LyricsLoader(asynchronous=False, lookup=broken)
    got = []
    loader.loaded.connect(lambda gen, text: got.append((gen, text)))

    loader.request("/music/a.mp3", 3)
    assert got == [(3, None)]
