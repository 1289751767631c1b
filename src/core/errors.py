"""Exceptions raised by the playback core."""


class PlayerError(Exception):
    """Base exception for the player."""
    pass


class FormatUnsupportedError(PlayerError):
    """File extension is not in the decodable allowlist."""
    pass


class FileMissingError(PlayerError):
    """Selected file does not exist at play time."""
    pass


class EngineError(PlayerError):
    """Audio engine reported a decode, resource, network or access failure."""
    pass


class PlaylistIOError(PlayerError):
    """Playlist file could not be read or written."""
    pass
