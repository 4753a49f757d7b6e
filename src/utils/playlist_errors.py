"""Exceptions raised while deduplicating a playlist."""

from typing import Optional


class PlaylistDedupError(Exception):
    """Base exception for playlist deduplication errors."""
    pass


class MissingRootError(PlaylistDedupError):
    """Raised when the source document has no root element."""
    pass


class PlaylistParseError(PlaylistDedupError):
    """Raised when the source document cannot be parsed."""
    pass


class MissingFieldError(PlaylistDedupError):
    """Raised when a track lacks a required child field."""

    def __init__(self, field_name: str, track_number: Optional[int] = None):
        self.field_name = field_name
        self.track_number = track_number
        if track_number is None:
            message = f"Pflichtfeld <{field_name}> fehlt im Track"
        else:
            message = f"Pflichtfeld <{field_name}> fehlt in Track {track_number}"
        super().__init__(message)


class MalformedLocationError(PlaylistDedupError):
    """Raised when a location has no folder separator."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"Ungültiger Speicherort ohne Ordnertrenner '\\': {location}")


class PlaylistIOError(PlaylistDedupError):
    """Raised when the source cannot be read or the destination cannot be written."""
    pass
