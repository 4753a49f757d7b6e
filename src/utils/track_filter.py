"""Artist and folder based uniqueness filter for playlist tracks."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Set
from xml.etree.ElementTree import Element

from src.utils.playlist_errors import MissingFieldError, MalformedLocationError

logger = logging.getLogger(__name__)

ARTIST_SEPARATOR = ";"
FOLDER_SEPARATOR = "\\"


def local_name(tag: str) -> str:
    """Return an element tag without its ``{namespace}`` part."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def split_artists(artist_field: str) -> List[str]:
    """
    Split a creator field into trimmed artist segments.

    Examples:
        "Queen; David Bowie" -> ["Queen", "David Bowie"]
        "Adele" -> ["Adele"]

    Args:
        artist_field: Raw creator text, artists separated by ';'

    Returns:
        List of segments with surrounding whitespace removed
    """
    return [segment.strip() for segment in artist_field.split(ARTIST_SEPARATOR)]


def folder_key(location: str) -> str:
    """
    Extract the containing folder from a track location.

    Examples:
        C:\\Music\\Queen\\01.mp3 -> C:\\Music\\Queen

    Args:
        location: File path using '\\' as separator

    Returns:
        Everything before the final separator

    Raises:
        MalformedLocationError: If the location contains no separator
    """
    index = location.rfind(FOLDER_SEPARATOR)
    if index < 0:
        raise MalformedLocationError(location)
    return location[:index]


def find_field(track: Element, name: str) -> str:
    """
    Read the full text of the first child field with the given local name.

    Args:
        track: Track element
        name: Field name without namespace (e.g. 'creator')

    Returns:
        Concatenated text of the field, '' if the field is empty

    Raises:
        MissingFieldError: If the track has no such child
    """
    for child in track:
        if isinstance(child.tag, str) and local_name(child.tag) == name:
            return "".join(child.itertext())
    raise MissingFieldError(name)


@dataclass
class DedupStats:
    """Counters for one deduplication run."""
    seen: int = 0
    kept: int = 0
    rejected_by_artist: int = 0
    rejected_by_folder: int = 0

    def summary(self) -> str:
        """Single line reported to the user after the run."""
        return f"Tracks: {self.seen} gelesen => {self.kept} übernommen"


class TrackFilter:
    """
    First-wins filter on artist segments and containing folders.

    A track is accepted only if every one of its artist segments and its
    folder are new. Artist segments are inserted one at a time; when a
    duplicate segment rejects a track, segments inserted before it stay in
    the set and block later tracks as well.

    One instance covers exactly one run.
    """

    def __init__(self, artists: Optional[Set[str]] = None, folders: Optional[Set[str]] = None):
        self.artists = artists if artists is not None else set()
        self.folders = folders if folders is not None else set()
        self.stats = DedupStats()

    def _add_artist(self, artist: str) -> bool:
        if artist in self.artists:
            return False
        self.artists.add(artist)
        return True

    def accept(self, track: Element) -> bool:
        """
        Decide whether a track is kept and record it in the sets.

        Args:
            track: Source track element

        Returns:
            True if the track introduces only new artists and a new folder

        Raises:
            MissingFieldError: If 'creator' is missing, or 'location' is
                missing on a track that passed the artist test
            MalformedLocationError: If the location has no folder separator
        """
        self.stats.seen += 1
        number = self.stats.seen

        try:
            artist_field = find_field(track, "creator")
        except MissingFieldError as e:
            raise MissingFieldError(e.field_name, number) from e

        # all() stops at the first duplicate, earlier inserts persist
        if not all(self._add_artist(artist) for artist in split_artists(artist_field)):
            self.stats.rejected_by_artist += 1
            logger.debug(f"Track {number} übersprungen (Interpret bereits vorhanden): {artist_field}")
            return False

        try:
            location = find_field(track, "location")
        except MissingFieldError as e:
            raise MissingFieldError(e.field_name, number) from e

        folder = folder_key(location)
        if folder in self.folders:
            self.stats.rejected_by_folder += 1
            logger.debug(f"Track {number} übersprungen (Ordner bereits vorhanden): {folder}")
            return False
        self.folders.add(folder)

        self.stats.kept += 1
        return True
