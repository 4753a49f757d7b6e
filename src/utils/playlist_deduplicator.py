"""Playlist deduplication: mirror the document and filter its track list.

The whole pass works on one in-memory tree. The destination file is only
replaced after the complete filtered document has been serialized.
"""

import copy
import logging
import os
import tempfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Optional, Tuple

from src.utils.playlist_errors import (
    MissingRootError,
    PlaylistIOError,
    PlaylistParseError,
)
from src.utils.playlist_sanitizer import sanitize_playlist_text
from src.utils.track_filter import DedupStats, TrackFilter, local_name

logger = logging.getLogger(__name__)

TRACK_LIST_NAME = "trackList"
XSPF_NAMESPACE = "http://xspf.org/ns/0/"


def parse_playlist(text: str) -> ET.Element:
    """
    Parse playlist text into its root element.

    Args:
        text: Sanitized playlist text

    Returns:
        Root element of the document

    Raises:
        MissingRootError: If the text contains no element at all
        PlaylistParseError: If the text is not well-formed XML
    """
    if not text or not text.strip():
        raise MissingRootError("Playlist enthält kein Wurzelelement")

    try:
        return ET.fromstring(text)
    except ET.ParseError as e:
        # Prolog or comments only
        if "no element found" in str(e):
            raise MissingRootError("Playlist enthält kein Wurzelelement") from e
        raise PlaylistParseError(f"Playlist konnte nicht gelesen werden: {e}") from e


def deduplicate_playlist(
    root: ET.Element,
    track_filter: Optional[TrackFilter] = None,
    progress_callback: Optional[Callable[[str], None]] = None
) -> Tuple[ET.Element, DedupStats]:
    """
    Build the destination document from a source root.

    Children other than the track list are copied as plain text elements
    (attributes and nested markup are dropped). Track list children are
    recreated empty and filled with copies of the tracks the filter accepts,
    in source order.

    Args:
        root: Root element of the source document
        track_filter: Filter to use (default: a fresh TrackFilter)
        progress_callback: Optional callback function(message: str) for progress updates

    Returns:
        Tuple of (destination root, run statistics)

    Raises:
        MissingRootError: If root is None
        MissingFieldError: If a track lacks a required field
        MalformedLocationError: If a location has no folder separator
    """
    if root is None:
        raise MissingRootError("Playlist enthält kein Wurzelelement")

    if track_filter is None:
        track_filter = TrackFilter()

    out_root = ET.Element(root.tag)
    track_lists = 0

    for node in root:
        if not isinstance(node.tag, str):
            continue

        if local_name(node.tag) != TRACK_LIST_NAME:
            mirrored = ET.SubElement(out_root, node.tag)
            mirrored.text = "".join(node.itertext())
            continue

        track_lists += 1
        out_track_list = ET.SubElement(out_root, node.tag)

        for track in node:
            if not isinstance(track.tag, str):
                continue
            if track_filter.accept(track):
                out_track_list.append(copy.deepcopy(track))

    if track_lists == 0:
        logger.warning(f"Kein <{TRACK_LIST_NAME}> gefunden, nur Metadaten werden übernommen")

    stats = track_filter.stats
    if progress_callback:
        progress_callback(
            f"{stats.rejected_by_artist} Tracks wegen Interpret, "
            f"{stats.rejected_by_folder} wegen Ordner übersprungen"
        )
    return out_root, stats


def _default_namespace(root: ET.Element) -> Optional[str]:
    """XSPF namespace if the document can be written without prefixes."""
    prefix = "{" + XSPF_NAMESPACE + "}"
    for el in root.iter():
        if not (isinstance(el.tag, str) and el.tag.startswith(prefix)):
            return None
        # default_namespace rejects unqualified attribute names
        if any(not key.startswith("{") for key in el.keys()):
            return None
    return XSPF_NAMESPACE


def write_playlist(root: ET.Element, path: Path) -> None:
    """
    Write a playlist document atomically.

    The document is written to a temporary file next to the destination and
    then moved into place, so the destination never holds a partial file.

    Args:
        root: Root element to serialize
        path: Destination file

    Raises:
        PlaylistIOError: If the file cannot be written
    """
    path = Path(path)
    tree = ET.ElementTree(root)
    ET.indent(tree, space="  ")
    default_namespace = _default_namespace(root)

    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tree.write(tmp, encoding="utf-8", xml_declaration=True, default_namespace=default_namespace)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise PlaylistIOError(f"Playlist konnte nicht geschrieben werden: {path} - {e}") from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError as cleanup_error:
                logger.error(f"Temporäre Datei konnte nicht entfernt werden: {tmp_name} - {cleanup_error}")


def deduplicate_playlist_file(
    source: Path,
    destination: Path,
    sanitizer: Callable[[str], str] = sanitize_playlist_text,
    progress_callback: Optional[Callable[[str], None]] = None
) -> DedupStats:
    """
    Deduplicate a playlist file into a new playlist file.

    Args:
        source: Path to the source playlist
        destination: Path to write the filtered playlist to
        sanitizer: Text repair applied before parsing
        progress_callback: Optional callback function(message: str) for progress updates

    Returns:
        Statistics of the run

    Raises:
        PlaylistDedupError: If reading, parsing, filtering or writing fails.
            The destination is left untouched in that case.
    """
    source = Path(source)
    destination = Path(destination)

    logger.info(f"Dedupliziere Playlist {source} -> {destination}")
    if progress_callback:
        progress_callback(f"Lese Playlist: {source.name}")

    try:
        raw_text = source.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise PlaylistIOError(f"Playlist konnte nicht gelesen werden: {source} - {e}") from e

    root = parse_playlist(sanitizer(raw_text))
    out_root, stats = deduplicate_playlist(root, progress_callback=progress_callback)

    if progress_callback:
        progress_callback(f"Schreibe Playlist: {destination.name}")
    write_playlist(out_root, destination)

    logger.info(f"Deduplizierung abgeschlossen, {destination.name} geschrieben")
    return stats
