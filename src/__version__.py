"""Version information for xspf-dedup."""

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)

# Release information
__license__ = "GNU General Public License v3.0"
__description__ = "Artist and folder based deduplication for XSPF playlists"
