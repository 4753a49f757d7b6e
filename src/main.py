"""Main entry point for the playlist deduplicator."""

import sys
import logging

from src.utils.playlist_deduplicator import deduplicate_playlist_file
from src.utils.playlist_errors import PlaylistDedupError

# Read from SOURCE_PATH, write to DESTINATION_PATH
SOURCE_PATH = "Source List.xspf"
DESTINATION_PATH = "Destination List.xspf"


def setup_logging():
    """Configure logging for the application."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler('xspf_dedup.log', encoding='utf-8'),
            logging.StreamHandler()
        ]
    )


def main():
    """Main entry point for the application."""
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Starting playlist deduplication")
    
    try:
        stats = deduplicate_playlist_file(SOURCE_PATH, DESTINATION_PATH)
    except PlaylistDedupError as e:
        logger.error(f"Deduplizierung fehlgeschlagen: {e}")
        return 1
    
    print(stats.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
