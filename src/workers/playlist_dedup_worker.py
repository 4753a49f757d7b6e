"""Worker for playlist deduplication."""

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from src.utils.playlist_deduplicator import deduplicate_playlist_file
from src.utils.playlist_errors import PlaylistDedupError

logger = logging.getLogger(__name__)


class PlaylistDedupWorker(QObject):
    """Worker for deduplicating a playlist file in a separate thread."""
    
    # Signals
    progress = Signal(str)  # Progress message
    finished = Signal(int, int)  # seen, kept
    error = Signal(str)  # Error message
    
    def __init__(self, source: Path, destination: Path):
        """
        Initialize the worker.
        
        Args:
            source: Path to the source playlist
            destination: Path to write the filtered playlist to
        """
        super().__init__()
        self.source = Path(source)
        self.destination = Path(destination)
    
    def run(self):
        """Execute the deduplication pass."""
        try:
            self.progress.emit("Starte Deduplizierung...")
            
            stats = deduplicate_playlist_file(
                self.source,
                self.destination,
                progress_callback=self._on_progress
            )
            
            self.progress.emit(f"[OK] {stats.summary()}")
            self.finished.emit(stats.seen, stats.kept)
            
        except PlaylistDedupError as e:
            self.error.emit(str(e))
        except Exception as e:
            logger.exception("Unexpected error in playlist dedup worker")
            self.error.emit(f"Unerwarteter Fehler ({type(e).__name__}): {str(e)}")
    
    def _on_progress(self, message: str):
        """Forward progress messages."""
        self.progress.emit(message)
