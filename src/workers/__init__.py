"""Workers package for background tasks."""

from src.workers.playlist_dedup_worker import PlaylistDedupWorker

__all__ = ['PlaylistDedupWorker']
