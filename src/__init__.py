"""xspf-dedup - keep one track per artist and per folder in an XSPF playlist."""

from src.__version__ import __version__, __description__, __license__  # noqa: F401
