"""Shared fixtures for playlist tests."""

import os

import pytest

# Qt tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def scenario_tracks():
    """Five tracks: 1 and 3 share an artist, 2 and 4 share a folder."""
    return [
        ("Queen", "C:\\Music\\Queen\\01.mp3", "Bohemian Rhapsody"),
        ("Adele", "C:\\Music\\Adele\\01.mp3", "Hello"),
        ("Queen", "C:\\Music\\Hits\\02.mp3", "Radio Ga Ga"),
        ("Muse", "C:\\Music\\Adele\\02.mp3", "Uprising"),
        ("Björk", "C:\\Music\\Bjork\\01.mp3", "Joga"),
    ]
