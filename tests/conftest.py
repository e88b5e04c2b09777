"""Test configuration and fixtures"""

import logging
from pathlib import Path
from unittest.mock import Mock

import pytest

from playlist_importer.core.logger import shutdown_logging
from playlist_importer.library.models import LibraryRecord
from playlist_importer.youtube.models import FetchedPlaylist


def _make_record(record_id, file_name, title=None, artist="Unknown Artist",
                 album="Unknown Album", duration_ms=200000, size=4_000_000):
    """Build a LibraryRecord stored under /music; title defaults to the stem"""
    file_path = f"/music/{file_name}"
    return LibraryRecord(
        id=record_id,
        title=title if title is not None else Path(file_name).stem,
        artist=artist,
        album=album,
        duration_ms=duration_ms,
        file_path=file_path,
        size=size,
    )


def _make_item(title, playlist_title=None):
    """Build one playlistItems entry"""
    snippet = {"title": title}
    if playlist_title is not None:
        snippet["playlistTitle"] = playlist_title
    return {"kind": "youtube#playlistItem", "snippet": snippet}


def _make_page(titles, total=None, next_token=None, playlist_title=None):
    """Build a decoded playlistItems response"""
    items = [_make_item(t) for t in titles]
    if items and playlist_title is not None:
        items[0] = _make_item(titles[0], playlist_title=playlist_title)
    data = {"kind": "youtube#playlistItemListResponse", "items": items}
    if total is not None:
        data["pageInfo"] = {"totalResults": total, "resultsPerPage": 50}
    if next_token is not None:
        data["nextPageToken"] = next_token
    return data


class StubFetcher:
    """Fetcher returning fixed titles in a single page"""

    def __init__(self, titles, title="Test Playlist", error=None):
        self.titles = tuple(titles)
        self.title = title
        self.error = error
        self.calls = []

    def fetch(self, playlist_id, on_page=None):
        self.calls.append(playlist_id)
        if self.error is not None:
            raise self.error
        if on_page is not None:
            on_page(len(self.titles), len(self.titles))
        return FetchedPlaylist(
            playlist_id=playlist_id,
            title=self.title,
            titles=self.titles,
        )


@pytest.fixture
def make_record():
    return _make_record


@pytest.fixture
def make_page():
    return _make_page


@pytest.fixture
def stub_fetcher():
    return StubFetcher


@pytest.fixture
def library_records():
    """Small library with tagged and untagged files"""
    return [
        _make_record(1, "Artist - Song.mp3"),
        _make_record(2, "01 Yellow.mp3", title="Yellow", artist="Coldplay"),
        _make_record(3, "Radiohead - Paranoid Android (Remastered).flac",
                     title="Paranoid Android", artist="Radiohead"),
        _make_record(4, "Track 07.m4a", title="Bohemian Rhapsody", artist="Queen"),
    ]


@pytest.fixture
def playlist_url():
    return "https://www.youtube.com/playlist?list=PLtest123"


@pytest.fixture
def mock_client():
    """YouTubeClient mock; set playlist_items_page.side_effect per test"""
    return Mock()


@pytest.fixture
def reset_logging():
    """Detach any handlers installed by setup_logging()"""
    yield
    shutdown_logging()
    logging.getLogger().setLevel(logging.WARNING)
