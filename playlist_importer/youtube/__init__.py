"""
YouTube module for playlist-importer (LOADING phase).

This module retrieves the ordered titles of a YouTube playlist through the
YouTube Data API v3.

Components:
    - YouTubeClient: Single-page playlistItems requests (requests.Session)
    - PlaylistPage: Parsed page (titles, playlist title, total, token)
    - PaginatedFetcher: Follows page tokens until the last page

Usage:
    from playlist_importer.youtube import YouTubeClient, fetch_playlist_titles

    with YouTubeClient(api_key) as client:
        playlist = fetch_playlist_titles(client, "PLxxxxxxxx")
"""

from playlist_importer.youtube.client import YouTubeClient
from playlist_importer.youtube.fetcher import PaginatedFetcher, fetch_playlist_titles
from playlist_importer.youtube.models import (
    DEFAULT_PLAYLIST_TITLE,
    FetchedPlaylist,
    PlaylistPage,
)

__all__ = [
    "YouTubeClient",
    "PaginatedFetcher",
    "fetch_playlist_titles",
    "PlaylistPage",
    "FetchedPlaylist",
    "DEFAULT_PLAYLIST_TITLE",
]
