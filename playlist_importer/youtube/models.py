"""
Data models for YouTube playlist pages.

Design:
    Only the fields the importer needs are extracted from a
    playlistItems response; everything else is ignored.
"""

from dataclasses import dataclass
from typing import Any


# Titles YouTube shows for entries that can no longer be played
UNAVAILABLE_TITLES = frozenset({"Private video", "Deleted video"})

DEFAULT_PLAYLIST_TITLE = "Imported Playlist"


@dataclass(frozen=True)
class PlaylistPage:
    """
    One page of a playlistItems response.

    Attributes:
        titles: Video titles in page order, without private/deleted entries.
        playlist_title: Playlist name embedded in the first item's snippet,
                        None if absent.
        total_results: pageInfo.totalResults estimate, None if absent.
        next_page_token: Continuation token, None on the last page.
    """

    titles: tuple[str, ...]
    playlist_title: str | None = None
    total_results: int | None = None
    next_page_token: str | None = None

    @property
    def is_last(self) -> bool:
        return self.next_page_token is None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "PlaylistPage":
        """
        Create a PlaylistPage from a decoded playlistItems response.

        Behavior:
            1. Collect items[*].snippet.title, skipping missing titles and
               the "Private video" / "Deleted video" placeholders
            2. Read items[0].snippet.playlistTitle if present
            3. Read pageInfo.totalResults if it is an integer
            4. Read nextPageToken if present and non-empty
        """
        items = data.get("items") or []

        titles = []
        for item in items:
            if not isinstance(item, dict):
                continue
            title = (item.get("snippet") or {}).get("title")
            if not isinstance(title, str) or not title:
                continue
            if title in UNAVAILABLE_TITLES:
                continue
            titles.append(title)

        playlist_title = None
        if items and isinstance(items[0], dict):
            embedded = (items[0].get("snippet") or {}).get("playlistTitle")
            if isinstance(embedded, str) and embedded.strip():
                playlist_title = embedded.strip()

        total_results = (data.get("pageInfo") or {}).get("totalResults")
        if not isinstance(total_results, int) or isinstance(total_results, bool):
            total_results = None

        next_page_token = data.get("nextPageToken") or None

        return cls(
            titles=tuple(titles),
            playlist_title=playlist_title,
            total_results=total_results,
            next_page_token=next_page_token,
        )


@dataclass(frozen=True)
class FetchedPlaylist:
    """
    All titles of a playlist, in playlist order.

    Attributes:
        playlist_id: Identifier extracted from the playlist URL.
        title: Display title (DEFAULT_PLAYLIST_TITLE when unknown).
        titles: Every available video title across all pages.
        pages: Number of pages retrieved.
    """

    playlist_id: str
    title: str
    titles: tuple[str, ...]
    pages: int = 1
