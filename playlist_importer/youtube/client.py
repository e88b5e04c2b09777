"""
YouTube Data API client for playlist pages.

This module wraps a requests.Session around the v3 playlistItems endpoint.
It knows nothing about pagination loops or matching: it fetches exactly
one page and either returns the decoded JSON object or raises
SourceUnavailable.

Authentication:
    Only API-key access is supported, which covers public and unlisted
    playlists. The key comes from config.yaml (youtube.api_key).

Usage:
    client = YouTubeClient(api_key=config.youtube.api_key)
    data = client.playlist_items_page("PLxxxxxxxx")
    data = client.playlist_items_page("PLxxxxxxxx", page_token=data["nextPageToken"])
"""

from typing import Any

import requests

from playlist_importer.core.exceptions import SourceUnavailable
from playlist_importer.core.logger import get_logger


logger = get_logger(__name__)


YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
PLAYLIST_ITEMS_ENDPOINT = f"{YOUTUBE_API_BASE}/playlistItems"

AUTH_ERROR_STATUSES = (401, 403)


class YouTubeClient:
    """
    Fetches single playlistItems pages from the YouTube Data API.

    Unlike a process-wide singleton, each import creates (or is handed)
    its own client, so concurrent imports never share mutable state
    beyond the underlying HTTP connection pool.

    Attributes:
        _api_key: YouTube Data API key.
        _page_size: maxResults per request (1-50).
        _timeout: Per-request timeout in seconds.
        _session: requests.Session used for all calls.
    """

    def __init__(
        self,
        api_key: str,
        page_size: int = 50,
        timeout: float = 30.0,
        session: requests.Session | None = None
    ) -> None:
        self._api_key = api_key
        self._page_size = page_size
        self._timeout = timeout
        self._session = session or requests.Session()

    def playlist_items_page(
        self,
        playlist_id: str,
        page_token: str | None = None
    ) -> dict[str, Any]:
        """
        Fetch one page of playlist items.

        Args:
            playlist_id: Playlist identifier (the list= URL parameter).
            page_token: Continuation token from the previous page, or None
                        for the first page.

        Returns:
            The decoded JSON object of the response.

        Raises:
            SourceUnavailable: On transport errors, non-2xx statuses, or a
                               body that is not a JSON object.
        """
        params = {
            "part": "snippet",
            "maxResults": self._page_size,
            "playlistId": playlist_id,
            "key": self._api_key,
        }
        if page_token:
            params["pageToken"] = page_token

        try:
            response = self._session.get(
                PLAYLIST_ITEMS_ENDPOINT,
                params=params,
                timeout=self._timeout
            )
        except requests.RequestException as e:
            raise SourceUnavailable(
                f"Failed to reach YouTube: {e}",
                details={"playlist_id": playlist_id, "original_error": str(e)}
            ) from e

        if not response.ok:
            reason = _error_reason(response)
            raise SourceUnavailable(
                f"YouTube returned HTTP {response.status_code} for playlist "
                f"{playlist_id}: {reason}",
                details={
                    "playlist_id": playlist_id,
                    "status_code": response.status_code,
                    "reason": reason,
                },
                status_code=response.status_code,
                is_auth_error=response.status_code in AUTH_ERROR_STATUSES
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SourceUnavailable(
                "YouTube returned a response that is not valid JSON",
                details={"playlist_id": playlist_id, "original_error": str(e)},
                status_code=response.status_code
            ) from e

        if not isinstance(data, dict):
            raise SourceUnavailable(
                "YouTube returned an unexpected response body",
                details={"playlist_id": playlist_id},
                status_code=response.status_code
            )

        return data

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "YouTubeClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _error_reason(response: requests.Response) -> str:
    """Best-effort error message from a YouTube error body."""
    try:
        body = response.json()
    except ValueError:
        return response.reason or "unknown error"

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.reason or "unknown error"
