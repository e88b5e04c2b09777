"""
Paginated playlist fetcher (LOADING phase).

This module retrieves every available title of a YouTube playlist by
following nextPageToken continuations until the API stops returning one.

LOADING Workflow:
    1. Request the first page (no page token)
    2. Parse it into a PlaylistPage, append its titles in page order
    3. Report (running count, estimated total) to the page callback when
       the count changed (the first page is always reported)
    4. Repeat with the returned continuation token until there is none
    5. Return a FetchedPlaylist with the playlist's display title

Total Estimate:
    pageInfo.totalResults counts private and deleted entries too, so it
    can exceed the number of titles actually collected. While pages are
    still pending the reported total is that estimate (never lower than
    the running count); once the last page arrives it is the final count.

Failure:
    Any SourceUnavailable raised by the client propagates unchanged, and a
    continuation token seen before raises SourceUnavailable instead of
    looping. No partial playlist is ever returned.
"""

from collections.abc import Callable

from playlist_importer.core.exceptions import SourceUnavailable
from playlist_importer.core.logger import get_logger
from playlist_importer.youtube.client import YouTubeClient
from playlist_importer.youtube.models import (
    DEFAULT_PLAYLIST_TITLE,
    FetchedPlaylist,
    PlaylistPage,
)


logger = get_logger(__name__)


PageCallback = Callable[[int, int], None]


class PaginatedFetcher:
    """
    Collects all titles of one playlist across pages.

    Attributes:
        _client: Client issuing the single-page requests.
    """

    def __init__(self, client: YouTubeClient) -> None:
        self._client = client

    def fetch(
        self,
        playlist_id: str,
        on_page: PageCallback | None = None
    ) -> FetchedPlaylist:
        """
        Fetch every available title of a playlist, in playlist order.

        Args:
            playlist_id: Playlist identifier.
            on_page: Called with (titles so far, total estimate) after the
                     first page and after every page that added titles.
                     Counts strictly increase between calls.

        Returns:
            FetchedPlaylist with the display title and ordered titles.

        Raises:
            SourceUnavailable: If any page request fails or a page token
                               repeats.
        """
        logger.info(f"Fetching playlist: {playlist_id}")

        titles: list[str] = []
        playlist_title: str | None = None
        page_token: str | None = None
        seen_tokens: set[str] = set()
        reported: int | None = None
        pages = 0

        while True:
            data = self._client.playlist_items_page(playlist_id, page_token=page_token)
            page = PlaylistPage.from_api_response(data)
            pages += 1

            if pages == 1:
                playlist_title = page.playlist_title

            titles.extend(page.titles)
            total = _estimate_total(page, len(titles))

            logger.debug(
                f"Page {pages}: {len(page.titles)} titles "
                f"({len(titles)}/{total} collected)"
            )

            if on_page is not None and len(titles) != reported:
                on_page(len(titles), total)
                reported = len(titles)

            if page.is_last:
                break

            page_token = page.next_page_token
            if page_token in seen_tokens:
                raise SourceUnavailable(
                    f"YouTube repeated page token {page_token!r} for playlist {playlist_id}",
                    details={"playlist_id": playlist_id, "page_token": page_token, "pages": pages}
                )
            seen_tokens.add(page_token)

        title = playlist_title or DEFAULT_PLAYLIST_TITLE
        logger.info(f"Playlist: {title} ({len(titles)} titles, {pages} page(s))")

        return FetchedPlaylist(
            playlist_id=playlist_id,
            title=title,
            titles=tuple(titles),
            pages=pages,
        )


def _estimate_total(page: PlaylistPage, collected: int) -> int:
    """Total to report after a page: final count on the last page."""
    if page.is_last or page.total_results is None:
        return collected
    return max(page.total_results, collected)


def fetch_playlist_titles(
    client: YouTubeClient,
    playlist_id: str,
    on_page: PageCallback | None = None
) -> FetchedPlaylist:
    """
    Convenience function for the LOADING phase.

    Args:
        client: Configured YouTubeClient.
        playlist_id: Playlist identifier.
        on_page: Optional per-page progress callback.

    Returns:
        FetchedPlaylist for the playlist.
    """
    return PaginatedFetcher(client).fetch(playlist_id, on_page=on_page)
