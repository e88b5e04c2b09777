"""
Playlist import orchestration.

ImportOrchestrator sequences one import run:

    PENDING -> LOADING -> MATCHING -> DONE
       |          |
       +----------+-----> FAILED

    PENDING:  Created, nothing done yet.
    LOADING:  Fetching every page of the playlist.
    MATCHING: Building the candidate index, then selecting a record for
              each title in playlist order.
    DONE:     ImportResult returned (terminal).
    FAILED:   A fatal error was raised or the run was interrupted (terminal).

Fatal errors (InvalidPlaylistUrl, EmptyLibrary, SourceUnavailable) move the
run to FAILED and propagate to the caller; no partial result is produced.
URL and library checks happen before any request is made. Titles that
find no record, or land on a record already taken by an earlier title, are
per-title outcomes and never abort the run.

Progress:
    The on_progress callback receives ProgressEvents synchronously on the
    calling thread: LOADING events after every page, then MATCHING events
    after every title. Counts never decrease within a phase.

Usage:
    with YouTubeClient(api_key) as client:
        result = import_playlist(url, records, client, on_progress=display)
    print(result.matched_count, "of", result.total_videos)
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from playlist_importer.core.exceptions import EmptyLibrary, ImportStateError
from playlist_importer.core.logger import (
    format_matched_message,
    format_summary_message,
    get_logger,
    log_unmatched_title,
)
from playlist_importer.library.models import LibraryRecord
from playlist_importer.matching.index import CandidateIndex
from playlist_importer.matching.selector import (
    MatchDecision,
    MatchSelector,
    MatchTier,
    OutcomeStatus,
)
from playlist_importer.utils import extract_playlist_id
from playlist_importer.youtube.client import YouTubeClient
from playlist_importer.youtube.fetcher import PageCallback, PaginatedFetcher
from playlist_importer.youtube.models import FetchedPlaylist


logger = get_logger(__name__)


DUPLICATE_ANNOTATION = "[duplicate]"


class ImportPhase(Enum):
    """Phase reported by a ProgressEvent."""
    LOADING = "loading"
    MATCHING = "matching"


class ImportState(Enum):
    """Lifecycle state of an ImportOrchestrator."""
    PENDING = "pending"
    LOADING = "loading"
    MATCHING = "matching"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ProgressEvent:
    """
    One progress notification.

    Attributes:
        phase: LOADING or MATCHING.
        current: Titles fetched (LOADING) or titles processed (MATCHING).
        total: Estimated total during LOADING (0 before the first page
               when unknown), exact title count during MATCHING.
        matched: Running matched count (always 0 during LOADING).
    """
    phase: ImportPhase
    current: int
    total: int
    matched: int = 0


ProgressCallback = Callable[[ProgressEvent], None]


class PlaylistFetcher(Protocol):
    """Anything that can turn a playlist id into its ordered titles."""

    def fetch(self, playlist_id: str, on_page: PageCallback | None = None) -> FetchedPlaylist:
        ...


@dataclass(frozen=True)
class TitleOutcome:
    """
    Outcome for one playlist title.

    Attributes:
        position: 1-based position in the fetched playlist.
        raw_title: Title as fetched.
        status: MATCHED, NO_MATCH or DUPLICATE.
        record: Matched record, or for DUPLICATE the record that was
                already taken. None for NO_MATCH.
        tier: Tier that selected the record, None for NO_MATCH.
        score: Tier-specific score, 0.0 for NO_MATCH.
    """
    position: int
    raw_title: str
    status: OutcomeStatus
    record: LibraryRecord | None = None
    tier: MatchTier | None = None
    score: float = 0.0

    @property
    def matched(self) -> bool:
        return self.status is OutcomeStatus.MATCHED

    @property
    def unmatched_label(self) -> str:
        """Entry used in ImportResult.unmatched_titles."""
        if self.status is OutcomeStatus.DUPLICATE:
            return f"{self.raw_title} {DUPLICATE_ANNOTATION}"
        return self.raw_title

    @classmethod
    def from_decision(cls, position: int, decision: MatchDecision) -> "TitleOutcome":
        return cls(
            position=position,
            raw_title=decision.raw_title,
            status=decision.status,
            record=decision.record,
            tier=decision.tier,
            score=decision.score,
        )


@dataclass(frozen=True)
class ImportResult:
    """
    Result of a completed import run.

    Every fetched title yields exactly one outcome, so
    len(matched_songs) + len(unmatched_titles) == total_videos.

    Attributes:
        playlist_id: Identifier extracted from the URL.
        playlist_title: Display title ("Imported Playlist" when unknown).
        total_videos: Number of titles fetched.
        matched_songs: Matched records in playlist order, no repeated id.
        unmatched_titles: Raw titles without a match, in playlist order.
                          Duplicates carry a " [duplicate]" suffix.
        outcomes: Per-title outcomes in playlist order.
    """
    playlist_id: str
    playlist_title: str
    total_videos: int
    matched_songs: tuple[LibraryRecord, ...]
    unmatched_titles: tuple[str, ...]
    outcomes: tuple[TitleOutcome, ...] = ()

    @property
    def matched_count(self) -> int:
        return len(self.matched_songs)

    @property
    def unmatched_count(self) -> int:
        return len(self.unmatched_titles)

    @classmethod
    def from_outcomes(
        cls,
        playlist: FetchedPlaylist,
        outcomes: Iterable[TitleOutcome]
    ) -> "ImportResult":
        outcomes = tuple(outcomes)
        return cls(
            playlist_id=playlist.playlist_id,
            playlist_title=playlist.title,
            total_videos=len(outcomes),
            matched_songs=tuple(o.record for o in outcomes if o.matched),
            unmatched_titles=tuple(o.unmatched_label for o in outcomes if not o.matched),
            outcomes=outcomes,
        )


class ImportOrchestrator:
    """
    Runs a single import of one playlist against one library snapshot.

    The orchestrator is single-use: once run() has been called it ends in
    DONE or FAILED, and calling run() again raises ImportStateError.

    Attributes:
        _fetcher: Playlist fetcher (normally a PaginatedFetcher).
        _records: Library snapshot, frozen at construction.
        _on_progress: Optional progress callback.
        _state: Current ImportState.
    """

    def __init__(
        self,
        fetcher: PlaylistFetcher,
        library_records: Iterable[LibraryRecord],
        on_progress: ProgressCallback | None = None
    ) -> None:
        self._fetcher = fetcher
        self._records: tuple[LibraryRecord, ...] = tuple(library_records)
        self._on_progress = on_progress
        self._state = ImportState.PENDING

    @property
    def state(self) -> ImportState:
        return self._state

    def run(self, playlist_url: str) -> ImportResult:
        """
        Import a playlist.

        Args:
            playlist_url: YouTube URL carrying a list= parameter.

        Returns:
            ImportResult for the playlist.

        Raises:
            ImportStateError: If this orchestrator already ran.
            InvalidPlaylistUrl: If the URL has no playlist identifier.
            EmptyLibrary: If the library snapshot has no records.
            SourceUnavailable: If any page request fails.
        """
        if self._state is not ImportState.PENDING:
            raise ImportStateError(
                f"Import already {self._state.value}; create a new orchestrator to import again",
                details={"state": self._state.value}
            )

        try:
            playlist_id = extract_playlist_id(playlist_url)

            if not self._records:
                raise EmptyLibrary(
                    "The local library is empty: nothing to match against",
                    details={"url": playlist_url}
                )

            self._state = ImportState.LOADING
            playlist = self._fetcher.fetch(playlist_id, on_page=self._emit_loading)

            self._state = ImportState.MATCHING
            result = self._match_titles(playlist)
        except BaseException:
            self._state = ImportState.FAILED
            raise

        self._state = ImportState.DONE
        logger.info(format_summary_message(
            result.playlist_title, result.matched_count, result.total_videos
        ))
        return result

    def _match_titles(self, playlist: FetchedPlaylist) -> ImportResult:
        index = CandidateIndex.build(self._records)
        selector = MatchSelector(index)

        total = len(playlist.titles)
        outcomes: list[TitleOutcome] = []
        matched = 0

        logger.info(f"Matching {total} titles against {len(index)} library records")

        for position, raw_title in enumerate(playlist.titles, start=1):
            decision = selector.select(raw_title)
            outcome = TitleOutcome.from_decision(position, decision)
            outcomes.append(outcome)

            if outcome.matched:
                matched += 1
                logger.debug(format_matched_message(
                    raw_title, outcome.record.artist, outcome.record.title, outcome.tier.value
                ))
            elif outcome.status is OutcomeStatus.DUPLICATE:
                log_unmatched_title(
                    logger, raw_title, f"duplicate of {outcome.record.display_name}", position
                )
            else:
                log_unmatched_title(logger, raw_title, "no match", position)

            self._emit(ProgressEvent(ImportPhase.MATCHING, position, total, matched))

        return ImportResult.from_outcomes(playlist, outcomes)

    def _emit_loading(self, current: int, total: int) -> None:
        self._emit(ProgressEvent(ImportPhase.LOADING, current, total))

    def _emit(self, event: ProgressEvent) -> None:
        if self._on_progress is not None:
            self._on_progress(event)


def import_playlist(
    playlist_url: str,
    library_records: Iterable[LibraryRecord],
    client: YouTubeClient,
    on_progress: ProgressCallback | None = None
) -> ImportResult:
    """
    Convenience function for a complete import run.

    Args:
        playlist_url: YouTube playlist URL.
        library_records: Library snapshot; must not change during the run.
        client: Configured YouTubeClient.
        on_progress: Optional ProgressEvent callback.

    Returns:
        ImportResult for the playlist.
    """
    orchestrator = ImportOrchestrator(
        PaginatedFetcher(client),
        library_records,
        on_progress=on_progress
    )
    return orchestrator.run(playlist_url)
