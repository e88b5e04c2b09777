"""
Tiered match selection for playlist titles.

For each playlist title the selector picks zero or one local record. Tiers
are tried in order and the first one that yields a candidate wins:

    1. EXACT_FILENAME: a normalized filename (10+ chars) whose
       string_similarity with the cleaned title is >= 0.95.
    2. SUBSTRING_FILENAME: a normalized filename (15+ chars) and the
       cleaned title (15+ chars) where one contains the other.
    3. FUZZY: the record with the highest
       0.75 * score(file keywords) + 0.25 * score(metadata keywords),
       accepted when the combined score is >= 0.28 and either two plain
       words are shared with the winning source or the score is >= 0.45.

Filename evidence dominates because local tags are often missing or
generic, while filenames usually carry "Artist - Title".

De-duplication:
    A record matched once in a run is never matched again. A later title
    whose selection lands on an already-used record is reported as a
    DUPLICATE; it is not retried against its next-best candidate.

Usage:
    selector = MatchSelector(CandidateIndex.build(records))
    decision = selector.select("Artist - Song (Official Video)")
    if decision.matched:
        print(decision.record.file_path, decision.tier.value)
"""

from dataclasses import dataclass
from enum import Enum

from playlist_importer.core.logger import get_logger
from playlist_importer.matching.index import CandidateIndex
from playlist_importer.library.models import IndexedRecord, LibraryRecord
from playlist_importer.matching.scorer import score, string_similarity
from playlist_importer.matching.text import (
    extract_keywords,
    is_bigram,
    normalize,
    strip_decoration,
)


logger = get_logger(__name__)


# =============================================================================
# TIER THRESHOLDS
# =============================================================================

# Tier 1: exact filename
EXACT_FILENAME_MIN_LENGTH = 10
EXACT_FILENAME_MIN_SIMILARITY = 0.95

# Tier 2: filename / title containment
SUBSTRING_MIN_LENGTH = 15

# Tier 3: weighted keyword score
FILE_WEIGHT = 0.75
METADATA_WEIGHT = 0.25
FUZZY_MIN_SCORE = 0.28
FUZZY_MIN_SHARED_WORDS = 2
FUZZY_STRONG_SCORE = 0.45


class MatchTier(Enum):
    """Decision tier that produced a match."""
    EXACT_FILENAME = "exact-filename"
    SUBSTRING_FILENAME = "substring-filename"
    FUZZY = "fuzzy"


class KeywordSource(Enum):
    """Which keyword set of a record supported the match."""
    FILE = "file"
    METADATA = "metadata"


class OutcomeStatus(Enum):
    """Per-title outcome of the selection."""
    MATCHED = "matched"
    NO_MATCH = "no-match"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class MatchCandidateScore:
    """
    Score of one candidate for one playlist title.

    Attributes:
        candidate: The indexed record being evaluated.
        score: Similarity in [0, 1] (tier-specific meaning).
        source: Keyword set the score is attributed to.
        shared_keywords: Query keywords also present in that keyword set.
    """
    candidate: IndexedRecord
    score: float
    source: KeywordSource
    shared_keywords: frozenset[str]

    @property
    def shared_words(self) -> frozenset[str]:
        """Shared keywords that are single words, not bigrams."""
        return frozenset(k for k in self.shared_keywords if not is_bigram(k))


@dataclass(frozen=True)
class MatchDecision:
    """
    Result of selecting a record for one playlist title.

    Attributes:
        raw_title: Title as fetched from the playlist.
        query: Decoration-stripped, normalized title.
        status: MATCHED, NO_MATCH or DUPLICATE.
        tier: Tier that found a candidate (None for NO_MATCH).
        best: Winning candidate score (None for NO_MATCH). For DUPLICATE
              it is the already-used record the title landed on.
    """
    raw_title: str
    query: str
    status: OutcomeStatus
    tier: MatchTier | None = None
    best: MatchCandidateScore | None = None

    @property
    def matched(self) -> bool:
        return self.status is OutcomeStatus.MATCHED

    @property
    def record(self) -> LibraryRecord | None:
        return self.best.candidate.record if self.best is not None else None

    @property
    def score(self) -> float:
        return self.best.score if self.best is not None else 0.0


class MatchSelector:
    """
    Applies the tiered decision policy with run-wide de-duplication.

    One selector serves exactly one import run: the set of used record ids
    lives here and grows as titles are matched. Titles must be passed in
    playlist order for the "first title wins" rule to be meaningful.

    Attributes:
        _index: Candidate index built for this run.
        _used_ids: Ids of records already assigned in this run.
    """

    def __init__(self, index: CandidateIndex) -> None:
        self._index = index
        self._used_ids: set[int] = set()

    @property
    def used_ids(self) -> frozenset[int]:
        return frozenset(self._used_ids)

    def select(self, raw_title: str) -> MatchDecision:
        """
        Choose at most one record for a raw playlist title.

        Args:
            raw_title: Title exactly as returned by the playlist API.

        Returns:
            MatchDecision with status MATCHED, NO_MATCH or DUPLICATE.
        """
        cleaned = strip_decoration(raw_title)
        query = normalize(cleaned)
        query_keywords = extract_keywords(cleaned)

        tier, best = self._find_candidate(query, query_keywords)

        if best is None:
            logger.debug(f"No match: '{query}'")
            return MatchDecision(raw_title=raw_title, query=query, status=OutcomeStatus.NO_MATCH)

        record_id = best.candidate.id
        if record_id in self._used_ids:
            logger.debug(
                f"Duplicate: '{query}' -> {best.candidate.record.display_name} "
                f"already matched earlier in this run"
            )
            return MatchDecision(
                raw_title=raw_title,
                query=query,
                status=OutcomeStatus.DUPLICATE,
                tier=tier,
                best=best,
            )

        self._used_ids.add(record_id)
        logger.debug(
            f"{tier.value} match (score: {best.score:.3f}, source: {best.source.value}): "
            f"'{query}' -> {best.candidate.record.display_name}"
        )
        return MatchDecision(
            raw_title=raw_title,
            query=query,
            status=OutcomeStatus.MATCHED,
            tier=tier,
            best=best,
        )

    def _find_candidate(
        self,
        query: str,
        query_keywords: frozenset[str]
    ) -> tuple[MatchTier | None, MatchCandidateScore | None]:
        """Run the tiers in order; the first tier with a candidate wins."""
        best = self._match_exact_filename(query, query_keywords)
        if best is not None:
            return MatchTier.EXACT_FILENAME, best

        best = self._match_substring_filename(query, query_keywords)
        if best is not None:
            return MatchTier.SUBSTRING_FILENAME, best

        best = self._match_fuzzy(query_keywords)
        if best is not None:
            return MatchTier.FUZZY, best

        return None, None

    def _match_exact_filename(
        self,
        query: str,
        query_keywords: frozenset[str]
    ) -> MatchCandidateScore | None:
        for candidate in self._index:
            filename = candidate.normalized_filename
            if len(filename) < EXACT_FILENAME_MIN_LENGTH:
                continue

            similarity = string_similarity(filename, query)
            if similarity >= EXACT_FILENAME_MIN_SIMILARITY:
                return MatchCandidateScore(
                    candidate=candidate,
                    score=similarity,
                    source=KeywordSource.FILE,
                    shared_keywords=query_keywords & candidate.file_keywords,
                )
        return None

    def _match_substring_filename(
        self,
        query: str,
        query_keywords: frozenset[str]
    ) -> MatchCandidateScore | None:
        if len(query) < SUBSTRING_MIN_LENGTH:
            return None

        for candidate in self._index:
            filename = candidate.normalized_filename
            if len(filename) < SUBSTRING_MIN_LENGTH:
                continue

            if filename in query or query in filename:
                return MatchCandidateScore(
                    candidate=candidate,
                    score=string_similarity(filename, query),
                    source=KeywordSource.FILE,
                    shared_keywords=query_keywords & candidate.file_keywords,
                )
        return None

    def _match_fuzzy(self, query_keywords: frozenset[str]) -> MatchCandidateScore | None:
        if not query_keywords:
            return None

        best: MatchCandidateScore | None = None

        for candidate in self._index:
            file_score = score(query_keywords, candidate.file_keywords)
            metadata_score = score(query_keywords, candidate.metadata_keywords)
            combined = FILE_WEIGHT * file_score + METADATA_WEIGHT * metadata_score

            if best is not None and combined <= best.score:
                continue
            if combined <= 0.0:
                continue

            if file_score >= metadata_score:
                source = KeywordSource.FILE
                shared = query_keywords & candidate.file_keywords
            else:
                source = KeywordSource.METADATA
                shared = query_keywords & candidate.metadata_keywords

            best = MatchCandidateScore(
                candidate=candidate,
                score=combined,
                source=source,
                shared_keywords=shared,
            )

        if best is None or best.score < FUZZY_MIN_SCORE:
            return None

        if len(best.shared_words) < FUZZY_MIN_SHARED_WORDS and best.score < FUZZY_STRONG_SCORE:
            logger.debug(
                f"Rejected fuzzy candidate {best.candidate.record.display_name}: "
                f"score {best.score:.3f} with {len(best.shared_words)} shared word(s)"
            )
            return None

        return best
