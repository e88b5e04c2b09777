"""
Matching module for playlist-importer.

This module decides which local record, if any, a playlist title refers to.

Pipeline per title:
    strip_decoration -> normalize -> extract_keywords
    -> score against every IndexedRecord in the CandidateIndex
    -> MatchSelector tiers (exact filename, substring filename, fuzzy)

Usage:
    from playlist_importer.matching import CandidateIndex, MatchSelector

    selector = MatchSelector(CandidateIndex.build(records))
    for title in titles:
        decision = selector.select(title)
"""

from playlist_importer.matching.index import CandidateIndex, index_record
from playlist_importer.matching.scorer import score, string_similarity
from playlist_importer.matching.selector import (
    KeywordSource,
    MatchCandidateScore,
    MatchDecision,
    MatchSelector,
    MatchTier,
    OutcomeStatus,
)
from playlist_importer.matching.text import (
    extract_keywords,
    normalize,
    strip_decoration,
)

__all__ = [
    # Text
    "normalize",
    "strip_decoration",
    "extract_keywords",
    # Index
    "CandidateIndex",
    "index_record",
    # Scoring
    "score",
    "string_similarity",
    # Selection
    "MatchSelector",
    "MatchDecision",
    "MatchCandidateScore",
    "MatchTier",
    "KeywordSource",
    "OutcomeStatus",
]
