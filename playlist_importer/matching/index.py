"""
Candidate index over a local library snapshot.

Normalizing and tokenizing thousands of records for every playlist title
would dominate the import time, so CandidateIndex does it once per run:
each LibraryRecord becomes an IndexedRecord holding its normalized strings
and keyword sets. The index is read-only after construction and private to
the import run that built it.

Usage:
    index = CandidateIndex.build(records)
    for candidate in index:
        print(candidate.normalized_filename, candidate.file_keywords)
"""

from collections.abc import Iterable, Iterator

from playlist_importer.core.logger import get_logger
from playlist_importer.library.models import IndexedRecord, LibraryRecord
from playlist_importer.matching.text import extract_keywords, normalize


logger = get_logger(__name__)


def index_record(record: LibraryRecord) -> IndexedRecord:
    """Compute the matching view of a single record."""
    return IndexedRecord(
        record=record,
        normalized_title=normalize(record.title),
        normalized_artist=normalize(record.artist),
        normalized_filename=normalize(record.file_stem),
        file_keywords=extract_keywords(record.file_stem),
        metadata_keywords=extract_keywords(record.title) | extract_keywords(record.artist),
    )


class CandidateIndex:
    """
    Immutable, ordered collection of IndexedRecords.

    Iteration order is the order of the snapshot passed to build(); the
    match selector relies on it to break ties deterministically.
    """

    def __init__(self, entries: Iterable[IndexedRecord]) -> None:
        self._entries: tuple[IndexedRecord, ...] = tuple(entries)

    @classmethod
    def build(cls, records: Iterable[LibraryRecord]) -> "CandidateIndex":
        """
        Index every record of a library snapshot.

        Args:
            records: The snapshot. It is consumed once and must not change
                     while the import run is in progress.
        """
        index = cls(index_record(record) for record in records)
        logger.debug(f"Indexed {len(index)} library records")
        return index

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IndexedRecord]:
        return iter(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    @property
    def entries(self) -> tuple[IndexedRecord, ...]:
        return self._entries
