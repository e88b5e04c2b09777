"""
Data models for the local audio library.

LibraryRecord is what the library collaborator (the scanner, or any other
source of tracks) produces. IndexedRecord is the matching engine's derived
view of one record, computed once per import run by CandidateIndex.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LibraryRecord:
    """
    Immutable representation of one local audio file.

    Attributes:
        id: Numeric identifier, unique and stable within one library.
        title: Title tag (or the file stem when untagged).
        artist: Artist tag, frequently generic ("Unknown Artist").
        album: Album tag.
        duration_ms: Track length in milliseconds (0 if unknown).
        file_path: Absolute path to the audio file.
        size: File size in bytes.
    """

    id: int
    title: str
    artist: str
    album: str
    duration_ms: int
    file_path: str
    size: int

    @property
    def file_stem(self) -> str:
        """Basename of file_path without its extension."""
        return Path(self.file_path).stem

    @property
    def duration_seconds(self) -> int:
        return self.duration_ms // 1000

    @property
    def display_name(self) -> str:
        """'Artist - Title' for logs and playlist exports."""
        return f"{self.artist} - {self.title}"


@dataclass(frozen=True)
class IndexedRecord:
    """
    Precomputed matching view of a LibraryRecord.

    Attributes:
        record: The source record, returned to the caller on a match.
        normalized_title: normalize(record.title).
        normalized_artist: normalize(record.artist).
        normalized_filename: normalize(record.file_stem).
        file_keywords: Keywords of the file stem.
        metadata_keywords: Union of title keywords and artist keywords.
    """

    record: LibraryRecord
    normalized_title: str
    normalized_artist: str
    normalized_filename: str
    file_keywords: frozenset[str]
    metadata_keywords: frozenset[str]

    @property
    def id(self) -> int:
        return self.record.id
