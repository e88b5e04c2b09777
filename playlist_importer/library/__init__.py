"""
Local library module for playlist-importer.

This module provides the snapshot of local audio files that playlist
titles are matched against.

Components:
    - LibraryRecord: Immutable description of one audio file
    - IndexedRecord: Precomputed matching view of a LibraryRecord
    - LibraryScanner: Directory walker reading tags with mutagen

Usage:
    from playlist_importer.library import LibraryScanner

    records = LibraryScanner(Path("~/Music").expanduser()).scan()
"""

from playlist_importer.library.models import IndexedRecord, LibraryRecord
from playlist_importer.library.scanner import LibraryScanner, file_id, read_record

__all__ = [
    "LibraryRecord",
    "IndexedRecord",
    "LibraryScanner",
    "file_id",
    "read_record",
]
