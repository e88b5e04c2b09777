"""
Local library scanner.

Walks a music directory and produces the LibraryRecord snapshot the import
run matches against. Tags are read with mutagen's "easy" interface, which
exposes the same keys (title, artist, album) for ID3, MP4, Vorbis and the
other formats mutagen understands.

Scan Rules:
    - Directories are walked in sorted order so the snapshot (and with it
      the matcher's tie-breaking) is deterministic.
    - Only files with a configured audio extension are considered.
    - Files of min_file_size bytes or less are skipped (ringtones,
      notification sounds, voice memos).
    - Missing tags fall back to the file stem / "Unknown Artist" /
      "Unknown Album"; a file mutagen cannot parse is still scanned.
    - The record id is derived from the file's (device, inode) pair, so it
      stays unique across mount points. Hard links to an already scanned
      file are skipped.

Usage:
    scanner = LibraryScanner(config.library.directory)
    records = scanner.scan()
"""

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

import mutagen

from playlist_importer.core.config import DEFAULT_AUDIO_EXTENSIONS, DEFAULT_MIN_FILE_SIZE_KB
from playlist_importer.core.exceptions import LibraryScanError
from playlist_importer.core.logger import get_logger
from playlist_importer.library.models import LibraryRecord


logger = get_logger(__name__)


UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"


class LibraryScanner:
    """
    Produces LibraryRecords for the audio files under a directory.

    Attributes:
        directory: Root of the music library.
        extensions: Accepted lowercase extensions, with leading dot.
        min_file_size: Files of this many bytes or less are skipped.
    """

    def __init__(
        self,
        directory: Path,
        extensions: Iterable[str] = DEFAULT_AUDIO_EXTENSIONS,
        min_file_size: int = DEFAULT_MIN_FILE_SIZE_KB * 1024
    ) -> None:
        self.directory = directory
        self.extensions = frozenset(ext.lower() for ext in extensions)
        self.min_file_size = min_file_size

    def scan(self) -> list[LibraryRecord]:
        """
        Scan the whole library into a list.

        Returns:
            Records in sorted path order.

        Raises:
            LibraryScanError: If the directory does not exist.
        """
        records = list(self.iter_records())
        logger.info(f"Found {len(records)} audio files in {self.directory}")
        return records

    def iter_records(self) -> Iterator[LibraryRecord]:
        """Yield records one by one in sorted path order."""
        if not self.directory.is_dir():
            raise LibraryScanError(
                f"Music library directory not found: {self.directory}",
                details={"directory": str(self.directory)}
            )

        seen: set[tuple[int, int]] = set()

        for path in self._iter_audio_files():
            try:
                stat = path.stat()
            except OSError as e:
                logger.warning(f"Cannot stat {path}: {e}")
                continue

            if stat.st_size <= self.min_file_size:
                continue
            key = (stat.st_dev, stat.st_ino)
            if key in seen:
                logger.debug(f"Skipping hard link to an already scanned file: {path}")
                continue
            seen.add(key)

            yield read_record(path, record_id=file_id(stat), size=stat.st_size)

    def _iter_audio_files(self) -> Iterator[Path]:
        for root, dirs, files in os.walk(self.directory):
            dirs.sort()
            for name in sorted(files):
                path = Path(root) / name
                if path.suffix.lower() in self.extensions:
                    yield path


def file_id(stat: os.stat_result) -> int:
    """Numeric record id combining the device and inode numbers."""
    return (stat.st_dev << 64) | stat.st_ino


def read_record(path: Path, record_id: int, size: int) -> LibraryRecord:
    """
    Build a LibraryRecord from one audio file's tags.

    Args:
        path: Audio file path.
        record_id: Numeric id to assign (file_id() when scanning).
        size: File size in bytes.

    Returns:
        LibraryRecord with fallback values for missing tags.
    """
    title = artist = album = None
    duration_ms = 0

    try:
        audio = mutagen.File(path, easy=True)
    except (mutagen.MutagenError, OSError) as e:
        logger.debug(f"Unreadable tags in {path.name}: {e}")
        audio = None

    if audio is not None:
        title = _first_tag(audio, "title")
        artist = _first_tag(audio, "artist")
        album = _first_tag(audio, "album")

        length = getattr(audio.info, "length", None)
        if length:
            duration_ms = int(length * 1000)

    return LibraryRecord(
        id=record_id,
        title=title or path.stem,
        artist=artist or UNKNOWN_ARTIST,
        album=album or UNKNOWN_ALBUM,
        duration_ms=duration_ms,
        file_path=str(path.resolve()),
        size=size,
    )


def _first_tag(audio, key: str) -> str | None:
    """First non-empty value of an easy tag, or None."""
    try:
        values = audio.get(key)
    except (KeyError, ValueError):
        return None

    if not values:
        return None
    if isinstance(values, str):
        values = [values]

    for value in values:
        text = str(value).strip()
        if text:
            return text
    return None
