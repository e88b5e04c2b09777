"""
Playlist export for playlist-importer.

The import core never persists anything. This module is the caller-side
persistence used by the CLI: matched records are written as an extended
M3U file that references the local audio files by absolute path.

Layout:
    output_directory/
    ├── logs/
    │   └── ...
    └── playlists/                 # export_directory (configurable)
        ├── My Playlist.m3u
        └── Road Trip.m3u

Usage:
    from playlist_importer.core.file_manager import export_playlist_m3u

    m3u_path = export_playlist_m3u(result.playlist_title, result.matched_songs, export_dir)
"""

import re
from collections.abc import Iterable
from pathlib import Path

from playlist_importer.library.models import LibraryRecord


# Characters that are invalid in filenames on various operating systems
_INVALID_CHARS_PATTERN = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

# Maximum filename length (conservative for cross-platform compatibility)
_MAX_FILENAME_LENGTH = 200


def sanitize_filename(name: str) -> str:
    """
    Sanitize a string for use in a filename.

    Args:
        name: The string to sanitize.

    Returns:
        A sanitized string safe for use in filenames.

    Behavior:
        - Replaces invalid characters with underscores
        - Strips leading/trailing whitespace and dots
        - Truncates to maximum length
        - Returns "Unknown" if result is empty
    """
    if not name:
        return "Unknown"

    result = _INVALID_CHARS_PATTERN.sub("_", name)

    # Dots at start can hide files on Unix
    result = result.strip(" .")

    if len(result) > _MAX_FILENAME_LENGTH:
        result = result[:_MAX_FILENAME_LENGTH].rstrip(" .")

    return result if result else "Unknown"


def export_playlist_m3u(
    playlist_title: str,
    records: Iterable[LibraryRecord],
    export_dir: Path
) -> Path:
    """
    Generate an extended M3U playlist file.

    Args:
        playlist_title: Display title of the imported playlist.
        records: Matched records in playlist order.
        export_dir: Directory where the M3U file will be created.

    Returns:
        Path to the created M3U file. An existing file with the same
        name is overwritten.
    """
    export_dir.mkdir(parents=True, exist_ok=True)

    safe_name = sanitize_filename(playlist_title)
    m3u_path = export_dir / f"{safe_name}.m3u"

    with open(m3u_path, "w", encoding="utf-8") as f:
        f.write("#EXTM3U\n")

        for record in records:
            # #EXTINF:duration,Artist - Title
            f.write(f"#EXTINF:{record.duration_seconds},{record.display_name}\n")
            f.write(f"{Path(record.file_path).resolve()}\n")

    return m3u_path
