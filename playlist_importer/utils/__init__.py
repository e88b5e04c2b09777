"""
Utility functions for playlist-importer.

This module provides small helpers used across the application:
    - Playlist identifier extraction from YouTube URLs
    - Path manipulation helpers
    - Duration formatting for console output

Usage:
    from playlist_importer.utils import (
        extract_playlist_id,
        ensure_directory,
        format_duration
    )
"""

import re
from pathlib import Path

from playlist_importer.core.exceptions import InvalidPlaylistUrl


_PLAYLIST_ID_PATTERN = re.compile(r"list=([^&]+)")


def extract_playlist_id(url: str) -> str:
    """
    Extract the playlist identifier from a YouTube playlist URL.

    The identifier is the value of the first list= parameter, so watch
    URLs that carry a playlist context are accepted too.

    Args:
        url: YouTube URL (playlist page, watch page within a playlist,
             or YouTube Music playlist).

    Returns:
        The playlist identifier.

    Raises:
        InvalidPlaylistUrl: If the URL has no list= parameter.

    Examples:
        extract_playlist_id("https://www.youtube.com/playlist?list=PLabc123")
        # Returns: "PLabc123"

        extract_playlist_id("https://www.youtube.com/watch?v=xyz&list=PLabc123&index=2")
        # Returns: "PLabc123"
    """
    match = _PLAYLIST_ID_PATTERN.search(url or "")
    if match is None:
        raise InvalidPlaylistUrl(
            f"No playlist identifier found in URL: {url}",
            details={"url": url}
        )
    return match.group(1)


def ensure_directory(path: Path) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to the directory.

    Returns:
        The same path (for chaining).

    Raises:
        OSError: If directory cannot be created (permissions, etc.)

    Example:
        export_dir = ensure_directory(config.output.export_directory)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def format_duration(seconds: int) -> str:
    """
    Format duration in seconds to human-readable string.

    Args:
        seconds: Duration in seconds.

    Returns:
        Formatted string like "3:45" or "1:02:30".

    Examples:
        format_duration(225)   # "3:45"
        format_duration(3750)  # "1:02:30"
        format_duration(45)    # "0:45"
    """
    if seconds < 3600:
        minutes = seconds // 60
        secs = seconds % 60
        return f"{minutes}:{secs:02d}"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        secs = seconds % 60
        return f"{hours}:{minutes:02d}:{secs:02d}"
