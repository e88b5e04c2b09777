"""
playlist-importer: Rebuild YouTube playlists from a local music library.

This package fetches the titles of a YouTube playlist and matches each one
against the audio files already on disk, producing a best-effort playlist
of local files plus the list of titles it could not place.

Architecture:
    An import run has two phases:

    LOADING (youtube/): Fetch the playlist
        - Request playlistItems pages from the YouTube Data API
        - Skip private and deleted videos
        - Report running counts after every page

    MATCHING (matching/): Match titles to local files
        - Strip video decoration ("(Official Video)", "[Lyrics]", "ft.")
        - Normalize and tokenize into keyword sets
        - Select at most one record per title (exact filename,
          substring filename, weighted fuzzy score)
        - Never assign the same local file twice

Modules:
    core/       - Configuration, logging, exceptions, progress, M3U export
    library/    - Library records and the mutagen-based scanner
    matching/   - Normalization, scoring and tiered selection
    youtube/    - YouTube Data API client and paginated fetcher
    importer.py - Import state machine and result types
    utils/      - Playlist URL parsing and formatting helpers
    cli.py      - Command-line interface

Usage:
    Command Line:
        plimport --url "https://www.youtube.com/playlist?list=PL..."
        plimport --url "https://..." --library ~/Music --no-export

    Python API:
        from playlist_importer import (
            LibraryScanner, YouTubeClient, import_playlist, load_config
        )

        config = load_config()
        records = LibraryScanner(config.library.directory).scan()

        with YouTubeClient(config.youtube.api_key) as client:
            result = import_playlist(url, records, client)

        print(result.playlist_title, result.matched_count, result.unmatched_titles)

Configuration:
    Requires a config.yaml file in the current directory:

        youtube:
          api_key: "your_api_key"

        library:
          directory: "~/Music"

        output:
          directory: "~/Music/PlaylistImporter"

Dependencies:
    - requests: YouTube Data API calls
    - mutagen: Audio tag reading
    - click: CLI framework
    - rich-click: CLI colors
    - rich: Progress bars
    - tqdm: Progress-safe console logging
    - pyyaml: Configuration file parsing
"""

__version__ = "0.1.0"
__author__ = "playlist-importer"
__license__ = "MIT"

# Convenience imports for common usage
from playlist_importer.core import (
    Config,
    ConfigError,
    EmptyLibrary,
    InvalidPlaylistUrl,
    PlaylistImporterError,
    SourceUnavailable,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from playlist_importer.importer import (
    ImportOrchestrator,
    ImportPhase,
    ImportResult,
    ImportState,
    ProgressEvent,
    TitleOutcome,
    import_playlist,
)
from playlist_importer.library import LibraryRecord, LibraryScanner
from playlist_importer.youtube import PaginatedFetcher, YouTubeClient

__all__ = [
    "__version__",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    # Exceptions
    "PlaylistImporterError",
    "ConfigError",
    "InvalidPlaylistUrl",
    "SourceUnavailable",
    "EmptyLibrary",
    # Import
    "ImportOrchestrator",
    "ImportPhase",
    "ImportResult",
    "ImportState",
    "ProgressEvent",
    "TitleOutcome",
    "import_playlist",
    # Library
    "LibraryRecord",
    "LibraryScanner",
    # YouTube
    "YouTubeClient",
    "PaginatedFetcher",
]
