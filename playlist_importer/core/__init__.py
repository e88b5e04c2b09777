"""
Core module for playlist-importer.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with multiple outputs

The progress display (core.progress) and the M3U export (core.file_manager)
are imported from their own modules by the CLI.

Usage:
    from playlist_importer.core import (
        Config, load_config,
        setup_logging, get_logger,
        PlaylistImporterError, ConfigError, SourceUnavailable
    )
"""

from playlist_importer.core.config import (
    Config,
    LibraryConfig,
    OutputConfig,
    YouTubeConfig,
    load_config,
)
from playlist_importer.core.exceptions import (
    ConfigError,
    EmptyLibrary,
    ImportStateError,
    InvalidPlaylistUrl,
    LibraryScanError,
    PlaylistImporterError,
    SourceUnavailable,
)
from playlist_importer.core.logger import (
    get_logger,
    log_unmatched_title,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "YouTubeConfig",
    "LibraryConfig",
    "OutputConfig",
    "load_config",
    # Exceptions
    "PlaylistImporterError",
    "ConfigError",
    "InvalidPlaylistUrl",
    "SourceUnavailable",
    "EmptyLibrary",
    "LibraryScanError",
    "ImportStateError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_unmatched_title",
    "shutdown_logging",
]
