"""
Configuration management for playlist-importer.

This module handles loading, validating, and providing access to the
application configuration stored in config.yaml.

The configuration file contains:
    - YouTube Data API key and paging options
    - Local library directory and scan filters
    - Output directory for logs and exported M3U playlists

Configuration File Location:
    The config.yaml file is looked up in the current working directory
    unless an explicit path is given.

Example config.yaml:
    youtube:
      api_key: "your_api_key_here"
      page_size: 50
      timeout: 30

    library:
      directory: "~/Music"
      min_file_size_kb: 500
      extensions: [".mp3", ".m4a", ".flac"]

    output:
      directory: "~/Music/PlaylistImporter"
      export_directory: "~/Music/PlaylistImporter/playlists"
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from playlist_importer.core.exceptions import ConfigError


# Default configuration file name (always in current working directory)
CONFIG_FILENAME = "config.yaml"

# YouTube Data API returns at most 50 items per playlistItems page
MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 50
DEFAULT_TIMEOUT_SECONDS = 30.0

# Files at or below this size are not considered songs
DEFAULT_MIN_FILE_SIZE_KB = 500

DEFAULT_AUDIO_EXTENSIONS = (
    ".mp3",
    ".m4a",
    ".flac",
    ".ogg",
    ".opus",
    ".wav",
    ".aac",
    ".wma",
)


@dataclass(frozen=True)
class YouTubeConfig:
    """
    YouTube Data API configuration.

    Attributes:
        api_key: API key from the Google Cloud console with the
                 YouTube Data API v3 enabled.
        page_size: Number of playlist items requested per page (1-50).
        timeout: HTTP timeout in seconds for each page request.
    """
    api_key: str
    page_size: int
    timeout: float


@dataclass(frozen=True)
class LibraryConfig:
    """
    Local audio library configuration.

    Attributes:
        directory: Root directory scanned for audio files.
        min_file_size: Minimum size in bytes; smaller files are skipped.
        extensions: Lowercase file extensions (with dot) considered audio.
    """
    directory: Path
    min_file_size: int
    extensions: tuple[str, ...]


@dataclass(frozen=True)
class OutputConfig:
    """
    Output directory configuration.

    Attributes:
        directory: Directory for the logs/ subdirectory.
        export_directory: Directory where M3U playlists are written.
                          Defaults to {directory}/playlists.
    """
    directory: Path
    export_directory: Path


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Created by load_config() and treated as immutable.

    Example:
        config = load_config()
        print(f"Scanning: {config.library.directory}")
        print(f"Exporting to: {config.output.export_directory}")
    """
    youtube: YouTubeConfig
    library: LibraryConfig
    output: OutputConfig


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If the config file is not found, has invalid YAML syntax,
                     is missing required fields, or contains invalid values.

    Behavior:
        1. Locate config file (explicit path or CWD/config.yaml)
        2. Read and parse YAML content
        3. Validate structure (required sections exist)
        4. Parse youtube, library and output sections
        5. Create and return frozen Config object
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME

    if not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    _validate_config(raw_config)

    return Config(
        youtube=_parse_youtube_config(raw_config["youtube"]),
        library=_parse_library_config(raw_config["library"]),
        output=_parse_output_config(raw_config["output"]),
    )


def _validate_config(raw_config: dict[str, Any]) -> None:
    """
    Check that all required sections exist and are dictionaries.

    Raises:
        ConfigError: If a section is missing or has the wrong type.
    """
    required_sections = ["youtube", "library", "output"]

    for section in required_sections:
        if section not in raw_config:
            raise ConfigError(
                f"Missing required section: '{section}'",
                details={"missing_section": section}
            )

        if not isinstance(raw_config[section], dict):
            raise ConfigError(
                f"Section '{section}' must be a dictionary",
                details={"section": section}
            )


def _parse_youtube_config(youtube_section: dict[str, Any]) -> YouTubeConfig:
    """
    Parse and validate the YouTube configuration section.

    Raises:
        ConfigError: If api_key is missing or page_size/timeout are invalid.
    """
    api_key = youtube_section.get("api_key", "")

    if not isinstance(api_key, str) or not api_key.strip():
        raise ConfigError(
            "'youtube.api_key' must be a non-empty string",
            details={"field": "youtube.api_key"}
        )

    page_size = youtube_section.get("page_size", DEFAULT_PAGE_SIZE)
    # bool is an int subclass; reject it explicitly
    if (
        not isinstance(page_size, int)
        or isinstance(page_size, bool)
        or not 1 <= page_size <= MAX_PAGE_SIZE
    ):
        raise ConfigError(
            f"'youtube.page_size' must be an integer between 1 and {MAX_PAGE_SIZE}",
            details={"field": "youtube.page_size", "value": page_size}
        )

    timeout = youtube_section.get("timeout", DEFAULT_TIMEOUT_SECONDS)
    if (
        not isinstance(timeout, (int, float))
        or isinstance(timeout, bool)
        or timeout <= 0
    ):
        raise ConfigError(
            "'youtube.timeout' must be a positive number of seconds",
            details={"field": "youtube.timeout", "value": timeout}
        )

    return YouTubeConfig(
        api_key=api_key.strip(),
        page_size=page_size,
        timeout=float(timeout)
    )


def _parse_library_config(library_section: dict[str, Any]) -> LibraryConfig:
    """
    Parse and validate the library configuration section.

    Expands ~ in the directory. Existence of the directory is checked
    at scan time, not here.

    Raises:
        ConfigError: If directory is missing, min_file_size_kb is negative,
                     or extensions is not a list of strings.
    """
    directory = library_section.get("directory", "")

    if not isinstance(directory, str) or not directory.strip():
        raise ConfigError(
            "'library.directory' must be a non-empty string",
            details={"field": "library.directory"}
        )

    min_size_kb = library_section.get("min_file_size_kb", DEFAULT_MIN_FILE_SIZE_KB)
    if (
        not isinstance(min_size_kb, int)
        or isinstance(min_size_kb, bool)
        or min_size_kb < 0
    ):
        raise ConfigError(
            "'library.min_file_size_kb' must be a non-negative integer",
            details={"field": "library.min_file_size_kb", "value": min_size_kb}
        )

    raw_extensions = library_section.get("extensions")
    if raw_extensions is None:
        extensions = DEFAULT_AUDIO_EXTENSIONS
    else:
        if (
            not isinstance(raw_extensions, list)
            or not raw_extensions
            or not all(isinstance(ext, str) and ext.strip() for ext in raw_extensions)
        ):
            raise ConfigError(
                "'library.extensions' must be a non-empty list of strings",
                details={"field": "library.extensions"}
            )
        extensions = tuple(_normalize_extension(ext) for ext in raw_extensions)

    return LibraryConfig(
        directory=Path(directory.strip()).expanduser().resolve(),
        min_file_size=min_size_kb * 1024,
        extensions=extensions
    )


def _normalize_extension(extension: str) -> str:
    """Lowercase an extension and make sure it starts with a dot."""
    extension = extension.strip().lower()
    return extension if extension.startswith(".") else f".{extension}"


def _parse_output_config(output_section: dict[str, Any]) -> OutputConfig:
    """
    Parse and validate the output configuration section.

    Expands ~ to home directory and converts to absolute Path.
    Does NOT create the directory (that happens when logging starts).

    Raises:
        ConfigError: If directory is missing or empty.
    """
    directory = output_section.get("directory", "")

    if not isinstance(directory, str) or not directory.strip():
        raise ConfigError(
            "'output.directory' must be a non-empty string",
            details={"field": "output.directory"}
        )

    path = Path(directory.strip()).expanduser().resolve()

    export_dir_raw = output_section.get("export_directory")
    if export_dir_raw is not None:
        if not isinstance(export_dir_raw, str) or not export_dir_raw.strip():
            raise ConfigError(
                "'output.export_directory' must be a non-empty string",
                details={"field": "output.export_directory"}
            )
        export_path = Path(export_dir_raw.strip()).expanduser().resolve()
    else:
        export_path = path / "playlists"

    return OutputConfig(directory=path, export_directory=export_path)
