"""
Command-line interface for playlist-importer.

This module implements the CLI using Click, importing a YouTube playlist
into the local music library as an M3U playlist.
rich-click is used for the output colors.

Commands:
    plimport --url <playlist_url>              Import a playlist
    plimport --url <url> --library <dir>       Use another music directory
    plimport --url <url> --no-export           Match only, write no M3U

Usage:
    # Import a playlist into ./playlists/<title>.m3u
    plimport --url "https://www.youtube.com/playlist?list=PL..."

    # Use a config file outside the current directory
    plimport --url "https://..." --config ~/.config/plimport/config.yaml

Configuration:
    The CLI requires a config.yaml file in the current directory (or the
    path given with --config) with:
    - YouTube Data API key
    - Music library directory
    - Output directory path

Exit Codes:
    0    Import completed (even with unmatched titles)
    1    Configuration error or unexpected error
    2    Invalid playlist URL
    3    YouTube unavailable (network, HTTP error, bad key)
    4    Library error (missing directory, empty library)
    130  Interrupted by user
"""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import rich_click as click

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = ""
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "cli": [
        {
            "name": "Input",
            "options": ["--url", "--library"],
        },
        {
            "name": "Output",
            "options": ["--config", "--no-export"],
        },
        {
            "name": "Info",
            "options": ["--version", "--help"],
        },
    ],
}

from playlist_importer import __version__
from playlist_importer.core import (
    Config,
    ConfigError,
    InvalidPlaylistUrl,
    PlaylistImporterError,
    SourceUnavailable,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from playlist_importer.core.file_manager import export_playlist_m3u
from playlist_importer.core.progress import ImportProgressDisplay
from playlist_importer.importer import ImportResult, import_playlist
from playlist_importer.library import LibraryScanner
from playlist_importer.utils import ensure_directory, format_duration
from playlist_importer.youtube import YouTubeClient

logger = get_logger(__name__)


@click.command()
@click.option(
    "--url",
    type=str,
    default=None,
    metavar="<youtube-url>",
    help="YouTube playlist URL (must contain list=...)"
)
@click.option(
    "--library",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    metavar="<dir>",
    help="Music library directory (overrides library.directory)"
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Configuration file (default: ./config.yaml)"
)
@click.option(
    "--no-export",
    is_flag=True,
    help="Do not write the M3U playlist"
)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit."
)
@click.pass_context
def cli(
    ctx: click.Context,
    url: Optional[str],
    library: Optional[Path],
    config_path: Optional[Path],
    no_export: bool,
    version: bool
) -> None:
    """
    playlist-importer: Rebuild YouTube playlists from your local music.

    Fetches every title of a YouTube playlist, matches each one against the
    audio files in your music library and writes the matches as an M3U
    playlist. Titles without a confident match are listed, never guessed.

    \b
    BASIC USAGE:
        plimport --url "https://www.youtube.com/playlist?list=PL..."
        plimport --url "https://..." --library ~/Music
        plimport --url "https://..." --no-export
    """
    if version:
        click.echo(f"playlist-importer {__version__}")
        ctx.exit(0)

    if not url:
        click.echo(ctx.get_help())
        ctx.exit(0)

    _run_import(url, library, config_path, export=not no_export)


def _run_import(
    url: str,
    library: Path | None,
    config_path: Path | None,
    export: bool
) -> None:
    """
    Execute the import workflow.

    1. Load configuration (with --library override)
    2. Set up logging
    3. Scan the music library
    4. Fetch and match the playlist with progress bars
    5. Report results and export the M3U

    Raises:
        SystemExit: On fatal errors (with appropriate exit code).
    """
    try:
        config = _load_configuration(config_path, library)

        setup_logging(config.output.directory)
        logger.info("playlist-importer starting")

        records = LibraryScanner(
            config.library.directory,
            extensions=config.library.extensions,
            min_file_size=config.library.min_file_size
        ).scan()

        with YouTubeClient(
            api_key=config.youtube.api_key,
            page_size=config.youtube.page_size,
            timeout=config.youtube.timeout
        ) as client:
            with ImportProgressDisplay() as display:
                result = import_playlist(url, records, client, on_progress=display)

        _print_result(result)

        if export:
            if result.matched_songs:
                export_dir = ensure_directory(config.output.export_directory)
                m3u_path = export_playlist_m3u(result.playlist_title, result.matched_songs, export_dir)
                logger.info(f"Playlist written to {m3u_path}")
            else:
                logger.warning("No titles matched: playlist not written")

        logger.info("playlist-importer completed successfully")

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(1)

    except InvalidPlaylistUrl as e:
        click.echo(f"URL error: {e.message}", err=True)
        sys.exit(2)

    except SourceUnavailable as e:
        click.echo(f"YouTube error: {e.message}", err=True)
        if e.is_auth_error:
            click.echo("Check youtube.api_key in config.yaml", err=True)
        logger.error(f"YouTube error: {e.message}", exc_info=True)
        sys.exit(3)

    except PlaylistImporterError as e:
        click.echo(f"Library error: {e.message}", err=True)
        logger.error(f"Library error: {e.message}", exc_info=True)
        sys.exit(4)

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        logger.info("Interrupted by user")
        sys.exit(130)

    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error")
        sys.exit(1)

    finally:
        shutdown_logging()


def _load_configuration(config_path: Path | None, library: Path | None) -> Config:
    """
    Load configuration and apply the --library override.

    Raises:
        ConfigError: If configuration is invalid or missing.
    """
    config = load_config(config_path)
    if library is not None:
        library_config = replace(config.library, directory=library.expanduser().resolve())
        config = replace(config, library=library_config)
    return config


def _print_result(result: ImportResult) -> None:
    """
    Print import statistics and the unmatched titles.

    Args:
        result: Completed ImportResult.
    """
    total_seconds = sum(record.duration_seconds for record in result.matched_songs)

    logger.info("=" * 60)
    logger.info(f"IMPORT RESULT: {result.playlist_title}")
    logger.info("=" * 60)
    logger.info(f"Playlist videos:   {result.total_videos}")
    logger.info(f"Matched:           {result.matched_count}")
    logger.info(f"Unmatched:         {result.unmatched_count}")
    logger.info(f"Matched duration:  {format_duration(total_seconds)}")
    logger.info("=" * 60)

    if result.unmatched_titles:
        logger.info("Unmatched titles:")
        for title in result.unmatched_titles:
            logger.info(f"  - {title}")


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `plimport` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
