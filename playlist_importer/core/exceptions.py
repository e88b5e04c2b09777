"""
Exception classes for playlist-importer.

This module defines all custom exceptions used throughout the application.
Each exception carries a human-readable message and an optional details
dictionary so callers can log context without parsing strings.

Exception Hierarchy:
    PlaylistImporterError (base)
        ConfigError - Configuration file issues
        InvalidPlaylistUrl - URL without a playlist identifier
        SourceUnavailable - YouTube Data API failures
        EmptyLibrary - No local candidates to match against
        LibraryScanError - Local library directory issues
        ImportStateError - Orchestrator reused after a run

Per-title outcomes (no match, duplicate match) are NOT exceptions: they are
recorded in the import result and never abort a run.
"""


class PlaylistImporterError(Exception):
    """
    Base exception for all playlist-importer errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch every fatal import error with a single
    except clause.

    Attributes:
        message: Human-readable error description.
        details: Dictionary with additional context (e.g., URL, status code).

    Example:
        try:
            result = orchestrator.run(url)
        except PlaylistImporterError as e:
            logger.error(f"Import failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description shown to the user.
            details: Optional dictionary containing additional context.
                     Common keys include:
                     - 'url': URL that caused the error
                     - 'status_code': HTTP status returned by the source
                     - 'original_error': The underlying exception message
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(PlaylistImporterError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that should stop program execution.

    Common causes:
        - config.yaml not found
        - config.yaml has invalid YAML syntax
        - Required fields missing (youtube.api_key, library.directory)
        - Invalid field values (e.g., page_size above 50)
    """
    pass


class InvalidPlaylistUrl(PlaylistImporterError):
    """
    Raised when a playlist identifier cannot be extracted from a URL.

    This is a CRITICAL error raised before any network request is made.

    Example:
        raise InvalidPlaylistUrl(
            "No playlist identifier found in URL",
            details={'url': 'https://www.youtube.com/watch?v=abc'}
        )
    """
    pass


class SourceUnavailable(PlaylistImporterError):
    """
    Raised when the YouTube Data API does not return a usable page.

    This is a CRITICAL error: the whole import is aborted and no partial
    result is produced, even if earlier pages were retrieved.

    Common causes:
        - Invalid or restricted API key (401/403)
        - Playlist not found or private (404)
        - Quota exhausted (403 quotaExceeded)
        - Network connectivity issues or timeouts
        - Response body is not a JSON object

    Attributes:
        status_code: HTTP status of the failed response, None for
                     transport errors.
        is_auth_error: True if the source rejected the credentials.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status_code: int | None = None,
        is_auth_error: bool = False
    ) -> None:
        """
        Initialize the source error with HTTP context.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
            status_code: HTTP status code, or None if no response arrived.
            is_auth_error: Set to True for 401/403 responses.
        """
        super().__init__(message, details)
        self.status_code = status_code
        self.is_auth_error = is_auth_error


class EmptyLibrary(PlaylistImporterError):
    """
    Raised when the local library snapshot contains no records.

    This is a CRITICAL error raised before fetching the playlist:
    there is nothing to match against.
    """
    pass


class LibraryScanError(PlaylistImporterError):
    """
    Raised when the local library directory cannot be scanned.

    Individual unreadable files never raise this error; they are logged
    and scanned with fallback metadata instead.
    """
    pass


class ImportStateError(PlaylistImporterError):
    """
    Raised when an ImportOrchestrator is run more than once.

    Each orchestrator instance performs a single, non-retryable pass.
    Create a new instance to import again.
    """
    pass
