"""
Logging configuration for playlist-importer.

This module sets up the logging system with multiple outputs:
    - Console: Real-time messages with tqdm-compatible formatting
    - log_full.log: Complete log of all events (DEBUG and above)
    - log_errors.log: Only ERROR and CRITICAL level messages
    - unmatched_titles.log: Playlist titles without a local match

The logging system follows the principle: everything to screen is also saved
to file, then filtered into specialized files.

Log File Locations:
    All log files are created in a logs/ subdirectory of the output
    directory specified in config.yaml. Each run gets its own timestamped
    files.

Usage:
    from playlist_importer.core.logger import setup_logging, get_logger

    setup_logging(output_dir)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Starting import")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


# Log file name prefixes (created in output_dir/logs)
LOG_FULL_PREFIX = "log_full"
LOG_ERRORS_PREFIX = "log_errors"
UNMATCHED_TITLES_PREFIX = "unmatched_titles"

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Custom formatter that adds colors to console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        colored_levelname = f"{color}{record.levelname}{Colors.RESET}"
        return f"{colored_levelname}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to console without breaking progress bars.

    Uses tqdm.write(), which prints above any active bar instead of
    corrupting the line it is redrawing.
    """

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


class UnmatchedTitleHandler(logging.Handler):
    """
    Handler that captures unmatched playlist titles for the report file.

    Listens for log records carrying unmatched-title extras and writes them
    to unmatched_titles.log in a simple, human-readable format:

        #3 Artist - Song (Official Video)
        no match

        #7 Another Artist - Another Song
        duplicate of Another Song

    The handler looks for specific extra fields in log records:
        - 'unmatched_title': The raw playlist title
        - 'unmatched_position': 1-based position in the playlist (optional)
        - 'unmatched_reason': Why the title was not matched

    Only records containing these fields are written to the report.
    """

    def __init__(self, report_path: Path) -> None:
        """
        Initialize the unmatched title handler.

        Args:
            report_path: Path to the report file. Created/overwritten on open().
        """
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "unmatched_title"):
            return

        if self.report_file is None:
            return

        try:
            title = getattr(record, "unmatched_title", "")
            position = getattr(record, "unmatched_position", None)
            reason = getattr(record, "unmatched_reason", "no match")

            prefix = f"#{position} " if position is not None else "#? "
            self.report_file.write(f"{prefix}{title}\n")
            self.report_file.write(f"{reason}\n\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """Filter that only allows ERROR and CRITICAL level records."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def _file_handler(path: Path, level: int) -> logging.FileHandler:
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    return handler


def setup_logging(output_dir: Path) -> Path:
    """
    Configure the root logger for one import run.

    Call once, after the configuration is loaded. Existing root handlers
    are replaced, so calling it again starts a fresh set of files.

    Args:
        output_dir: Directory where the logs/ subdirectory is created.

    Returns:
        Path to the logs directory for this run.

    Handlers installed:
        - console: TqdmLoggingHandler, INFO and above, colored
        - log_full_<timestamp>.log: DEBUG and above
        - log_errors_<timestamp>.log: ERROR and above
        - unmatched_titles_<timestamp>.log: unmatched title report
    """
    logs_dir = output_dir / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(ColoredConsoleFormatter())

    full_handler = _file_handler(logs_dir / f"{LOG_FULL_PREFIX}_{stamp}.log", logging.DEBUG)

    error_handler = _file_handler(logs_dir / f"{LOG_ERRORS_PREFIX}_{stamp}.log", logging.DEBUG)
    error_handler.addFilter(ErrorOnlyFilter())

    unmatched_handler = UnmatchedTitleHandler(logs_dir / f"{UNMATCHED_TITLES_PREFIX}_{stamp}.log")
    unmatched_handler.open()

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()
    for handler in (console_handler, full_handler, error_handler, unmatched_handler):
        root.addHandler(handler)

    return logs_dir


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Note:
        Loggers obtained before setup_logging() is called have no handlers
        of their own and only propagate to the root logger.
    """
    return logging.getLogger(name)


def format_matched_message(title: str, artist: str, record_title: str, tier: str) -> str:
    """Format a 'Matched' line with colors."""
    return (
        f"{Colors.GREEN}Matched{Colors.RESET}: "
        f"{title} -> {artist} - {record_title} "
        f"{Colors.CYAN}[{tier}]{Colors.RESET}"
    )


def format_summary_message(playlist_title: str, matched: int, total: int) -> str:
    """Format the end-of-import summary line."""
    unmatched = total - matched
    return (
        f"{Colors.BOLD}{playlist_title}{Colors.RESET}: "
        f"{Colors.GREEN}{matched}{Colors.RESET} matched, "
        f"{Colors.RED}{unmatched}{Colors.RESET} unmatched "
        f"of {total} videos"
    )


def log_unmatched_title(
    logger: logging.Logger,
    title: str,
    reason: str,
    position: int | None = None
) -> None:
    """
    Log a playlist title that could not be matched.

    Attaches the extra fields UnmatchedTitleHandler uses to write
    unmatched_titles.log. Logged at DEBUG so the console stays quiet;
    the file handlers still receive it.

    Args:
        logger: The logger to use for the message.
        title: Raw playlist title.
        reason: "no match" or "duplicate of <record title>".
        position: 1-based playlist position.
    """
    logger.debug(
        f"Unmatched: {title} ({reason})",
        extra={
            "unmatched_title": title,
            "unmatched_position": position,
            "unmatched_reason": reason,
        }
    )


def shutdown_logging() -> None:
    """
    Flush, close and detach all root handlers.

    Typically called in a finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except OSError:
            pass
        root_logger.removeHandler(handler)
