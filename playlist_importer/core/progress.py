"""
Progress bar handling for playlist-importer using Rich library.

This module renders the two phases of an import run as styled progress
bars. The import core only emits ProgressEvents; ImportProgressDisplay is
the callback that turns them into bars, so the core never depends on it.

Phases:
    - LOADING (playlist pages): LoadingProgressBar
    - MATCHING (title selection): MatchingProgressBar

Usage:
    from playlist_importer.core.progress import ImportProgressDisplay

    with ImportProgressDisplay() as display:
        result = import_playlist(url, records, client, on_progress=display)
"""

from abc import ABC, abstractmethod
from typing import Optional

from rich import get_console
from rich.progress import BarColumn, Progress, ProgressColumn, Task, TaskID
from rich.text import Text
from rich.theme import Theme

from playlist_importer.importer import ImportPhase, ProgressEvent


# =============================================================================
# Common Theme
# =============================================================================

PROGRESS_THEME = Theme({
    "bar.back": "grey23",
    "bar.complete": "rgb(204,0,0)",  # YouTube red
    "bar.finished": "rgb(114,156,31)",
    "bar.pulse": "rgb(204,0,0)",
    "progress.percentage": "white",
})

DESCRIPTION_WIDTH = 15
STATUS_WIDTH = 35


# =============================================================================
# Custom Column
# =============================================================================

class SizedTextColumn(ProgressColumn):
    """Markup column padded or cut (with an ellipsis) to a fixed width."""

    def __init__(self, text_format: str, width: int, style: str = "none") -> None:
        self.text_format = text_format
        self.width = width
        self.style = style
        super().__init__()

    def render(self, task: Task) -> Text:
        text = Text.from_markup(self.text_format.format(task=task), style=self.style)
        text.truncate(max_width=self.width, overflow="ellipsis", pad=True)
        return text


# =============================================================================
# Base Progress Bar
# =============================================================================

class BaseProgressBar(ABC):
    """
    One Rich task shown on the shared console under PROGRESS_THEME.

    The theme is pushed on start() and popped on stop(), so a bar that was
    never started leaves the console untouched. Subclasses provide the
    status column text and an update() with their own counters.
    """

    def __init__(self, total: int, description: str):
        self.total = total
        self.description = description
        self.completed = 0

        self.console = get_console()
        self.progress = Progress(
            SizedTextColumn("[white]{task.description}", width=DESCRIPTION_WIDTH),
            SizedTextColumn("{task.fields[status]}", width=STATUS_WIDTH, style="white"),
            BarColumn(bar_width=40, finished_style="green"),
            "[progress.percentage]{task.percentage:>3.0f}%",
            console=self.console,
            refresh_per_second=10,
        )
        self.task_id: Optional[TaskID] = None

    def __enter__(self) -> "BaseProgressBar":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    @property
    def started(self) -> bool:
        return self.task_id is not None

    def start(self) -> None:
        if self.started:
            return
        self.console.push_theme(PROGRESS_THEME)
        self.progress.start()
        self.task_id = self.progress.add_task(
            self.description,
            total=self.total,
            status=self._status_text(),
        )

    def stop(self) -> None:
        if not self.started:
            return
        self.progress.stop()
        self.console.pop_theme()
        self.task_id = None

    def _refresh(self) -> None:
        if self.task_id is not None:
            self.progress.update(
                self.task_id,
                total=self.total,
                completed=self.completed,
                status=self._status_text(),
            )

    @abstractmethod
    def _status_text(self) -> str:
        """Rich markup for the status column."""

    @abstractmethod
    def update(self, *args, **kwargs) -> None:
        """Set the phase counters and redraw."""


# =============================================================================
# LOADING Progress Bar
# =============================================================================

class LoadingProgressBar(BaseProgressBar):
    """
    Progress bar for the playlist fetch.

    The total is YouTube's estimate and is replaced on every page.

    Example:
        Loading         ↓ 150 / 212              ━━━━━━━━━━━━━━━━━  71%
    """

    def __init__(self, total: int = 0):
        super().__init__(total=total, description="Loading")

    def _status_text(self) -> str:
        return f"[cyan]↓ {self.completed}[/cyan] / {self.total}"

    def update(self, fetched: int, total: int) -> None:
        self.completed = fetched
        self.total = max(total, fetched)
        self._refresh()


# =============================================================================
# MATCHING Progress Bar
# =============================================================================

class MatchingProgressBar(BaseProgressBar):
    """
    Progress bar for title matching.

    The status column counts matched titles (✓) and titles left without
    a record (✗), duplicates included.

    Example:
        Matching        ✓ 45  ✗ 2                ━━━━━━━━━━━━━━━━━  47%
    """

    def __init__(self, total: int):
        super().__init__(total=total, description="Matching")
        self.matched = 0
        self.unmatched = 0

    def _status_text(self) -> str:
        return f"[green]✓ {self.matched}[/green]  [red]✗ {self.unmatched}[/red]"

    def update(self, processed: int, matched: int) -> None:
        """
        Set running counts.

        Args:
            processed: Titles processed so far.
            matched: Titles matched so far.
        """
        self.completed = processed
        self.matched = matched
        self.unmatched = processed - matched
        self._refresh()


# =============================================================================
# ProgressEvent callback
# =============================================================================

class ImportProgressDisplay:
    """
    ProgressEvent callback rendering both phases.

    The LOADING bar is created on the first LOADING event and stopped when
    the first MATCHING event arrives; the MATCHING bar is sized from that
    event's total. Leaving the context stops whichever bar is active.

    Example:
        with ImportProgressDisplay() as display:
            orchestrator = ImportOrchestrator(fetcher, records, on_progress=display)
            result = orchestrator.run(url)
    """

    def __init__(self) -> None:
        self.loading: Optional[LoadingProgressBar] = None
        self.matching: Optional[MatchingProgressBar] = None

    def __enter__(self) -> "ImportProgressDisplay":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __call__(self, event: ProgressEvent) -> None:
        if event.phase is ImportPhase.LOADING:
            if self.loading is None:
                self.loading = LoadingProgressBar(total=event.total)
                self.loading.start()
            self.loading.update(event.current, event.total)
            return

        if self.matching is None:
            if self.loading is not None:
                self.loading.stop()
            self.matching = MatchingProgressBar(total=event.total)
            self.matching.start()
        self.matching.update(event.current, event.matched)

    def close(self) -> None:
        """Stop every bar that is still running."""
        for bar in (self.loading, self.matching):
            if bar is not None:
                bar.stop()
