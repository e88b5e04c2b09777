"""Test the progress display callback"""

from playlist_importer.core.progress import (
    ImportProgressDisplay,
    LoadingProgressBar,
    MatchingProgressBar,
)
from playlist_importer.importer import ImportPhase, ProgressEvent


class TestProgressBars:
    """Test the phase bars"""

    def test_loading_total_never_below_fetched(self):
        bar = LoadingProgressBar()
        with bar:
            bar.update(50, 40)

        assert bar.completed == 50
        assert bar.total == 50
        assert not bar.started

    def test_matching_counts(self):
        bar = MatchingProgressBar(total=10)
        with bar:
            bar.update(4, 3)

        assert bar.matched == 3
        assert bar.unmatched == 1


class TestImportProgressDisplay:
    """Test ImportProgressDisplay as a ProgressEvent callback"""

    def test_phase_switch(self):
        with ImportProgressDisplay() as display:
            display(ProgressEvent(ImportPhase.LOADING, 50, 120))
            display(ProgressEvent(ImportPhase.LOADING, 100, 100))
            assert display.loading.started

            display(ProgressEvent(ImportPhase.MATCHING, 1, 100, 1))
            assert not display.loading.started
            assert display.matching.started
            assert display.matching.total == 100

        assert display.loading.completed == 100
        assert display.matching.matched == 1
        assert not display.matching.started

    def test_matching_without_loading(self):
        with ImportProgressDisplay() as display:
            display(ProgressEvent(ImportPhase.MATCHING, 1, 1, 0))

        assert display.loading is None
        assert display.matching.unmatched == 1
