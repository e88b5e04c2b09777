"""Test the command-line interface"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from playlist_importer import __version__
from playlist_importer.cli import cli
from playlist_importer.core.exceptions import SourceUnavailable
from playlist_importer.youtube.models import FetchedPlaylist


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    """Config pointing at a one-song library under tmp_path"""
    music = tmp_path / "music"
    music.mkdir()
    (music / "Artist - Song.mp3").write_bytes(b"\0" * 64)

    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        f"""
youtube:
  api_key: test-key
library:
  directory: "{music}"
  min_file_size_kb: 0
output:
  directory: "{tmp_path / 'out'}"
""",
        encoding="utf-8",
    )
    return config_path


class TestCli:
    """Test cli() exit codes and output"""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_url_shows_help(self, runner):
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "--url" in result.output

    def test_missing_config(self, runner, tmp_path):
        result = runner.invoke(
            cli, ["--url", "https://www.youtube.com/playlist?list=PL1",
                  "--config", str(tmp_path / "missing.yaml")]
        )

        assert result.exit_code == 1

    def test_invalid_url(self, runner, config_file, reset_logging):
        result = runner.invoke(
            cli, ["--url", "https://www.youtube.com/watch?v=abc", "--config", str(config_file)]
        )

        assert result.exit_code == 2

    def test_missing_library(self, runner, config_file, tmp_path, reset_logging):
        result = runner.invoke(
            cli, ["--url", "https://www.youtube.com/playlist?list=PL1",
                  "--config", str(config_file), "--library", str(tmp_path / "nope")]
        )

        assert result.exit_code == 4

    @patch("playlist_importer.cli.import_playlist")
    def test_youtube_error(self, mock_import, runner, config_file, reset_logging):
        mock_import.side_effect = SourceUnavailable(
            "YouTube returned HTTP 403", status_code=403, is_auth_error=True
        )

        result = runner.invoke(
            cli, ["--url", "https://www.youtube.com/playlist?list=PL1", "--config", str(config_file)]
        )

        assert result.exit_code == 3

    @patch("playlist_importer.library.scanner.mutagen.File", return_value=None)
    @patch("playlist_importer.importer.PaginatedFetcher.fetch")
    def test_import_writes_m3u(self, mock_fetch, mock_file, runner, config_file, tmp_path,
                               reset_logging):
        mock_fetch.return_value = FetchedPlaylist(
            playlist_id="PL1",
            title="Road Trip",
            titles=("Artist - Song (Official Video)", "Unknown Title Here"),
        )

        result = runner.invoke(
            cli, ["--url", "https://www.youtube.com/playlist?list=PL1", "--config", str(config_file)]
        )

        assert result.exit_code == 0
        m3u_path = tmp_path / "out" / "playlists" / "Road Trip.m3u"
        lines = m3u_path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "#EXTM3U"
        assert lines[2].endswith("Artist - Song.mp3")

    @patch("playlist_importer.library.scanner.mutagen.File", return_value=None)
    @patch("playlist_importer.importer.PaginatedFetcher.fetch")
    def test_no_export(self, mock_fetch, mock_file, runner, config_file, tmp_path, reset_logging):
        mock_fetch.return_value = FetchedPlaylist(
            playlist_id="PL1", title="Road Trip", titles=("Artist - Song",)
        )

        result = runner.invoke(
            cli, ["--url", "https://www.youtube.com/playlist?list=PL1",
                  "--config", str(config_file), "--no-export"]
        )

        assert result.exit_code == 0
        assert not (tmp_path / "out" / "playlists").exists()
