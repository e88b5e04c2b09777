"""Test configuration loading and validation"""

from pathlib import Path

import pytest

from playlist_importer.core.config import (
    DEFAULT_AUDIO_EXTENSIONS,
    DEFAULT_MIN_FILE_SIZE_KB,
    load_config,
)
from playlist_importer.core.exceptions import ConfigError


MINIMAL_CONFIG = """
youtube:
  api_key: "  test-key  "
library:
  directory: "{library}"
output:
  directory: "{output}"
"""


def write_config(temp_dir, text):
    config_path = temp_dir / "config.yaml"
    config_path.write_text(text, encoding="utf-8")
    return config_path


@pytest.fixture
def minimal_config(tmp_path):
    return MINIMAL_CONFIG.format(library=tmp_path / "music", output=tmp_path / "out")


class TestLoadConfig:
    """Test load_config()"""

    def test_defaults(self, tmp_path, minimal_config):
        config = load_config(write_config(tmp_path, minimal_config))

        assert config.youtube.api_key == "test-key"
        assert config.youtube.page_size == 50
        assert config.youtube.timeout == 30.0
        assert config.library.directory == (tmp_path / "music").resolve()
        assert config.library.min_file_size == DEFAULT_MIN_FILE_SIZE_KB * 1024
        assert config.library.extensions == DEFAULT_AUDIO_EXTENSIONS
        assert config.output.directory == (tmp_path / "out").resolve()
        assert config.output.export_directory == (tmp_path / "out").resolve() / "playlists"

    def test_explicit_values(self, tmp_path):
        text = f"""
youtube:
  api_key: key
  page_size: 20
  timeout: 7.5
library:
  directory: "{tmp_path}"
  min_file_size_kb: 0
  extensions: ["MP3", ".Flac"]
output:
  directory: "{tmp_path / 'out'}"
  export_directory: "{tmp_path / 'm3u'}"
"""
        config = load_config(write_config(tmp_path, text))

        assert config.youtube.page_size == 20
        assert config.youtube.timeout == 7.5
        assert config.library.min_file_size == 0
        assert config.library.extensions == (".mp3", ".flac")
        assert config.output.export_directory == (tmp_path / "m3u").resolve()

    def test_home_is_expanded(self, tmp_path):
        text = MINIMAL_CONFIG.format(library="~/Music", output=tmp_path)
        config = load_config(write_config(tmp_path, text))

        assert config.library.directory == (Path.home() / "Music").resolve()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.yaml")

        assert "not found" in exc_info.value.message

    def test_default_location_is_cwd(self, tmp_path, minimal_config, monkeypatch):
        write_config(tmp_path, minimal_config)
        monkeypatch.chdir(tmp_path)

        assert load_config().youtube.api_key == "test-key"

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(write_config(tmp_path, "youtube: [unclosed"))

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(write_config(tmp_path, "- just\n- a list\n"))

    @pytest.mark.parametrize("section", ["youtube", "library", "output"])
    def test_missing_section(self, tmp_path, minimal_config, section):
        lines = minimal_config.splitlines()
        start = lines.index(f"{section}:")
        del lines[start:start + 2]

        with pytest.raises(ConfigError) as exc_info:
            load_config(write_config(tmp_path, "\n".join(lines)))

        assert exc_info.value.details["missing_section"] == section

    @pytest.mark.parametrize("replacement", [
        'api_key: ""',
        "api_key: 12345",
    ])
    def test_invalid_api_key(self, tmp_path, minimal_config, replacement):
        text = minimal_config.replace('api_key: "  test-key  "', replacement)

        with pytest.raises(ConfigError):
            load_config(write_config(tmp_path, text))

    @pytest.mark.parametrize("value", ["0", "51", "true", "ten"])
    def test_invalid_page_size(self, tmp_path, minimal_config, value):
        text = minimal_config.replace(
            'api_key: "  test-key  "', f'api_key: key\n  page_size: {value}'
        )

        with pytest.raises(ConfigError) as exc_info:
            load_config(write_config(tmp_path, text))

        assert exc_info.value.details["field"] == "youtube.page_size"

    @pytest.mark.parametrize("value", ["0", "-1", "false"])
    def test_invalid_timeout(self, tmp_path, minimal_config, value):
        text = minimal_config.replace(
            'api_key: "  test-key  "', f'api_key: key\n  timeout: {value}'
        )

        with pytest.raises(ConfigError):
            load_config(write_config(tmp_path, text))

    @pytest.mark.parametrize("extra", [
        "min_file_size_kb: -5",
        "extensions: []",
        "extensions: .mp3",
    ])
    def test_invalid_library_fields(self, tmp_path, extra):
        text = f"""
youtube:
  api_key: key
library:
  directory: "{tmp_path}"
  {extra}
output:
  directory: "{tmp_path}"
"""
        with pytest.raises(ConfigError):
            load_config(write_config(tmp_path, text))
