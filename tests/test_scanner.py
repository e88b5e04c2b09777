"""Test the local library scanner"""

import os
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock, patch

import mutagen
import pytest

from playlist_importer.core.exceptions import LibraryScanError
from playlist_importer.library.scanner import (
    UNKNOWN_ALBUM,
    UNKNOWN_ARTIST,
    LibraryScanner,
    file_id,
    read_record,
)


def make_audio(tags, length=None):
    """Mock of an easy-tags mutagen file"""
    audio = Mock()
    audio.get.side_effect = lambda key, default=None: tags.get(key, default)
    audio.info.length = length
    return audio


def write_file(path, size=2048):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\0" * size)
    return path


@pytest.fixture
def music_dir(tmp_path):
    root = tmp_path / "music"
    write_file(root / "b" / "Beta - Two.mp3")
    write_file(root / "a" / "Alpha - One.flac")
    write_file(root / "Cover.jpg")
    write_file(root / "notification.ogg", size=100)
    write_file(root / "LOUD.MP3")
    return root


class TestLibraryScanner:
    """Test LibraryScanner.scan()"""

    @patch("playlist_importer.library.scanner.mutagen.File", return_value=None)
    def test_filters_and_sorted_order(self, mock_file, music_dir):
        records = LibraryScanner(music_dir, min_file_size=1024).scan()

        assert [os.path.basename(r.file_path) for r in records] == [
            "LOUD.MP3",
            "Alpha - One.flac",
            "Beta - Two.mp3",
        ]

    @patch("playlist_importer.library.scanner.mutagen.File", return_value=None)
    def test_size_threshold_is_exclusive(self, mock_file, tmp_path):
        write_file(tmp_path / "exact.mp3", size=1024)
        write_file(tmp_path / "bigger.mp3", size=1025)

        records = LibraryScanner(tmp_path, min_file_size=1024).scan()

        assert [r.title for r in records] == ["bigger"]

    @patch("playlist_importer.library.scanner.mutagen.File", return_value=None)
    def test_extension_filter(self, mock_file, music_dir):
        records = LibraryScanner(music_dir, extensions=[".flac"], min_file_size=0).scan()

        assert [r.title for r in records] == ["Alpha - One"]

    @patch("playlist_importer.library.scanner.mutagen.File", return_value=None)
    def test_hard_links_yield_one_record(self, mock_file, tmp_path):
        original = write_file(tmp_path / "a.mp3")
        os.link(original, tmp_path / "b.mp3")

        records = LibraryScanner(tmp_path, min_file_size=0).scan()

        assert len(records) == 1
        assert records[0].id == file_id(original.stat())

    @patch("playlist_importer.library.scanner.mutagen.File", return_value=None)
    def test_same_inode_on_two_devices(self, mock_file, tmp_path):
        write_file(tmp_path / "disk1" / "a.mp3")
        write_file(tmp_path / "disk2" / "b.mp3")
        real_stat = Path.stat

        def fake_stat(path, *args, **kwargs):
            if path.suffix != ".mp3":
                return real_stat(path, *args, **kwargs)
            device = 1 if path.parent.name == "disk1" else 2
            return SimpleNamespace(st_size=2048, st_dev=device, st_ino=42)

        with patch.object(Path, "stat", autospec=True, side_effect=fake_stat):
            records = LibraryScanner(tmp_path, min_file_size=0).scan()

        assert [r.title for r in records] == ["a", "b"]
        assert records[0].id != records[1].id

    @patch("playlist_importer.library.scanner.mutagen.File", return_value=None)
    def test_ids_are_unique(self, mock_file, music_dir):
        records = LibraryScanner(music_dir, min_file_size=0).scan()
        ids = [r.id for r in records]

        assert len(ids) == len(set(ids))

    def test_missing_directory(self, tmp_path):
        with pytest.raises(LibraryScanError) as exc_info:
            LibraryScanner(tmp_path / "nope").scan()

        assert exc_info.value.details["directory"] == str(tmp_path / "nope")


class TestReadRecord:
    """Test read_record()"""

    def test_tags(self, tmp_path):
        path = write_file(tmp_path / "file.m4a")
        audio = make_audio(
            {"title": ["Paranoid Android"], "artist": ["Radiohead"], "album": ["OK Computer"]},
            length=383.5,
        )

        with patch("playlist_importer.library.scanner.mutagen.File", return_value=audio) as mock_file:
            record = read_record(path, record_id=7, size=2048)

        mock_file.assert_called_once_with(path, easy=True)
        assert record.id == 7
        assert record.title == "Paranoid Android"
        assert record.artist == "Radiohead"
        assert record.album == "OK Computer"
        assert record.duration_ms == 383500
        assert record.size == 2048
        assert record.file_path == str(path.resolve())

    def test_missing_tags_fall_back(self, tmp_path):
        path = write_file(tmp_path / "Artist - Song.mp3")
        audio = make_audio({"title": [""], "artist": []}, length=None)

        with patch("playlist_importer.library.scanner.mutagen.File", return_value=audio):
            record = read_record(path, record_id=1, size=2048)

        assert record.title == "Artist - Song"
        assert record.artist == UNKNOWN_ARTIST
        assert record.album == UNKNOWN_ALBUM
        assert record.duration_ms == 0

    def test_unreadable_file_still_scanned(self, tmp_path):
        path = write_file(tmp_path / "Broken.mp3")

        with patch(
            "playlist_importer.library.scanner.mutagen.File",
            side_effect=mutagen.MutagenError("can't sync to MPEG frame"),
        ):
            record = read_record(path, record_id=1, size=2048)

        assert record.title == "Broken"
        assert record.artist == UNKNOWN_ARTIST


class TestFileId:
    """Test file_id()"""

    def test_device_is_part_of_the_id(self):
        first = SimpleNamespace(st_dev=1, st_ino=42)
        second = SimpleNamespace(st_dev=2, st_ino=42)

        assert file_id(first) != file_id(second)
        assert file_id(first) == file_id(SimpleNamespace(st_dev=1, st_ino=42))
