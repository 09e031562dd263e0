"""Tests for the JSON file state adapter."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from diary.adapters.json_file import JsonFileRepository
from diary.errors import CorruptStateError, StateNotFoundError, StorageIOError


class TestRead:
    def test_missing_file(self, tmp_path):
        repo = JsonFileRepository(tmp_path / "none.json")
        with pytest.raises(StateNotFoundError):
            repo.read()

    def test_reads_object(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text('{"entries": [], "next_id": 1}')
        assert JsonFileRepository(path).read() == {"entries": [], "next_id": 1}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("entries: []")
        with pytest.raises(CorruptStateError, match="not valid JSON"):
            JsonFileRepository(path).read()

    def test_non_object(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("[1, 2]")
        with pytest.raises(CorruptStateError, match="JSON object"):
            JsonFileRepository(path).read()

    def test_invalid_utf8_is_corrupt(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_bytes(b'{"entries": [], "next_id": 1, "x": "\xff\xfe"}')
        with pytest.raises(CorruptStateError, match="UTF-8"):
            JsonFileRepository(path).read()

    def test_unreadable_is_io_error(self, tmp_path):
        # A directory in place of the file fails with an OSError other than absence
        path = tmp_path / "state.json"
        path.mkdir()
        with pytest.raises(StorageIOError):
            JsonFileRepository(path).read()

    def test_expands_user(self):
        repo = JsonFileRepository("~/diary.json")
        assert repo.path == Path.home() / "diary.json"


class TestWrite:
    def test_writes_json(self, tmp_path):
        path = tmp_path / "state.json"
        JsonFileRepository(path).write({"entries": [], "next_id": 4})
        assert json.loads(path.read_text()) == {"entries": [], "next_id": 4}

    def test_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "state.json"
        JsonFileRepository(path).write({"entries": [], "next_id": 1})
        assert path.exists()

    def test_replaces_whole_snapshot(self, tmp_path):
        path = tmp_path / "state.json"
        repo = JsonFileRepository(path)
        repo.write({"entries": [{"id": 1}], "next_id": 2})
        repo.write({"entries": [], "next_id": 2})
        assert json.loads(path.read_text()) == {"entries": [], "next_id": 2}
        assert not (tmp_path / "state.json.tmp").exists()

    def test_keeps_unicode(self, tmp_path):
        path = tmp_path / "state.json"
        JsonFileRepository(path).write({"content": "café 日記"})
        assert "café 日記" in path.read_text(encoding="utf-8")

    def test_write_failure_is_io_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        repo = JsonFileRepository(blocker / "state.json")
        with pytest.raises(StorageIOError):
            repo.write({"entries": [], "next_id": 1})

    def test_failed_replace_removes_temp_file(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text('{"entries": [], "next_id": 1}')
        repo = JsonFileRepository(path)

        with patch("diary.adapters.json_file.os.replace", side_effect=OSError("busy")):
            with pytest.raises(StorageIOError, match="busy"):
                repo.write({"entries": [], "next_id": 2})

        assert not (tmp_path / "state.json.tmp").exists()
        assert json.loads(path.read_text())["next_id"] == 1
