"""Tests for the file-backed state storage."""

import pytest

from calorie_tracker.adapters.file_storage import FileStateStorage
from calorie_tracker.services.store import PersistedStore, StorageError


def test_read_write_delete_round_trip(tmp_path) -> None:
    storage = FileStateStorage(tmp_path / "state")

    assert storage.read("kalorie_entries") is None
    assert storage.keys() == []

    storage.write("kalorie_entries", "[]")
    storage.write("kalorie_favorites", '["Butter"]')

    assert storage.read("kalorie_entries") == "[]"
    assert storage.keys() == ["kalorie_entries", "kalorie_favorites"]

    storage.delete("kalorie_entries")
    storage.delete("kalorie_entries")

    assert storage.keys() == ["kalorie_favorites"]


def test_keys_with_path_characters_are_escaped(tmp_path) -> None:
    storage = FileStateStorage(tmp_path)

    storage.write("kalorie_a/b", "1")

    assert storage.keys() == ["kalorie_a/b"]
    assert storage.read("kalorie_a/b") == "1"


def test_write_failure_raises_storage_error(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    storage = FileStateStorage(blocker)

    with pytest.raises(StorageError):
        storage.write("kalorie_entries", "[]")


def test_store_persists_through_files(tmp_path) -> None:
    storage = FileStateStorage(tmp_path)
    store = PersistedStore(storage=storage)
    store.toggle_favorite("Butter")

    reloaded = PersistedStore(storage=FileStateStorage(tmp_path))

    assert reloaded.favorites == ["Butter"]
