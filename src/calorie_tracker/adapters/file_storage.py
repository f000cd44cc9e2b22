"""File-backed implementation of the state storage port."""

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote

from calorie_tracker.services.store import StateStorage, StorageError

_SUFFIX = ".json"


@dataclass
class FileStateStorage(StateStorage):
    """Stores each key as its own JSON file inside a directory."""

    directory: Path

    def read(self, key: str) -> str | None:
        """Return a key's stored text, if the file exists."""
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Failed to read {key}") from exc

    def write(self, key: str, value: str) -> None:
        """Replace a key's file atomically."""
        path = self._path(key)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StorageError(f"Failed to write {key}") from exc

    def delete(self, key: str) -> None:
        """Remove a key's file if present."""
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to delete {key}") from exc

    def keys(self) -> list[str]:
        """Return keys for every stored file."""
        if not self.directory.exists():
            return []
        try:
            return sorted(
                unquote(path.name[: -len(_SUFFIX)])
                for path in self.directory.iterdir()
                if path.is_file() and path.name.endswith(_SUFFIX)
            )
        except OSError as exc:
            raise StorageError("Failed to list keys") from exc

    def _path(self, key: str) -> Path:
        return self.directory / f"{quote(key, safe='')}{_SUFFIX}"
