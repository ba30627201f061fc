"""Key-value backends for persisted records (JSON files + fcntl.flock + atomic write)."""

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Protocol

from periodic_progress.errors import PersistenceWriteError


class KeyValueBackend(Protocol):
    """Synchronous blob store keyed by a stable string."""

    def put(self, key: str, data: bytes) -> None: ...

    def get(self, key: str) -> bytes | None: ...


class InMemoryBackend:
    """Process-local backend; contents are lost on exit."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    def put(self, key: str, data: bytes) -> None:
        self._blobs[key] = bytes(data)

    def get(self, key: str) -> bytes | None:
        return self._blobs.get(key)


class JsonFileBackend:
    """Stores each key as ``<directory>/<key>.json``.

    Writes land in a temp file first and are moved into place with
    ``os.replace``, so a reader sees either the old or the new blob.

    Args:
        directory: Folder holding the record files. Created on first write.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        with open(path, "rb") as f:
            fcntl.flock(f, fcntl.LOCK_SH)
            data = f.read()
            fcntl.flock(f, fcntl.LOCK_UN)
        return data

    def put(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        tmp = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb", dir=self.directory, delete=False, suffix=".json"
            ) as tmp:
                tmp.write(data)
            os.replace(tmp.name, path)
        except OSError as e:
            if tmp is not None:
                Path(tmp.name).unlink(missing_ok=True)
            raise PersistenceWriteError(f"could not write {path}: {e}") from e
