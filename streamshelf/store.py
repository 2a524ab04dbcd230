# streamshelf/store.py
"""
Flat-file JSON storage.

Each entity type lives in one file holding a single top-level JSON array.
``read_json`` / ``write_json`` are the raw primitives; ``JsonFileStore`` wraps
them behind the ``Store`` interface used by the repositories, and adds a
per-file lock so a read-modify-write sequence inside ``locked()`` cannot
interleave with another one in the same process. ``MemoryStore`` is the
drop-in used by tests.
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Protocol, Union

PathLike = Union[str, Path]

# Entity files under the data directory
USERS = "users.json"
CATALOG = "shows.json"
FAVORITES = "favorites.json"
LISTS = "lists.json"
FOLLOWS = "follows.json"
SHARES = "shares.json"
RATINGS = "ratings.json"
PROFILES = "profiles.json"
PARENTAL_SETTINGS = "parental_settings.json"


def _resolve(path: PathLike, root: PathLike) -> Path:
    return Path(root) / path


def read_json(path: PathLike, root: PathLike = ".") -> List[Any]:
    """Return the array stored at ``root/path``.

    A missing file is created (with parent directories) holding ``[]``.
    Any other I/O or decoding failure propagates to the caller.
    """
    file = _resolve(path, root)
    try:
        raw = file.read_text(encoding="utf-8")
    except FileNotFoundError:
        file.parent.mkdir(parents=True, exist_ok=True)
        try:
            # "x" so a concurrent creator's content is never clobbered
            with file.open("x", encoding="utf-8") as f:
                f.write("[]")
        except FileExistsError:
            return read_json(path, root)
        return []
    return json.loads(raw or "[]")


def write_json(path: PathLike, content: Any, root: PathLike = ".") -> None:
    """Pretty-print ``content`` to ``root/path``, replacing the whole file."""
    file = _resolve(path, root)
    file.parent.mkdir(parents=True, exist_ok=True)
    data = json.dumps(content, indent=2, ensure_ascii=False)
    fd, tmp = tempfile.mkstemp(dir=str(file.parent), prefix=f".{file.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp, file)
    except BaseException:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass
        raise


class Store(Protocol):
    def load(self, name: str) -> List[Dict[str, Any]]: ...

    def save(self, name: str, rows: List[Dict[str, Any]]) -> None: ...

    def locked(self, name: str) -> Any: ...


class _LockTable:
    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}

    def get(self, name: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = threading.RLock()
            return lock

    @contextmanager
    def hold(self, name: str) -> Iterator[None]:
        with self.get(name):
            yield


class JsonFileStore:
    """``Store`` backed by one JSON file per entity under ``root``."""

    def __init__(self, root: PathLike) -> None:
        self.root = Path(root)
        self._locks = _LockTable()

    def load(self, name: str) -> List[Dict[str, Any]]:
        with self._locks.hold(name):
            return read_json(name, self.root)

    def save(self, name: str, rows: List[Dict[str, Any]]) -> None:
        with self._locks.hold(name):
            write_json(name, rows, self.root)

    def locked(self, name: str):
        return self._locks.hold(name)


class MemoryStore:
    """In-memory ``Store``; every load hands out a deep copy."""

    def __init__(self, initial: Dict[str, List[Dict[str, Any]]] | None = None) -> None:
        self._data: Dict[str, List[Dict[str, Any]]] = copy.deepcopy(initial or {})
        self._locks = _LockTable()

    def load(self, name: str) -> List[Dict[str, Any]]:
        with self._locks.hold(name):
            return copy.deepcopy(self._data.setdefault(name, []))

    def save(self, name: str, rows: List[Dict[str, Any]]) -> None:
        with self._locks.hold(name):
            self._data[name] = copy.deepcopy(rows)

    def locked(self, name: str):
        return self._locks.hold(name)
