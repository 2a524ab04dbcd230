# streamshelf/repositories/base.py
from __future__ import annotations

import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from streamshelf.store import Store

Row = Dict[str, Any]


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow_iso() -> str:
    # 2024-05-01T12:00:00.000Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonRepository:
    """Array-as-table over one store file."""

    name: str = ""

    def __init__(self, store: Store) -> None:
        self.store = store

    def all(self) -> List[Row]:
        return self.store.load(self.name)

    def find(self, **match: Any) -> Optional[Row]:
        for row in self.all():
            if all(row.get(k) == v for k, v in match.items()):
                return row
        return None

    def filter(self, **match: Any) -> List[Row]:
        return [r for r in self.all() if all(r.get(k) == v for k, v in match.items())]

    @contextmanager
    def editing(self) -> Iterator[List[Row]]:
        """Read-modify-write under the file lock; saved only if the body succeeds."""
        with self.store.locked(self.name):
            rows = self.store.load(self.name)
            yield rows
            self.store.save(self.name, rows)


class Abort(Exception):
    """Raised inside editing() to leave the file untouched."""
