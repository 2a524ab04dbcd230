# streamshelf/repositories/catalog.py
from __future__ import annotations

from typing import Any, Dict, Optional, Set

from streamshelf import store
from streamshelf.repositories.base import Abort, JsonRepository, Row, new_id, utcnow_iso

ITEM_TYPES = ("show", "movie", "episode")

# Optional fields and the value they take when a client leaves them out
ITEM_DEFAULTS: Dict[str, Any] = {
    "description": "",
    "coverUrl": "",
    "videoUrl": "",
    "showId": None,
    "season": None,
    "episodeNumber": None,
}

IMMUTABLE_FIELDS = ("id", "createdAt")


def _with_defaults(item: Row) -> Row:
    for key, default in ITEM_DEFAULTS.items():
        if item.get(key) in (None, ""):
            item[key] = default
    return item


class CatalogRepository(JsonRepository):
    name = store.CATALOG

    def get(self, item_id: str) -> Optional[Row]:
        return self.find(id=item_id)

    def exists(self, item_id: str) -> bool:
        return self.get(item_id) is not None

    def ids(self) -> Set[str]:
        return {i["id"] for i in self.all()}

    def add(self, data: Dict[str, Any]) -> Row:
        item = _with_defaults({k: v for k, v in data.items() if k not in IMMUTABLE_FIELDS})
        item = {"id": new_id(), **item, "createdAt": utcnow_iso()}
        with self.editing() as items:
            items.append(item)
        return item

    def update(self, item_id: str, patch: Dict[str, Any]) -> Optional[Row]:
        changes = {k: v for k, v in patch.items() if k not in IMMUTABLE_FIELDS}
        merged: Optional[Row] = None
        try:
            with self.editing() as items:
                for idx, existing in enumerate(items):
                    if existing.get("id") == item_id:
                        merged = _with_defaults({**existing, **changes, "id": item_id})
                        items[idx] = merged
                        break
                else:
                    raise Abort()
        except Abort:
            return None
        return merged

    def delete(self, item_id: str) -> bool:
        try:
            with self.editing() as items:
                remaining = [i for i in items if i.get("id") != item_id]
                if len(remaining) == len(items):
                    raise Abort()
                items[:] = remaining
        except Abort:
            return False
        return True
