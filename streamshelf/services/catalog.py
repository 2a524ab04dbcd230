# streamshelf/services/catalog.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from streamshelf.errors import AuthError, NotFoundError, ValidationError
from streamshelf.repositories import CatalogRepository
from streamshelf.repositories.catalog import ITEM_TYPES
from streamshelf.security import Identity
from streamshelf.store import Store

log = logging.getLogger(__name__)


def _require_actor(actor: Optional[Identity]) -> Identity:
    if actor is None:
        raise AuthError("Missing bearer token")
    return actor


def _check_type(value: Any) -> None:
    if value not in ITEM_TYPES:
        raise ValidationError(f"type must be one of: {', '.join(ITEM_TYPES)}")


class CatalogService:
    def __init__(self, store: Store) -> None:
        self.items = CatalogRepository(store)

    def list(self, type: Optional[str] = None, q: Optional[str] = None) -> List[Dict[str, Any]]:
        items = self.items.all()
        if type:
            items = [i for i in items if i.get("type") == type]
        needle = (q or "").strip().lower()
        if needle:
            items = [i for i in items if needle in str(i.get("title") or "").lower()]
        return items

    def get(self, item_id: str) -> Dict[str, Any]:
        item = self.items.get(item_id)
        if item is None:
            raise NotFoundError("Item not found")
        return item

    def create(self, item: Dict[str, Any], actor: Optional[Identity]) -> Dict[str, Any]:
        who = _require_actor(actor)
        if not item.get("title") or not item.get("type"):
            raise ValidationError("title and type are required")
        _check_type(item["type"])
        created = self.items.add(item)
        log.info("Catalog item %s created by %s", created["id"], who.id)
        return created

    def update(self, item_id: str, patch: Dict[str, Any], actor: Optional[Identity]) -> Dict[str, Any]:
        who = _require_actor(actor)
        if "type" in patch:
            _check_type(patch["type"])
        if "title" in patch and not patch["title"]:
            raise ValidationError("title cannot be empty")
        merged = self.items.update(item_id, patch)
        if merged is None:
            raise NotFoundError("Item not found")
        log.info("Catalog item %s updated by %s", item_id, who.id)
        return merged

    def delete(self, item_id: str, actor: Optional[Identity]) -> None:
        who = _require_actor(actor)
        if not self.items.delete(item_id):
            raise NotFoundError("Item not found")
        log.info("Catalog item %s deleted by %s", item_id, who.id)
