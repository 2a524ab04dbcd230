# streamshelf/services/favorites.py
from __future__ import annotations

from typing import Any, Dict, Optional

from streamshelf.errors import NotFoundError, ValidationError
from streamshelf.repositories import CatalogRepository, FavoriteRepository
from streamshelf.security import Identity
from streamshelf.store import Store


class FavoritesService:
    """Explicit add / remove / membership over a user's favorite item ids."""

    def __init__(self, store: Store) -> None:
        self.favorites = FavoriteRepository(store)
        self.catalog = CatalogRepository(store)

    def list(self, user: Identity) -> Dict[str, Any]:
        return {"favorites": self.favorites.item_ids(user.id, known=self.catalog.ids())}

    def add(self, user: Identity, item_id: Optional[str]) -> Dict[str, Any]:
        if not item_id:
            raise ValidationError("itemId is required")
        if not self.catalog.exists(item_id):
            raise NotFoundError("Item not found")
        created = self.favorites.add(user.id, item_id)
        return {"ok": True, "itemId": item_id, "created": created}

    def remove(self, user: Identity, item_id: str) -> None:
        if not self.favorites.remove(user.id, item_id):
            raise NotFoundError("Item is not in favorites")

    def is_favorited(self, user: Identity, item_id: str) -> Dict[str, Any]:
        return {"itemId": item_id, "favorited": self.favorites.contains(user.id, item_id)}
