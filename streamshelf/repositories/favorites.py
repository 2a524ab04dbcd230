# streamshelf/repositories/favorites.py
from __future__ import annotations

from collections import Counter
from typing import Collection, Dict, List, Optional

from streamshelf import store
from streamshelf.repositories.base import Abort, JsonRepository, utcnow_iso


class FavoriteRepository(JsonRepository):
    name = store.FAVORITES

    def item_ids(self, user_id: str, known: Optional[Collection[str]] = None) -> List[str]:
        """Favorited ids, restricted to `known` catalog ids when given."""
        ids = [f["itemId"] for f in self.filter(userId=user_id)]
        return ids if known is None else [i for i in ids if i in known]

    def contains(self, user_id: str, item_id: str) -> bool:
        return self.find(userId=user_id, itemId=item_id) is not None

    def add(self, user_id: str, item_id: str) -> bool:
        """Insert the pair; False when it was already there."""
        try:
            with self.editing() as rows:
                if any(r["userId"] == user_id and r["itemId"] == item_id for r in rows):
                    raise Abort()
                rows.append({"userId": user_id, "itemId": item_id, "createdAt": utcnow_iso()})
        except Abort:
            return False
        return True

    def remove(self, user_id: str, item_id: str) -> bool:
        try:
            with self.editing() as rows:
                kept = [r for r in rows if not (r["userId"] == user_id and r["itemId"] == item_id)]
                if len(kept) == len(rows):
                    raise Abort()
                rows[:] = kept
        except Abort:
            return False
        return True

    def counts_by_item(self) -> Dict[str, int]:
        return dict(Counter(r["itemId"] for r in self.all()))

    def counts_by_user(self, known: Optional[Collection[str]] = None) -> Dict[str, int]:
        return dict(Counter(r["userId"] for r in self.all() if known is None or r["itemId"] in known))
