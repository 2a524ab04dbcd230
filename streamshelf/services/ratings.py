# streamshelf/services/ratings.py
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from streamshelf.errors import NotFoundError, ValidationError
from streamshelf.repositories import CatalogRepository, RatingRepository
from streamshelf.security import Identity
from streamshelf.store import Store

MIN_RATING = 1
MAX_RATING = 5


class RatingService:
    def __init__(self, store: Store) -> None:
        self.ratings = RatingRepository(store)
        self.catalog = CatalogRepository(store)

    def summary(self, item_id: str) -> Dict[str, Any]:
        rows = self.ratings.for_item(item_id)
        total = len(rows)
        avg = sum(r["rating"] for r in rows) / total if total else 0
        return {
            "itemId": item_id,
            "ratings": rows,
            "averageRating": round(avg, 1),
            "totalRatings": total,
        }

    def rate(
        self, actor: Identity, item_id: Optional[str], rating: Any, comment: Optional[str] = ""
    ) -> Tuple[Dict[str, Any], bool]:
        if not item_id:
            raise ValidationError("itemId is required")
        # bools are ints in Python; reject them explicitly
        if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(f"rating must be an integer between {MIN_RATING} and {MAX_RATING}")
        if not self.catalog.exists(item_id):
            raise NotFoundError("Item not found")
        return self.ratings.upsert(user_id=actor.id, item_id=item_id, rating=rating, comment=comment or "")

    def remove(self, actor: Identity, item_id: str) -> None:
        if not self.ratings.remove(actor.id, item_id):
            raise NotFoundError("Rating not found")
