# streamshelf/repositories/ratings.py
from __future__ import annotations

from typing import List, Tuple

from streamshelf import store
from streamshelf.repositories.base import Abort, JsonRepository, Row, new_id, utcnow_iso


class RatingRepository(JsonRepository):
    name = store.RATINGS

    def for_item(self, item_id: str) -> List[Row]:
        return self.filter(itemId=item_id)

    def upsert(self, *, user_id: str, item_id: str, rating: int, comment: str) -> Tuple[Row, bool]:
        """Create or replace the (user, item) rating. Returns (row, created)."""
        now = utcnow_iso()
        with self.editing() as rows:
            for row in rows:
                if row["userId"] == user_id and row["itemId"] == item_id:
                    row.update(rating=rating, comment=comment, updatedAt=now)
                    return row, False
            row = {
                "id": new_id(),
                "itemId": item_id,
                "userId": user_id,
                "rating": rating,
                "comment": comment,
                "createdAt": now,
                "updatedAt": now,
            }
            rows.append(row)
        return row, True

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
