# streamshelf/repositories/social.py
from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Dict, List, Optional

from streamshelf import store
from streamshelf.repositories.base import Abort, JsonRepository, Row, new_id, utcnow_iso


class ListRepository(JsonRepository):
    name = store.LISTS

    def get(self, list_id: str) -> Optional[Row]:
        return self.find(id=list_id)

    def by_creator(self, user_id: str) -> List[Row]:
        return self.filter(creatorId=user_id)

    def add(self, *, creator_id: str, name: str, description: str, items: List[str], is_public: bool) -> Row:
        now = utcnow_iso()
        row = {
            "id": new_id(),
            "name": name,
            "description": description,
            "items": items,
            "isPublic": is_public,
            "creatorId": creator_id,
            "createdAt": now,
            "updatedAt": now,
        }
        with self.editing() as rows:
            rows.append(row)
        return row

    def modify(self, list_id: str, change: Callable[[Row], None]) -> Optional[Row]:
        """Apply ``change`` to the stored list in place; None if it is gone.

        ``change`` may raise to abort without writing.
        """
        target: Optional[Row] = None
        try:
            with self.editing() as rows:
                for row in rows:
                    if row["id"] == list_id:
                        change(row)
                        row["updatedAt"] = utcnow_iso()
                        target = row
                        break
                else:
                    raise Abort()
        except Abort:
            return None
        return target

    def delete(self, list_id: str) -> bool:
        try:
            with self.editing() as rows:
                kept = [r for r in rows if r["id"] != list_id]
                if len(kept) == len(rows):
                    raise Abort()
                rows[:] = kept
        except Abort:
            return False
        return True

    def counts_by_creator(self) -> Dict[str, int]:
        return dict(Counter(r["creatorId"] for r in self.all()))


class FollowRepository(JsonRepository):
    name = store.FOLLOWS

    def followers(self, user_id: str) -> List[str]:
        return [r["followerId"] for r in self.filter(followeeId=user_id)]

    def following(self, user_id: str) -> List[str]:
        return [r["followeeId"] for r in self.filter(followerId=user_id)]

    def add(self, follower_id: str, followee_id: str) -> bool:
        try:
            with self.editing() as rows:
                if any(r["followerId"] == follower_id and r["followeeId"] == followee_id for r in rows):
                    raise Abort()
                rows.append({"followerId": follower_id, "followeeId": followee_id, "createdAt": utcnow_iso()})
        except Abort:
            return False
        return True

    def remove(self, follower_id: str, followee_id: str) -> bool:
        try:
            with self.editing() as rows:
                kept = [
                    r for r in rows
                    if not (r["followerId"] == follower_id and r["followeeId"] == followee_id)
                ]
                if len(kept) == len(rows):
                    raise Abort()
                rows[:] = kept
        except Abort:
            return False
        return True

    def follower_counts(self) -> Dict[str, int]:
        return dict(Counter(r["followeeId"] for r in self.all()))


class ShareRepository(JsonRepository):
    name = store.SHARES

    def add(self, *, user_id: str, item_id: str, message: str) -> Row:
        row: Dict[str, Any] = {
            "id": new_id(),
            "userId": user_id,
            "itemId": item_id,
            "message": message,
            "createdAt": utcnow_iso(),
        }
        with self.editing() as rows:
            rows.append(row)
        return row
