# streamshelf/services/social.py
"""
Social features: public user profiles, follows, user-curated lists,
shares and the rankings page.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from streamshelf.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from streamshelf.repositories import (
    CatalogRepository,
    FavoriteRepository,
    FollowRepository,
    ListRepository,
    ShareRepository,
    UserRepository,
)
from streamshelf.repositories.base import Abort, Row
from streamshelf.security import Identity
from streamshelf.store import Store

log = logging.getLogger(__name__)

LIST_FIELDS = ("name", "description", "isPublic", "items")


def _creator(user: Optional[Row], user_id: str) -> Dict[str, Any]:
    if not user:
        return {"id": user_id, "name": None, "avatar": ""}
    return {"id": user["id"], "name": user.get("name"), "avatar": user.get("avatar", "")}


def _dedupe(ids: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for i in ids:
        seen.setdefault(str(i), None)
    return list(seen)


class SocialService:
    def __init__(self, store: Store) -> None:
        self.users = UserRepository(store)
        self.catalog = CatalogRepository(store)
        self.favorites = FavoriteRepository(store)
        self.follows = FollowRepository(store)
        self.lists = ListRepository(store)
        self.shares = ShareRepository(store)

    # ── Profiles ────────────────────────────────────────────────────────────

    def get_profile(self, user_id: str) -> Dict[str, Any]:
        user = self.users.by_id(user_id)
        if not user:
            raise NotFoundError("Profile not found")
        favorites = self.favorites.item_ids(user_id, known=self.catalog.ids())
        followers = self.follows.followers(user_id)
        following = self.follows.following(user_id)
        total_lists = len([r for r in self.lists.by_creator(user_id) if r.get("isPublic", True)])
        return {
            "id": user["id"],
            "name": user.get("name"),
            "username": user.get("username"),
            "bio": user.get("bio", ""),
            "avatar": user.get("avatar", ""),
            "createdAt": user.get("createdAt"),
            "favorites": favorites,
            "followers": followers,
            "following": following,
            "stats": {
                "totalWatched": len(favorites),
                "totalLists": total_lists,
                "totalFollowers": len(followers),
                "totalFollowing": len(following),
            },
        }

    def update_profile(self, actor: Identity, patch: Dict[str, Any]) -> Dict[str, Any]:
        if "name" in patch and patch["name"] is not None and not str(patch["name"]).strip():
            raise ValidationError("name cannot be empty")
        if self.users.update_profile(actor.id, patch) is None:
            raise NotFoundError("Profile not found")
        return self.get_profile(actor.id)

    # ── Follows ─────────────────────────────────────────────────────────────

    def follow(self, actor: Identity, user_id: str) -> Dict[str, Any]:
        if actor.id == user_id:
            raise ValidationError("You cannot follow yourself")
        if not self.users.by_id(user_id):
            raise NotFoundError("User not found")
        created = self.follows.add(actor.id, user_id)
        return {"ok": True, "following": True, "created": created}

    def unfollow(self, actor: Identity, user_id: str) -> Dict[str, Any]:
        if not self.follows.remove(actor.id, user_id):
            raise NotFoundError("Not following this user")
        return {"ok": True, "following": False}

    # ── Lists ───────────────────────────────────────────────────────────────

    def _present(self, row: Row, users: Dict[str, Row], catalog_ids: set) -> Dict[str, Any]:
        out = {k: v for k, v in row.items() if k != "creatorId"}
        out["items"] = [i for i in row.get("items", []) if i in catalog_ids]
        out["creator"] = _creator(users.get(row["creatorId"]), row["creatorId"])
        return out

    def _present_many(self, rows: List[Row]) -> List[Dict[str, Any]]:
        users = {u["id"]: u for u in self.users.all()}
        catalog_ids = self.catalog.ids()
        return [self._present(r, users, catalog_ids) for r in rows]

    def _present_one(self, row: Row) -> Dict[str, Any]:
        return self._present_many([row])[0]

    def _visible(self, row: Optional[Row], viewer: Optional[Identity]) -> bool:
        if row is None:
            return False
        return bool(row.get("isPublic", True)) or (viewer is not None and row["creatorId"] == viewer.id)

    def _owned(self, list_id: str, actor: Identity) -> Row:
        row = self.lists.get(list_id)
        if not self._visible(row, actor):
            raise NotFoundError("List not found")
        if row["creatorId"] != actor.id:  # type: ignore[index]
            raise ForbiddenError("Only the list creator can change it")
        return row  # type: ignore[return-value]

    def _check_items(self, ids: List[str]) -> None:
        known = self.catalog.ids()
        missing = [i for i in ids if i not in known]
        if missing:
            raise NotFoundError(f"Unknown catalog items: {', '.join(missing)}")

    def list_lists(self, viewer: Optional[Identity] = None) -> List[Dict[str, Any]]:
        rows = [r for r in self.lists.all() if self._visible(r, viewer)]
        rows.sort(key=lambda r: r.get("createdAt") or "", reverse=True)
        return self._present_many(rows)

    def get_list(self, list_id: str, viewer: Optional[Identity] = None) -> Dict[str, Any]:
        row = self.lists.get(list_id)
        if not self._visible(row, viewer):
            raise NotFoundError("List not found")
        return self._present_one(row)  # type: ignore[arg-type]

    def create_list(
        self,
        actor: Identity,
        name: Optional[str],
        description: Optional[str] = "",
        items: Optional[List[str]] = None,
        is_public: bool = True,
    ) -> Dict[str, Any]:
        if not name or not name.strip():
            raise ValidationError("name is required")
        ids = _dedupe(items or [])
        self._check_items(ids)
        row = self.lists.add(
            creator_id=actor.id,
            name=name.strip(),
            description=description or "",
            items=ids,
            is_public=bool(is_public),
        )
        log.info("List %s created by %s", row["id"], actor.id)
        return self._present_one(row)

    def update_list(self, actor: Identity, list_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        self._owned(list_id, actor)
        changes = {k: v for k, v in patch.items() if k in LIST_FIELDS and v is not None}
        if "name" in changes:
            if not str(changes["name"]).strip():
                raise ValidationError("name cannot be empty")
            changes["name"] = str(changes["name"]).strip()
        if "items" in changes:
            changes["items"] = _dedupe(changes["items"])
            self._check_items(changes["items"])
        if "isPublic" in changes:
            changes["isPublic"] = bool(changes["isPublic"])
        row = self.lists.modify(list_id, lambda r: r.update(changes))
        if row is None:
            raise NotFoundError("List not found")
        return self._present_one(row)

    def delete_list(self, actor: Identity, list_id: str) -> None:
        self._owned(list_id, actor)
        if not self.lists.delete(list_id):
            raise NotFoundError("List not found")
        log.info("List %s deleted by %s", list_id, actor.id)

    def add_item(self, actor: Identity, list_id: str, item_id: Optional[str]) -> Dict[str, Any]:
        if not item_id:
            raise ValidationError("itemId is required")
        self._owned(list_id, actor)
        item = self.catalog.get(item_id)
        if item is None:
            raise NotFoundError("Item not found")

        def _append(row: Row) -> None:
            if item_id in row["items"]:
                raise ConflictError("Item already in list")
            row["items"].append(item_id)

        row = self.lists.modify(list_id, _append)
        if row is None:
            raise NotFoundError("List not found")
        return {"message": f"{item.get('title')} added to {row['name']}", "list": self._present_one(row)}

    def remove_item(self, actor: Identity, list_id: str, item_id: str) -> Dict[str, Any]:
        self._owned(list_id, actor)

        def _drop(row: Row) -> None:
            if item_id not in row["items"]:
                raise Abort()
            row["items"].remove(item_id)

        row = self.lists.modify(list_id, _drop)
        if row is None:
            raise NotFoundError("Item not in list")
        return {"message": f"Item removed from {row['name']}", "list": self._present_one(row)}

    # ── Shares ──────────────────────────────────────────────────────────────

    def share(self, actor: Identity, item_id: Optional[str], message: Optional[str] = "") -> Dict[str, Any]:
        if not item_id:
            raise ValidationError("itemId is required")
        if not self.catalog.exists(item_id):
            raise NotFoundError("Item not found")
        return self.shares.add(user_id=actor.id, item_id=item_id, message=message or "")

    # ── Rankings ────────────────────────────────────────────────────────────

    def rankings(self, limit: int = 10) -> Dict[str, Any]:
        fav_by_item = self.favorites.counts_by_item()
        fav_by_user = self.favorites.counts_by_user(known=self.catalog.ids())
        lists_by_user = self.lists.counts_by_creator()
        followers_by_user = self.follows.follower_counts()

        items = [
            {**item, "favoriteCount": fav_by_item.get(item["id"], 0)}
            for item in self.catalog.all()
            if fav_by_item.get(item["id"], 0) > 0
        ]
        items.sort(key=lambda i: (-i["favoriteCount"], str(i.get("title") or "").lower()))

        users = []
        for user in self.users.all():
            uid = user["id"]
            total_lists = lists_by_user.get(uid, 0)
            total_favs = fav_by_user.get(uid, 0)
            total_followers = followers_by_user.get(uid, 0)
            score = total_lists + total_favs + total_followers
            if score == 0:
                continue
            users.append({
                **_creator(user, uid),
                "score": score,
                "totalLists": total_lists,
                "totalFavorites": total_favs,
                "totalFollowers": total_followers,
            })
        users.sort(key=lambda u: (-u["score"], str(u.get("name") or "").lower()))

        return {"mostFavorited": items[:limit], "topUsers": users[:limit]}
