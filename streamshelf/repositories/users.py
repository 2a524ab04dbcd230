# streamshelf/repositories/users.py
from __future__ import annotations

from typing import Any, Dict, Optional

from streamshelf import store
from streamshelf.errors import ConflictError
from streamshelf.repositories.base import JsonRepository, Row, new_id, utcnow_iso

PROFILE_FIELDS = ("name", "username", "bio", "avatar")


def public_user(user: Row) -> Dict[str, Any]:
    return {"id": user["id"], "name": user.get("name"), "email": user.get("email")}


class UserRepository(JsonRepository):
    name = store.USERS

    def by_id(self, user_id: str) -> Optional[Row]:
        return self.find(id=user_id)

    def by_email(self, email: str) -> Optional[Row]:
        needle = email.strip().lower()
        for user in self.all():
            if str(user.get("email", "")).lower() == needle:
                return user
        return None

    def add(self, *, name: str, email: str, password_hash: str) -> Row:
        # uniqueness is checked inside the lock so it holds per process
        with self.editing() as users:
            needle = email.lower()
            if any(str(u.get("email", "")).lower() == needle for u in users):
                raise ConflictError("Email already registered")
            user = {
                "id": new_id(),
                "name": name,
                "email": email,
                "passwordHash": password_hash,
                "createdAt": utcnow_iso(),
                "username": email.split("@", 1)[0],
                "bio": "",
                "avatar": "",
            }
            users.append(user)
        return user

    def update_profile(self, user_id: str, patch: Dict[str, Any]) -> Optional[Row]:
        with self.editing() as users:
            for user in users:
                if user["id"] == user_id:
                    for key in PROFILE_FIELDS:
                        if key in patch and patch[key] is not None:
                            user[key] = patch[key]
                    return user
        return None
