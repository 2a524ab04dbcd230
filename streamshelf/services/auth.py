# streamshelf/services/auth.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from streamshelf.core.settings import Settings
from streamshelf.errors import AuthError, ValidationError
from streamshelf.repositories import UserRepository
from streamshelf.repositories.users import public_user
from streamshelf.security import Identity, create_access_token, hash_password, verify_password
from streamshelf.store import Store

log = logging.getLogger(__name__)


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class AuthService:
    def __init__(self, store: Store, settings: Settings) -> None:
        self.users = UserRepository(store)
        self.settings = settings

    def register(self, name: Optional[str], email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        if _blank(name) or _blank(email) or _blank(password):
            raise ValidationError("name, email and password are required")

        password_hash = hash_password(password, rounds=self.settings.bcrypt_rounds)
        user = self.users.add(name=name.strip(), email=email.strip(), password_hash=password_hash)
        log.info("Registered user %s", user["id"])
        return public_user(user)

    def login(self, email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        if _blank(email) or _blank(password):
            raise ValidationError("email and password are required")

        user = self.users.by_email(email)
        if not user or not verify_password(password, user.get("passwordHash", "")):
            log.warning("Rejected login for %s", email.strip().lower())
            raise AuthError("Invalid credentials")

        token = create_access_token(
            user_id=user["id"],
            email=user["email"],
            name=user.get("name"),
            settings=self.settings,
        )
        return {"token": token, "user": public_user(user)}

    def me(self, identity: Identity) -> Dict[str, Any]:
        user = self.users.by_id(identity.id)
        if not user:
            raise AuthError("User not found")
        return {
            **public_user(user),
            "username": user.get("username"),
            "avatar": user.get("avatar", ""),
            "createdAt": user.get("createdAt"),
        }
