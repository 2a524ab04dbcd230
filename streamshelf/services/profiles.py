# streamshelf/services/profiles.py
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from streamshelf.errors import ConflictError, NotFoundError, ValidationError
from streamshelf.repositories import ParentalSettingsRepository, ProfileRepository
from streamshelf.repositories.base import Row
from streamshelf.security import Identity
from streamshelf.store import Store

AGE_RATINGS = ("L", "10", "12", "14", "16", "18")
MAX_PROFILES = 5
PIN_RE = re.compile(r"^\d{4}$")

DEFAULT_RESTRICTIONS: Dict[str, Any] = {
    "maxAgeRating": "L",
    "allowViolence": False,
    "allowLanguage": False,
    "allowAdultContent": False,
}


def _restrictions(raw: Optional[Dict[str, Any]], base: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    merged = {**DEFAULT_RESTRICTIONS, **(base or {})}
    for key, value in (raw or {}).items():
        if key in DEFAULT_RESTRICTIONS and value is not None:
            merged[key] = value
    merged["maxAgeRating"] = str(merged["maxAgeRating"])
    if merged["maxAgeRating"] not in AGE_RATINGS:
        raise ValidationError(f"maxAgeRating must be one of: {', '.join(AGE_RATINGS)}")
    for flag in ("allowViolence", "allowLanguage", "allowAdultContent"):
        merged[flag] = bool(merged[flag])
    return merged


def _public_settings(row: Row) -> Dict[str, Any]:
    out = {k: v for k, v in row.items() if k not in ("pin", "ownerId")}
    out["hasPin"] = bool(row.get("pin"))
    return out


class ProfileService:
    """Household viewer profiles and the owner's parental-control settings."""

    def __init__(self, store: Store) -> None:
        self.profiles = ProfileRepository(store)
        self.settings = ParentalSettingsRepository(store)

    def list(self, owner: Identity) -> List[Row]:
        return self.profiles.for_owner(owner.id)

    def create(self, owner: Identity, data: Dict[str, Any]) -> Row:
        name = str(data.get("name") or "").strip()
        if not name:
            raise ValidationError("name is required")
        age = data.get("age") or 0
        if not isinstance(age, int) or isinstance(age, bool) or age < 0:
            raise ValidationError("age must be a non-negative integer")
        profile = {
            "name": name,
            "avatar": data.get("avatar") or "",
            "age": age,
            "isChild": bool(data.get("isChild", False)),
            "restrictions": _restrictions(data.get("restrictions")),
        }
        row = self.profiles.add(owner.id, profile, limit=MAX_PROFILES)
        if row is None:
            raise ConflictError(f"At most {MAX_PROFILES} profiles per account")
        return row

    def update(self, owner: Identity, profile_id: str, patch: Dict[str, Any]) -> Row:
        current = self.profiles.get(owner.id, profile_id)
        if current is None:
            raise NotFoundError("Profile not found")
        changes: Dict[str, Any] = {}
        if "name" in patch and patch["name"] is not None:
            if not str(patch["name"]).strip():
                raise ValidationError("name cannot be empty")
            changes["name"] = str(patch["name"]).strip()
        if patch.get("avatar") is not None:
            changes["avatar"] = patch["avatar"]
        if patch.get("age") is not None:
            if not isinstance(patch["age"], int) or isinstance(patch["age"], bool) or patch["age"] < 0:
                raise ValidationError("age must be a non-negative integer")
            changes["age"] = patch["age"]
        if patch.get("isChild") is not None:
            changes["isChild"] = bool(patch["isChild"])
        if patch.get("restrictions") is not None:
            changes["restrictions"] = _restrictions(patch["restrictions"], current.get("restrictions"))
        row = self.profiles.update(owner.id, profile_id, changes)
        if row is None:
            raise NotFoundError("Profile not found")
        return row

    def delete(self, owner: Identity, profile_id: str) -> None:
        if not self.profiles.delete(owner.id, profile_id):
            raise NotFoundError("Profile not found")

    def switch(self, owner: Identity, profile_id: str) -> Row:
        row = self.profiles.activate(owner.id, profile_id)
        if row is None:
            raise NotFoundError("Profile not found")
        return row

    def get_settings(self, owner: Identity) -> Dict[str, Any]:
        return _public_settings(self.settings.get(owner.id))

    def update_settings(self, owner: Identity, patch: Dict[str, Any]) -> Dict[str, Any]:
        current = self.settings.get(owner.id)
        merged = {**current, **{k: v for k, v in patch.items() if v is not None}}

        merged["requirePin"] = bool(merged.get("requirePin"))
        merged["autoLock"] = bool(merged.get("autoLock"))
        pin = str(merged.get("pin") or "")
        if merged["requirePin"] and not PIN_RE.match(pin):
            raise ValidationError("pin must be exactly 4 digits")
        timeout = merged.get("lockTimeout")
        if not isinstance(timeout, int) or isinstance(timeout, bool) or not 1 <= timeout <= 240:
            raise ValidationError("lockTimeout must be between 1 and 240 minutes")

        saved = self.settings.put(
            owner.id,
            {
                "requirePin": merged["requirePin"],
                "pin": pin,
                "autoLock": merged["autoLock"],
                "lockTimeout": timeout,
            },
        )
        return _public_settings(saved)
