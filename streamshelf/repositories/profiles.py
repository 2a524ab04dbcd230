# streamshelf/repositories/profiles.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from streamshelf import store
from streamshelf.repositories.base import Abort, JsonRepository, Row, new_id, utcnow_iso

DEFAULT_SETTINGS: Dict[str, Any] = {
    "requirePin": False,
    "pin": "",
    "autoLock": False,
    "lockTimeout": 30,
}


class ProfileRepository(JsonRepository):
    name = store.PROFILES

    def for_owner(self, owner_id: str) -> List[Row]:
        return self.filter(ownerId=owner_id)

    def get(self, owner_id: str, profile_id: str) -> Optional[Row]:
        return self.find(ownerId=owner_id, id=profile_id)

    def add(self, owner_id: str, data: Dict[str, Any], *, limit: int) -> Optional[Row]:
        """Append a profile; None once the owner already has ``limit`` of them."""
        row = {
            "id": new_id(),
            "ownerId": owner_id,
            **data,
            "isActive": False,
            "createdAt": utcnow_iso(),
        }
        try:
            with self.editing() as rows:
                if sum(1 for r in rows if r["ownerId"] == owner_id) >= limit:
                    raise Abort()
                rows.append(row)
        except Abort:
            return None
        return row

    def update(self, owner_id: str, profile_id: str, changes: Dict[str, Any]) -> Optional[Row]:
        target: Optional[Row] = None
        try:
            with self.editing() as rows:
                for row in rows:
                    if row["ownerId"] == owner_id and row["id"] == profile_id:
                        row.update(changes)
                        target = row
                        break
                else:
                    raise Abort()
        except Abort:
            return None
        return target

    def delete(self, owner_id: str, profile_id: str) -> bool:
        try:
            with self.editing() as rows:
                kept = [r for r in rows if not (r["ownerId"] == owner_id and r["id"] == profile_id)]
                if len(kept) == len(rows):
                    raise Abort()
                rows[:] = kept
        except Abort:
            return False
        return True

    def activate(self, owner_id: str, profile_id: str) -> Optional[Row]:
        """Mark one profile active and every other profile of the owner inactive."""
        active: Optional[Row] = None
        try:
            with self.editing() as rows:
                if not any(r["ownerId"] == owner_id and r["id"] == profile_id for r in rows):
                    raise Abort()
                for row in rows:
                    if row["ownerId"] != owner_id:
                        continue
                    row["isActive"] = row["id"] == profile_id
                    if row["isActive"]:
                        active = row
        except Abort:
            return None
        return active


class ParentalSettingsRepository(JsonRepository):
    name = store.PARENTAL_SETTINGS

    def get(self, owner_id: str) -> Row:
        row = self.find(ownerId=owner_id)
        if row is None:
            return {"ownerId": owner_id, **DEFAULT_SETTINGS}
        return {**DEFAULT_SETTINGS, **row}

    def put(self, owner_id: str, settings: Dict[str, Any]) -> Row:
        saved: Row = {**DEFAULT_SETTINGS, **settings, "ownerId": owner_id}
        with self.editing() as rows:
            for idx, row in enumerate(rows):
                if row.get("ownerId") == owner_id:
                    rows[idx] = saved
                    break
            else:
                rows.append(saved)
        return saved
