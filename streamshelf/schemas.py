# streamshelf/schemas.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# ── Auth ─────────────────────────────────────────────────────────────────────

# Fields are optional so a missing one reaches the service and comes back as
# a 400 with our own message instead of FastAPI's 422.
class RegisterIn(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, max_length=128)


class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    id: str
    name: Optional[str] = None
    email: str


class MeOut(UserOut):
    username: Optional[str] = None
    avatar: str = ""
    createdAt: Optional[str] = None


class TokenOut(BaseModel):
    token: str
    user: UserOut


# ── Catalog ──────────────────────────────────────────────────────────────────

class CatalogItemIn(BaseModel):
    """Partial catalog item; unknown keys (year, genres, ...) are kept."""

    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    coverUrl: Optional[str] = None
    videoUrl: Optional[str] = None
    showId: Optional[str] = None
    season: Optional[int] = None
    episodeNumber: Optional[int] = None


class CatalogItemOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    type: str
    title: str
    description: str = ""
    coverUrl: str = ""
    videoUrl: str = ""
    showId: Optional[str] = None
    season: Optional[int] = None
    episodeNumber: Optional[int] = None
    createdAt: str


# ── Favorites ────────────────────────────────────────────────────────────────

class FavoriteIn(BaseModel):
    itemId: Optional[str] = None


class FavoritesOut(BaseModel):
    favorites: List[str]


class FavoriteStatusOut(BaseModel):
    itemId: str
    favorited: bool


# ── Social ───────────────────────────────────────────────────────────────────

class ProfilePatchIn(BaseModel):
    name: Optional[str] = None
    username: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    avatar: Optional[str] = None


class ListIn(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = ""
    items: List[str] = Field(default_factory=list)
    isPublic: bool = True


class ListPatchIn(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    items: Optional[List[str]] = None
    isPublic: Optional[bool] = None


class ListItemIn(BaseModel):
    itemId: Optional[str] = None


class ShareIn(BaseModel):
    itemId: Optional[str] = None
    message: Optional[str] = Field(default="", max_length=2000)


# ── Ratings ──────────────────────────────────────────────────────────────────

class RatingIn(BaseModel):
    itemId: Optional[str] = None
    rating: Optional[int] = None
    comment: Optional[str] = Field(default="", max_length=2000)


# ── Viewer profiles / parental control ───────────────────────────────────────

class ViewerProfileIn(BaseModel):
    name: Optional[str] = None
    avatar: Optional[str] = None
    age: Optional[int] = None
    isChild: Optional[bool] = None
    restrictions: Optional[Dict[str, Any]] = None


class ParentalSettingsIn(BaseModel):
    requirePin: Optional[bool] = None
    pin: Optional[str] = None
    autoLock: Optional[bool] = None
    lockTimeout: Optional[int] = None
