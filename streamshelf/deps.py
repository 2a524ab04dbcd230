# streamshelf/deps.py
# FastAPI dependencies: the store lives on app.state, services are built per request.
from __future__ import annotations

from fastapi import Depends, Request

from streamshelf.core.settings import Settings
from streamshelf.security import get_app_settings
from streamshelf.services import (
    AuthService,
    CatalogService,
    FavoritesService,
    ProfileService,
    RatingService,
    SocialService,
)
from streamshelf.store import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_auth_service(
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(store, settings)


def get_catalog_service(store: Store = Depends(get_store)) -> CatalogService:
    return CatalogService(store)


def get_favorites_service(store: Store = Depends(get_store)) -> FavoritesService:
    return FavoritesService(store)


def get_social_service(store: Store = Depends(get_store)) -> SocialService:
    return SocialService(store)


def get_rating_service(store: Store = Depends(get_store)) -> RatingService:
    return RatingService(store)


def get_profile_service(store: Store = Depends(get_store)) -> ProfileService:
    return ProfileService(store)
