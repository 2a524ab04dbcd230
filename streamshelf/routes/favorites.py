# streamshelf/routes/favorites.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from streamshelf.deps import get_favorites_service
from streamshelf.schemas import FavoriteIn, FavoritesOut, FavoriteStatusOut
from streamshelf.security import Identity, require_user
from streamshelf.services import FavoritesService

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=FavoritesOut)
def list_favorites(
    current: Identity = Depends(require_user),
    favorites: FavoritesService = Depends(get_favorites_service),
) -> dict:
    return favorites.list(current)


@router.post("")
def add_favorite(
    payload: FavoriteIn,
    response: Response,
    current: Identity = Depends(require_user),
    favorites: FavoritesService = Depends(get_favorites_service),
) -> dict:
    out = favorites.add(current, payload.itemId)
    # 201 on insert, 200 when it was already a favorite (idempotent)
    response.status_code = 201 if out["created"] else 200
    return out


@router.get("/{item_id}", response_model=FavoriteStatusOut)
def favorite_status(
    item_id: str,
    current: Identity = Depends(require_user),
    favorites: FavoritesService = Depends(get_favorites_service),
) -> dict:
    return favorites.is_favorited(current, item_id)


@router.delete("/{item_id}", status_code=204)
def remove_favorite(
    item_id: str,
    current: Identity = Depends(require_user),
    favorites: FavoritesService = Depends(get_favorites_service),
) -> Response:
    favorites.remove(current, item_id)
    return Response(status_code=204)
