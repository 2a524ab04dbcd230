# streamshelf/routes/social.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from streamshelf.deps import get_social_service
from streamshelf.schemas import ListIn, ListItemIn, ListPatchIn, ProfilePatchIn, ShareIn
from streamshelf.security import Identity, get_optional_user, require_user
from streamshelf.services import SocialService

router = APIRouter(prefix="/social", tags=["social"])

# ──────────────────────────────────────────────────────────────────────
# Profiles & follows
# ──────────────────────────────────────────────────────────────────────

@router.put("/profiles/me")
def update_my_profile(
    payload: ProfilePatchIn,
    current: Identity = Depends(require_user),
    social: SocialService = Depends(get_social_service),
) -> dict:
    return social.update_profile(current, payload.model_dump(exclude_unset=True))


@router.get("/profiles/{user_id}")
def get_profile(user_id: str, social: SocialService = Depends(get_social_service)) -> dict:
    return social.get_profile(user_id)


@router.post("/follow/{user_id}")
def follow(
    user_id: str,
    current: Identity = Depends(require_user),
    social: SocialService = Depends(get_social_service),
) -> dict:
    return social.follow(current, user_id)


@router.delete("/follow/{user_id}")
def unfollow(
    user_id: str,
    current: Identity = Depends(require_user),
    social: SocialService = Depends(get_social_service),
) -> dict:
    return social.unfollow(current, user_id)

# ──────────────────────────────────────────────────────────────────────
# Lists
# ──────────────────────────────────────────────────────────────────────

@router.get("/lists")
def list_lists(
    viewer: Optional[Identity] = Depends(get_optional_user),
    social: SocialService = Depends(get_social_service),
) -> list:
    return social.list_lists(viewer)


@router.get("/lists/{list_id}")
def get_list(
    list_id: str,
    viewer: Optional[Identity] = Depends(get_optional_user),
    social: SocialService = Depends(get_social_service),
) -> dict:
    return social.get_list(list_id, viewer)


@router.post("/lists", status_code=201)
def create_list(
    payload: ListIn,
    current: Identity = Depends(require_user),
    social: SocialService = Depends(get_social_service),
) -> dict:
    return social.create_list(
        current,
        payload.name,
        description=payload.description,
        items=payload.items,
        is_public=payload.isPublic,
    )


@router.put("/lists/{list_id}")
def update_list(
    list_id: str,
    payload: ListPatchIn,
    current: Identity = Depends(require_user),
    social: SocialService = Depends(get_social_service),
) -> dict:
    return social.update_list(current, list_id, payload.model_dump(exclude_unset=True))


@router.delete("/lists/{list_id}", status_code=204)
def delete_list(
    list_id: str,
    current: Identity = Depends(require_user),
    social: SocialService = Depends(get_social_service),
) -> Response:
    social.delete_list(current, list_id)
    return Response(status_code=204)


@router.post("/lists/{list_id}/items")
def add_list_item(
    list_id: str,
    payload: ListItemIn,
    current: Identity = Depends(require_user),
    social: SocialService = Depends(get_social_service),
) -> dict:
    return social.add_item(current, list_id, payload.itemId)


@router.delete("/lists/{list_id}/items/{item_id}")
def remove_list_item(
    list_id: str,
    item_id: str,
    current: Identity = Depends(require_user),
    social: SocialService = Depends(get_social_service),
) -> dict:
    return social.remove_item(current, list_id, item_id)

# ──────────────────────────────────────────────────────────────────────
# Shares & rankings
# ──────────────────────────────────────────────────────────────────────

@router.post("/share", status_code=201)
def share(
    payload: ShareIn,
    current: Identity = Depends(require_user),
    social: SocialService = Depends(get_social_service),
) -> dict:
    return social.share(current, payload.itemId, payload.message)


@router.get("/rankings")
def rankings(
    limit: int = Query(default=10, ge=1, le=100),
    social: SocialService = Depends(get_social_service),
) -> dict:
    return social.rankings(limit=limit)
