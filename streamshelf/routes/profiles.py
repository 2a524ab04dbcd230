# streamshelf/routes/profiles.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from streamshelf.deps import get_profile_service
from streamshelf.schemas import ParentalSettingsIn, ViewerProfileIn
from streamshelf.security import Identity, require_user
from streamshelf.services import ProfileService

router = APIRouter(prefix="/parental", tags=["parental"])


@router.get("/profiles")
def list_profiles(
    current: Identity = Depends(require_user),
    profiles: ProfileService = Depends(get_profile_service),
) -> list:
    return profiles.list(current)


@router.post("/profiles", status_code=201)
def create_profile(
    payload: ViewerProfileIn,
    current: Identity = Depends(require_user),
    profiles: ProfileService = Depends(get_profile_service),
) -> dict:
    return profiles.create(current, payload.model_dump(exclude_unset=True))


@router.put("/profiles/{profile_id}")
def update_profile(
    profile_id: str,
    payload: ViewerProfileIn,
    current: Identity = Depends(require_user),
    profiles: ProfileService = Depends(get_profile_service),
) -> dict:
    return profiles.update(current, profile_id, payload.model_dump(exclude_unset=True))


@router.delete("/profiles/{profile_id}", status_code=204)
def delete_profile(
    profile_id: str,
    current: Identity = Depends(require_user),
    profiles: ProfileService = Depends(get_profile_service),
) -> Response:
    profiles.delete(current, profile_id)
    return Response(status_code=204)


@router.post("/profiles/{profile_id}/switch")
def switch_profile(
    profile_id: str,
    current: Identity = Depends(require_user),
    profiles: ProfileService = Depends(get_profile_service),
) -> dict:
    return profiles.switch(current, profile_id)


@router.get("/settings")
def get_settings(
    current: Identity = Depends(require_user),
    profiles: ProfileService = Depends(get_profile_service),
) -> dict:
    return profiles.get_settings(current)


@router.put("/settings")
def update_settings(
    payload: ParentalSettingsIn,
    current: Identity = Depends(require_user),
    profiles: ProfileService = Depends(get_profile_service),
) -> dict:
    return profiles.update_settings(current, payload.model_dump(exclude_unset=True))
