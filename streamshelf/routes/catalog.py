# streamshelf/routes/catalog.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from streamshelf.deps import get_catalog_service
from streamshelf.schemas import CatalogItemIn, CatalogItemOut
from streamshelf.security import Identity, require_user
from streamshelf.services import CatalogService

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=List[CatalogItemOut])
def list_catalog(
    type: Optional[str] = Query(default=None, description="show | movie | episode"),
    q: Optional[str] = Query(default=None, description="Title search"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> list:
    """Public listing of the whole catalog."""
    return catalog.list(type=type, q=q)


@router.get("/{item_id}", response_model=CatalogItemOut)
def get_item(item_id: str, catalog: CatalogService = Depends(get_catalog_service)) -> dict:
    return catalog.get(item_id)


@router.post("", response_model=CatalogItemOut, status_code=201)
def create_item(
    payload: CatalogItemIn,
    current: Identity = Depends(require_user),
    catalog: CatalogService = Depends(get_catalog_service),
) -> dict:
    return catalog.create(payload.model_dump(exclude_unset=True), current)


@router.put("/{item_id}", response_model=CatalogItemOut)
def update_item(
    item_id: str,
    payload: CatalogItemIn,
    current: Identity = Depends(require_user),
    catalog: CatalogService = Depends(get_catalog_service),
) -> dict:
    return catalog.update(item_id, payload.model_dump(exclude_unset=True), current)


@router.delete("/{item_id}", status_code=204)
def delete_item(
    item_id: str,
    current: Identity = Depends(require_user),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Response:
    catalog.delete(item_id, current)
    return Response(status_code=204)
