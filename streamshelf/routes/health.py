# streamshelf/routes/health.py
from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Liveness")
async def health():
    # no store access; liveness only
    return {"ok": True}
