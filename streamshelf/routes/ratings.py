# streamshelf/routes/ratings.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from streamshelf.deps import get_rating_service
from streamshelf.schemas import RatingIn
from streamshelf.security import Identity, require_user
from streamshelf.services import RatingService

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.get("/{item_id}")
def rating_summary(item_id: str, ratings: RatingService = Depends(get_rating_service)) -> dict:
    """Ratings for one item with average and count."""
    return ratings.summary(item_id)


@router.post("")
def upsert_rating(
    payload: RatingIn,
    response: Response,
    current: Identity = Depends(require_user),
    ratings: RatingService = Depends(get_rating_service),
) -> dict:
    """Create or update the caller's rating (unique on user + item)."""
    row, created = ratings.rate(current, payload.itemId, payload.rating, payload.comment)
    response.status_code = 201 if created else 200
    return row


@router.delete("/{item_id}", status_code=204)
def delete_rating(
    item_id: str,
    current: Identity = Depends(require_user),
    ratings: RatingService = Depends(get_rating_service),
) -> Response:
    ratings.remove(current, item_id)
    return Response(status_code=204)
