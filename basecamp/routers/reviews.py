from fastapi import APIRouter

from basecamp.dependencies import ReviewDep
from basecamp.schemas.review import Review, ReviewCreate

router = APIRouter(prefix="/api/hotels", tags=["reviews"])


@router.get("/{hotel_id}/reviews", response_model=list[Review])
async def list_reviews(hotel_id: str, service: ReviewDep) -> list[Review]:
    return await service.list_for_hotel(hotel_id)


@router.post("/{hotel_id}/reviews", response_model=Review, status_code=201)
async def create_review(hotel_id: str, request: ReviewCreate, service: ReviewDep) -> Review:
    return await service.create(hotel_id, request)
