import logging

from basecamp.schemas.review import Review, ReviewCreate
from basecamp.services.bookings import HotelCheck
from basecamp.storage.append_log import AppendLogStore

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, log: AppendLogStore[Review], hotel_check: HotelCheck | None = None):
        self._log = log
        self._hotel_check = hotel_check

    async def list_for_hotel(self, hotel_id: int | str) -> list[Review]:
        """Newest first."""
        return await self._log.read_all(hotel_id)

    async def create(self, hotel_id: int | str, request: ReviewCreate) -> Review:
        if self._hotel_check is not None:
            await self._hotel_check(hotel_id)
        review = await self._log.append_entry(hotel_id, request.model_dump())
        logger.info("Review %s added for hotel %s (rating %d)", review.id, hotel_id, review.rating)
        return review
