from typing import Annotated

from fastapi import Depends, Request

from basecamp.services.bookings import BookingLifecycle
from basecamp.services.listings import ListingService
from basecamp.services.maps import MapService
from basecamp.services.reviews import ReviewService


def get_listing_service(request: Request) -> ListingService:
    return request.app.state.listing_service


def get_map_service(request: Request) -> MapService:
    return request.app.state.map_service


def get_booking_lifecycle(request: Request) -> BookingLifecycle:
    return request.app.state.booking_lifecycle


def get_review_service(request: Request) -> ReviewService:
    return request.app.state.review_service


ListingDep = Annotated[ListingService, Depends(get_listing_service)]
MapDep = Annotated[MapService, Depends(get_map_service)]
BookingDep = Annotated[BookingLifecycle, Depends(get_booking_lifecycle)]
ReviewDep = Annotated[ReviewService, Depends(get_review_service)]
