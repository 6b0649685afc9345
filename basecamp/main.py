import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from basecamp.config import Settings
from basecamp.exceptions.custom import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    StorageIOError,
)
from basecamp.exceptions.handlers import (
    conflict_error_handler,
    invalid_input_error_handler,
    not_found_error_handler,
    request_validation_error_handler,
    storage_error_handler,
)
from basecamp.routers.bookings import router as bookings_router
from basecamp.routers.listings import router as listings_router
from basecamp.routers.maps import router as maps_router
from basecamp.routers.reviews import router as reviews_router
from basecamp.routers.uploads import router as uploads_router
from basecamp.schemas.booking import Booking
from basecamp.schemas.listing import Listing
from basecamp.schemas.map_asset import MapAsset
from basecamp.schemas.review import Review
from basecamp.services.bookings import BookingLifecycle
from basecamp.services.listings import ListingService
from basecamp.services.maps import MapService
from basecamp.services.reviews import ReviewService
from basecamp.storage.append_log import AppendLogStore
from basecamp.storage.blob_store import BlobStore
from basecamp.storage.record_store import RecordStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )

    data_dir = settings.data_dir
    uploads_dir = settings.uploads_dir

    listings = ListingService(
        RecordStore(data_dir / "hotelImages.json", Listing, kind="Listing"),
        BlobStore(uploads_dir / "hotels", kind="hotel image"),
        settings.image_extensions,
        settings.max_image_bytes,
    )
    maps = MapService(
        RecordStore(data_dir / "maps.json", MapAsset, kind="Map"),
        BlobStore(uploads_dir / "maps", kind="map"),
        settings.map_extensions,
        settings.max_map_bytes,
    )

    # Referential checks against the listings collection are opt-in
    hotel_check = listings.ensure_exists if settings.enforce_hotel_reference else None

    app.state.listing_service = listings
    app.state.map_service = maps
    app.state.booking_lifecycle = BookingLifecycle(
        RecordStore(data_dir / "bookings.json", Booking, kind="Booking"),
        hotel_check=hotel_check,
    )
    app.state.review_service = ReviewService(
        AppendLogStore(
            data_dir / "reviews",
            Review,
            file_pattern="hotel_{key}_reviews.txt",
            kind="Review",
        ),
        hotel_check=hotel_check,
    )

    logger.info("Storage ready: data=%s uploads=%s", data_dir, uploads_dir)
    yield


app = FastAPI(title="Basecamp Stays", lifespan=lifespan)

app.add_exception_handler(NotFoundError, not_found_error_handler)
app.add_exception_handler(InvalidInputError, invalid_input_error_handler)
app.add_exception_handler(ConflictError, conflict_error_handler)
app.add_exception_handler(StorageIOError, storage_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

app.include_router(listings_router)
app.include_router(maps_router)
app.include_router(bookings_router)
app.include_router(reviews_router)
app.include_router(uploads_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
