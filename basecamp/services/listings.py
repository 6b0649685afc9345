import logging

from basecamp.exceptions.custom import NotFoundError
from basecamp.schemas.listing import Listing, ListingCreate
from basecamp.storage.blob_store import BlobStore
from basecamp.storage.record_store import RecordStore

logger = logging.getLogger(__name__)


class ListingService:
    def __init__(
        self,
        store: RecordStore[Listing],
        images: BlobStore,
        allowed_extensions: list[str],
        max_image_bytes: int,
        public_prefix: str = "/uploads/hotels",
    ):
        self._store = store
        self._images = images
        self._allowed_extensions = allowed_extensions
        self._max_image_bytes = max_image_bytes
        self._public_prefix = public_prefix.rstrip("/")

    async def list_all(self) -> list[Listing]:
        return await self._store.list_all()

    async def get(self, listing_id: int | str) -> Listing:
        return await self._store.get(listing_id)

    async def ensure_exists(self, listing_id: int | str) -> None:
        """Raise NotFoundError unless a listing with this id exists."""
        matches = await self._store.find(lambda r: str(r.id) == str(listing_id))
        if not matches:
            raise NotFoundError("Hotel", listing_id)

    async def create(self, meta: ListingCreate, data: bytes, original_name: str) -> Listing:
        blob = await self._images.store(
            data, original_name, self._allowed_extensions, self._max_image_bytes
        )
        try:
            listing = await self._store.insert({
                **meta.model_dump(),
                "fileName": blob.storedName,
                "imagePath": f"{self._public_prefix}/{blob.storedName}",
            })
        except Exception:
            logger.warning("Listing insert failed, removing uploaded image %s", blob.storedName)
            await self._images.delete(blob.storedName)
            raise

        logger.info("Listing %s created: %s", listing.id, listing.title)
        return listing

    async def delete(self, listing_id: int | str) -> Listing:
        listing = await self._store.delete(listing_id)
        if not await self._images.delete(listing.fileName):
            logger.warning("Image %s for listing %s was already missing", listing.fileName, listing.id)
        return listing

    async def image(self, stored_name: str) -> bytes:
        return await self._images.read(stored_name)
