import logging
from collections.abc import Callable
from datetime import datetime, timezone

from basecamp.schemas.map_asset import MapAsset, MapCreate
from basecamp.storage.blob_store import BlobStore
from basecamp.storage.record_store import RecordStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MapService:
    def __init__(
        self,
        store: RecordStore[MapAsset],
        files: BlobStore,
        allowed_extensions: list[str],
        max_map_bytes: int,
        public_prefix: str = "/uploads/maps",
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._store = store
        self._files = files
        self._allowed_extensions = allowed_extensions
        self._max_map_bytes = max_map_bytes
        self._public_prefix = public_prefix.rstrip("/")
        self._clock = clock

    async def list_all(self) -> list[MapAsset]:
        return await self._store.list_all()

    async def create(self, meta: MapCreate, data: bytes, original_name: str) -> MapAsset:
        blob = await self._files.store(
            data, original_name, self._allowed_extensions, self._max_map_bytes
        )
        try:
            asset = await self._store.insert({
                **meta.model_dump(),
                "fileName": blob.storedName,
                "originalName": original_name,
                "uploadDate": self._clock(),
                "size": blob.size,
                "path": f"{self._public_prefix}/{blob.storedName}",
            })
        except Exception:
            logger.warning("Map insert failed, removing uploaded file %s", blob.storedName)
            await self._files.delete(blob.storedName)
            raise

        logger.info("Map %s uploaded: %s", asset.id, asset.fileName)
        return asset

    async def delete(self, file_name: str) -> None:
        """Drop the map record(s) and file. Unknown names are not an error."""
        self._files.path_for(file_name)  # rejects unsafe names up front
        removed = await self._store.delete_where(lambda m: m.fileName == file_name)
        deleted = await self._files.delete(file_name)
        if not removed and not deleted:
            logger.info("Delete requested for unknown map %s", file_name)

    async def download(self, file_name: str) -> bytes:
        return await self._files.read(file_name)
