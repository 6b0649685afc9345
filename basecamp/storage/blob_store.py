import asyncio
import logging
from pathlib import Path

from pydantic import BaseModel

from basecamp.exceptions.custom import (
    FileTooLargeError,
    InvalidFileTypeError,
    InvalidInputError,
    NotFoundError,
    StorageIOError,
)
from basecamp.mappers.filenames import (
    build_stored_name,
    has_allowed_extension,
    is_safe_stored_name,
)

logger = logging.getLogger(__name__)


class StoredBlob(BaseModel):
    storedName: str
    size: int


class BlobStore:
    """Uploaded files of one kind (hotel images, map PDFs) in one directory."""

    def __init__(self, directory: str | Path, kind: str = "file"):
        self._directory = Path(directory)
        self._kind = kind

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, stored_name: str) -> Path:
        if not is_safe_stored_name(stored_name):
            raise InvalidInputError(f"Invalid {self._kind} name: {stored_name!r}")
        return self._directory / stored_name

    async def store(
        self,
        data: bytes,
        original_name: str,
        allowed_extensions: list[str],
        max_size: int,
    ) -> StoredBlob:
        if not data:
            raise InvalidInputError("No file uploaded")
        if not has_allowed_extension(original_name, allowed_extensions):
            logger.warning("Rejected %s upload with invalid type: %s", self._kind, original_name)
            raise InvalidFileTypeError(original_name, allowed_extensions)
        if len(data) > max_size:
            logger.warning("Rejected %s upload of %d bytes", self._kind, len(data))
            raise FileTooLargeError(len(data), max_size)

        stored_name = build_stored_name(original_name)
        path = self.path_for(stored_name)
        await asyncio.to_thread(self._write, path, data)

        logger.info("Stored %s %s (%d bytes)", self._kind, stored_name, len(data))
        return StoredBlob(storedName=stored_name, size=len(data))

    async def read(self, stored_name: str) -> bytes:
        path = self.path_for(stored_name)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as exc:
            raise NotFoundError(self._kind, stored_name) from exc
        except OSError as exc:
            raise StorageIOError(f"Cannot read {self._kind}", path) from exc

    async def exists(self, stored_name: str) -> bool:
        return await asyncio.to_thread(self.path_for(stored_name).is_file)

    async def delete(self, stored_name: str) -> bool:
        """Remove the blob. Returns False if it was already gone."""
        path = self.path_for(stored_name)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageIOError(f"Cannot delete {self._kind}", path) from exc

        logger.info("Deleted %s %s", self._kind, stored_name)
        return True

    def _write(self, path: Path, data: bytes) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("xb") as f:
                f.write(data)
        except OSError as exc:
            raise StorageIOError(f"Cannot write {self._kind}", path) from exc
