"""Whole-file JSON array collections.

A ``RecordStore`` owns one ``<name>.json`` file holding a JSON array of
records of a single pydantic model. Every mutation re-reads the file,
applies the change in memory and replaces the file atomically (temp file
plus ``os.replace``) while holding the store's lock, so concurrent requests
cannot lose each other's writes. Reads are lock-free: the file is always
either the previous or the next complete array.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from basecamp.exceptions.custom import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    StorageIOError,
)
from basecamp.storage.ids import MonotonicIds

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

RecordId = int | str
Mutator = Callable[[T], T | None]


class RecordStore(Generic[T]):
    def __init__(
        self,
        path: str | Path,
        model: type[T],
        kind: str | None = None,
        ids: MonotonicIds | None = None,
    ) -> None:
        self._path = Path(path)
        self._model = model
        self._kind = kind or model.__name__
        self._ids = ids or MonotonicIds()
        self._lock = asyncio.Lock()
        self._str_ids = model.model_fields["id"].annotation is str
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._path

    async def list_all(self) -> list[T]:
        """All records in insertion order."""
        return await asyncio.to_thread(self._load)

    async def get(self, record_id: RecordId) -> T:
        records = await self.list_all()
        index = self._index_of(records, record_id)
        if index is None:
            raise NotFoundError(self._kind, record_id)
        return records[index]

    async def find(self, predicate: Callable[[T], bool]) -> list[T]:
        return [r for r in await self.list_all() if predicate(r)]

    async def insert(self, data: dict) -> T:
        """Assign an id to ``data``, append it and persist the collection."""
        async with self._lock:
            records = await asyncio.to_thread(self._load)
            new_id = self._ids.next_id(r.id for r in records)
            try:
                record = self._model.model_validate(
                    {**data, "id": str(new_id) if self._str_ids else new_id}
                )
            except ValidationError as exc:
                raise InvalidInputError(
                    f"Invalid {self._kind}: {exc.errors()[0]['msg']}"
                ) from exc
            records.append(record)
            await asyncio.to_thread(self._save, records)

        logger.info("Inserted %s %s", self._kind, record.id)
        return record

    async def update(self, record_id: RecordId, mutator: Mutator[T]) -> T:
        """Apply ``mutator`` to a copy of the record and persist the result.

        The mutator may return a new model or mutate the copy in place and
        return ``None``. If it raises, nothing is written.
        """
        async with self._lock:
            records = await asyncio.to_thread(self._load)
            index = self._index_of(records, record_id)
            if index is None:
                raise NotFoundError(self._kind, record_id)

            current = records[index].model_copy(deep=True)
            result = mutator(current)
            updated = self._validate((current if result is None else result).model_dump())
            if str(updated.id) != str(records[index].id):
                raise ConflictError(f"Mutator changed the id of {self._kind} {record_id}")
            records[index] = updated
            await asyncio.to_thread(self._save, records)

        logger.info("Updated %s %s", self._kind, record_id)
        return updated

    async def delete(self, record_id: RecordId) -> T:
        async with self._lock:
            records = await asyncio.to_thread(self._load)
            index = self._index_of(records, record_id)
            if index is None:
                raise NotFoundError(self._kind, record_id)
            removed = records.pop(index)
            await asyncio.to_thread(self._save, records)

        logger.info("Deleted %s %s", self._kind, record_id)
        return removed

    async def delete_where(self, predicate: Callable[[T], bool]) -> list[T]:
        """Remove every matching record. Zero matches is not an error."""
        async with self._lock:
            records = await asyncio.to_thread(self._load)
            kept = [r for r in records if not predicate(r)]
            removed = [r for r in records if predicate(r)]
            if removed:
                await asyncio.to_thread(self._save, kept)

        if removed:
            logger.info("Deleted %d %s record(s)", len(removed), self._kind)
        return removed

    @staticmethod
    def _index_of(records: list[T], record_id: RecordId) -> int | None:
        wanted = str(record_id)
        for i, record in enumerate(records):
            if str(record.id) == wanted:
                return i
        return None

    def _validate(self, data: dict) -> T:
        try:
            return self._model.model_validate(data)
        except ValidationError as exc:
            raise StorageIOError(
                f"Invalid {self._kind} record: {exc.errors()[0]['msg']}", self._path
            ) from exc

    def _ensure_file(self) -> None:
        if self._path.exists():
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageIOError(f"Cannot create {self._kind} collection", self._path) from exc
        self._save([])

    def _load(self) -> list[T]:
        if not self._path.exists():
            return []
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise StorageIOError(f"Corrupt {self._kind} collection", self._path) from exc
        except OSError as exc:
            raise StorageIOError(f"Cannot read {self._kind} collection", self._path) from exc

        if not isinstance(raw, list):
            raise StorageIOError(f"{self._kind} collection is not a JSON array", self._path)
        return [self._validate(item) for item in raw]

    def _save(self, records: list[T]) -> None:
        payload = json.dumps(
            [r.model_dump(mode="json") for r in records], indent=2, ensure_ascii=False
        )
        try:
            fd, tmp = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp, self._path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageIOError(f"Cannot write {self._kind} collection", self._path) from exc
