"""Per-key append-only JSON-lines logs.

Each key gets its own file; a record is one JSON object per line. Lines
are only ever appended, never rewritten, and ordering happens at read time.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import weakref
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from basecamp.exceptions.custom import InvalidInputError, StorageIOError
from basecamp.storage.ids import MonotonicIds

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AppendLogStore(Generic[T]):
    def __init__(
        self,
        directory: str | Path,
        model: type[T],
        file_pattern: str = "{key}.jsonl",
        kind: str | None = None,
        clock: Callable[[], datetime] = _utcnow,
        ids: MonotonicIds | None = None,
    ) -> None:
        self._directory = Path(directory)
        self._model = model
        self._file_pattern = file_pattern
        self._kind = kind or model.__name__
        self._clock = clock
        self._ids = ids or MonotonicIds()
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def path_for(self, key: object) -> Path:
        key = str(key)
        if not _KEY_RE.match(key):
            raise InvalidInputError(f"Invalid {self._kind} key: {key!r}")
        return self._directory / self._file_pattern.format(key=key)

    async def append_entry(self, key: object, data: dict) -> T:
        """Stamp ``id`` and ``createdAt`` on ``data`` and append it as one line."""
        path = self.path_for(key)
        lock = self._locks.get(str(key))
        if lock is None:
            # Held only while some append for this key is in flight.
            lock = self._locks[str(key)] = asyncio.Lock()

        async with lock:
            try:
                entry = self._model.model_validate(
                    {**data, "id": self._ids.next_id(), "createdAt": self._clock()}
                )
            except ValidationError as exc:
                raise InvalidInputError(
                    f"Invalid {self._kind}: {exc.errors()[0]['msg']}"
                ) from exc
            line = entry.model_dump_json() + "\n"
            await asyncio.to_thread(self._append_line, path, line)

        logger.info("Appended %s %s for key %s", self._kind, entry.id, key)
        return entry

    async def read_all(self, key: object) -> list[T]:
        """Entries for ``key``, newest ``createdAt`` first. Missing log -> []."""
        path = self.path_for(key)
        entries = await asyncio.to_thread(self._read_lines, path)
        return sorted(
            entries,
            key=lambda e: (e.createdAt, e.id),
            reverse=True,
        )

    def _append_line(self, path: Path, line: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as f:
                f.write(line)
                f.flush()
        except OSError as exc:
            raise StorageIOError(f"Cannot append to {self._kind} log", path) from exc

    def _read_lines(self, path: Path) -> list[T]:
        try:
            with path.open("r", encoding="utf-8") as f:
                lines = f.readlines()
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageIOError(f"Cannot read {self._kind} log", path) from exc

        entries: list[T] = []
        for lineno, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                entries.append(self._model.model_validate(json.loads(line)))
            except (json.JSONDecodeError, ValidationError):
                logger.warning("Skipping unreadable line %d in %s", lineno, path)
        return entries
