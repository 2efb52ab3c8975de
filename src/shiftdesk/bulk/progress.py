"""Progress observers for bulk creation batches."""

from __future__ import annotations

import asyncio
import json
from typing import Any

from shiftdesk.core.protocols import ICacheBackend


def progress_key(batch_id: str) -> str:
    return f"import:{batch_id}:progress"


class ProgressRecorder:
    """Keeps every (processed, total) observation in order."""

    def __init__(self) -> None:
        self.events: list[tuple[int, int]] = []

    def __call__(self, processed: int, total: int) -> None:
        self.events.append((processed, total))


class CacheProgressPublisher:
    """Writes the latest batch progress to the cache for polling clients.

    As an observer it is awaited by the orchestrator; the blocking cache
    write runs in a worker thread.
    """

    def __init__(self, cache: ICacheBackend, batch_id: str, ttl: int = 4 * 60 * 60) -> None:
        self._cache = cache
        self._batch_id = batch_id
        self._ttl = ttl

    def publish(self, processed: int, total: int, status: str = "RUNNING") -> None:
        payload = {"batch_id": self._batch_id, "processed": processed, "total": total, "status": status}
        self._cache.setex(progress_key(self._batch_id), self._ttl, json.dumps(payload))

    async def __call__(self, processed: int, total: int) -> None:
        status = "COMPLETED" if processed >= total else "RUNNING"
        await asyncio.to_thread(self.publish, processed, total, status)


def read_progress(cache: ICacheBackend, batch_id: str) -> dict[str, Any] | None:
    raw = cache.get(progress_key(batch_id))
    return json.loads(raw) if raw is not None else None
