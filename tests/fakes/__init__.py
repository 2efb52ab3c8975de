"""Shared test doubles: the memory backends plus a cache that fails on demand."""

from __future__ import annotations

from shiftdesk.core.exceptions import CacheError
from shiftdesk.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryFileStore,
    MemoryJobStore,
    MemoryTemplateStore,
)


class FlakyCache(MemoryCacheBackend):
    """Cache whose ``setex`` call number ``fail_on`` raises CacheError."""

    def __init__(self, fail_on: int) -> None:
        super().__init__()
        self._fail_on = fail_on
        self.writes = 0

    def setex(self, key: str, ttl: int, value: str) -> None:
        self.writes += 1
        if self.writes == self._fail_on:
            raise CacheError("redis connection reset")
        super().setex(key, ttl, value)


__all__ = ["FlakyCache", "MemoryCacheBackend", "MemoryFileStore", "MemoryJobStore", "MemoryTemplateStore"]
