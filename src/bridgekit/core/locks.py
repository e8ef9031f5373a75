"""Per-key async locking with LRU eviction."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections import OrderedDict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

__all__ = ["InMemoryKeyedLockManager", "KeyedLockManager"]


class KeyedLockManager(ABC):
    """Abstract base for serializing work that shares a key.

    ``CallUserMapper`` uses it to run at most one virtual room
    provisioning sequence per opponent at a time.  Unrelated keys must
    never block each other.
    """

    @abstractmethod
    @asynccontextmanager
    async def locked(self, key: str) -> AsyncIterator[None]:
        """Acquire an exclusive lock for *key*."""
        yield  # pragma: no cover


class InMemoryKeyedLockManager(KeyedLockManager):
    """In-process per-key asyncio locks with LRU eviction.

    Locks that are held or awaited are never evicted, so ``size`` may
    temporarily exceed ``max_locks`` under heavy contention.
    """

    def __init__(self, max_locks: int = 256) -> None:
        self._locks: OrderedDict[str, asyncio.Lock] = OrderedDict()
        self._refcounts: dict[str, int] = {}
        self._max_locks = max_locks

    def _get_lock(self, key: str) -> asyncio.Lock:
        self._refcounts[key] = self._refcounts.get(key, 0) + 1
        lock = self._locks.get(key)
        if lock is not None:
            self._locks.move_to_end(key)
            return lock

        lock = asyncio.Lock()
        self._locks[key] = lock
        self._evict()
        return lock

    def _release_ref(self, key: str) -> None:
        count = self._refcounts.get(key, 0) - 1
        if count <= 0:
            self._refcounts.pop(key, None)
        else:
            self._refcounts[key] = count

    def _evict(self) -> None:
        if len(self._locks) <= self._max_locks:
            return
        excess = len(self._locks) - self._max_locks
        to_remove = [
            key
            for key, lock in self._locks.items()
            if not lock.locked() and self._refcounts.get(key, 0) <= 0
        ][:excess]
        for key in to_remove:
            del self._locks[key]

    @asynccontextmanager
    async def locked(self, key: str) -> AsyncIterator[None]:
        """Acquire the lock for *key*, waiting behind current holders."""
        lock = self._get_lock(key)
        try:
            async with lock:
                yield
        finally:
            self._release_ref(key)

    @property
    def size(self) -> int:
        """Return the number of locks currently tracked."""
        return len(self._locks)
