"""Tests for InMemoryKeyedLockManager."""

from __future__ import annotations

import asyncio

from bridgekit.core.locks import InMemoryKeyedLockManager


class TestInMemoryKeyedLockManager:
    async def test_same_key_same_lock(self) -> None:
        mgr = InMemoryKeyedLockManager()
        assert mgr._get_lock("k1") is mgr._get_lock("k1")

    async def test_different_keys_different_locks(self) -> None:
        mgr = InMemoryKeyedLockManager()
        assert mgr._get_lock("k1") is not mgr._get_lock("k2")

    async def test_serialization(self) -> None:
        mgr = InMemoryKeyedLockManager()
        active = 0
        peak = 0

        async def task() -> None:
            nonlocal active, peak
            async with mgr.locked("k1"):
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0)
                active -= 1

        await asyncio.gather(*(task() for _ in range(5)))
        assert peak == 1

    async def test_different_keys_do_not_block(self) -> None:
        mgr = InMemoryKeyedLockManager()
        entered: list[str] = []

        async with mgr.locked("k1"):
            async with mgr.locked("k2"):
                entered.append("k2")

        assert entered == ["k2"]

    async def test_lru_eviction(self) -> None:
        mgr = InMemoryKeyedLockManager(max_locks=2)
        for key in ("k1", "k2", "k3"):
            async with mgr.locked(key):
                pass
        assert mgr.size == 2
        assert "k1" not in mgr._locks

    async def test_held_lock_not_evicted(self) -> None:
        mgr = InMemoryKeyedLockManager(max_locks=1)
        async with mgr.locked("k1"):
            async with mgr.locked("k2"):
                pass
            assert "k1" in mgr._locks

    async def test_refcount_released(self) -> None:
        mgr = InMemoryKeyedLockManager()
        async with mgr.locked("k1"):
            assert mgr._refcounts["k1"] == 1
        assert "k1" not in mgr._refcounts
