"""Shared test fixtures and helpers."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

import pytest

from bridgekit.call.lookup import ThirdPartyLookup
from bridgekit.call.mapper import CallUserMapper
from bridgekit.call.protocols import CallProtocolsChecker
from bridgekit.models.config import DiscoveryConfig, RetryPolicy
from bridgekit.models.enums import CallProtocol
from bridgekit.models.protocol import ThirdPartyProtocol
from bridgekit.providers.thirdparty.mock import MockThirdPartyService
from bridgekit.store.memory import InMemoryRoomService

MY_USER_ID = "@alice:example.org"


class GatedThirdPartyService(MockThirdPartyService):
    """Mock service whose ``get_protocols`` blocks until ``gate`` is set."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.gate = asyncio.Event()
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_protocols(self) -> dict[str, ThirdPartyProtocol]:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await self.gate.wait()
            return await super().get_protocols()
        finally:
            self.in_flight -= 1


def fast_discovery(max_attempts: int = 3) -> DiscoveryConfig:
    """Discovery config with the production attempt count and no real delay."""
    return DiscoveryConfig(retry=RetryPolicy(max_attempts=max_attempts, delay_seconds=0.001))


def sip_protocols() -> dict[str, dict[str, Any]]:
    return {CallProtocol.SIP_NATIVE: {}, CallProtocol.SIP_VIRTUAL: {}}


@pytest.fixture
def advance() -> Callable[[int], Coroutine[Any, Any, None]]:
    """Yield control to let pending tasks run without real delay.

    Replaces ``await asyncio.sleep(0.05)`` patterns with zero-delay
    event loop yields::

        await advance()       # 5 yields (default)
        await advance(10)     # 10 yields for heavier workloads
    """

    async def _advance(n: int = 5) -> None:
        for _ in range(n):
            await asyncio.sleep(0)

    return _advance


@pytest.fixture
def rooms() -> InMemoryRoomService:
    return InMemoryRoomService(MY_USER_ID)


@pytest.fixture
def service() -> MockThirdPartyService:
    return MockThirdPartyService(protocols=sip_protocols())


@pytest.fixture
def checker(service: MockThirdPartyService) -> CallProtocolsChecker:
    return CallProtocolsChecker(service, fast_discovery())


@pytest.fixture
def lookup(service: MockThirdPartyService, checker: CallProtocolsChecker) -> ThirdPartyLookup:
    return ThirdPartyLookup(service, checker)


@pytest.fixture
def mapper(
    rooms: InMemoryRoomService,
    checker: CallProtocolsChecker,
    lookup: ThirdPartyLookup,
) -> CallUserMapper:
    return CallUserMapper(rooms, checker, lookup)
