"""Discovery of the VoIP protocols bridged by the homeserver.

As long as a discovery round succeeds, protocols are checked only once per
session.  A round makes up to ``DiscoveryConfig.max_attempts`` sequential
attempts; when all of them fail the round is abandoned and the next
``check_protocols()`` starts a fresh one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from bridgekit.core.retry import retry_async
from bridgekit.models.config import DiscoveryConfig
from bridgekit.models.enums import CallProtocol, Capability
from bridgekit.models.protocol import ThirdPartyProtocol
from bridgekit.providers.thirdparty.base import ThirdPartyService

logger = logging.getLogger("bridgekit.call.protocols")

__all__ = [
    "CallProtocolsChecker",
    "CapabilityListener",
    "extract_pstn",
    "supports_virtual_rooms",
]


class CapabilityListener:
    """Receives capability updates. Override only what you need.

    Methods may be plain functions or coroutines.
    """

    def on_pstn_support_updated(self) -> Any:
        return None

    def on_virtual_room_support_updated(self) -> Any:
        return None


def extract_pstn(protocols: Iterable[str]) -> str | None:
    """Return the supported PSTN protocol id, preferring the prefixed one."""
    available = set(protocols)
    for candidate in (CallProtocol.PSTN_PREFIXED, CallProtocol.PSTN):
        if candidate in available:
            return str(candidate)
    return None


def supports_virtual_rooms(protocols: Iterable[str]) -> bool:
    """Virtual rooms need both SIP protocols to be bridged."""
    available = set(protocols)
    return CallProtocol.SIP_VIRTUAL in available and CallProtocol.SIP_NATIVE in available


class CallProtocolsChecker:
    """Session-scoped holder of the discovered call capabilities.

    Only the discovery task writes the capability fields.  Listeners
    registered after discovery completed do not receive past updates.
    """

    def __init__(
        self,
        service: ThirdPartyService,
        config: DiscoveryConfig | None = None,
    ) -> None:
        self._service = service
        self._config = config or DiscoveryConfig()
        self._listeners: list[CapabilityListener] = []
        self._task: asyncio.Task[bool] | None = None
        self._discovered = False
        self._supported_pstn_protocol: str | None = None
        self._supports_virtual_rooms = False

    # -- accessors --

    @property
    def discovered(self) -> bool:
        return self._discovered

    @property
    def supported_pstn_protocol(self) -> str | None:
        return self._supported_pstn_protocol

    @property
    def supports_virtual_rooms(self) -> bool:
        return self._supports_virtual_rooms

    @property
    def in_flight(self) -> bool:
        """Whether a discovery round is currently running."""
        return self._task is not None and not self._task.done()

    # -- listeners --

    def add_listener(self, listener: CapabilityListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: CapabilityListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # -- discovery --

    def check_protocols(self) -> None:
        """Start discovery in the background unless done or already running."""
        self._ensure_task()

    async def await_check_protocols(self) -> bool:
        """Wait for the current discovery round, starting one if needed.

        Returns:
            ``True`` once protocols are discovered, ``False`` if the round
            was abandoned after exhausting its attempts.
        """
        task = self._ensure_task()
        if task is None:
            return True
        # A cancelled waiter must not cancel the round shared with others.
        return await asyncio.shield(task)

    def _ensure_task(self) -> asyncio.Task[bool] | None:
        if self._discovered:
            return None
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(
                self._check_third_party_protocols(), name="bridgekit:check-protocols"
            )
            self._task.add_done_callback(self._task_done)
        return self._task

    @staticmethod
    def _task_done(task: asyncio.Task[bool]) -> None:
        """Log unexpected exceptions from the discovery task."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Protocol discovery task failed",
                exc_info=exc,
                extra={"task": task.get_name()},
            )

    async def _check_third_party_protocols(self) -> bool:
        try:
            protocols = await retry_async(
                self._service.get_protocols,
                self._config.retry,
                operation="get_protocols",
            )
        except Exception as exc:
            logger.info(
                "Failed to get supported protocols, will check again next time",
                extra={"attempts": self._config.max_attempts, "error": str(exc)},
            )
            return False

        await self._apply(protocols)
        return True

    async def _apply(self, protocols: dict[str, ThirdPartyProtocol]) -> None:
        self._discovered = True
        self._supported_pstn_protocol = extract_pstn(protocols)
        self._supports_virtual_rooms = supports_virtual_rooms(protocols)
        logger.debug(
            "Discovered %d third-party protocols",
            len(protocols),
            extra={
                "protocols": sorted(protocols),
                "pstn": self._supported_pstn_protocol,
                "virtual_rooms": self._supports_virtual_rooms,
            },
        )
        if self._supported_pstn_protocol is not None:
            await self._notify(Capability.PSTN)
        if self._supports_virtual_rooms:
            await self._notify(Capability.VIRTUAL_ROOMS)

    async def _notify(self, capability: Capability) -> None:
        # Snapshot so listeners may unregister themselves while notified.
        for listener in list(self._listeners):
            try:
                if capability is Capability.PSTN:
                    result = listener.on_pstn_support_updated()
                else:
                    result = listener.on_virtual_room_support_updated()
                if asyncio.iscoroutine(result):
                    await result
            except Exception:
                logger.exception(
                    "Capability listener failed",
                    extra={"capability": capability.value},
                )
