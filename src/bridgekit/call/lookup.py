"""Third-party user lookups used to place and map calls."""

from __future__ import annotations

import logging

from bridgekit.call.protocols import CallProtocolsChecker
from bridgekit.core.errors import ConfigurationError
from bridgekit.models.enums import CallProtocol
from bridgekit.models.protocol import (
    FIELD_NATIVE_MXID,
    FIELD_PHONE,
    FIELD_VIRTUAL_MXID,
    ThirdPartyUser,
)
from bridgekit.providers.thirdparty.base import ThirdPartyService

logger = logging.getLogger("bridgekit.call.lookup")


class ThirdPartyLookup:
    """Resolves phone numbers and native/virtual SIP identities.

    Lookup failures are logged and reported as an empty result, so callers
    cannot tell "no match" from "lookup failed".
    """

    def __init__(self, service: ThirdPartyService, protocols: CallProtocolsChecker) -> None:
        self._service = service
        self._protocols = protocols

    async def pstn_lookup(self, phone_number: str) -> list[ThirdPartyUser]:
        """Find the users reachable at *phone_number*.

        Raises:
            ConfigurationError: If no PSTN protocol has been discovered yet.
        """
        protocol = self._protocols.supported_pstn_protocol
        if protocol is None:
            raise ConfigurationError("No supported PSTN protocol; check protocols first")
        return await self._lookup(protocol, {FIELD_PHONE: phone_number})

    async def sip_virtual_lookup(self, native_user_id: str) -> list[ThirdPartyUser]:
        """Find the virtual identity of a native user."""
        return await self._lookup(CallProtocol.SIP_VIRTUAL, {FIELD_NATIVE_MXID: native_user_id})

    async def sip_native_lookup(self, virtual_user_id: str) -> list[ThirdPartyUser]:
        """Find the native identity behind a virtual user."""
        return await self._lookup(CallProtocol.SIP_NATIVE, {FIELD_VIRTUAL_MXID: virtual_user_id})

    async def _lookup(self, protocol: str, fields: dict[str, str]) -> list[ThirdPartyUser]:
        try:
            return await self._service.get_user(str(protocol), fields)
        except Exception as exc:
            logger.debug(
                "Third-party lookup failed",
                extra={"protocol": str(protocol), "error": str(exc)},
            )
            return []
