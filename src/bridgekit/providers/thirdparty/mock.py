"""Mock third-party service for testing."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bridgekit.core.errors import TransientRemoteError
from bridgekit.models.protocol import ThirdPartyProtocol, ThirdPartyUser
from bridgekit.providers.thirdparty.base import ThirdPartyService


class MockThirdPartyService(ThirdPartyService):
    """Serves canned protocols and users and records every call.

    ``protocol_failures`` makes the next N ``get_protocols`` calls raise
    ``TransientRemoteError``.  Users are keyed by ``(protocol, field, value)``
    for each field of a lookup, first match wins.
    """

    def __init__(
        self,
        protocols: Mapping[str, ThirdPartyProtocol | dict[str, Any]] | None = None,
        users: dict[tuple[str, str, str], list[ThirdPartyUser]] | None = None,
        protocol_failures: int = 0,
        fail_user_lookups: bool = False,
    ) -> None:
        self.protocols = {
            key: ThirdPartyProtocol.model_validate(value)
            for key, value in (protocols or {}).items()
        }
        self.users = users or {}
        self.protocol_failures = protocol_failures
        self.fail_user_lookups = fail_user_lookups
        self.protocol_calls = 0
        self.user_calls: list[tuple[str, dict[str, str]]] = []

    async def get_protocols(self) -> dict[str, ThirdPartyProtocol]:
        self.protocol_calls += 1
        if self.protocol_failures > 0:
            self.protocol_failures -= 1
            raise TransientRemoteError("mock protocols failure", status_code=503)
        return dict(self.protocols)

    async def get_user(
        self, protocol: str, fields: Mapping[str, str]
    ) -> list[ThirdPartyUser]:
        self.user_calls.append((protocol, dict(fields)))
        if self.fail_user_lookups:
            raise TransientRemoteError("mock user lookup failure", status_code=502)
        for name, value in fields.items():
            users = self.users.get((protocol, name, value))
            if users:
                return list(users)
        return []
