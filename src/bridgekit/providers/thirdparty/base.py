"""Abstract base class for homeserver third-party lookups."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

from bridgekit.models.protocol import ThirdPartyProtocol, ThirdPartyUser


class ThirdPartyService(ABC):
    """Queries the protocols bridged by a homeserver and the users behind them.

    Implementations raise ``TransientRemoteError`` for any remote failure.
    """

    @abstractmethod
    async def get_protocols(self) -> dict[str, ThirdPartyProtocol]:
        """List the third-party protocols supported by the homeserver.

        Returns:
            Protocol metadata keyed by protocol id.
        """
        ...

    @abstractmethod
    async def get_user(
        self, protocol: str, fields: Mapping[str, str]
    ) -> list[ThirdPartyUser]:
        """Find homeserver users matching *fields* on *protocol*."""
        ...

    async def close(self) -> None:  # noqa: B027
        """Release resources. Override in subclasses that hold connections."""
