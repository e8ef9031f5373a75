"""Exception hierarchy for BridgeKit."""

from __future__ import annotations

__all__ = [
    "BridgeKitError",
    "ConfigurationError",
    "ProvisioningFailure",
    "RoomNotFoundError",
    "TransientRemoteError",
]


class BridgeKitError(Exception):
    """Base exception for all BridgeKit errors."""


class TransientRemoteError(BridgeKitError):
    """A remote third-party call failed and may succeed later.

    Attributes:
        status_code: HTTP status code returned by the homeserver, if any.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(BridgeKitError):
    """A capability-dependent operation was called before the capability was known."""


class ProvisioningFailure(BridgeKitError):
    """Creating, tagging or joining a virtual room failed."""


class RoomNotFoundError(BridgeKitError):
    """Room does not exist."""
