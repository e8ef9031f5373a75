"""Call capability discovery and virtual room mapping."""

from bridgekit.call.lookup import ThirdPartyLookup
from bridgekit.call.mapper import CallUserMapper
from bridgekit.call.protocols import CallProtocolsChecker, CapabilityListener

__all__ = [
    "CallProtocolsChecker",
    "CallUserMapper",
    "CapabilityListener",
    "ThirdPartyLookup",
]
