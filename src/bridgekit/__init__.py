"""BridgeKit - Pure async Python library for VoIP protocol discovery and virtual call rooms."""

from bridgekit._version import __version__
from bridgekit.call import (
    CallProtocolsChecker,
    CallUserMapper,
    CapabilityListener,
    ThirdPartyLookup,
)
from bridgekit.core.errors import (
    BridgeKitError,
    ConfigurationError,
    ProvisioningFailure,
    RoomNotFoundError,
    TransientRemoteError,
)
from bridgekit.core.locks import InMemoryKeyedLockManager, KeyedLockManager
from bridgekit.core.retry import retry_async
from bridgekit.models.config import DiscoveryConfig, RetryPolicy
from bridgekit.models.enums import CallProtocol, Capability, Membership, VirtualRoomTrust
from bridgekit.models.protocol import ThirdPartyProtocol, ThirdPartyUser
from bridgekit.models.room import (
    EVENT_TYPE_VIRTUAL_ROOM,
    CreateRoomParams,
    CreationEvent,
    Room,
    RoomVirtualContent,
)
from bridgekit.providers.thirdparty import (
    HTTPThirdPartyConfig,
    HTTPThirdPartyService,
    MockThirdPartyService,
    ThirdPartyService,
)
from bridgekit.store.base import RoomService
from bridgekit.store.memory import InMemoryRoomService

__all__ = [
    "EVENT_TYPE_VIRTUAL_ROOM",
    "BridgeKitError",
    "CallProtocol",
    "CallProtocolsChecker",
    "CallUserMapper",
    "Capability",
    "CapabilityListener",
    "ConfigurationError",
    "CreateRoomParams",
    "CreationEvent",
    "DiscoveryConfig",
    "HTTPThirdPartyConfig",
    "HTTPThirdPartyService",
    "InMemoryKeyedLockManager",
    "InMemoryRoomService",
    "KeyedLockManager",
    "Membership",
    "MockThirdPartyService",
    "ProvisioningFailure",
    "RetryPolicy",
    "Room",
    "RoomNotFoundError",
    "RoomService",
    "RoomVirtualContent",
    "ThirdPartyLookup",
    "ThirdPartyProtocol",
    "ThirdPartyService",
    "ThirdPartyUser",
    "TransientRemoteError",
    "VirtualRoomTrust",
    "__version__",
    "retry_async",
]
