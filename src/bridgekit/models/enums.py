"""Enumerations for BridgeKit models."""

from __future__ import annotations

from enum import StrEnum, unique


@unique
class CallProtocol(StrEnum):
    """Third-party protocol identifiers recognised by discovery."""

    PSTN_PREFIXED = "im.vector.protocol.pstn"
    PSTN = "m.protocol.pstn"
    SIP_NATIVE = "im.vector.protocol.sip_native"
    SIP_VIRTUAL = "im.vector.protocol.sip_virtual"


@unique
class Capability(StrEnum):
    """Capabilities whose discovery is announced to listeners."""

    PSTN = "pstn"
    VIRTUAL_ROOMS = "virtual_rooms"


@unique
class VirtualRoomTrust(StrEnum):
    """Why a room is considered virtual, strongest signal first."""

    CACHE = "cache"
    ACCOUNT_DATA = "account_data"
    SELF_CREATED = "self_created"
    NONE = "none"


@unique
class Membership(StrEnum):
    INVITE = "invite"
    JOIN = "join"
    LEAVE = "leave"
