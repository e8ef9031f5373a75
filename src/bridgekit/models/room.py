"""Room models used by the virtual room mapper."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from bridgekit.models.enums import Membership

#: Account data type of the virtual room back-link, also used as the
#: creation content key marking a room created as virtual.
EVENT_TYPE_VIRTUAL_ROOM = "im.vector.is_virtual_room"


class Room(BaseModel):
    """Summary of a room as seen by the local user."""

    id: str
    membership: Membership = Membership.JOIN
    inviter_id: str | None = None
    is_direct: bool = False
    direct_user_id: str | None = None


class CreationEvent(BaseModel):
    """The state event that created a room."""

    sender_id: str
    content: dict[str, Any] = Field(default_factory=dict)


class CreateRoomParams(BaseModel):
    """Parameters for creating a room."""

    invited_user_ids: list[str] = Field(default_factory=list)
    is_direct: bool = False
    creation_content: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def direct(
        cls, user_id: str, creation_content: dict[str, Any] | None = None
    ) -> CreateRoomParams:
        """Parameters for a direct room with *user_id*."""
        return cls(
            invited_user_ids=[user_id],
            is_direct=True,
            creation_content=creation_content or {},
        )


class RoomVirtualContent(BaseModel):
    """Content of the back-link stored on a virtual room."""

    native_room: str | None = None
