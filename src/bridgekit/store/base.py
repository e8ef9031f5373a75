"""Abstract base class for the conversation collaborator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from bridgekit.models.room import CreateRoomParams, CreationEvent, Room


class RoomService(ABC):
    """Room access used by the virtual room mapper.

    Implement this ABC on top of the client's session and sync machinery.
    The library ships with ``InMemoryRoomService`` for development and
    testing.
    """

    @property
    @abstractmethod
    def my_user_id(self) -> str:
        """User id of the local session."""
        ...

    # Room operations

    @abstractmethod
    async def get_room(self, room_id: str) -> Room | None:
        """Get a room by ID, or ``None`` if it is not known locally."""
        ...

    @abstractmethod
    async def get_existing_direct_room_with_user(self, user_id: str) -> str | None:
        """Return the id of a direct room shared with *user_id*, if any."""
        ...

    @abstractmethod
    async def create_room(self, params: CreateRoomParams) -> str:
        """Create a room and return its id."""
        ...

    @abstractmethod
    async def join_room(self, room_id: str) -> None:
        """Join a room the local user is invited to."""
        ...

    @abstractmethod
    async def get_creation_event(self, room_id: str) -> CreationEvent | None:
        """Return the event that created the room, if it is known locally."""
        ...

    # Room account data

    @abstractmethod
    async def get_account_data(self, room_id: str, event_type: str) -> dict[str, Any] | None:
        """Return the content of room account data *event_type*, or ``None``."""
        ...

    @abstractmethod
    async def set_account_data(
        self, room_id: str, event_type: str, content: dict[str, Any]
    ) -> None:
        """Store room account data *event_type* on the room."""
        ...
