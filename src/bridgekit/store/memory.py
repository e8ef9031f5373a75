"""In-memory implementation of RoomService."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from bridgekit.core.errors import RoomNotFoundError
from bridgekit.models.enums import Membership
from bridgekit.models.room import CreateRoomParams, CreationEvent, Room
from bridgekit.store.base import RoomService


class InMemoryRoomService(RoomService):
    """Dict-based room service for development and testing.

    Created rooms get a creation event sent by the local user carrying the
    requested creation content.  Every mutation is recorded in
    ``created``, ``joined`` and the account data map.
    """

    def __init__(self, my_user_id: str, server_name: str = "example.org") -> None:
        self._my_user_id = my_user_id
        self._server_name = server_name
        self._rooms: dict[str, Room] = {}
        self._creation_events: dict[str, CreationEvent] = {}
        self._direct_rooms: dict[str, str] = {}
        self._account_data: dict[str, dict[str, dict[str, Any]]] = {}
        self.created: list[CreateRoomParams] = []
        self.joined: list[str] = []

    @property
    def my_user_id(self) -> str:
        return self._my_user_id

    def add_room(
        self,
        room: Room,
        creation_event: CreationEvent | None = None,
        account_data: dict[str, dict[str, Any]] | None = None,
    ) -> Room:
        """Seed a room as if it had arrived through sync."""
        self._rooms[room.id] = room
        if creation_event is not None:
            self._creation_events[room.id] = creation_event
        if room.is_direct and room.direct_user_id:
            self._direct_rooms.setdefault(room.direct_user_id, room.id)
        self._account_data[room.id] = dict(account_data or {})
        return room

    # Room operations

    async def get_room(self, room_id: str) -> Room | None:
        room = self._rooms.get(room_id)
        return room.model_copy() if room is not None else None

    async def get_existing_direct_room_with_user(self, user_id: str) -> str | None:
        return self._direct_rooms.get(user_id)

    async def create_room(self, params: CreateRoomParams) -> str:
        room_id = f"!{uuid4().hex[:18]}:{self._server_name}"
        direct_user_id = params.invited_user_ids[0] if params.is_direct else None
        self.add_room(
            Room(id=room_id, is_direct=params.is_direct, direct_user_id=direct_user_id),
            creation_event=CreationEvent(
                sender_id=self._my_user_id, content=dict(params.creation_content)
            ),
        )
        self.created.append(params)
        return room_id

    async def join_room(self, room_id: str) -> None:
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        self._rooms[room_id] = room.model_copy(update={"membership": Membership.JOIN})
        self.joined.append(room_id)

    async def get_creation_event(self, room_id: str) -> CreationEvent | None:
        return self._creation_events.get(room_id)

    # Room account data

    async def get_account_data(self, room_id: str, event_type: str) -> dict[str, Any] | None:
        content = self._account_data.get(room_id, {}).get(event_type)
        return dict(content) if content is not None else None

    async def set_account_data(
        self, room_id: str, event_type: str, content: dict[str, Any]
    ) -> None:
        if room_id not in self._rooms:
            raise RoomNotFoundError(room_id)
        self._account_data.setdefault(room_id, {})[event_type] = dict(content)
