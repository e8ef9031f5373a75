"""Mapping between native rooms and their virtual call rooms.

A virtual room is the direct room with a user's virtual SIP identity that
carries the bridged leg of calls placed from a native room.  Whether a room
is virtual is decided from three signals, strongest first:

1. the in-process confirmation cache,
2. the ``im.vector.is_virtual_room`` room account data back-link,
3. the same key in the creation content, trusted only when the local user
   created the room so an inviter cannot hide arbitrary rooms.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from bridgekit.call.lookup import ThirdPartyLookup
from bridgekit.call.protocols import CallProtocolsChecker
from bridgekit.core.errors import ProvisioningFailure
from bridgekit.core.locks import InMemoryKeyedLockManager, KeyedLockManager
from bridgekit.models.enums import VirtualRoomTrust
from bridgekit.models.protocol import FIELD_IS_VIRTUAL
from bridgekit.models.room import (
    EVENT_TYPE_VIRTUAL_ROOM,
    CreateRoomParams,
    RoomVirtualContent,
)
from bridgekit.store.base import RoomService

logger = logging.getLogger("bridgekit.call.mapper")


class CallUserMapper:
    """Finds, creates and recognises virtual rooms for the local session."""

    def __init__(
        self,
        rooms: RoomService,
        protocols: CallProtocolsChecker,
        lookup: ThirdPartyLookup,
        lock_manager: KeyedLockManager | None = None,
    ) -> None:
        self._rooms = rooms
        self._protocols = protocols
        self._lookup = lookup
        self._locks = lock_manager or InMemoryKeyedLockManager()
        # Only ever grows; absence proves nothing.
        self._virtual_room_ids: set[str] = set()

    async def native_room_for_virtual_room(self, room_id: str) -> str | None:
        """Return the native room linked from *room_id*'s account data."""
        if await self._rooms.get_room(room_id) is None:
            return None
        content = await self._rooms.get_account_data(room_id, EVENT_TYPE_VIRTUAL_ROOM)
        if content is None:
            return None
        try:
            return RoomVirtualContent.model_validate(content).native_room
        except ValidationError:
            logger.debug("Ignoring malformed virtual room back-link", extra={"room_id": room_id})
            return None

    async def get_or_create_virtual_room_for_room(
        self, room_id: str, opponent_user_id: str
    ) -> str | None:
        """Return the virtual room for calls with *opponent_user_id* in *room_id*.

        Reuses the direct room with the opponent's virtual identity or
        creates one, then links it back to *room_id*.  Returns ``None`` when
        virtual rooms are unsupported, the opponent has no virtual identity,
        or provisioning failed.
        """
        await self._protocols.await_check_protocols()
        if not self._protocols.supports_virtual_rooms:
            return None
        virtual_user = await self._user_to_virtual_user(opponent_user_id)
        if virtual_user is None:
            return None

        async with self._locks.locked(virtual_user):
            try:
                virtual_room_id = await self._ensure_virtual_room_exists(virtual_user, room_id)
                await self._mark_virtual(virtual_room_id, room_id)
            except ProvisioningFailure as exc:
                logger.warning(
                    "Failed to provision virtual room",
                    extra={"room_id": room_id, "virtual_user": virtual_user, "error": str(exc)},
                )
                return None
        return virtual_room_id

    async def is_virtual_room(self, room_id: str) -> bool:
        """Whether *room_id* is a virtual room, using the capabilities known now."""
        if not self._protocols.supports_virtual_rooms:
            return False
        return await self.resolve_virtual_room_trust(room_id) is not VirtualRoomTrust.NONE

    async def resolve_virtual_room_trust(self, room_id: str) -> VirtualRoomTrust:
        """Return the strongest signal marking *room_id* as virtual."""
        if room_id in self._virtual_room_ids:
            return VirtualRoomTrust.CACHE
        if await self.native_room_for_virtual_room(room_id) is not None:
            self._virtual_room_ids.add(room_id)
            return VirtualRoomTrust.ACCOUNT_DATA
        # Recognises a room we created before the account data echo arrives.
        create_event = await self._rooms.get_creation_event(room_id)
        if create_event is None or create_event.sender_id != self._rooms.my_user_id:
            return VirtualRoomTrust.NONE
        if EVENT_TYPE_VIRTUAL_ROOM in create_event.content:
            self._virtual_room_ids.add(room_id)
            return VirtualRoomTrust.SELF_CREATED
        return VirtualRoomTrust.NONE

    async def on_new_invited_room(self, invited_room_id: str) -> None:
        """Tag and join an invite sent by the virtual identity of a DM partner.

        The inviter is trusted through the native lookup, never through the
        room content.  Invites with no matching native DM are left untouched.
        """
        await self._protocols.await_check_protocols()
        if not self._protocols.supports_virtual_rooms:
            return
        invited_room = await self._rooms.get_room(invited_room_id)
        if invited_room is None or invited_room.inviter_id is None:
            return
        results = await self._lookup.sip_native_lookup(invited_room.inviter_id)
        if not results or FIELD_IS_VIRTUAL not in results[0].fields:
            return

        native_user = results[0].user_id
        native_room_id = await self._rooms.get_existing_direct_room_with_user(native_user)
        if native_room_id is None:
            logger.debug(
                "Virtual invite without native room",
                extra={"room_id": invited_room_id, "native_user": native_user},
            )
            return

        try:
            await self._mark_virtual(invited_room_id, native_room_id)
            await self._rooms.join_room(invited_room_id)
        except Exception as exc:
            logger.warning(
                "Failed to accept virtual room invite",
                extra={"room_id": invited_room_id, "error": str(exc)},
            )

    async def _user_to_virtual_user(self, user_id: str) -> str | None:
        results = await self._lookup.sip_virtual_lookup(user_id)
        return results[0].user_id if results else None

    async def _ensure_virtual_room_exists(self, user_id: str, native_room_id: str) -> str:
        try:
            existing = await self._rooms.get_existing_direct_room_with_user(user_id)
        except Exception:
            logger.debug("Direct room lookup failed", extra={"user_id": user_id}, exc_info=True)
            existing = None
        if existing is not None:
            return existing

        params = CreateRoomParams.direct(
            user_id, creation_content={EVENT_TYPE_VIRTUAL_ROOM: native_room_id}
        )
        try:
            return await self._rooms.create_room(params)
        except Exception as exc:
            raise ProvisioningFailure(f"Could not create virtual room with {user_id}") from exc

    async def _mark_virtual(self, room_id: str, native_room_id: str) -> None:
        content = RoomVirtualContent(native_room=native_room_id).model_dump()
        try:
            await self._rooms.set_account_data(room_id, EVENT_TYPE_VIRTUAL_ROOM, content)
        except Exception as exc:
            raise ProvisioningFailure(f"Could not tag {room_id} as virtual") from exc
        self._virtual_room_ids.add(room_id)
