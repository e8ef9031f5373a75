"""Virtual call rooms with a SIP bridge.

Demonstrates how a client maps a native DM to the virtual room carrying
its bridged call leg. Shows:
- CallProtocolsChecker discovering protocols and notifying listeners
- CallUserMapper creating and linking the virtual room for an opponent
- Recognising the virtual room and accepting a virtual invite

Run with:
    uv run python examples/virtual_call_room.py
"""

from __future__ import annotations

import asyncio
import logging

from bridgekit import (
    CallProtocol,
    CallProtocolsChecker,
    CallUserMapper,
    CapabilityListener,
    InMemoryRoomService,
    MockThirdPartyService,
    Room,
    ThirdPartyLookup,
    ThirdPartyUser,
)

logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")


class PrintListener(CapabilityListener):
    def on_virtual_room_support_updated(self) -> None:
        print("Homeserver supports virtual rooms")


async def main() -> None:
    service = MockThirdPartyService(
        protocols={CallProtocol.SIP_NATIVE: {}, CallProtocol.SIP_VIRTUAL: {}},
        users={
            (CallProtocol.SIP_VIRTUAL, "native_mxid", "@bob:example.org"): [
                ThirdPartyUser(
                    user_id="@bob_virtual:sip.example.org", protocol=CallProtocol.SIP_VIRTUAL
                )
            ],
        },
    )
    rooms = InMemoryRoomService("@alice:example.org")
    rooms.add_room(Room(id="!native:example.org", is_direct=True, direct_user_id="@bob:example.org"))

    checker = CallProtocolsChecker(service)
    checker.add_listener(PrintListener())
    checker.check_protocols()

    mapper = CallUserMapper(rooms, checker, ThirdPartyLookup(service, checker))
    virtual_room = await mapper.get_or_create_virtual_room_for_room(
        "!native:example.org", "@bob:example.org"
    )
    print(f"Virtual room: {virtual_room}")
    if virtual_room is not None:
        print(f"Is virtual: {await mapper.is_virtual_room(virtual_room)}")
        print(f"Native room: {await mapper.native_room_for_virtual_room(virtual_room)}")


if __name__ == "__main__":
    asyncio.run(main())
