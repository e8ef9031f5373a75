"""Discover the call protocols bridged by a real homeserver.

Set MATRIX_HOMESERVER and MATRIX_ACCESS_TOKEN, then run with:
    uv run python examples/homeserver_protocols.py
"""

from __future__ import annotations

import asyncio
import logging
import os

from bridgekit import CallProtocolsChecker, HTTPThirdPartyConfig, HTTPThirdPartyService

logging.basicConfig(level=logging.INFO)


async def main() -> None:
    service = HTTPThirdPartyService(
        HTTPThirdPartyConfig(
            homeserver_url=os.environ["MATRIX_HOMESERVER"],
            access_token=os.environ["MATRIX_ACCESS_TOKEN"],
        )
    )
    checker = CallProtocolsChecker(service)
    try:
        if await checker.await_check_protocols():
            print(f"PSTN protocol: {checker.supported_pstn_protocol}")
            print(f"Virtual rooms: {checker.supports_virtual_rooms}")
        else:
            print("Protocol discovery failed, try again later")
    finally:
        await service.close()


if __name__ == "__main__":
    asyncio.run(main())
