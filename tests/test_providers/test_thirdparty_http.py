"""Tests for the HTTP third-party service."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
from pydantic import ValidationError

from bridgekit.core.errors import TransientRemoteError
from bridgekit.providers.thirdparty import HTTPThirdPartyConfig, HTTPThirdPartyService


def _config(**overrides: Any) -> HTTPThirdPartyConfig:
    defaults: dict[str, Any] = {
        "homeserver_url": "https://matrix.example.org/",
        "access_token": "syt_token",
    }
    defaults.update(overrides)
    return HTTPThirdPartyConfig(**defaults)


class _MockTransport(httpx.AsyncBaseTransport):
    """Captures requests and returns a canned JSON response."""

    def __init__(self, response_data: Any, status_code: int = 200) -> None:
        self._response_data = response_data
        self._status_code = status_code
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self._status_code, json=self._response_data, request=request)


class _TimeoutTransport(httpx.AsyncBaseTransport):
    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out")


def _service(transport: httpx.AsyncBaseTransport) -> HTTPThirdPartyService:
    return HTTPThirdPartyService(_config(), transport=transport)


class TestHTTPThirdPartyConfig:
    def test_trailing_slash_stripped(self) -> None:
        assert _config().homeserver_url == "https://matrix.example.org"
        assert _config().timeout == 30.0

    def test_rejects_invalid_url(self) -> None:
        with pytest.raises(ValidationError):
            _config(homeserver_url="matrix.example.org")

    def test_token_is_secret(self) -> None:
        assert "syt_token" not in repr(_config())


class TestGetProtocols:
    async def test_parses_protocols(self) -> None:
        transport = _MockTransport(
            {
                "im.vector.protocol.sip_native": {"user_fields": ["virtual_mxid"]},
                "m.protocol.pstn": {
                    "user_fields": ["m.id.phone"],
                    "field_types": {"m.id.phone": {"regexp": r"\d+", "placeholder": "+1"}},
                    "instances": [{"desc": "PSTN", "network_id": "pstn"}],
                    "unknown": True,
                },
            }
        )
        service = _service(transport)

        protocols = await service.get_protocols()

        assert set(protocols) == {"im.vector.protocol.sip_native", "m.protocol.pstn"}
        assert protocols["m.protocol.pstn"].user_fields == ["m.id.phone"]
        assert protocols["m.protocol.pstn"].instances[0].network_id == "pstn"
        req = transport.requests[0]
        assert req.url == "https://matrix.example.org/_matrix/client/v3/thirdparty/protocols"
        assert req.headers["Authorization"] == "Bearer syt_token"

    async def test_http_error(self) -> None:
        service = _service(_MockTransport({"errcode": "M_UNKNOWN"}, status_code=502))
        with pytest.raises(TransientRemoteError) as exc_info:
            await service.get_protocols()
        assert exc_info.value.status_code == 502

    async def test_timeout(self) -> None:
        service = _service(_TimeoutTransport())
        with pytest.raises(TransientRemoteError, match="Timeout"):
            await service.get_protocols()

    async def test_malformed_body(self) -> None:
        service = _service(_MockTransport(["not", "a", "mapping"]))
        with pytest.raises(TransientRemoteError):
            await service.get_protocols()

    async def test_invalid_protocol_metadata(self) -> None:
        service = _service(_MockTransport({"m.protocol.pstn": {"user_fields": "m.id.phone"}}))
        with pytest.raises(TransientRemoteError, match="Malformed protocols"):
            await service.get_protocols()


class TestGetUser:
    async def test_lookup_encodes_protocol_and_fields(self) -> None:
        transport = _MockTransport(
            [
                {
                    "userid": "@bob_virtual:sip.example.org",
                    "protocol": "im.vector.protocol.sip_virtual",
                    "fields": {"native_mxid": "@bob:example.org"},
                }
            ]
        )
        service = _service(transport)

        users = await service.get_user(
            "im.vector.protocol.sip_virtual", {"native_mxid": "@bob:example.org"}
        )

        assert [u.user_id for u in users] == ["@bob_virtual:sip.example.org"]
        req = transport.requests[0]
        assert req.url.path == (
            "/_matrix/client/v3/thirdparty/user/im.vector.protocol.sip_virtual"
        )
        assert req.url.params["native_mxid"] == "@bob:example.org"

    async def test_user_without_id(self) -> None:
        service = _service(_MockTransport([{"protocol": "m.protocol.pstn"}]))
        with pytest.raises(TransientRemoteError, match="Malformed third-party user"):
            await service.get_user("m.protocol.pstn", {"m.id.phone": "+1555"})

    async def test_empty_result(self) -> None:
        service = _service(_MockTransport([]))
        assert await service.get_user("m.protocol.pstn", {"m.id.phone": "+1555"}) == []

    async def test_not_found(self) -> None:
        service = _service(_MockTransport({"errcode": "M_NOT_FOUND"}, status_code=404))
        with pytest.raises(TransientRemoteError) as exc_info:
            await service.get_user("m.protocol.pstn", {"m.id.phone": "+1555"})
        assert exc_info.value.status_code == 404

    async def test_close(self) -> None:
        service = _service(_MockTransport([]))
        await service.close()
        assert service._client.is_closed
