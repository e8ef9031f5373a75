"""Third-party service backed by the Matrix client-server API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from pydantic import ValidationError

from bridgekit.core.errors import TransientRemoteError
from bridgekit.models.protocol import ThirdPartyProtocol, ThirdPartyUser
from bridgekit.providers.thirdparty.base import ThirdPartyService
from bridgekit.providers.thirdparty.config import HTTPThirdPartyConfig

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger("bridgekit.providers.thirdparty")

_API_PREFIX = "/_matrix/client/v3/thirdparty"


class HTTPThirdPartyService(ThirdPartyService):
    """Calls ``/thirdparty/protocols`` and ``/thirdparty/user/{protocol}``."""

    def __init__(
        self,
        config: HTTPThirdPartyConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Homeserver URL, access token and timeout.
            transport: Custom httpx transport, e.g. for tests or proxies.
        """
        try:
            import httpx as _httpx
        except ImportError as exc:
            raise ImportError(
                "httpx is required for HTTPThirdPartyService. "
                "Install it with: pip install bridgekit[httpx]"
            ) from exc
        self._config = config
        self._httpx = _httpx
        self._client: httpx.AsyncClient = _httpx.AsyncClient(
            timeout=config.timeout, transport=transport
        )

    async def get_protocols(self) -> dict[str, ThirdPartyProtocol]:
        data = await self._get(f"{_API_PREFIX}/protocols")
        if not isinstance(data, dict):
            raise TransientRemoteError("Malformed protocols response")
        try:
            return {
                protocol_id: ThirdPartyProtocol.model_validate(meta or {})
                for protocol_id, meta in data.items()
            }
        except ValidationError as exc:
            raise TransientRemoteError("Malformed protocols response") from exc

    async def get_user(
        self, protocol: str, fields: Mapping[str, str]
    ) -> list[ThirdPartyUser]:
        data = await self._get(
            f"{_API_PREFIX}/user/{quote(protocol, safe='')}", params=dict(fields)
        )
        if not isinstance(data, list):
            raise TransientRemoteError("Malformed third-party user response")
        try:
            return [ThirdPartyUser.model_validate(item) for item in data]
        except ValidationError as exc:
            raise TransientRemoteError("Malformed third-party user response") from exc

    async def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        headers = {
            "Authorization": f"Bearer {self._config.access_token.get_secret_value()}",
        }
        url = f"{self._config.homeserver_url}{path}"
        try:
            resp = await self._client.get(url, headers=headers, params=params)
            resp.raise_for_status()
            return resp.json()
        except self._httpx.TimeoutException as exc:
            raise TransientRemoteError(f"Timeout calling {path}") from exc
        except self._httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.debug("Homeserver returned %d for %s", status, path)
            raise TransientRemoteError(
                f"Homeserver returned {status} for {path}", status_code=status
            ) from exc
        except self._httpx.HTTPError as exc:
            raise TransientRemoteError(str(exc)) from exc
        except ValueError as exc:
            raise TransientRemoteError(f"Invalid JSON from {path}") from exc

    async def close(self) -> None:
        await self._client.aclose()
