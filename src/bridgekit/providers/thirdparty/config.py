"""HTTP third-party service configuration."""

from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel, SecretStr, field_validator


class HTTPThirdPartyConfig(BaseModel):
    """Configuration for the Matrix client-server third-party API."""

    homeserver_url: str
    access_token: SecretStr
    timeout: float = 30.0

    @field_validator("homeserver_url")
    @classmethod
    def validate_homeserver_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError("homeserver_url must be an http(s) URL with a host")
        return v.rstrip("/")
