"""Third-party lookup services."""

from bridgekit.providers.thirdparty.base import ThirdPartyService
from bridgekit.providers.thirdparty.config import HTTPThirdPartyConfig
from bridgekit.providers.thirdparty.http import HTTPThirdPartyService
from bridgekit.providers.thirdparty.mock import MockThirdPartyService

__all__ = [
    "HTTPThirdPartyConfig",
    "HTTPThirdPartyService",
    "MockThirdPartyService",
    "ThirdPartyService",
]
