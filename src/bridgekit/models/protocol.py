"""Third-party protocol and user models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

#: Field carrying a phone number in a PSTN user lookup.
FIELD_PHONE = "m.id.phone"
#: Field carrying the native user id in a virtual SIP lookup.
FIELD_NATIVE_MXID = "native_mxid"
#: Field carrying the virtual user id in a native SIP lookup.
FIELD_VIRTUAL_MXID = "virtual_mxid"
#: Present in a native lookup result when the queried user is a virtual identity.
FIELD_IS_VIRTUAL = "is_virtual"


class FieldType(BaseModel):
    """Describes how a protocol field should be entered and displayed."""

    model_config = ConfigDict(extra="ignore")

    regexp: str | None = None
    placeholder: str | None = None


class ProtocolInstance(BaseModel):
    """A network reachable through a third-party protocol."""

    model_config = ConfigDict(extra="ignore")

    desc: str | None = None
    icon: str | None = None
    network_id: str | None = None
    fields: dict[str, Any] = Field(default_factory=dict)
    instance_id: str | None = None
    bot_user_id: str | None = None


class ThirdPartyProtocol(BaseModel):
    """Metadata for one protocol advertised by the homeserver."""

    model_config = ConfigDict(extra="ignore")

    user_fields: list[str] = Field(default_factory=list)
    location_fields: list[str] = Field(default_factory=list)
    icon: str | None = None
    field_types: dict[str, FieldType] = Field(default_factory=dict)
    instances: list[ProtocolInstance] = Field(default_factory=list)


class ThirdPartyUser(BaseModel):
    """A user on the homeserver bridged to a third-party identity."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(alias="userid")
    protocol: str
    fields: dict[str, Any] = Field(default_factory=dict)
