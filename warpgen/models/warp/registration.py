"""
WARP Registration Models

Pydantic models for the WARP device registration exchange.

- RegistrationRequest: body POSTed to the registration endpoint
- RegistrationResponse: the subset of the response needed to build a
  WireGuard config (interface addresses and the first peer's key)

Response models are strict about types and ignore unknown keys, since the
service returns many fields that are not used here.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

INSTALL_ID_LENGTH = 22
FCM_TOKEN_SUFFIX_LENGTH = 134
FCM_TOKEN_MARKER = "APA91b"


class InstallIdentity(BaseModel):
    """Synthesized device installation identity"""
    model_config = ConfigDict(frozen=True)

    install_id: str = Field(
        ...,
        pattern=rf'^[A-Za-z0-9]{{{INSTALL_ID_LENGTH}}}$',
        description="22-character alphanumeric install identifier"
    )


class RegistrationRequest(BaseModel):
    """Request body binding a WireGuard public key to a device identity"""
    model_config = ConfigDict(frozen=True, extra='forbid')

    key: str = Field(
        ...,
        pattern=r'^[A-Za-z0-9+/]+={0,2}$',
        description="WireGuard public key (standard base64)"
    )
    install_id: str = Field(
        ...,
        pattern=rf'^[A-Za-z0-9]{{{INSTALL_ID_LENGTH}}}$',
        description="Install identifier"
    )
    fcm_token: str = Field(
        ...,
        pattern=(
            rf'^[A-Za-z0-9]{{{INSTALL_ID_LENGTH}}}:{FCM_TOKEN_MARKER}'
            rf'[A-Za-z0-9]{{{FCM_TOKEN_SUFFIX_LENGTH}}}$'
        ),
        description="Synthesized push token: <install_id>:APA91b<134 chars>"
    )
    tos: str = Field(
        ...,
        description="RFC 3339 UTC timestamp of terms-of-service acceptance"
    )
    type: Literal["Android"] = Field(
        "Android",
        description="Device type"
    )
    locale: Literal["en_US"] = Field(
        "en_US",
        description="Device locale"
    )


class WarpAddresses(BaseModel):
    """Interface addresses assigned to the device (bare IPs, no CIDR)"""
    v4: StrictStr
    v6: StrictStr


class WarpInterface(BaseModel):
    addresses: WarpAddresses


class WarpPeer(BaseModel):
    public_key: StrictStr


class WarpAccountConfig(BaseModel):
    peers: List[WarpPeer] = Field(..., min_length=1)
    interface: WarpInterface

    @field_validator("peers", mode="before")
    @classmethod
    def keep_first_peer(cls, v):
        """Only the first peer is used, so later entries are not validated"""
        if isinstance(v, list):
            return v[:1]
        return v


class RegistrationResponse(BaseModel):
    """Registration response fields required for config synthesis"""
    config: WarpAccountConfig

    @property
    def peer(self) -> WarpPeer:
        """First peer returned by the service"""
        return self.config.peers[0]

    @property
    def addresses(self) -> WarpAddresses:
        return self.config.interface.addresses
