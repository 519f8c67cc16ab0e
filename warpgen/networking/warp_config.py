"""
WireGuard Configuration Synthesis

Turns a WARP registration response into WireGuard client configuration
text. The response is decoded by a path-aware decoder: any missing key,
wrong type or empty peer list fails with MalformedResponseError naming the
path, and no partial or default-filled config is ever rendered.

The rendered layout is a compatibility contract with WireGuard clients:

    [Interface]
    PrivateKey = <private_key>
    Address = <v4>/32, <v6>/128
    DNS = 1.1.1.1, 8.8.8.8

    [Peer]
    PublicKey = <peer_public_key>
    AllowedIPs = 0.0.0.0/0, ::/0
    Endpoint = <endpoint>
"""

import logging
from typing import Any, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from warpgen.errors import MalformedResponseError
from warpgen.models.warp.registration import RegistrationResponse

logger = logging.getLogger(__name__)

DNS_SERVERS = ["1.1.1.1", "8.8.8.8"]
ALLOWED_IPS = ["0.0.0.0/0", "::/0"]
IPV4_HOST_PREFIX = 32
IPV6_HOST_PREFIX = 128


class WireGuardInterface(BaseModel):
    """
    WireGuard Interface Configuration

    Local side of the tunnel.
    """
    private_key: str = Field(..., description="Base64-encoded WireGuard private key")
    addresses: List[str] = Field(..., description="Interface addresses in CIDR notation")
    dns: List[str] = Field(default_factory=lambda: list(DNS_SERVERS))

    model_config = ConfigDict(frozen=True)


class WireGuardPeer(BaseModel):
    """
    WireGuard Peer Configuration

    The WARP edge the tunnel connects to.
    """
    public_key: str = Field(..., description="Base64-encoded peer public key")
    allowed_ips: List[str] = Field(default_factory=lambda: list(ALLOWED_IPS))
    endpoint: str = Field(..., description="Peer endpoint, passed through unchanged")

    model_config = ConfigDict(frozen=True)


class WireGuardConfig(BaseModel):
    """
    Complete WireGuard Configuration

    Single interface, single peer.
    """
    interface: WireGuardInterface
    peer: WireGuardPeer

    model_config = ConfigDict(frozen=True)

    def to_config_file(self) -> str:
        """
        Convert configuration to WireGuard config file format

        Returns:
            Config text, stanzas separated by one blank line, no trailing newline
        """
        lines = [
            "[Interface]",
            f"PrivateKey = {self.interface.private_key}",
            f"Address = {', '.join(self.interface.addresses)}",
            f"DNS = {', '.join(self.interface.dns)}",
            "",
            "[Peer]",
            f"PublicKey = {self.peer.public_key}",
            f"AllowedIPs = {', '.join(self.peer.allowed_ips)}",
            f"Endpoint = {self.peer.endpoint}",
        ]
        return "\n".join(lines)


def _format_path(loc: Tuple[Any, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "$"


def decode_registration_response(data: Any) -> RegistrationResponse:
    """
    Decode and validate a registration response document

    Args:
        data: Parsed JSON document

    Returns:
        RegistrationResponse

    Raises:
        MalformedResponseError: With the path of the first failing field
    """
    try:
        return RegistrationResponse.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        raise MalformedResponseError(
            path=_format_path(tuple(error["loc"])),
            reason=error["msg"]
        ) from e


def build_config(
    response: RegistrationResponse,
    private_key: str,
    endpoint: str
) -> WireGuardConfig:
    """Assemble a WireGuardConfig from a decoded response."""
    addresses = response.addresses
    return WireGuardConfig(
        interface=WireGuardInterface(
            private_key=private_key,
            addresses=[
                f"{addresses.v4}/{IPV4_HOST_PREFIX}",
                f"{addresses.v6}/{IPV6_HOST_PREFIX}",
            ],
        ),
        peer=WireGuardPeer(
            public_key=response.peer.public_key,
            endpoint=endpoint,
        ),
    )


def render(
    response: Union[RegistrationResponse, Any],
    private_key: str,
    endpoint: str
) -> str:
    """
    Render WireGuard config text from a registration response

    Args:
        response: Raw response document or an already decoded RegistrationResponse
        private_key: Client private key (standard base64)
        endpoint: Peer endpoint "host:port", not validated

    Returns:
        WireGuard configuration text

    Raises:
        MalformedResponseError: If the response does not match the expected schema
    """
    if not isinstance(response, RegistrationResponse):
        response = decode_registration_response(response)

    wg_config = build_config(response, private_key, endpoint)

    logger.info(
        f"Rendered WireGuard config: address={', '.join(wg_config.interface.addresses)}, "
        f"endpoint={endpoint}"
    )

    return wg_config.to_config_file()
