"""
WireGuard Networking Package

Key generation, endpoint selection and config synthesis for WARP.
"""

from warpgen.networking.warp_keys import (
    KeyPair,
    KeyProvider,
    CryptographyKeyProvider,
    KeyPairGenerator,
    generate_keypair,
    to_std_base64,
    from_std_base64,
)

from warpgen.networking.warp_config import (
    WireGuardConfig,
    WireGuardInterface,
    WireGuardPeer,
    decode_registration_response,
    render,
)

from warpgen.networking.endpoint_pool import EndpointPool

__all__ = [
    "KeyPair",
    "KeyProvider",
    "CryptographyKeyProvider",
    "KeyPairGenerator",
    "generate_keypair",
    "to_std_base64",
    "from_std_base64",
    "WireGuardConfig",
    "WireGuardInterface",
    "WireGuardPeer",
    "decode_registration_response",
    "render",
    "EndpointPool",
]
