"""
WARP models and schemas

Pydantic models for the WARP registration request and response.
"""

from .registration import (
    InstallIdentity,
    RegistrationRequest,
    RegistrationResponse,
    WarpAccountConfig,
    WarpAddresses,
    WarpInterface,
    WarpPeer,
)

__all__ = [
    "InstallIdentity",
    "RegistrationRequest",
    "RegistrationResponse",
    "WarpAccountConfig",
    "WarpAddresses",
    "WarpInterface",
    "WarpPeer",
]
